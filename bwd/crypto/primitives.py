"""
bw Cryptographic Primitives

Thin wrappers over the cryptography library used by key handling.

Dependencies:
- cryptography (OpenSSL backend)
"""

import hmac
from typing import Optional

from cryptography.hazmat.primitives import hashes


# Key and signature sizes
ED25519_SEED_SIZE = 32  # bytes
ED25519_PUBLIC_KEY_SIZE = 32  # bytes
ED25519_SIGNATURE_SIZE = 64  # bytes

# BLAKE2b is only exposed with a 64-byte digest; shorter digests are truncations
_BLAKE2B_DIGEST_SIZE = 64


def blake2b_hash(
    data: bytes,
    digest_size: int = 32,
    person: Optional[bytes] = None,
) -> bytes:
    """
    Compute a BLAKE2b hash of data.

    Args:
        data: Data to hash
        digest_size: Output size in bytes (1-64, default 32)
        person: Optional personalization string (up to 16 bytes)

    Returns:
        bytes: Digest truncated to digest_size

    Raises:
        ValueError: If parameters are invalid
    """
    if not 1 <= digest_size <= _BLAKE2B_DIGEST_SIZE:
        raise ValueError("Digest size must be 1-64 bytes")

    if person is not None and len(person) > 16:
        raise ValueError("Personalization must be at most 16 bytes")

    hasher = hashes.Hash(hashes.BLAKE2b(_BLAKE2B_DIGEST_SIZE))

    # Personalization is folded in as a fixed-width prefix
    if person is not None:
        hasher.update(person.ljust(16, b'\x00'))

    hasher.update(data)
    return hasher.finalize()[:digest_size]


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in constant time."""
    return hmac.compare_digest(a, b)
