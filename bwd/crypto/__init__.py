"""
bw Cryptographic Module

Provides the key operations needed to establish node identity:
- Ed25519 identity keys built from a seed
- Node ID derivation (BLAKE2b)
- Signature verification

All implementations use python3-cryptography (OpenSSL backend).
"""

from .primitives import (
    blake2b_hash,
    constant_time_compare,
    ED25519_SEED_SIZE,
)

from .keys import (
    IdentityKey,
    KeyError,
    derive_node_id,
    verify_signature,
)

__all__ = [
    # Primitives
    'blake2b_hash',
    'constant_time_compare',
    'ED25519_SEED_SIZE',
    # Keys
    'IdentityKey',
    'KeyError',
    'derive_node_id',
    'verify_signature',
]
