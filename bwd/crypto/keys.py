"""
bw Key Handling

Node identity is an Ed25519 signing key built from a 32-byte seed.
The same seed always yields the same public key, so a node redeployed
with its old seed keeps its identity without re-registration.

Key Types:
- Identity Key: Ed25519 signing key (long-term)
- Node ID: 16-byte BLAKE2b digest of the public key

SECURITY NOTES:
- Private keys are never logged
- Seeds are only accepted in raw 32-byte form
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .primitives import (
    blake2b_hash,
    ED25519_SEED_SIZE,
    ED25519_PUBLIC_KEY_SIZE,
    ED25519_SIGNATURE_SIZE,
)


# Node ID is first 16 bytes of BLAKE2b hash of public key
NODE_ID_LENGTH = 16


class KeyError(Exception):
    """Exception raised for key-related errors."""
    pass


class IdentityKey:
    """
    Node identity key pair.

    Wraps an Ed25519 private key and exposes the raw public key bytes
    handed to the handshake layer.
    """

    def __init__(self, ed25519_private: Ed25519PrivateKey):
        """
        Initialize identity from Ed25519 private key.

        Args:
            ed25519_private: Ed25519 private key
        """
        self._ed25519_private = ed25519_private
        self._ed25519_public = ed25519_private.public_key()

    @classmethod
    def from_seed(cls, seed: bytes) -> 'IdentityKey':
        """
        Build an identity key from a raw seed.

        Args:
            seed: 32-byte Ed25519 seed

        Returns:
            IdentityKey: Identity derived from the seed

        Raises:
            KeyError: If the seed is not usable
        """
        if len(seed) != ED25519_SEED_SIZE:
            raise KeyError(
                f"Invalid seed length: {len(seed)} (expected {ED25519_SEED_SIZE} bytes)"
            )

        try:
            ed25519_private = Ed25519PrivateKey.from_private_bytes(seed)
        except ValueError as e:
            raise KeyError(f"Invalid seed: {e}") from e

        return cls(ed25519_private)

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message with Ed25519.

        Args:
            message: Message to sign

        Returns:
            bytes: 64-byte Ed25519 signature
        """
        return self._ed25519_private.sign(message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify an Ed25519 signature made by this key."""
        return verify_signature(self.public_key_bytes, message, signature)

    @property
    def public_key_bytes(self) -> bytes:
        """Get Ed25519 public key as bytes."""
        return self._ed25519_public.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )

    @property
    def node_id(self) -> bytes:
        """16-byte node identifier derived from the public key."""
        return derive_node_id(self.public_key_bytes)


def derive_node_id(public_key_bytes: bytes) -> bytes:
    """
    Derive node ID from Ed25519 public key bytes.

    NodeID = BLAKE2b(public_key)[:16]

    Args:
        public_key_bytes: 32-byte Ed25519 public key

    Returns:
        bytes: 16-byte node ID
    """
    return blake2b_hash(
        public_key_bytes,
        digest_size=NODE_ID_LENGTH,
        person=b"bw-nodeid"
    )


def verify_signature(
    public_key_bytes: bytes,
    message: bytes,
    signature: bytes,
) -> bool:
    """
    Verify an Ed25519 signature given public key bytes.

    Args:
        public_key_bytes: 32-byte Ed25519 public key
        message: Original message
        signature: 64-byte signature

    Returns:
        bool: True if signature is valid
    """
    if len(public_key_bytes) != ED25519_PUBLIC_KEY_SIZE:
        return False

    if len(signature) != ED25519_SIGNATURE_SIZE:
        return False

    try:
        public_key = Ed25519PublicKey.from_public_bytes(public_key_bytes)
        public_key.verify(signature, message)
        return True
    except (InvalidSignature, ValueError):
        return False
