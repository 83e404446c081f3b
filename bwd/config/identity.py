"""
Node identity resolution.

The `key` field of the document holds the node's Ed25519 seed. The
resolver turns it into a signing key and remembers the public key,
which is what peers see of this node.
"""

import logging
from typing import Optional, Tuple

from ..crypto.keys import IdentityKey, KeyError as CryptoKeyError, derive_node_id
from .errors import InvalidSeedError
from .secret import LazySecret


logger = logging.getLogger(__name__)


class IdentityResolver:
    """
    Derives the node keypair from a seed secret.

    The public key is a pure function of the seed; deriving twice from
    the same seed yields identical bytes.
    """

    def __init__(self, seed: LazySecret):
        self.seed = seed
        self._public_key: Optional[bytes] = None

    def derive_keypair(self) -> Tuple[bytes, IdentityKey]:
        """
        Derive the identity keypair and cache the public key.

        Returns:
            Tuple[bytes, IdentityKey]: (public_key_bytes, signing key)

        Raises:
            IoError: If the seed file cannot be read
            DecodeError: If the inline seed is not valid base64
            InvalidSeedError: If the seed is not a valid Ed25519 seed
        """
        seed = self.seed.resolve()

        try:
            identity = IdentityKey.from_seed(seed)
        except CryptoKeyError as e:
            raise InvalidSeedError(str(e), self.seed.path) from e

        self._public_key = identity.public_key_bytes
        logger.debug(f"Derived identity {derive_node_id(self._public_key).hex()}")
        return self._public_key, identity

    def public_key(self) -> bytes:
        """Return the cached public key; derive_keypair() must have run."""
        if self._public_key is None:
            raise RuntimeError("Identity not derived. Call derive_keypair() first.")
        return self._public_key

    def node_id(self) -> bytes:
        """Return the 16-byte node ID of the derived identity."""
        return derive_node_id(self.public_key())
