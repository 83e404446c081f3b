import pytest

from bwd.config.errors import InvalidSeedError, IoError
from bwd.config.identity import IdentityResolver
from bwd.config.secret import FileSecret, with_value
from bwd.crypto.keys import IdentityKey, KeyError, derive_node_id, verify_signature


class TestIdentityKey:
    def test_deterministic(self, seed):
        assert IdentityKey.from_seed(seed).public_key_bytes == \
            IdentityKey.from_seed(seed).public_key_bytes

    def test_public_key_size(self, seed):
        assert len(IdentityKey.from_seed(seed).public_key_bytes) == 32

    def test_sign_and_verify(self, seed):
        key = IdentityKey.from_seed(seed)
        signature = key.sign(b"message")
        assert len(signature) == 64
        assert key.verify(b"message", signature)
        assert not key.verify(b"other", signature)

    def test_verify_rejects_bad_public_key(self):
        assert not verify_signature(b"short", b"message", b"\x00" * 64)

    def test_verify_rejects_bad_signature_length(self, seed):
        key = IdentityKey.from_seed(seed)
        signature = key.sign(b"message")
        assert not verify_signature(key.public_key_bytes, b"message", signature[:63])
        assert not verify_signature(key.public_key_bytes, b"message", signature + b"\x00")

    def test_short_seed(self):
        with pytest.raises(KeyError):
            IdentityKey.from_seed(b"\x00" * 31)

    def test_node_id(self, seed):
        key = IdentityKey.from_seed(seed)
        assert len(key.node_id) == 16
        assert key.node_id == derive_node_id(key.public_key_bytes)


class TestIdentityResolver:
    def test_derive_from_file(self, seed, seed_file):
        resolver = IdentityResolver(FileSecret(str(seed_file), "key"))
        public_key, identity = resolver.derive_keypair()
        assert public_key == IdentityKey.from_seed(seed).public_key_bytes
        assert resolver.public_key() == public_key
        assert identity.verify(b"x", identity.sign(b"x"))

    def test_rederive_identical(self, seed):
        resolver = IdentityResolver(with_value(seed))
        first, _ = resolver.derive_keypair()
        second, _ = resolver.derive_keypair()
        assert first == second

    def test_public_key_before_derive(self, seed):
        resolver = IdentityResolver(with_value(seed))
        with pytest.raises(RuntimeError):
            resolver.public_key()

    @pytest.mark.parametrize("size", [0, 16, 31, 33, 64])
    def test_wrong_seed_size(self, size):
        resolver = IdentityResolver(with_value(b"\x01" * size, path="key"))
        with pytest.raises(InvalidSeedError) as exc:
            resolver.derive_keypair()
        assert exc.value.path == "key"

    def test_unreadable_seed(self, tmp_path):
        resolver = IdentityResolver(FileSecret(str(tmp_path / "nope"), "key"))
        with pytest.raises(IoError):
            resolver.derive_keypair()

    def test_node_id(self, seed):
        resolver = IdentityResolver(with_value(seed))
        public_key, _ = resolver.derive_keypair()
        assert resolver.node_id() == derive_node_id(public_key)
