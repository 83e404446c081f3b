import pytest


SEED = bytes(range(32))


@pytest.fixture
def seed():
    """Fixed Ed25519 seed."""
    return SEED


@pytest.fixture
def seed_file(tmp_path):
    """32-byte Ed25519 seed on disk."""
    path = tmp_path / "node.key"
    path.write_bytes(SEED)
    return path


@pytest.fixture
def write_config(tmp_path):
    """Write TOML text to a config file and return its path."""
    def _write(text: str):
        path = tmp_path / "config.toml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write
