import base64
from pathlib import Path

import pytest

from bwd.config.errors import DecodeError, IoError, MalformedDocumentError
from bwd.config.secret import (
    FileSecret,
    TextSecret,
    ValueSecret,
    parse_secret,
    with_value,
)


class TestFileSecret:
    def test_resolve_reads_file(self, tmp_path):
        path = tmp_path / "secret"
        path.write_bytes(b"\x00\x01binary")
        assert FileSecret(str(path)).resolve() == b"\x00\x01binary"

    def test_resolve_before_materialize(self, tmp_path):
        path = tmp_path / "secret"
        path.write_bytes(b"lazy")
        secret = FileSecret(str(path))
        assert not secret.is_resolved
        assert secret.resolve() == b"lazy"
        assert secret.is_resolved

    def test_no_io_after_materialize(self, tmp_path):
        path = tmp_path / "secret"
        path.write_bytes(b"original")
        secret = FileSecret(str(path))
        secret.materialize()

        path.write_bytes(b"corrupted")
        assert secret.resolve() == b"original"

        path.unlink()
        secret.materialize()
        assert secret.resolve() == b"original"

    def test_single_read(self, tmp_path, monkeypatch):
        path = tmp_path / "secret"
        path.write_bytes(b"counted")
        reads = []
        original = Path.read_bytes

        def counting_read(self):
            reads.append(self)
            return original(self)

        monkeypatch.setattr(Path, "read_bytes", counting_read)

        secret = FileSecret(str(path))
        first = secret.resolve()
        second = secret.resolve()
        secret.materialize()

        assert first == second == b"counted"
        assert len(reads) == 1

    def test_missing_file(self, tmp_path):
        secret = FileSecret(str(tmp_path / "missing"), path="key")
        with pytest.raises(IoError) as exc:
            secret.resolve()
        assert exc.value.path == "key"
        assert "key" in str(exc.value)
        assert not secret.is_resolved


class TestValueSecret:
    def test_decodes_base64(self):
        encoded = base64.b64encode(b"hello world").decode()
        assert ValueSecret(encoded).resolve() == b"hello world"

    def test_invalid_base64(self):
        secret = ValueSecret("not base64!", path="auth.ca")
        with pytest.raises(DecodeError) as exc:
            secret.materialize()
        assert "auth.ca" in str(exc.value)

    def test_with_value_is_warm(self):
        secret = with_value(b"in-memory")
        assert secret.is_resolved
        assert secret.resolve() == b"in-memory"
        assert secret.to_document() == {"value": base64.b64encode(b"in-memory").decode()}


class TestTextSecret:
    def test_utf8_bytes(self):
        assert TextSecret("help").resolve() == b"help"

    def test_document_is_bare_string(self):
        assert TextSecret("help").to_document() == "help"


class TestParseSecret:
    def test_file_form(self):
        secret = parse_secret({"file": "/etc/bw/node.key"}, "key")
        assert isinstance(secret, FileSecret)
        assert secret.file == "/etc/bw/node.key"
        assert secret.to_document() == {"file": "/etc/bw/node.key"}

    def test_value_form(self):
        secret = parse_secret({"value": "aGVscA=="}, "key")
        assert isinstance(secret, ValueSecret)

    def test_bare_string_only_when_allowed(self):
        assert isinstance(parse_secret("help", "auth.secret", allow_text=True), TextSecret)
        with pytest.raises(MalformedDocumentError):
            parse_secret("help", "key")

    @pytest.mark.parametrize("text", ["a\x7fb", "a\nb", "a\rb"])
    def test_bare_string_control_character(self, text):
        with pytest.raises(MalformedDocumentError) as exc:
            parse_secret(text, "auth.secret", allow_text=True)
        assert exc.value.path == "auth.secret"

    def test_bare_string_tab(self):
        secret = parse_secret("a\tb", "auth.secret", allow_text=True)
        assert secret.resolve() == b"a\tb"

    @pytest.mark.parametrize("table", [
        {},
        {"file": "a", "value": "b"},
        {"file": "a", "mode": "0600"},
        {"file": 3},
    ])
    def test_malformed(self, table):
        with pytest.raises(MalformedDocumentError) as exc:
            parse_secret(table, "key")
        assert "key" in str(exc.value)
