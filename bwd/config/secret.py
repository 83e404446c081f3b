"""
bw Lazy Secrets

A secret in the configuration document is either written inline or
referenced by path:

    key = { value = "<base64>" }
    key = { file = "/etc/bw/node.key" }

Secrets resolve to raw bytes on first use and keep them, so the source
is read at most once over the lifetime of the object. The daemon warms
every secret explicitly during Config.load() (materialize), while
code that skips the load step still gets the bytes on demand (resolve).

SECURITY NOTES:
- Resolved bytes are never logged
- to_document() writes back the source, never the cached bytes
"""

import base64
import binascii
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .document import check_text, expect_table, get_field, join_path
from .errors import DecodeError, IoError, MalformedDocumentError


logger = logging.getLogger(__name__)


class LazySecret:
    """
    Secret material resolved on demand and memoized.

    Subclasses implement _read(), which fetches the bytes from the
    underlying source. The cache slot is written once; after that no
    call touches the source again.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._cache: Optional[bytes] = None

    @property
    def is_resolved(self) -> bool:
        """True once the bytes are cached."""
        return self._cache is not None

    def resolve(self) -> bytes:
        """
        Return the secret bytes, reading the source on first call.

        Returns:
            bytes: Raw secret material

        Raises:
            IoError: If a referenced file cannot be read
            DecodeError: If an inline value is not valid base64
        """
        if self._cache is None:
            self._cache = self._read()
            logger.debug(f"Resolved secret {self.path or '<anonymous>'}")
        return self._cache

    def materialize(self) -> None:
        """Resolve eagerly so later resolve() calls never touch storage."""
        self.resolve()

    def _read(self) -> bytes:
        raise NotImplementedError

    def to_document(self) -> Union[str, Dict[str, str]]:
        """Return the document form of this secret."""
        raise NotImplementedError

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "pending"
        return f"<{type(self).__name__} {self.path or '-'} {state}>"


class ValueSecret(LazySecret):
    """Inline secret, base64 encoded."""

    def __init__(self, value: str, path: Optional[str] = None):
        super().__init__(path)
        self.value = value

    def _read(self) -> bytes:
        try:
            return base64.b64decode(self.value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"invalid base64 value: {e}", self.path) from e

    def to_document(self) -> Dict[str, str]:
        return {"value": self.value}


class FileSecret(LazySecret):
    """Secret read from a file, taken verbatim."""

    def __init__(self, file: str, path: Optional[str] = None):
        super().__init__(path)
        self.file = file

    def _read(self) -> bytes:
        try:
            return Path(self.file).read_bytes()
        except OSError as e:
            raise IoError(f"cannot read {self.file}: {e.strerror or e}", self.path) from e

    def to_document(self) -> Dict[str, str]:
        return {"file": self.file}


class TextSecret(LazySecret):
    """Plaintext secret written as a bare string; its bytes are UTF-8."""

    def __init__(self, text: str, path: Optional[str] = None):
        super().__init__(path)
        self.text = text

    def _read(self) -> bytes:
        return self.text.encode("utf-8")

    def to_document(self) -> str:
        return self.text


def with_value(data: bytes, path: Optional[str] = None) -> ValueSecret:
    """
    Build a secret that is already resolved to data.

    Used by embedders and tests that hold key material in memory. The
    inline value is the base64 form of data, so the secret still
    serializes to a valid document.
    """
    secret = ValueSecret(base64.b64encode(data).decode("ascii"), path)
    secret._cache = bytes(data)
    return secret


def parse_secret(data: Any, path: str, allow_text: bool = False) -> LazySecret:
    """
    Build a LazySecret from its document form.

    Args:
        data: A `{value = ...}` or `{file = ...}` table, or a bare
            string when allow_text is set
        path: Dotted path of the field, used in errors
        allow_text: Accept a bare string as a plaintext secret

    Returns:
        LazySecret: Unresolved secret

    Raises:
        MalformedDocumentError: If data has neither or both source keys
            or a bare string holds a control character
    """
    if allow_text and isinstance(data, str):
        return TextSecret(check_text(data, path), path)

    table = expect_table(data, path)

    for key in table:
        if key not in ("value", "file"):
            raise MalformedDocumentError("unknown field", join_path(path, key))

    if "value" in table and "file" in table:
        raise MalformedDocumentError("set either 'value' or 'file', not both", path)

    if "value" in table:
        return ValueSecret(get_field(table, "value", str, path), path)

    if "file" in table:
        return FileSecret(get_field(table, "file", str, path), path)

    raise MalformedDocumentError("expected a 'value' or 'file' field", path)
