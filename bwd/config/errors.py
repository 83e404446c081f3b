"""
bw Configuration Errors

Every failure raised while parsing or loading a configuration document
derives from ConfigError and carries the dotted path of the offending
field, so the daemon can abort startup with a message that points at
the exact line of the document to fix.

Hierarchy:
- ConfigError
  - IoError                  : secret file could not be read
  - DecodeError              : inline secret is not valid base64
  - InvalidSeedError         : key material has the wrong size/format
  - AmbiguousAuthConfigError : auth section matches zero or several methods
  - UnknownVariantError      : unrecognized `type` / `name` discriminator
  - MalformedDocumentError   : schema violation at parse time
"""

from typing import Any, Optional


class ConfigError(Exception):
    """Base class for configuration errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class IoError(ConfigError):
    """Exception raised when a secret file cannot be read."""
    pass


class DecodeError(ConfigError):
    """Exception raised when an inline secret cannot be decoded."""
    pass


class InvalidSeedError(ConfigError):
    """Exception raised for key material unusable as an Ed25519 seed."""
    pass


class AmbiguousAuthConfigError(ConfigError):
    """Exception raised when the auth section matches zero or several methods."""
    pass


class UnknownVariantError(ConfigError):
    """Exception raised for an unrecognized variant discriminator."""

    def __init__(self, value: Any, path: Optional[str] = None):
        self.value = value
        super().__init__(f"unknown variant {value!r}", path)


class MalformedDocumentError(ConfigError):
    """Exception raised when the document does not match the schema."""
    pass
