"""
Typed access to parsed TOML tables.

Each helper takes the dotted path of the table it reads from so that
schema violations are reported against the exact field.
"""

from typing import Any, Dict, Iterable, Optional

from .errors import MalformedDocumentError


_MISSING = object()

_TYPE_NAMES = {
    str: "string",
    int: "integer",
    dict: "table",
    list: "array",
}


def join_path(parent: Optional[str], key: str) -> str:
    """Join a parent path and a key into a dotted field path."""
    if not parent:
        return key
    return f"{parent}.{key}"


def expect_table(value: Any, path: Optional[str]) -> Dict[str, Any]:
    """Ensure value is a table."""
    if not isinstance(value, dict):
        raise MalformedDocumentError(
            f"expected a table, got {type(value).__name__}", path
        )
    return value


def reject_unknown(
    data: Dict[str, Any],
    allowed: Iterable[str],
    path: Optional[str],
) -> None:
    """Raise if data carries keys outside allowed."""
    allowed = set(allowed)
    for key in data:
        if key not in allowed:
            raise MalformedDocumentError("unknown field", join_path(path, key))


def get_field(
    data: Dict[str, Any],
    key: str,
    expected: type,
    path: Optional[str],
    default: Any = _MISSING,
) -> Any:
    """
    Read a typed field from a table.

    Args:
        data: Table to read from
        key: Field name
        expected: Python type the value must have
        path: Dotted path of the table
        default: Value returned when the field is absent (required if omitted)

    Returns:
        The field value, or default

    Raises:
        MalformedDocumentError: If the field is missing or has the wrong type
    """
    field_path = join_path(path, key)

    if key not in data:
        if default is _MISSING:
            raise MalformedDocumentError("missing required field", field_path)
        return default

    value = data[key]

    # bool is a subclass of int, but `threads = true` is never meant
    if isinstance(value, bool) and expected is not bool:
        ok = False
    else:
        ok = isinstance(value, expected)

    if not ok:
        name = _TYPE_NAMES.get(expected, expected.__name__)
        raise MalformedDocumentError(
            f"expected {name}, got {type(value).__name__}", field_path
        )

    return value


def get_int_in_range(
    data: Dict[str, Any],
    key: str,
    path: Optional[str],
    default: int,
    low: int,
    high: int,
) -> int:
    """Read an integer field bounded to [low, high]."""
    value = get_field(data, key, int, path, default)
    if not low <= value <= high:
        raise MalformedDocumentError(
            f"{value} out of range ({low}..{high})", join_path(path, key)
        )
    return value


def get_text(
    data: Dict[str, Any],
    key: str,
    path: Optional[str],
    default: Any = _MISSING,
) -> Any:
    """Read a string field that must be free of control characters."""
    value = get_field(data, key, str, path, default)
    if isinstance(value, str):
        check_text(value, join_path(path, key))
    return value


def check_text(value: str, path: Optional[str]) -> str:
    """
    Reject control characters other than tab.

    Raises:
        MalformedDocumentError: If value holds a control character
    """
    for char in value:
        if (ord(char) < 0x20 and char != "\t") or ord(char) == 0x7F:
            raise MalformedDocumentError(
                f"control character {char!r} not allowed", path
            )
    return value
