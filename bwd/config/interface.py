"""Virtual network interface settings (`[interface]`)."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .document import expect_table, get_field, get_int_in_range, join_path, reject_unknown
from .errors import MalformedDocumentError


DEFAULT_NAME = "bw%d"  # %d is replaced with the first free index
DEFAULT_MTU = 1400


class InterfaceMode(str, Enum):
    """Kind of virtual interface."""
    TAP = "tap"  # layer 2
    TUN = "tun"  # layer 3


@dataclass
class InterfaceConfig:
    """Virtual interface configuration."""
    mode: InterfaceMode = InterfaceMode.TAP
    name: str = DEFAULT_NAME
    mtu: int = DEFAULT_MTU

    @classmethod
    def from_document(cls, data: Any, path: str = "interface") -> 'InterfaceConfig':
        table = expect_table(data, path)
        reject_unknown(table, ("mode", "name", "mtu"), path)

        raw_mode = get_field(table, "mode", str, path, default=InterfaceMode.TAP.value)
        try:
            mode = InterfaceMode(raw_mode)
        except ValueError:
            raise MalformedDocumentError(
                f"expected 'tap' or 'tun', got {raw_mode!r}", join_path(path, "mode")
            ) from None

        return cls(
            mode=mode,
            name=get_field(table, "name", str, path, default=DEFAULT_NAME),
            mtu=get_int_in_range(table, "mtu", path, DEFAULT_MTU, 1, 0xFFFFFFFF),
        )

    def to_document(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "name": self.name, "mtu": self.mtu}
