"""Listener binding parameters (`[server]`)."""

import ipaddress
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .document import expect_table, get_field, get_int_in_range, join_path, reject_unknown
from .errors import MalformedDocumentError


DEFAULT_THREADS = 2
DEFAULT_PORT = 0  # ephemeral
DEFAULT_IP = "0.0.0.0"


@dataclass
class ServerConfig:
    """Transport listener configuration."""
    threads: int = DEFAULT_THREADS
    port: int = DEFAULT_PORT
    ip: Union[ipaddress.IPv4Address, ipaddress.IPv6Address] = field(
        default_factory=lambda: ipaddress.ip_address(DEFAULT_IP)
    )
    unix_socket: Optional[str] = None

    @classmethod
    def from_document(cls, data: Any, path: str = "server") -> 'ServerConfig':
        table = expect_table(data, path)
        reject_unknown(table, ("threads", "port", "ip", "unix-socket"), path)

        raw_ip = get_field(table, "ip", str, path, default=DEFAULT_IP)
        try:
            ip = ipaddress.ip_address(raw_ip)
        except ValueError as e:
            raise MalformedDocumentError(
                f"invalid IP address {raw_ip!r}", join_path(path, "ip")
            ) from e

        return cls(
            threads=get_int_in_range(table, "threads", path, DEFAULT_THREADS, 0, 0xFF),
            port=get_int_in_range(table, "port", path, DEFAULT_PORT, 0, 0xFFFF),
            ip=ip,
            unix_socket=get_field(table, "unix-socket", str, path, default=None),
        )

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            "threads": self.threads,
            "port": self.port,
            "ip": str(self.ip),
        }
        if self.unix_socket is not None:
            document["unix-socket"] = self.unix_socket
        return document
