"""
bw Network Sources

Each `[[network]]` entry tells the daemon where to find peers. The
entry names its kind in an explicit `type` field:

    [[network]]                 [[network]]
    type = "dns"                type = "peers"
    domain = "zer.ooo"          peers = ["1.2.3.4:124", "[::1]:124"]

Entries are validated structurally only; resolving the domain or
dialing the peers belongs to the discovery layer.
"""

import ipaddress
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Type, Union

from .document import expect_table, get_field, join_path, reject_unknown
from .errors import ConfigError, MalformedDocumentError, UnknownVariantError


logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class SocketAddress(NamedTuple):
    """IP address and port of a peer."""
    ip: IPAddress
    port: int

    def __str__(self) -> str:
        if self.ip.version == 6:
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"


def parse_socket_address(text: str, path: Optional[str] = None) -> SocketAddress:
    """
    Parse `ip:port` or `[ipv6]:port`.

    Raises:
        MalformedDocumentError: If text is not a socket address
    """
    host, sep, port_text = text.rpartition(":")
    if not sep or not host:
        raise MalformedDocumentError(f"invalid socket address {text!r}", path)

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        # bare IPv6 must be bracketed
        raise MalformedDocumentError(f"invalid socket address {text!r}", path)

    try:
        ip = ipaddress.ip_address(host)
    except ValueError as e:
        raise MalformedDocumentError(f"invalid socket address {text!r}", path) from e

    if not (port_text.isascii() and port_text.isdigit()) or int(port_text) > 0xFFFF:
        raise MalformedDocumentError(f"invalid port in {text!r}", path)

    return SocketAddress(ip, int(port_text))


@dataclass
class DnsNetworkConfig:
    """Discover peers by looking up a domain."""
    TYPE = "dns"

    domain: str

    @classmethod
    def from_document(cls, data: Dict[str, Any], path: str) -> 'DnsNetworkConfig':
        reject_unknown(data, ("type", "domain"), path)
        return cls(domain=get_field(data, "domain", str, path))

    def to_document(self) -> Dict[str, Any]:
        return {"type": self.TYPE, "domain": self.domain}


@dataclass
class PeersNetworkConfig:
    """Static list of peers, kept in declared order (duplicates included)."""
    TYPE = "peers"

    peers: List[SocketAddress] = field(default_factory=list)

    @classmethod
    def from_document(cls, data: Dict[str, Any], path: str) -> 'PeersNetworkConfig':
        reject_unknown(data, ("type", "peers"), path)
        raw = get_field(data, "peers", list, path, default=[])

        peers = []
        for i, item in enumerate(raw):
            item_path = f"{join_path(path, 'peers')}[{i}]"
            if not isinstance(item, str):
                raise MalformedDocumentError(
                    f"expected string, got {type(item).__name__}", item_path
                )
            peers.append(parse_socket_address(item, item_path))

        return cls(peers=peers)

    def to_document(self) -> Dict[str, Any]:
        return {"type": self.TYPE, "peers": [str(peer) for peer in self.peers]}


NetworkConfig = Union[DnsNetworkConfig, PeersNetworkConfig]

NETWORK_TYPES: Dict[str, Type] = {
    DnsNetworkConfig.TYPE: DnsNetworkConfig,
    PeersNetworkConfig.TYPE: PeersNetworkConfig,
}


def parse_network(data: Any, path: str) -> NetworkConfig:
    """
    Build one network source from its table.

    Raises:
        UnknownVariantError: If `type` names no known source
        MalformedDocumentError: On any other schema violation
    """
    table = expect_table(data, path)
    kind = get_field(table, "type", str, path)

    cls = NETWORK_TYPES.get(kind)
    if cls is None:
        raise UnknownVariantError(kind, join_path(path, "type"))

    return cls.from_document(table, path)


def parse_networks(data: Any, path: str = "network") -> List[NetworkConfig]:
    """
    Build every network source of the `[[network]]` array.

    All entries are evaluated even after one fails, so every broken
    entry shows up in the log; the first failure is then raised.

    Raises:
        ConfigError: The first entry failure
    """
    if not isinstance(data, list):
        raise MalformedDocumentError(
            f"expected an array of tables, got {type(data).__name__}", path
        )

    networks: List[NetworkConfig] = []
    errors: List[ConfigError] = []

    for i, item in enumerate(data):
        try:
            networks.append(parse_network(item, f"{path}[{i}]"))
        except ConfigError as e:
            logger.error(f"Invalid network source: {e}")
            errors.append(e)

    if errors:
        raise errors[0]

    return networks
