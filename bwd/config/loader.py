"""
bw Configuration Loading

Parses the TOML document into a Config tree and resolves every secret
it references. Loading is a single fail-fast pass run once at startup:
either a fully resolved Config comes back or an exception does, and the
daemon must not bring up networking without the former.

Example document:

    key = { file = "/etc/bw/node.key" }
    network-id = "help"

    [server]
    threads = 4

    [[network]]
    type = "dns"
    domain = "zer.ooo"

    [auth]
    secret = "help"

    [router]
    name = "dumb"
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import toml

from ..crypto.keys import IdentityKey
from .auth import AuthMethod, parse_auth
from .document import expect_table, get_text, reject_unknown
from .errors import IoError, MalformedDocumentError
from .identity import IdentityResolver
from .interface import InterfaceConfig
from .network import NetworkConfig, parse_networks
from .router import RouterConfig
from .secret import LazySecret, parse_secret
from .server import ServerConfig


logger = logging.getLogger(__name__)

# Default configuration path
DEFAULT_CONFIG_PATH = Path("/etc/bw/config.toml")

TOP_LEVEL_FIELDS = (
    "key",
    "network-id",
    "server",
    "auth",
    "network",
    "interface",
    "router",
)


class Config:
    """
    Complete node configuration.

    Owns every nested section. The public key and network-id bytes are
    cached projections of the key and network-id fields, filled by
    load(). After load() the object is a read-only snapshot shared by
    reference with the transport, router and interface layers.
    """

    def __init__(
        self,
        key: LazySecret,
        network_id: str,
        auth: AuthMethod,
        server: Optional[ServerConfig] = None,
        networks: Optional[List[NetworkConfig]] = None,
        interface: Optional[InterfaceConfig] = None,
        router: Optional[RouterConfig] = None,
    ):
        self.identity = IdentityResolver(key)
        self.network_id = network_id
        self.auth = auth
        self.server = server or ServerConfig()
        self.networks = networks if networks is not None else []
        self.interface = interface or InterfaceConfig()
        self.router = router or RouterConfig()

        self._cached_network_id: Optional[bytes] = None

    @property
    def key(self) -> LazySecret:
        return self.identity.seed

    @classmethod
    def from_document(cls, data: Any) -> 'Config':
        """
        Build a Config from a parsed document, without resolving secrets.

        Raises:
            MalformedDocumentError: On schema violations
            AmbiguousAuthConfigError: If the auth section is ambiguous
            UnknownVariantError: On an unknown network type or router name
        """
        table = expect_table(data, None)
        reject_unknown(table, TOP_LEVEL_FIELDS, None)

        if "key" not in table:
            raise MalformedDocumentError("missing required field", "key")
        if "auth" not in table:
            raise MalformedDocumentError("missing required field", "auth")

        return cls(
            key=parse_secret(table["key"], "key"),
            network_id=get_text(table, "network-id", None),
            auth=parse_auth(table["auth"], "auth"),
            server=ServerConfig.from_document(table.get("server", {}), "server"),
            networks=parse_networks(table.get("network", []), "network"),
            interface=InterfaceConfig.from_document(table.get("interface", {}), "interface"),
            router=RouterConfig.from_document(table.get("router", {}), "router"),
        )

    def load(self) -> None:
        """
        Resolve identity and secrets.

        Order:
        1. Derive identity and cache the public key
        2. Cache the network-id bytes
        3. Resolve the auth method's secrets
        4. Resolve the key bytes (already warm from step 1)

        Safe to call again: identity is re-derived to the same bytes and
        caches are overwritten, never appended.

        Raises:
            ConfigError: The first failure; nothing is partially usable
        """
        self.identity.derive_keypair()
        self._cached_network_id = self.network_id.encode("utf-8")
        self.auth.load()
        self.key.materialize()

    def get_public_key(self) -> bytes:
        """Public key bytes for the handshake layer."""
        return self.identity.public_key()

    def get_key_pair(self) -> Tuple[bytes, IdentityKey]:
        """Derive the identity keypair (public bytes, signing key)."""
        return self.identity.derive_keypair()

    def get_network_id(self) -> bytes:
        """Network identifier bytes for discovery and wire namespacing."""
        if self._cached_network_id is not None:
            return self._cached_network_id
        return self.network_id.encode("utf-8")

    def to_document(self) -> Dict[str, Any]:
        """
        Serialize to a document with every default written out.

        Secrets are written in their source form, never as bytes.
        """
        return {
            "key": self.key.to_document(),
            "network-id": self.network_id,
            "server": self.server.to_document(),
            "auth": self.auth.to_document(),
            "network": [network.to_document() for network in self.networks],
            "interface": self.interface.to_document(),
            "router": self.router.to_document(),
        }


def parse_config(data: Dict[str, Any]) -> Config:
    """Build a Config from a parsed document (structure only)."""
    return Config.from_document(data)


def parse_config_text(text: str) -> Config:
    """
    Parse TOML text into a Config (structure only).

    Raises:
        MalformedDocumentError: If text is not valid TOML
    """
    try:
        data = toml.loads(text)
    except toml.TomlDecodeError as e:
        raise MalformedDocumentError(f"invalid TOML: {e}") from e
    return parse_config(data)


def dumps_config(config: Config) -> str:
    """Serialize a Config to TOML text."""
    return toml.dumps(config.to_document())


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load and resolve configuration from file.

    Args:
        path: Config file (default: /etc/bw/config.toml)

    Returns:
        Config: Fully loaded configuration

    Raises:
        IoError: If the config file or a referenced secret cannot be read
        ConfigError: On any other parse or load failure
    """
    path = Path(path or DEFAULT_CONFIG_PATH)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IoError(f"cannot read config file {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"config file is not valid UTF-8: {e}") from e

    config = parse_config_text(text)
    config.load()

    logger.info(
        f"Loaded configuration from {path}: "
        f"{len(config.networks)} network source(s), router {config.router.name.value}"
    )
    return config
