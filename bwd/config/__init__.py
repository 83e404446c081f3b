"""
bw Configuration Module

Turns the TOML configuration document into a resolved, read-only
snapshot for the rest of the daemon:
- secret.py    : lazily resolved inline/file secrets
- identity.py  : node identity from the key seed
- auth.py      : authentication method recognition
- network.py   : peer discovery sources
- router.py    : routing strategy selection
- server.py    : listener binding
- interface.py : virtual interface settings
- loader.py    : Config root and the load pass
"""

from .errors import (
    ConfigError,
    IoError,
    DecodeError,
    InvalidSeedError,
    AmbiguousAuthConfigError,
    UnknownVariantError,
    MalformedDocumentError,
)

from .secret import (
    LazySecret,
    ValueSecret,
    FileSecret,
    TextSecret,
    parse_secret,
    with_value,
)

from .identity import IdentityResolver

from .auth import (
    AuthMethod,
    SharedSecretConfig,
    CertificateAuthorityConfig,
    parse_auth,
)

from .network import (
    SocketAddress,
    DnsNetworkConfig,
    PeersNetworkConfig,
    parse_networks,
)

from .router import (
    RouterChoice,
    RouterConfig,
    PythonRouterConfig,
)

from .server import ServerConfig

from .interface import (
    InterfaceMode,
    InterfaceConfig,
)

from .loader import (
    Config,
    DEFAULT_CONFIG_PATH,
    load_config,
    parse_config,
    parse_config_text,
    dumps_config,
)

__all__ = [
    # Errors
    'ConfigError',
    'IoError',
    'DecodeError',
    'InvalidSeedError',
    'AmbiguousAuthConfigError',
    'UnknownVariantError',
    'MalformedDocumentError',
    # Secrets
    'LazySecret',
    'ValueSecret',
    'FileSecret',
    'TextSecret',
    'parse_secret',
    'with_value',
    # Identity
    'IdentityResolver',
    # Auth
    'AuthMethod',
    'SharedSecretConfig',
    'CertificateAuthorityConfig',
    'parse_auth',
    # Network
    'SocketAddress',
    'DnsNetworkConfig',
    'PeersNetworkConfig',
    'parse_networks',
    # Router
    'RouterChoice',
    'RouterConfig',
    'PythonRouterConfig',
    # Server / interface
    'ServerConfig',
    'InterfaceMode',
    'InterfaceConfig',
    # Loader
    'Config',
    'DEFAULT_CONFIG_PATH',
    'load_config',
    'parse_config',
    'parse_config_text',
    'dumps_config',
]
