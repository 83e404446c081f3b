"""
bwd Entry Point

Loads and checks the node configuration the daemon would start with:

    bwd check       - load the config, report problems (default)
    bwd identity    - print the node public key and node ID
    bwd dump        - print the config with every default filled in
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Config, ConfigError, DEFAULT_CONFIG_PATH, dumps_config, load_config


logger = logging.getLogger("bwd")


def _summary(config: Config) -> str:
    server = config.server
    listen = server.unix_socket or f"{server.ip}:{server.port}"
    return (
        f"node {config.identity.node_id().hex()} on network "
        f"{config.network_id!r}: listen {listen} ({server.threads} threads), "
        f"{config.interface.mode.value} {config.interface.name} "
        f"mtu {config.interface.mtu}, router {config.router.name.value}, "
        f"{len(config.networks)} network source(s)"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="bw mesh daemon configuration")
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Configuration file path",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"bwd {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="check",
        choices=("check", "identity", "dump"),
        help="What to do with the loaded configuration",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.command == "identity":
        print(f"Public key: {config.get_public_key().hex()}")
        print(f"Node ID:    {config.identity.node_id().hex()}")
    elif args.command == "dump":
        print(dumps_config(config), end="")
    else:
        logger.info(_summary(config))

    return 0


if __name__ == "__main__":
    sys.exit(main())
