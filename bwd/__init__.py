"""
bwd - bw mesh daemon, configuration and identity layer

Loads the node configuration, resolves its key material and secrets,
and derives the node identity handed to the network runtime.

This package contains:
- config/ : configuration document parsing and resolution
- crypto/ : Ed25519 identity keys

License: Open Source (see LICENSE)
"""

__version__ = "0.1.0"
__author__ = "bw Project"
