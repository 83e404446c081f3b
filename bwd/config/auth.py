"""
bw Authentication Methods

The `[auth]` section carries no explicit tag; the method is recognized
by which fields are present:

    [auth]                      [auth]
    secret = "..."              signature = { file = "node.sig" }
                                ca = { file = "ca.pub" }

    -> SharedSecretConfig       -> CertificateAuthorityConfig

Matching is done in two passes. Every registered method whose required
fields are all present becomes a candidate; the section is accepted
only if there is exactly one. A section matching none or several
methods is rejected instead of silently taking the first hit.
"""

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Type, Union

from ..crypto.keys import verify_signature
from ..crypto.primitives import constant_time_compare
from .document import expect_table, join_path, reject_unknown
from .errors import AmbiguousAuthConfigError
from .secret import LazySecret, parse_secret


logger = logging.getLogger(__name__)


class AuthMethod:
    """
    Base class for authentication methods.

    Subclasses declare the fields that identify them in REQUIRED_FIELDS
    and every field they accept in FIELDS.
    """

    NAME: str = ""
    REQUIRED_FIELDS: FrozenSet[str] = frozenset()
    FIELDS: FrozenSet[str] = frozenset()

    @classmethod
    def matches(cls, data: Dict[str, Any]) -> bool:
        """True if data carries every required field of this method."""
        return cls.REQUIRED_FIELDS.issubset(data)

    @classmethod
    def from_document(cls, data: Dict[str, Any], path: str) -> 'AuthMethod':
        raise NotImplementedError

    def secrets(self) -> List[LazySecret]:
        """Secrets owned by this method."""
        raise NotImplementedError

    def load(self) -> None:
        """
        Resolve every secret owned by this method.

        Raises:
            ConfigError: On the first secret that fails to resolve
        """
        for secret in self.secrets():
            secret.materialize()

    def to_document(self) -> Dict[str, Any]:
        raise NotImplementedError


class SharedSecretConfig(AuthMethod):
    """Authentication with a secret shared by every node of the network."""

    NAME = "shared-secret"
    REQUIRED_FIELDS = frozenset({"secret"})
    FIELDS = REQUIRED_FIELDS

    def __init__(self, secret: LazySecret):
        self.secret = secret

    @classmethod
    def from_document(cls, data: Dict[str, Any], path: str) -> 'SharedSecretConfig':
        return cls(parse_secret(data["secret"], join_path(path, "secret"), allow_text=True))

    def secrets(self) -> List[LazySecret]:
        return [self.secret]

    def get_secret(self) -> bytes:
        return self.secret.resolve()

    def matches_secret(self, candidate: bytes) -> bool:
        """Compare a presented secret against ours in constant time."""
        return constant_time_compare(self.get_secret(), candidate)

    def to_document(self) -> Dict[str, Any]:
        return {"secret": self.secret.to_document()}


class CertificateAuthorityConfig(AuthMethod):
    """
    Authentication with a certificate authority.

    `signature` is the CA's Ed25519 signature over this node's public
    key, `ca` is the CA public key peers are expected to trust.
    """

    NAME = "certificate-authority"
    REQUIRED_FIELDS = frozenset({"signature", "ca"})
    FIELDS = REQUIRED_FIELDS

    def __init__(self, signature: LazySecret, ca: LazySecret):
        self.signature = signature
        self.ca = ca

    @classmethod
    def from_document(
        cls, data: Dict[str, Any], path: str
    ) -> 'CertificateAuthorityConfig':
        return cls(
            signature=parse_secret(data["signature"], join_path(path, "signature")),
            ca=parse_secret(data["ca"], join_path(path, "ca")),
        )

    def secrets(self) -> List[LazySecret]:
        return [self.signature, self.ca]

    def get_signature(self) -> bytes:
        return self.signature.resolve()

    def get_ca(self) -> bytes:
        return self.ca.resolve()

    def verify(self, public_key: bytes) -> bool:
        """Check that our signature is the CA's signature over public_key."""
        return verify_signature(self.get_ca(), public_key, self.get_signature())

    def to_document(self) -> Dict[str, Any]:
        return {
            "signature": self.signature.to_document(),
            "ca": self.ca.to_document(),
        }


AuthConfig = Union[SharedSecretConfig, CertificateAuthorityConfig]

AUTH_METHODS: List[Type[AuthMethod]] = [
    SharedSecretConfig,
    CertificateAuthorityConfig,
]


def check_disjoint_variants(methods: Optional[List[Type[AuthMethod]]] = None) -> None:
    """
    Verify that no method's required fields contain another's.

    If they did, every document for the larger method would also match
    the smaller one and always be rejected as ambiguous.

    Raises:
        TypeError: If two methods overlap that way
    """
    methods = AUTH_METHODS if methods is None else methods

    for i, first in enumerate(methods):
        for second in methods[i + 1:]:
            if (first.REQUIRED_FIELDS.issubset(second.REQUIRED_FIELDS)
                    or second.REQUIRED_FIELDS.issubset(first.REQUIRED_FIELDS)):
                raise TypeError(
                    f"auth methods {first.__name__} and {second.__name__} "
                    f"have overlapping required fields"
                )


def parse_auth(
    data: Any,
    path: str = "auth",
    methods: Optional[List[Type[AuthMethod]]] = None,
) -> AuthMethod:
    """
    Recognize and build the authentication method of a section.

    Args:
        data: The `[auth]` table
        path: Dotted path of the section
        methods: Candidate methods (default: AUTH_METHODS)

    Returns:
        AuthMethod: The single matching method

    Raises:
        AmbiguousAuthConfigError: If zero or several methods match
        MalformedDocumentError: If the section is not a table or carries
            fields foreign to the matched method
    """
    methods = AUTH_METHODS if methods is None else methods
    table = expect_table(data, path)

    candidates = [method for method in methods if method.matches(table)]

    if not candidates:
        fields = ", ".join(sorted(table)) or "no fields"
        raise AmbiguousAuthConfigError(
            f"no authentication method matches ({fields})", path
        )

    if len(candidates) > 1:
        names = ", ".join(method.NAME for method in candidates)
        raise AmbiguousAuthConfigError(
            f"several authentication methods match: {names}", path
        )

    method = candidates[0]
    reject_unknown(table, method.FIELDS, path)

    logger.debug(f"Authentication method: {method.NAME}")
    return method.from_document(table, path)


check_disjoint_variants()
