"""
Type definitions for HTTP signatures

This module provides the immutable :class:`Signature` value object: the keyId,
algorithm, covered headers and (once signed) the base64 signature value
carried in an ``Authorization: Signature ...`` header.
"""

import numbers
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from ..config.settings import SignatureSettings
from ..crypto.algorithms import Algorithm, get_algorithm
from ..crypto.profiles import SigningProfile, get_signing_profile
from ..exceptions import AlgorithmMismatchError

REQUEST_TARGET = "(request-target)"
CREATED = "(created)"
EXPIRES = "(expires)"

DEFAULT_HEADERS: Tuple[str, ...] = ("date",)


@dataclass(frozen=True)
class Signature:
    """
    HTTP signature metadata

    The same type serves as a signing template (``signature`` is ``None``)
    and as a computed or received signature. Instances are immutable; signing
    produces a new instance.

    Attributes:
        key_id: Opaque identifier the verifier uses to look up key material
        algorithm: Concrete signature algorithm (a name is resolved on construction)
        signature: Base64 signature value, ``None`` for templates
        headers: Lowercased header names in signing order, defaults to ``("date",)``
        signing_profile: Optional profile identifier such as ``hs2019``
        parameters: Optional algorithm parameters passed through to the crypto provider
        created: Signature creation time, integer seconds since the epoch
        expires: Signature expiration time, seconds since the epoch
    """
    key_id: str
    algorithm: Union[Algorithm, str]
    signature: Optional[str] = None
    headers: Sequence[str] = ()
    signing_profile: Optional[Union[SigningProfile, str]] = None
    parameters: Optional[Mapping[str, Any]] = None
    created: Optional[int] = None
    expires: Optional[float] = None

    def __post_init__(self):
        """Validate and normalize the signature metadata"""
        if not isinstance(self.key_id, str) or not self.key_id.strip():
            raise ValueError("keyId is required.")

        if self.algorithm is None:
            raise ValueError("algorithm is required.")

        algorithm = get_algorithm(self.algorithm)
        profile = None
        if self.signing_profile is not None:
            profile = get_signing_profile(self.signing_profile)
            if not profile.supports(algorithm):
                raise AlgorithmMismatchError(
                    f"Signing algorithm {profile.name} is not compatible with {algorithm.name}",
                    details={"signing_profile": profile.name, "algorithm": algorithm.name}
                )

        if self.signature is not None and not isinstance(self.signature, str):
            raise ValueError("signature must be a base64 string")

        object.__setattr__(self, 'algorithm', algorithm)
        object.__setattr__(self, 'signing_profile', profile)
        object.__setattr__(self, 'headers', _normalize_headers(self.headers))

        if self.parameters is not None:
            object.__setattr__(self, 'parameters', MappingProxyType(dict(self.parameters)))

        if self.created is not None:
            if isinstance(self.created, bool) or not isinstance(self.created, numbers.Integral):
                raise ValueError("created must be an integer number of seconds")
            object.__setattr__(self, 'created', int(self.created))

        if self.expires is not None:
            if isinstance(self.expires, bool) or not isinstance(self.expires, numbers.Real):
                raise ValueError("expires must be a number of seconds")
            object.__setattr__(self, 'expires', float(self.expires))

    @property
    def is_signed(self) -> bool:
        return self.signature is not None

    def with_signature(self, signature: str) -> 'Signature':
        """Return a copy carrying the given signature value."""
        return replace(self, signature=signature)

    def with_timestamps(self, created: Optional[int] = None, expires: Optional[float] = None) -> 'Signature':
        """Return a copy with creation/expiration times set."""
        return replace(
            self,
            created=created if created is not None else self.created,
            expires=expires if expires is not None else self.expires,
        )

    @classmethod
    def from_string(
        cls,
        header_value: str,
        algorithm: Optional[Union[Algorithm, str]] = None,
        settings: Optional[SignatureSettings] = None
    ) -> 'Signature':
        """
        Parse an ``Authorization``/``Signature`` header value.

        See :func:`httpsig_sdk.signing.wire_format.parse_signature`.
        """
        from .wire_format import parse_signature
        return parse_signature(header_value, algorithm, settings)

    def to_string(self) -> str:
        """Render the header value, see :func:`httpsig_sdk.signing.wire_format.format_signature`."""
        from .wire_format import format_signature
        return format_signature(self)

    def __str__(self) -> str:
        return self.to_string()


def _normalize_headers(headers: Optional[Sequence[str]]) -> Tuple[str, ...]:
    if headers is None:
        return DEFAULT_HEADERS
    if isinstance(headers, str):
        headers = headers.split()
    normalized = tuple(header.strip().lower() for header in headers)
    return normalized or DEFAULT_HEADERS
