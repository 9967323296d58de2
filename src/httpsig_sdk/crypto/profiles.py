"""
Signing profile registry

A signing profile is the value a sender puts into the ``algorithm`` field.
``hs2019`` is generic: the verifier derives the concrete algorithm from the
keyId. The legacy profiles name exactly one concrete algorithm each.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional

from ..exceptions import UnsupportedAlgorithmError
from . import algorithms as alg
from .algorithms import Algorithm, ALGORITHMS


@dataclass(frozen=True)
class SigningProfile:
    """
    Signing profile identifier and the algorithms it is compatible with

    Attributes:
        name: Identifier as it appears in the ``algorithm`` field
        algorithms: Concrete algorithms compatible with the profile
    """
    name: str
    algorithms: FrozenSet[Algorithm]

    def supports(self, algorithm: Algorithm) -> bool:
        return algorithm in self.algorithms

    def __str__(self) -> str:
        return self.name


HS2019 = SigningProfile("hs2019", frozenset(ALGORITHMS.values()))

LEGACY_RSA_SHA1 = SigningProfile("rsa-sha1", frozenset({alg.RSA_SHA1}))
LEGACY_RSA_SHA256 = SigningProfile("rsa-sha256", frozenset({alg.RSA_SHA256}))
LEGACY_HMAC_SHA256 = SigningProfile("hmac-sha256", frozenset({alg.HMAC_SHA256}))
LEGACY_ECDSA_SHA256 = SigningProfile("ecdsa-sha256", frozenset({alg.ECDSA_SHA256}))

SIGNING_PROFILES: Mapping[str, SigningProfile] = MappingProxyType({
    profile.name: profile
    for profile in (HS2019, LEGACY_RSA_SHA1, LEGACY_RSA_SHA256, LEGACY_HMAC_SHA256, LEGACY_ECDSA_SHA256)
})


def find_signing_profile(name: Optional[str]) -> Optional[SigningProfile]:
    """Look up a signing profile by identifier (case-insensitive)."""
    if not isinstance(name, str):
        return None
    return SIGNING_PROFILES.get(name.strip().lower())


def get_signing_profile(name) -> SigningProfile:
    """
    Resolve a signing profile by identifier.

    Args:
        name: Profile identifier, or a SigningProfile (returned unchanged)

    Raises:
        UnsupportedAlgorithmError: If the identifier is not registered
    """
    if isinstance(name, SigningProfile):
        return name
    profile = find_signing_profile(name)
    if profile is None:
        raise UnsupportedAlgorithmError(str(name), f"Unsupported signing profile: {name}")
    return profile


def list_signing_profiles() -> List[str]:
    """List registered signing profile identifiers."""
    return list(SIGNING_PROFILES.keys())
