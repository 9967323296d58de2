"""
Signature algorithm registry

This module maps the portable algorithm names used on the wire (``rsa-sha256``,
``ecdsa-sha256-p1363``, ``hmac-sha512``, ...) to descriptors that tell a crypto
provider which key type, digest, padding and signature encoding to use.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Any, Optional

from ..exceptions import UnsupportedAlgorithmError


class DigestAlgorithm(str, Enum):
    """Message digests used by the registered algorithms"""
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


class KeyType(str, Enum):
    """Kind of key material an algorithm operates on"""
    HMAC = "hmac"
    RSA = "rsa"
    DSA = "dsa"
    EC = "ec"
    ED25519 = "ed25519"


class SignatureEncoding(str, Enum):
    """Bit layout of (r, s) signatures"""
    DER = "der"
    P1363 = "p1363"


class RsaPadding(str, Enum):
    PKCS1V15 = "pkcs1v15"
    PSS = "pss"


_EMPTY_PARAMETERS: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class Algorithm:
    """
    Descriptor for one concrete signature algorithm

    Attributes:
        name: Portable name as it appears in the ``algorithm`` field
        key_type: Key material the algorithm requires
        digest: Message digest, ``None`` for algorithms that hash internally (Ed25519)
        encoding: Signature encoding for (r, s) algorithms
        padding: Padding scheme for RSA algorithms
        parameters: Default cryptographic parameters (e.g. PSS salt length)
    """
    name: str
    key_type: KeyType
    digest: Optional[DigestAlgorithm] = None
    encoding: Optional[SignatureEncoding] = None
    padding: Optional[RsaPadding] = None
    parameters: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_PARAMETERS, compare=False, hash=False)

    def __str__(self) -> str:
        return self.name


def _normalize(name: str) -> str:
    return re.sub(r'[^a-z0-9]', '', name.lower())


def _hmac(digest: DigestAlgorithm) -> Algorithm:
    return Algorithm(f"hmac-{digest.value}", KeyType.HMAC, digest)


def _rsa(digest: DigestAlgorithm) -> Algorithm:
    return Algorithm(f"rsa-{digest.value}", KeyType.RSA, digest, padding=RsaPadding.PKCS1V15)


def _rsa_pss(digest: DigestAlgorithm, salt_length: int) -> Algorithm:
    return Algorithm(
        f"rsa-pss-{digest.value}",
        KeyType.RSA,
        digest,
        padding=RsaPadding.PSS,
        parameters=MappingProxyType({"salt_length": salt_length}),
    )


def _dsa(digest: DigestAlgorithm) -> Algorithm:
    return Algorithm(f"dsa-{digest.value}", KeyType.DSA, digest, encoding=SignatureEncoding.DER)


def _ecdsa(digest: DigestAlgorithm, encoding: SignatureEncoding = SignatureEncoding.DER) -> Algorithm:
    suffix = "-p1363" if encoding is SignatureEncoding.P1363 else ""
    return Algorithm(f"ecdsa-{digest.value}{suffix}", KeyType.EC, digest, encoding=encoding)


HMAC_SHA1 = _hmac(DigestAlgorithm.SHA1)
HMAC_SHA224 = _hmac(DigestAlgorithm.SHA224)
HMAC_SHA256 = _hmac(DigestAlgorithm.SHA256)
HMAC_SHA384 = _hmac(DigestAlgorithm.SHA384)
HMAC_SHA512 = _hmac(DigestAlgorithm.SHA512)

RSA_SHA1 = _rsa(DigestAlgorithm.SHA1)
RSA_SHA256 = _rsa(DigestAlgorithm.SHA256)
RSA_SHA384 = _rsa(DigestAlgorithm.SHA384)
RSA_SHA512 = _rsa(DigestAlgorithm.SHA512)

# Salt length defaults to the digest length
RSA_PSS_SHA256 = _rsa_pss(DigestAlgorithm.SHA256, 32)
RSA_PSS_SHA384 = _rsa_pss(DigestAlgorithm.SHA384, 48)
RSA_PSS_SHA512 = _rsa_pss(DigestAlgorithm.SHA512, 64)

DSA_SHA1 = _dsa(DigestAlgorithm.SHA1)
DSA_SHA224 = _dsa(DigestAlgorithm.SHA224)
DSA_SHA256 = _dsa(DigestAlgorithm.SHA256)

ECDSA_SHA1 = _ecdsa(DigestAlgorithm.SHA1)
ECDSA_SHA256 = _ecdsa(DigestAlgorithm.SHA256)
ECDSA_SHA384 = _ecdsa(DigestAlgorithm.SHA384)
ECDSA_SHA512 = _ecdsa(DigestAlgorithm.SHA512)
ECDSA_SHA256_P1363 = _ecdsa(DigestAlgorithm.SHA256, SignatureEncoding.P1363)
ECDSA_SHA384_P1363 = _ecdsa(DigestAlgorithm.SHA384, SignatureEncoding.P1363)
ECDSA_SHA512_P1363 = _ecdsa(DigestAlgorithm.SHA512, SignatureEncoding.P1363)

ED25519 = Algorithm("ed25519", KeyType.ED25519)


_REGISTRY: Dict[str, Algorithm] = {
    _normalize(algorithm.name): algorithm
    for algorithm in (
        HMAC_SHA1, HMAC_SHA224, HMAC_SHA256, HMAC_SHA384, HMAC_SHA512,
        RSA_SHA1, RSA_SHA256, RSA_SHA384, RSA_SHA512,
        RSA_PSS_SHA256, RSA_PSS_SHA384, RSA_PSS_SHA512,
        DSA_SHA1, DSA_SHA224, DSA_SHA256,
        ECDSA_SHA1, ECDSA_SHA256, ECDSA_SHA384, ECDSA_SHA512,
        ECDSA_SHA256_P1363, ECDSA_SHA384_P1363, ECDSA_SHA512_P1363,
        ED25519,
    )
}

ALGORITHMS: Mapping[str, Algorithm] = MappingProxyType(
    {algorithm.name: algorithm for algorithm in _REGISTRY.values()}
)


def find_algorithm(name: Optional[str], strict: bool = False) -> Optional[Algorithm]:
    """
    Look up an algorithm by portable name.

    Matching ignores case and punctuation, so ``RSA-SHA256`` and ``rsa_sha256``
    both resolve to ``rsa-sha256``.

    Args:
        name: Algorithm name
        strict: Only ignore case and surrounding whitespace. Used for names
            read from signature headers.

    Returns:
        Algorithm or None if the name is not registered
    """
    if not isinstance(name, str):
        return None
    if strict:
        return ALGORITHMS.get(name.strip().lower())
    return _REGISTRY.get(_normalize(name))


def get_algorithm(name) -> Algorithm:
    """
    Resolve an algorithm by portable name.

    Args:
        name: Portable name, or an Algorithm (returned unchanged)

    Raises:
        UnsupportedAlgorithmError: If the name is not registered
    """
    if isinstance(name, Algorithm):
        return name
    algorithm = find_algorithm(name)
    if algorithm is None:
        raise UnsupportedAlgorithmError(str(name))
    return algorithm


def list_algorithms() -> List[str]:
    """List registered portable algorithm names."""
    return list(ALGORITHMS.keys())
