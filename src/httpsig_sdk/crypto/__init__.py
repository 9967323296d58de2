"""
Cryptographic building blocks for the HTTP Signatures SDK

Algorithm and signing profile registries, signature encodings, the crypto
provider abstraction and key loading helpers.
"""

from .algorithms import (
    Algorithm,
    DigestAlgorithm,
    KeyType,
    SignatureEncoding,
    RsaPadding,
    ALGORITHMS,
    find_algorithm,
    get_algorithm,
    list_algorithms,
)
from .profiles import (
    SigningProfile,
    HS2019,
    SIGNING_PROFILES,
    find_signing_profile,
    get_signing_profile,
    list_signing_profiles,
)
from .provider import (
    CryptoProvider,
    CryptographyProvider,
    get_default_provider,
)
from ..exceptions import KeyLoadError
from .keys import (
    load_private_key,
    load_public_key,
    load_hmac_key,
    load_key_file,
)

__all__ = [
    'Algorithm',
    'DigestAlgorithm',
    'KeyType',
    'SignatureEncoding',
    'RsaPadding',
    'ALGORITHMS',
    'find_algorithm',
    'get_algorithm',
    'list_algorithms',
    'SigningProfile',
    'HS2019',
    'SIGNING_PROFILES',
    'find_signing_profile',
    'get_signing_profile',
    'list_signing_profiles',
    'CryptoProvider',
    'CryptographyProvider',
    'get_default_provider',
    'KeyLoadError',
    'load_private_key',
    'load_public_key',
    'load_hmac_key',
    'load_key_file',
]
