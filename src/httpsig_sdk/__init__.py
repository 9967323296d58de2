"""
HTTP Signatures Python SDK
Signing and verification of HTTP requests with ``Authorization: Signature`` headers
"""

from .version import __version__
from .exceptions import (
    HttpSignatureError,
    AuthenticationError,
    MissingFieldError,
    MissingKeyIdError,
    MissingAlgorithmError,
    MissingSignatureError,
    InvalidTimestampFieldError,
    InvalidCreatedFieldError,
    InvalidExpiresFieldError,
    SignatureNotYetValidError,
    SignatureExpiredError,
    UnsupportedAlgorithmError,
    AlgorithmMismatchError,
    MissingRequiredHeaderError,
    MalformedSignatureEncodingError,
    UnparsableSignatureError,
    SigningError,
    KeyLoadError,
    ConfigurationError,
)
from .config import (
    SignatureSettings,
    DEFAULT_SETTINGS,
    load_settings_from_env,
    load_settings_from_file,
)
from .crypto import (
    Algorithm,
    SigningProfile,
    CryptoProvider,
    CryptographyProvider,
    get_algorithm,
    get_signing_profile,
    list_algorithms,
    list_signing_profiles,
    load_private_key,
    load_public_key,
    load_hmac_key,
)
from .signing import (
    Signature,
    Signer,
    create_signer,
    sign_request,
    parse_signature,
    format_signature,
    build_signing_string,
    HttpSignatureAuth,
    SigningSession,
)
from .verification import (
    Verifier,
    create_verifier,
    verify_signature,
    verify_request,
)

__all__ = [
    '__version__',
    'HttpSignatureError',
    'AuthenticationError',
    'MissingFieldError',
    'MissingKeyIdError',
    'MissingAlgorithmError',
    'MissingSignatureError',
    'InvalidTimestampFieldError',
    'InvalidCreatedFieldError',
    'InvalidExpiresFieldError',
    'SignatureNotYetValidError',
    'SignatureExpiredError',
    'UnsupportedAlgorithmError',
    'AlgorithmMismatchError',
    'MissingRequiredHeaderError',
    'MalformedSignatureEncodingError',
    'UnparsableSignatureError',
    'SigningError',
    'KeyLoadError',
    'ConfigurationError',
    'SignatureSettings',
    'DEFAULT_SETTINGS',
    'load_settings_from_env',
    'load_settings_from_file',
    'Algorithm',
    'SigningProfile',
    'CryptoProvider',
    'CryptographyProvider',
    'get_algorithm',
    'get_signing_profile',
    'list_algorithms',
    'list_signing_profiles',
    'load_private_key',
    'load_public_key',
    'load_hmac_key',
    'Signature',
    'Signer',
    'create_signer',
    'sign_request',
    'parse_signature',
    'format_signature',
    'build_signing_string',
    'HttpSignatureAuth',
    'SigningSession',
    'Verifier',
    'create_verifier',
    'verify_signature',
    'verify_request',
]
