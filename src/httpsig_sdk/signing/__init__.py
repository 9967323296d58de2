"""
HTTP Signatures SDK - Request Signing Module

Signature metadata, the header wire format, the signing string and the signer.
"""

from .types import (
    Signature,
    REQUEST_TARGET,
    CREATED,
    EXPIRES,
    DEFAULT_HEADERS,
)

from .wire_format import (
    FieldValue,
    parse_signature,
    format_signature,
    tokenize_fields,
    strip_scheme,
)

from .canonical_message import (
    HeaderSource,
    MappingHeaderSource,
    as_header_source,
    build_signing_string,
    build_signing_string_for,
)

from .signer import (
    Signer,
    create_signer,
    sign_request,
)

from .utils import (
    PerformanceTimer,
    encode_signature,
    decode_signature,
    format_http_date,
    normalize_header_name,
)

from .integration import (
    HttpSignatureAuth,
    SigningSession,
    create_signing_session,
)

# Public API exports
__all__ = [
    'Signature',
    'REQUEST_TARGET',
    'CREATED',
    'EXPIRES',
    'DEFAULT_HEADERS',
    'FieldValue',
    'parse_signature',
    'format_signature',
    'tokenize_fields',
    'strip_scheme',
    'HeaderSource',
    'MappingHeaderSource',
    'as_header_source',
    'build_signing_string',
    'build_signing_string_for',
    'Signer',
    'create_signer',
    'sign_request',
    'PerformanceTimer',
    'encode_signature',
    'decode_signature',
    'format_http_date',
    'normalize_header_name',
    'HttpSignatureAuth',
    'SigningSession',
    'create_signing_session',
]
