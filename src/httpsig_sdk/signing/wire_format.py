"""
Wire format for signature headers

Parses and renders header values of the form::

    Signature keyId="rsa-key-1",algorithm="hs2019",created=1402170695,
        headers="(request-target) host date",signature="Base64(...)"

Values are double-quoted strings or unquoted decimal numbers. Keys are
case-insensitive; unknown keys are ignored.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from ..config.settings import SignatureSettings, resolve_settings
from ..crypto.algorithms import Algorithm, find_algorithm, get_algorithm
from ..crypto.profiles import SigningProfile, find_signing_profile
from ..exceptions import (
    AuthenticationError,
    AlgorithmMismatchError,
    InvalidCreatedFieldError,
    InvalidExpiresFieldError,
    MissingAlgorithmError,
    MissingKeyIdError,
    MissingSignatureError,
    SignatureExpiredError,
    SignatureNotYetValidError,
    UnparsableSignatureError,
    UnsupportedAlgorithmError,
)
from .types import Signature
from .utils import format_timestamp

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "Signature"

# key="quoted \"string\"" or key=123 / key=123.45
_FIELD_PATTERN = re.compile(
    r'(?P<key>\w+)=(?:"(?P<string>(?:[^"\\]|\\.)*)"|(?P<number>\d+(?:\.\d*)?))'
)
_SCHEME_PATTERN = re.compile(r'^\s*[^\s=,"]+\s+')
_ESCAPE_PATTERN = re.compile(r'\\(.)')


@dataclass(frozen=True)
class FieldValue:
    """
    A single field value from a signature header

    Attributes:
        value: ``str`` for quoted values, ``int`` or ``float`` for numbers
    """
    value: Union[str, int, float]

    @property
    def is_string(self) -> bool:
        return isinstance(self.value, str)

    @property
    def is_number(self) -> bool:
        return not self.is_string

    @property
    def is_integer(self) -> bool:
        return isinstance(self.value, int)

    def as_string(self) -> Optional[str]:
        return self.value if self.is_string else None


def strip_scheme(header_value: str) -> str:
    """Remove a leading auth scheme token such as ``Signature``."""
    return _SCHEME_PATTERN.sub('', header_value, count=1).strip()


def tokenize_fields(header_value: str) -> Dict[str, FieldValue]:
    """
    Split a header value (without scheme) into lowercased keys and typed values.

    The last occurrence of a repeated key wins.
    """
    fields: Dict[str, FieldValue] = {}
    for match in _FIELD_PATTERN.finditer(header_value):
        key = match.group('key').lower()
        string_value = match.group('string')
        if string_value is not None:
            fields[key] = FieldValue(_ESCAPE_PATTERN.sub(r'\1', string_value))
            continue
        number = match.group('number')
        fields[key] = FieldValue(float(number) if '.' in number else int(number))
    return fields


def parse_signature(
    header_value: str,
    algorithm: Optional[Union[Algorithm, str]] = None,
    settings: Optional[SignatureSettings] = None
) -> Signature:
    """
    Parse a signature header value into a validated :class:`Signature`.

    Verifiers must derive the concrete algorithm from the keyId rather than
    from the header. When the header carries a generic signing profile such as
    ``hs2019``, ``algorithm`` is mandatory. When the header names a concrete
    algorithm, it must agree with ``algorithm`` if one is supplied.

    Args:
        header_value: Value of the ``Authorization`` or ``Signature`` header
        algorithm: Algorithm the caller associates with the keyId
        settings: Clock and maximum time skew for created/expires validation

    Returns:
        Signature: Signed metadata with timestamps attached

    Raises:
        AuthenticationError: Typed protocol errors (missing fields, bad or
            stale timestamps, unsupported or mismatched algorithm)
        UnparsableSignatureError: Any other failure, chained to its cause
    """
    settings = resolve_settings(settings)

    try:
        fields = tokenize_fields(strip_scheme(header_value))

        headers = []
        fv = fields.get('headers')
        if fv is not None:
            if not fv.is_string:
                raise ValueError("headers field must be a double-quoted string")
            headers = fv.value.lower().split()

        key_id = _string_field(fields, 'keyid')
        if key_id is None:
            raise MissingKeyIdError()

        algorithm_field = _string_field(fields, 'algorithm')
        if algorithm_field is None:
            raise MissingAlgorithmError()

        signature_value = _string_field(fields, 'signature')
        if signature_value is None:
            raise MissingSignatureError()

        now = settings.now()

        created = None
        fv = fields.get('created')
        if fv is not None:
            if not fv.is_number or not float(fv.value).is_integer():
                raise InvalidCreatedFieldError("Field must be an integer value")
            created = int(fv.value)
            if created > now + settings.max_time_skew:
                raise SignatureNotYetValidError(
                    "Signature is not valid yet",
                    details={"created": created, "max_time_skew": settings.max_time_skew}
                )

        expires = None
        fv = fields.get('expires')
        if fv is not None:
            if not fv.is_number:
                raise InvalidExpiresFieldError("Field must be a number")
            expires = float(fv.value)
            if expires <= now:
                raise SignatureExpiredError("Signature has expired", details={"expires": expires})

        expected = get_algorithm(algorithm) if algorithm is not None else None
        profile, resolved = _resolve_algorithm(algorithm_field, expected)

        return Signature(
            key_id=key_id,
            algorithm=resolved,
            signature=signature_value,
            headers=headers,
            signing_profile=profile,
            created=created,
            expires=expires,
        )

    except AuthenticationError as e:
        logger.debug(f"Rejected signature header: {e.message}")
        raise
    except Exception as e:
        logger.debug(f"Unparsable signature header: {e}")
        raise UnparsableSignatureError(header_value, e) from e


def format_signature(signature: Signature, scheme: Optional[str] = DEFAULT_SCHEME) -> str:
    """
    Render a signature as a header value.

    Fields are emitted in a fixed order: keyId, algorithm (the concrete
    algorithm name), headers, signature. ``signature`` is omitted for
    templates; ``created``/``expires`` are appended only when set.

    Args:
        signature: Signature to render
        scheme: Leading scheme token, ``None`` for a bare parameter list
    """
    parts = [
        f'keyId="{_quote(signature.key_id)}"',
        f'algorithm="{signature.algorithm.name}"',
        f'headers="{" ".join(signature.headers)}"',
    ]
    if signature.signature is not None:
        parts.append(f'signature="{_quote(signature.signature)}"')
    if signature.created is not None:
        parts.append(f'created={signature.created}')
    if signature.expires is not None:
        parts.append(f'expires={format_timestamp(signature.expires)}')

    rendered = ",".join(parts)
    return f"{scheme} {rendered}" if scheme else rendered


def _resolve_algorithm(
    algorithm_field: str,
    expected: Optional[Algorithm]
) -> Tuple[Optional[SigningProfile], Algorithm]:
    profile = find_signing_profile(algorithm_field)
    parsed = find_algorithm(algorithm_field, strict=True)

    if parsed is not None:
        if expected is not None and expected.name != parsed.name:
            raise AlgorithmMismatchError(
                "The algorithm does not match the value of the 'Authorization' header.",
                details={"header_algorithm": parsed.name, "expected_algorithm": expected.name}
            )
        return profile, parsed

    if profile is not None:
        if expected is None:
            raise ValueError("The algorithm is required.")
        return profile, expected

    raise UnsupportedAlgorithmError(algorithm_field)


def _string_field(fields: Dict[str, FieldValue], name: str) -> Optional[str]:
    fv = fields.get(name)
    return fv.as_string() if fv is not None else None


def _quote(value: str) -> str:
    return value.replace('\\', '\\\\').replace('"', '\\"')

