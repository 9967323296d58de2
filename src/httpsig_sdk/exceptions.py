"""
Exception classes for the HTTP Signatures SDK
"""

from typing import Optional, Dict, Any


class HttpSignatureError(Exception):
    """Base exception for all HTTP Signatures SDK errors"""

    default_code = "HTTP_SIGNATURE_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message='{self.message}', error_code='{self.error_code}')"


class AuthenticationError(HttpSignatureError):
    """Protocol-level failure while handling a signature. Never retryable."""

    default_code = "AUTHENTICATION_ERROR"


class MissingFieldError(AuthenticationError):
    """A required field is absent from a parsed signature header"""

    default_code = "MISSING_FIELD"
    field_name = ""

    def __init__(self, message: Optional[str] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message or f"Missing {self.field_name}", error_code, details)
        self.field = self.field_name


class MissingKeyIdError(MissingFieldError):
    default_code = "MISSING_KEY_ID"
    field_name = "keyId"


class MissingAlgorithmError(MissingFieldError):
    default_code = "MISSING_ALGORITHM"
    field_name = "algorithm"


class MissingSignatureError(MissingFieldError):
    default_code = "MISSING_SIGNATURE"
    field_name = "signature"


class InvalidTimestampFieldError(AuthenticationError):
    """A created/expires field has the wrong type"""

    default_code = "INVALID_TIMESTAMP_FIELD"
    field_name = ""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.field = self.field_name


class InvalidCreatedFieldError(InvalidTimestampFieldError):
    default_code = "INVALID_CREATED"
    field_name = "created"


class InvalidExpiresFieldError(InvalidTimestampFieldError):
    default_code = "INVALID_EXPIRES"
    field_name = "expires"


class SignatureNotYetValidError(AuthenticationError):
    """The created timestamp lies beyond the allowed clock skew"""

    default_code = "SIGNATURE_NOT_YET_VALID"


class SignatureExpiredError(AuthenticationError):
    """The expires timestamp is not in the future"""

    default_code = "SIGNATURE_EXPIRED"


class UnsupportedAlgorithmError(AuthenticationError):
    """Name is in neither the algorithm nor the signing profile table"""

    default_code = "UNSUPPORTED_ALGORITHM"

    def __init__(self, algorithm: str, message: Optional[str] = None):
        super().__init__(message or f"Unsupported algorithm: {algorithm}",
                         details={"algorithm": algorithm})
        self.algorithm = algorithm


class AlgorithmMismatchError(AuthenticationError):
    """Signing profile, algorithm or key material disagree with each other"""

    default_code = "ALGORITHM_MISMATCH"


class MissingRequiredHeaderError(AuthenticationError):
    """A covered header has no value in the supplied header source"""

    default_code = "MISSING_REQUIRED_HEADER"

    def __init__(self, header: str):
        super().__init__(f"Required header not present: {header}", details={"header": header})
        self.header = header


class MalformedSignatureEncodingError(AuthenticationError):
    """Signature value is not valid base64 or not valid for the algorithm's encoding"""

    default_code = "MALFORMED_SIGNATURE_ENCODING"


class UnparsableSignatureError(AuthenticationError):
    """Catch-all for header values that could not be parsed"""

    default_code = "UNPARSABLE_SIGNATURE"

    def __init__(self, header_value: str, cause: Optional[BaseException] = None):
        message = f"Unparsable signature: {header_value}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message, details={"header_value": header_value})
        self.header_value = header_value
        self.cause = cause


class SigningError(HttpSignatureError):
    """The crypto provider failed to produce a signature"""

    default_code = "SIGNING_FAILED"


class KeyLoadError(HttpSignatureError):
    """Exception raised when key material cannot be decoded"""

    default_code = "KEY_LOAD_FAILED"


class ConfigurationError(HttpSignatureError):
    """Invalid SDK settings"""

    default_code = "INVALID_CONFIG"
