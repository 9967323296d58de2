"""
Utility functions for request signing

Header-name normalization, strict base64 handling, HTTP dates and a small
performance timer shared by the signer and verifier.
"""

import base64
import binascii
import time
from email.utils import formatdate
from typing import Optional

from ..exceptions import MalformedSignatureEncodingError


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase.

    Args:
        name: Header name

    Returns:
        str: Lowercase header name with surrounding whitespace removed
    """
    return name.strip().lower()


def encode_signature(signature_bytes: bytes) -> str:
    """Standard base64 (with padding) of raw signature bytes."""
    return base64.b64encode(signature_bytes).decode('ascii')


def decode_signature(signature_value: str) -> bytes:
    """
    Strictly decode a base64 signature value.

    Args:
        signature_value: Base64 text from the signature field

    Returns:
        bytes: Raw signature bytes

    Raises:
        MalformedSignatureEncodingError: If the value is not valid base64
    """
    try:
        return base64.b64decode(signature_value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedSignatureEncodingError(
            f"Signature is not valid base64: {e}",
            details={"original_error": str(e)}
        ) from e


def format_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format a timestamp as an IMF-fixdate ``Date`` header value.

    Args:
        timestamp: Seconds since the epoch, defaults to now
    """
    return formatdate(timestamp, usegmt=True)


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000

    def reset(self) -> None:
        """Reset the timer."""
        self.start_time = time.perf_counter()


def format_timestamp(value: float) -> str:
    """Render seconds since the epoch without a trailing ``.0`` for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6f}".rstrip('0').rstrip('.')
