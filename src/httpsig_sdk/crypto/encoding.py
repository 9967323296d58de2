"""
Signature encodings for (r, s) algorithms

ECDSA and DSA signatures are either DER encoded (SEQUENCE of two INTEGERs,
variable length) or IEEE P1363 encoded (r and s as fixed-width big-endian
integers, concatenated). The ``cryptography`` package only speaks DER.
"""

from typing import Tuple

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ..exceptions import MalformedSignatureEncodingError


def component_width(key_size: int) -> int:
    """Byte width of r and s for a curve of ``key_size`` bits."""
    return (key_size + 7) // 8


def decode_der_signature(signature: bytes) -> Tuple[int, int]:
    """
    Split a DER signature into (r, s).

    Raises:
        MalformedSignatureEncodingError: If the bytes are not a DER signature
    """
    try:
        return decode_dss_signature(signature)
    except ValueError as e:
        raise MalformedSignatureEncodingError(
            f"Invalid DER signature: {e}",
            details={"length": len(signature)}
        ) from e


def der_to_p1363(signature: bytes, key_size: int) -> bytes:
    """Convert a DER signature to fixed-width r || s."""
    r, s = decode_der_signature(signature)
    width = component_width(key_size)
    return r.to_bytes(width, "big") + s.to_bytes(width, "big")


def p1363_to_der(signature: bytes, key_size: int) -> bytes:
    """
    Convert a fixed-width r || s signature to DER.

    Raises:
        MalformedSignatureEncodingError: If the signature has the wrong width for the key
    """
    width = component_width(key_size)
    if len(signature) != 2 * width:
        raise MalformedSignatureEncodingError(
            f"P1363 signature must be {2 * width} bytes for a {key_size}-bit key, got {len(signature)}",
            details={"expected_length": 2 * width, "length": len(signature)}
        )
    r = int.from_bytes(signature[:width], "big")
    s = int.from_bytes(signature[width:], "big")
    return encode_dss_signature(r, s)
