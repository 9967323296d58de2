"""
Key material loading helpers

Thin wrappers over ``cryptography`` serialization so callers (and the CLI)
can turn PEM/DER files into key objects the default provider understands.
"""

from pathlib import Path
from typing import Optional, Union

from cryptography.hazmat.primitives import serialization

from ..exceptions import KeyLoadError

KeyData = Union[str, bytes]


def _to_bytes(data: KeyData) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise KeyLoadError(f"Key data must be str or bytes, got {type(data).__name__}", "INVALID_KEY_DATA")


def load_private_key(data: KeyData, password: Optional[bytes] = None):
    """
    Load a private key from PEM (or DER) data.

    Args:
        data: PEM text or DER bytes
        password: Optional password for encrypted keys

    Returns:
        A ``cryptography`` private key object

    Raises:
        KeyLoadError: If the data is not a supported private key
    """
    key_bytes = _to_bytes(data)
    try:
        if key_bytes.lstrip().startswith(b"-----"):
            return serialization.load_pem_private_key(key_bytes, password=password)
        return serialization.load_der_private_key(key_bytes, password=password)
    except (ValueError, TypeError) as e:
        raise KeyLoadError(f"Failed to load private key: {e}", "INVALID_PRIVATE_KEY") from e


def load_public_key(data: KeyData):
    """
    Load a public key from PEM (or DER) data.

    Raises:
        KeyLoadError: If the data is not a supported public key
    """
    key_bytes = _to_bytes(data)
    try:
        if key_bytes.lstrip().startswith(b"-----"):
            return serialization.load_pem_public_key(key_bytes)
        return serialization.load_der_public_key(key_bytes)
    except (ValueError, TypeError) as e:
        raise KeyLoadError(f"Failed to load public key: {e}", "INVALID_PUBLIC_KEY") from e


def load_hmac_key(secret: KeyData) -> bytes:
    """Normalize an HMAC shared secret to bytes."""
    key_bytes = _to_bytes(secret)
    if not key_bytes:
        raise KeyLoadError("HMAC secret cannot be empty", "INVALID_HMAC_KEY")
    return key_bytes


def load_key_file(path: Union[str, Path], private: bool = True, password: Optional[bytes] = None):
    """Read a key file and load it as a private or public key."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise KeyLoadError(f"Failed to read key file: {e}", "FILE_ERROR") from e
    if private:
        return load_private_key(data, password)
    return load_public_key(data)
