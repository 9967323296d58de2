"""
Signature verifier

A :class:`Verifier` recomputes the signing string for a request from the
covered headers recorded in a received :class:`Signature` and checks the
signature value with the crypto provider. A cryptographic mismatch is reported
as ``False``; structural problems raise typed errors.
"""

import logging
from typing import Any, Optional, Union

from ..config.settings import SignatureSettings, resolve_settings
from ..crypto.algorithms import Algorithm
from ..crypto.provider import CryptoProvider, get_default_provider
from ..signing.canonical_message import HeadersLike, build_signing_string_for
from ..signing.types import Signature
from ..signing.utils import PerformanceTimer, decode_signature
from ..signing.wire_format import parse_signature

logger = logging.getLogger(__name__)


class Verifier:
    """
    HTTP signature verifier

    Args:
        key: Public key (a private key is accepted), or the shared secret for HMAC
        signature: Received, signed signature metadata
        provider: Crypto provider, defaults to the ``cryptography`` backed one
        settings: Slow-operation threshold
    """

    def __init__(
        self,
        key: Any,
        signature: Signature,
        provider: Optional[CryptoProvider] = None,
        settings: Optional[SignatureSettings] = None
    ):
        if key is None:
            raise ValueError("key is required.")
        if signature is None:
            raise ValueError("signature is required.")

        self.key = key
        self.signature = signature
        self.provider = provider or get_default_provider()
        self.settings = resolve_settings(settings)

    def verify(self, method: str, uri: str, headers: Optional[HeadersLike] = None) -> bool:
        """
        Verify the signature against a request.

        Args:
            method: HTTP method
            uri: Request target (path and query)
            headers: Request headers

        Returns:
            bool: ``True`` if the signature matches, ``False`` otherwise

        Raises:
            ValueError: If the signature carries no signature value
            MissingRequiredHeaderError: If a covered header is absent
            MalformedSignatureEncodingError: If the value is not valid base64
                or not valid for the algorithm's encoding
            AlgorithmMismatchError: If the key does not fit the algorithm
        """
        if not self.signature.is_signed:
            raise ValueError("This signature does not contain a signature value.")

        timer = PerformanceTimer()
        signing_string = build_signing_string_for(self.signature, method, uri, headers)
        signature_bytes = decode_signature(self.signature.signature)

        valid = self.provider.verify(
            self.signature.algorithm,
            self.key,
            signing_string.encode('utf-8'),
            signature_bytes,
            self.signature.parameters
        )

        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > self.settings.slow_operation_ms:
            logger.warning(
                f"Verification operation took {elapsed_ms:.2f}ms "
                f"(threshold: {self.settings.slow_operation_ms}ms)"
            )
        logger.debug(
            f"Verification {'succeeded' if valid else 'failed'} for keyId={self.signature.key_id} "
            f"with {self.signature.algorithm.name}"
        )

        return valid


def create_verifier(
    key: Any,
    signature: Signature,
    provider: Optional[CryptoProvider] = None,
    settings: Optional[SignatureSettings] = None
) -> Verifier:
    """
    Create a verifier for a received signature.

    Returns:
        Verifier: Configured verifier
    """
    return Verifier(key, signature, provider, settings)


def verify_signature(
    key: Any,
    signature: Signature,
    method: str,
    uri: str,
    headers: Optional[HeadersLike] = None,
    provider: Optional[CryptoProvider] = None,
    settings: Optional[SignatureSettings] = None
) -> bool:
    """Verify a parsed signature against a request in a single call."""
    return Verifier(key, signature, provider, settings).verify(method, uri, headers)


def verify_request(
    header_value: str,
    key: Any,
    method: str,
    uri: str,
    headers: Optional[HeadersLike] = None,
    algorithm: Optional[Union[Algorithm, str]] = None,
    provider: Optional[CryptoProvider] = None,
    settings: Optional[SignatureSettings] = None
) -> bool:
    """
    Parse a signature header and verify it against a request.

    Args:
        header_value: ``Authorization`` or ``Signature`` header value
        key: Verification key for the header's keyId
        method: HTTP method
        uri: Request target (path and query)
        headers: Request headers
        algorithm: Algorithm associated with the keyId, required for ``hs2019``
        provider: Crypto provider
        settings: Clock, time skew and slow-operation threshold

    Returns:
        bool: Verification result

    Raises:
        AuthenticationError: If the header cannot be parsed or validated
    """
    signature = parse_signature(header_value, algorithm, settings)
    return verify_signature(key, signature, method, uri, headers, provider, settings)
