"""
Request signer

A :class:`Signer` holds key material and a signature template. Each call to
:meth:`Signer.sign` produces a new, signed :class:`Signature`; the template
itself is never modified, so a signer may be shared between threads.
"""

import logging
from typing import Any, Optional, Sequence, Union

from ..config.settings import SignatureSettings, resolve_settings
from ..crypto.algorithms import Algorithm
from ..crypto.provider import CryptoProvider, get_default_provider
from ..exceptions import HttpSignatureError, SigningError
from .canonical_message import HeadersLike, build_signing_string_for
from .types import CREATED, Signature
from .utils import PerformanceTimer, encode_signature

logger = logging.getLogger(__name__)


class Signer:
    """
    HTTP signature signer

    Args:
        key: Private key object, or the shared secret for HMAC algorithms
        signature: Template carrying keyId, algorithm and covered headers
        provider: Crypto provider, defaults to the ``cryptography`` backed one
        settings: Clock and slow-operation threshold
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

    def sign(self, method: str, uri: str, headers: Optional[HeadersLike] = None) -> Signature:
        """
        Sign a request.

        Args:
            method: HTTP method
            uri: Request target (path and query)
            headers: Request headers

        Returns:
            Signature: Copy of the template with the base64 signature value set

        Raises:
            MissingRequiredHeaderError: If a covered header is absent
            AlgorithmMismatchError: If the key does not fit the algorithm
            SigningError: If the crypto provider fails
        """
        timer = PerformanceTimer()
        template = self._stamp_created(self.signature)
        signing_string = build_signing_string_for(template, method, uri, headers)

        try:
            signature_bytes = self.provider.sign(
                template.algorithm,
                self.key,
                signing_string.encode('utf-8'),
                template.parameters
            )
        except HttpSignatureError:
            raise
        except Exception as e:
            raise SigningError(
                f"Request signing failed: {e}",
                details={"key_id": template.key_id, "algorithm": template.algorithm.name}
            ) from e

        signed = template.with_signature(encode_signature(signature_bytes))

        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > self.settings.slow_operation_ms:
            logger.warning(
                f"Signing operation took {elapsed_ms:.2f}ms "
                f"(threshold: {self.settings.slow_operation_ms}ms)"
            )
        logger.debug(f"Signed request for keyId={template.key_id} with {template.algorithm.name}")

        return signed

    def _stamp_created(self, template: Signature) -> Signature:
        if CREATED in template.headers and template.created is None:
            return template.with_timestamps(created=int(self.settings.now()))
        return template


def create_signer(
    key: Any,
    key_id: str,
    algorithm: Union[Algorithm, str],
    headers: Optional[Sequence[str]] = None,
    signing_profile: Optional[str] = None,
    provider: Optional[CryptoProvider] = None,
    settings: Optional[SignatureSettings] = None,
    **kwargs
) -> Signer:
    """
    Create a signer from its parts.

    Args:
        key: Private key or shared secret
        key_id: Key identifier sent to the verifier
        algorithm: Algorithm or algorithm name
        headers: Covered headers, defaults to ``["date"]``
        signing_profile: Optional profile name such as ``hs2019``
        provider: Crypto provider
        settings: Signature settings
        **kwargs: ``parameters``, ``created`` or ``expires`` for the template

    Returns:
        Signer: Configured signer
    """
    template = Signature(
        key_id=key_id,
        algorithm=algorithm,
        headers=headers or (),
        signing_profile=signing_profile,
        **kwargs
    )
    return Signer(key, template, provider, settings)


def sign_request(
    key: Any,
    signature: Signature,
    method: str,
    uri: str,
    headers: Optional[HeadersLike] = None,
    provider: Optional[CryptoProvider] = None,
    settings: Optional[SignatureSettings] = None
) -> Signature:
    """
    Sign a single request without keeping a signer around.

    Returns:
        Signature: Signed copy of ``signature``
    """
    return Signer(key, signature, provider, settings).sign(method, uri, headers)
