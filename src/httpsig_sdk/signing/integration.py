"""
HTTP client integration for request signing

This module plugs the :class:`~httpsig_sdk.signing.signer.Signer` into
``requests`` so outbound requests are signed automatically.
"""

import logging
from typing import Any, Optional

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from .signer import Signer
from .types import Signature
from .utils import format_http_date
from .wire_format import format_signature

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
SIGNATURE_HEADER = "Signature"


class HttpSignatureAuth(AuthBase):
    """
    ``requests`` auth handler that signs each prepared request

    The request target is taken from ``PreparedRequest.path_url`` (path and
    query). A ``Date`` header is added when ``date`` is covered and absent.

    Args:
        signer: Configured signer
        header_name: ``Authorization`` (rendered with the ``Signature`` scheme)
            or ``Signature`` (bare parameter list)
    """

    def __init__(self, signer: Signer, header_name: str = AUTHORIZATION_HEADER):
        if header_name.lower() not in (AUTHORIZATION_HEADER.lower(), SIGNATURE_HEADER.lower()):
            raise ValueError(f"Unsupported signature header: {header_name}")
        self.signer = signer
        self.header_name = header_name

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        if "date" in self.signer.signature.headers and "Date" not in request.headers:
            request.headers["Date"] = format_http_date(self.signer.settings.now())

        try:
            signed = self.signer.sign(request.method, request.path_url, request.headers)
        except Exception as e:
            logger.error(f"Request signing failed for {request.method} {request.path_url}: {e}")
            raise

        request.headers[self.header_name] = self.render(signed)
        return request

    def render(self, signature: Signature) -> str:
        """Header value for ``signature`` in this handler's header style."""
        if self.header_name.lower() == SIGNATURE_HEADER.lower():
            return format_signature(signature, scheme=None)
        return format_signature(signature)


class SigningSession:
    """
    ``requests.Session`` wrapper that signs every request it sends

    Args:
        signer: Configured signer
        session: Existing session to wrap
        header_name: Header that carries the signature
    """

    def __init__(
        self,
        signer: Signer,
        session: Optional[requests.Session] = None,
        header_name: str = AUTHORIZATION_HEADER
    ):
        self.session = session or requests.Session()
        self.auth = HttpSignatureAuth(signer, header_name)
        self.session.auth = self.auth
        logger.info(f"Configured request signing for key ID: {signer.signature.key_id}")

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        return self.session.request(method, url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        return self.request("POST", url, **kwargs)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def create_signing_session(signer: Signer, session: Optional[requests.Session] = None) -> SigningSession:
    """
    Create a session that signs its requests.

    Args:
        signer: Configured signer
        session: Optional existing requests session to wrap

    Returns:
        SigningSession: Session with signing enabled
    """
    return SigningSession(signer, session)
