"""
Test suite for the requests integration

Requests are prepared locally and never sent.
"""

from unittest.mock import patch

import pytest
import requests

from httpsig_sdk.exceptions import MissingRequiredHeaderError
from httpsig_sdk.signing import (
    HttpSignatureAuth,
    SigningSession,
    create_signer,
    create_signing_session,
    parse_signature,
)
from httpsig_sdk.verification import verify_request

SECRET = b"integration secret"


def _prepare(auth, method="POST", url="https://example.org/foo?param=value&pet=dog", **kwargs):
    return requests.Request(method, url, auth=auth, **kwargs).prepare()


class TestHttpSignatureAuth:
    """Test signing of prepared requests"""

    def test_authorization_header_set(self):
        signer = create_signer(SECRET, "hmac-key-1", "hmac-sha256",
                               headers=["(request-target)", "host", "date"])
        prepared = _prepare(HttpSignatureAuth(signer), headers={
            "Host": "example.org",
            "Date": "Thu, 05 Jan 2012 21:31:40 GMT",
        })

        header = prepared.headers["Authorization"]
        assert header.startswith('Signature keyId="hmac-key-1",algorithm="hmac-sha256"')
        assert verify_request(header, SECRET, "POST", "/foo?param=value&pet=dog", prepared.headers)

    def test_byte_header_values(self):
        """A header set as bytes verifies against the same header received as text"""
        signer = create_signer(SECRET, "k", "hmac-sha256", headers=["(request-target)", "x-custom"])
        prepared = _prepare(HttpSignatureAuth(signer), headers={"X-Custom": b"abc"})

        assert verify_request(prepared.headers["Authorization"], SECRET, "POST",
                              "/foo?param=value&pet=dog", {"X-Custom": "abc"})

    def test_date_added_when_covered(self, fixed_settings):
        """A Date header is generated from the settings clock when date is covered"""
        signer = create_signer(SECRET, "k", "hmac-sha256", settings=fixed_settings)
        prepared = _prepare(HttpSignatureAuth(signer), method="GET", url="https://example.org/")

        assert prepared.headers["Date"] == "Tue, 14 Nov 2023 22:13:20 GMT"
        assert verify_request(prepared.headers["Authorization"], SECRET, "GET", "/", prepared.headers)

    def test_existing_date_kept(self):
        signer = create_signer(SECRET, "k", "hmac-sha256")
        prepared = _prepare(HttpSignatureAuth(signer), headers={"Date": "Thu, 05 Jan 2012 21:31:40 GMT"})
        assert prepared.headers["Date"] == "Thu, 05 Jan 2012 21:31:40 GMT"

    def test_signature_header_style(self):
        """The Signature header carries the bare parameter list"""
        signer = create_signer(SECRET, "k", "hmac-sha256")
        prepared = _prepare(HttpSignatureAuth(signer, header_name="Signature"))

        value = prepared.headers["Signature"]
        assert value.startswith('keyId="k"')
        assert "Authorization" not in prepared.headers
        assert parse_signature(value).key_id == "k"

    def test_unsupported_header_name(self):
        signer = create_signer(SECRET, "k", "hmac-sha256")
        with pytest.raises(ValueError):
            HttpSignatureAuth(signer, header_name="X-Signature")

    def test_signing_errors_propagate(self, caplog):
        signer = create_signer(SECRET, "k", "hmac-sha256", headers=["digest"])
        with pytest.raises(MissingRequiredHeaderError):
            _prepare(HttpSignatureAuth(signer))
        assert "Request signing failed" in caplog.text


class TestSigningSession:
    """Test the session wrapper"""

    def test_session_auth_configured(self):
        signer = create_signer(SECRET, "k", "hmac-sha256")
        with create_signing_session(signer) as session:
            assert isinstance(session, SigningSession)
            assert isinstance(session.session.auth, HttpSignatureAuth)

    def test_requests_are_signed(self):
        """Requests sent through the session carry a signature"""
        signer = create_signer(SECRET, "k", "hmac-sha256")
        session = SigningSession(signer)
        captured = {}

        def fake_send(request, **kwargs):
            captured["request"] = request
            response = requests.Response()
            response.status_code = 200
            return response

        with patch.object(session.session, "send", side_effect=fake_send):
            response = session.get("https://example.org/resource?x=1")

        assert response.status_code == 200
        sent = captured["request"]
        assert verify_request(sent.headers["Authorization"], SECRET, "GET", "/resource?x=1", sent.headers)
        session.close()
