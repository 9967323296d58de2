"""
Shared fixtures for the HTTP Signatures SDK test suite
"""

import pytest
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, rsa

from httpsig_sdk.config import SignatureSettings

FIXED_NOW = 1_700_000_000

REQUEST_METHOD = "POST"
REQUEST_URI = "/foo?param=value&pet=dog"
REQUEST_HEADERS = {
    "Host": "example.org",
    "Date": "Thu, 05 Jan 2012 21:31:40 GMT",
    "Content-Type": "application/json",
    "Digest": "SHA-256=X48E9qOokqqrvdts8nOJRJN3OWDUoyWxBf7kbu9DBPE=",
    "Accept": "*/*",
    "Content-Length": "18",
}


@pytest.fixture
def fixed_settings():
    """Settings whose clock is pinned to FIXED_NOW"""
    return SignatureSettings(clock=lambda: FIXED_NOW)


@pytest.fixture
def request_headers():
    return dict(REQUEST_HEADERS)


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec384_private_key():
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def dsa_private_key():
    return dsa.generate_private_key(key_size=2048)


@pytest.fixture(scope="session")
def ed25519_private_key():
    return ed25519.Ed25519PrivateKey.generate()
