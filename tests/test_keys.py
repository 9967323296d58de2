"""
Test suite for key loading helpers
"""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from httpsig_sdk.crypto import KeyLoadError, load_hmac_key, load_key_file, load_private_key, load_public_key


class TestKeyLoading:
    """Test PEM/DER and shared secret loading"""

    def test_private_pem_round_trip(self, ec_private_key):
        pem = ec_private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
        loaded = load_private_key(pem.decode())
        assert isinstance(loaded, ec.EllipticCurvePrivateKey)

    def test_encrypted_private_key(self, rsa_private_key):
        pem = rsa_private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.BestAvailableEncryption(b"hunter2"),
        )
        assert isinstance(load_private_key(pem, password=b"hunter2"), rsa.RSAPrivateKey)
        with pytest.raises(KeyLoadError):
            load_private_key(pem)

    def test_public_der(self, rsa_private_key):
        der = rsa_private_key.public_key().public_bytes(
            serialization.Encoding.DER,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        assert isinstance(load_public_key(der), rsa.RSAPublicKey)

    def test_invalid_data(self):
        with pytest.raises(KeyLoadError) as exc_info:
            load_public_key("-----BEGIN PUBLIC KEY-----\nnope\n-----END PUBLIC KEY-----\n")
        assert exc_info.value.error_code == "INVALID_PUBLIC_KEY"

    def test_hmac_key(self):
        assert load_hmac_key("secret") == b"secret"
        assert load_hmac_key(b"secret") == b"secret"
        with pytest.raises(KeyLoadError):
            load_hmac_key("")

    def test_key_file(self, tmp_path, ec_private_key):
        path = tmp_path / "key.pem"
        path.write_bytes(ec_private_key.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        ))
        assert isinstance(load_key_file(path, private=False), ec.EllipticCurvePublicKey)

    def test_missing_key_file(self, tmp_path):
        with pytest.raises(KeyLoadError) as exc_info:
            load_key_file(tmp_path / "absent.pem")
        assert exc_info.value.error_code == "FILE_ERROR"
