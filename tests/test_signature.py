"""
Test suite for the Signature value object
"""

import dataclasses

import pytest

from httpsig_sdk.crypto.algorithms import HMAC_SHA256, RSA_PSS_SHA256, RSA_SHA256
from httpsig_sdk.crypto.profiles import HS2019, LEGACY_RSA_SHA256
from httpsig_sdk.exceptions import AlgorithmMismatchError, UnsupportedAlgorithmError
from httpsig_sdk.signing import Signature


class TestSignatureConstruction:
    """Test validation performed when a Signature is built"""

    def test_minimal_template(self):
        """keyId and algorithm are enough; headers default to date"""
        sig = Signature("hmac-key-1", "hmac-sha256")
        assert sig.key_id == "hmac-key-1"
        assert sig.algorithm is HMAC_SHA256
        assert sig.signature is None
        assert sig.headers == ("date",)
        assert sig.signing_profile is None
        assert not sig.is_signed

    @pytest.mark.parametrize("key_id", ["", "   ", None])
    def test_key_id_required(self, key_id):
        """Empty or whitespace keyId is rejected"""
        with pytest.raises(ValueError, match="keyId is required"):
            Signature(key_id, "rsa-sha256")

    def test_algorithm_required(self):
        with pytest.raises(ValueError, match="algorithm is required"):
            Signature("key", None)

    def test_key_id_checked_before_algorithm(self):
        """An empty keyId is reported even when the algorithm is also missing"""
        with pytest.raises(ValueError, match="keyId is required"):
            Signature("", None)

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedAlgorithmError):
            Signature("key", "rsa-md5")

    def test_unknown_profile(self):
        with pytest.raises(UnsupportedAlgorithmError):
            Signature("key", "rsa-sha256", signing_profile="hs2020")

    def test_incompatible_profile(self):
        """A legacy profile only accepts the algorithm of the same name"""
        with pytest.raises(AlgorithmMismatchError) as exc_info:
            Signature("key", "hmac-sha256", signing_profile="rsa-sha256")
        assert "rsa-sha256" in exc_info.value.message
        assert "hmac-sha256" in exc_info.value.message

    def test_hs2019_accepts_any_algorithm(self):
        sig = Signature("key", RSA_PSS_SHA256, signing_profile="hs2019")
        assert sig.signing_profile is HS2019
        assert sig.algorithm is RSA_PSS_SHA256

    def test_compatible_legacy_profile(self):
        sig = Signature("key", "rsa-sha256", signing_profile="rsa-sha256")
        assert sig.signing_profile is LEGACY_RSA_SHA256
        assert sig.algorithm is RSA_SHA256


class TestSignatureHeaders:
    """Test covered header normalization"""

    def test_headers_lowercased(self):
        sig = Signature("key", "rsa-sha256", headers=["(Request-Target)", "Host", "DATE"])
        assert sig.headers == ("(request-target)", "host", "date")

    def test_headers_from_string(self):
        sig = Signature("key", "rsa-sha256", headers="(request-target)  host date")
        assert sig.headers == ("(request-target)", "host", "date")

    def test_empty_headers_default_to_date(self):
        assert Signature("key", "rsa-sha256", headers=[]).headers == ("date",)
        assert Signature("key", "rsa-sha256", headers=None).headers == ("date",)

    def test_duplicates_kept(self):
        """Duplicate names are kept verbatim and in order"""
        sig = Signature("key", "rsa-sha256", headers=["date", "host", "date"])
        assert sig.headers == ("date", "host", "date")

    def test_headers_are_immutable(self):
        headers = ["date", "host"]
        sig = Signature("key", "rsa-sha256", headers=headers)
        headers.append("digest")
        assert sig.headers == ("date", "host")


class TestSignatureTimestamps:
    """Test created/expires validation"""

    def test_created_must_be_integer(self):
        with pytest.raises(ValueError):
            Signature("key", "rsa-sha256", created=1.5)

    def test_created_rejects_bool(self):
        with pytest.raises(ValueError):
            Signature("key", "rsa-sha256", created=True)

    def test_expires_accepts_int_and_float(self):
        assert Signature("key", "rsa-sha256", expires=10).expires == 10.0
        assert Signature("key", "rsa-sha256", expires=10.5).expires == 10.5

    def test_expires_rejects_text(self):
        with pytest.raises(ValueError):
            Signature("key", "rsa-sha256", expires="soon")

    def test_with_timestamps(self):
        sig = Signature("key", "rsa-sha256")
        stamped = sig.with_timestamps(created=100, expires=200)
        assert (stamped.created, stamped.expires) == (100, 200.0)
        assert sig.created is None


class TestSignatureImmutability:
    """Test that signatures are value objects"""

    def test_fields_cannot_be_assigned(self):
        sig = Signature("key", "rsa-sha256")
        with pytest.raises(dataclasses.FrozenInstanceError):
            sig.key_id = "other"

    def test_with_signature_returns_copy(self):
        """Attaching a signature value leaves the template untouched"""
        template = Signature("key", "rsa-sha256", headers=["date"])
        signed = template.with_signature("c2lnbmF0dXJl")
        assert signed.is_signed
        assert signed.signature == "c2lnbmF0dXJl"
        assert template.signature is None
        assert signed.headers == template.headers

    def test_parameters_are_read_only(self):
        params = {"salt_length": 20}
        sig = Signature("key", "rsa-pss-sha256", parameters=params)
        params["salt_length"] = 99
        assert sig.parameters["salt_length"] == 20
        with pytest.raises(TypeError):
            sig.parameters["salt_length"] = 1

    def test_signature_value_must_be_text(self):
        with pytest.raises(ValueError):
            Signature("key", "rsa-sha256", signature=b"raw")

    def test_equality(self):
        assert Signature("key", "rsa-sha256") == Signature("key", RSA_SHA256)
