"""
Test suite for the algorithm and signing profile registries
"""

import pytest

from httpsig_sdk.crypto.algorithms import (
    ALGORITHMS,
    ECDSA_SHA256,
    ECDSA_SHA256_P1363,
    ED25519,
    HMAC_SHA256,
    RSA_PSS_SHA256,
    RSA_SHA256,
    DigestAlgorithm,
    KeyType,
    RsaPadding,
    SignatureEncoding,
    find_algorithm,
    get_algorithm,
    list_algorithms,
)
from httpsig_sdk.crypto.profiles import (
    HS2019,
    LEGACY_HMAC_SHA256,
    LEGACY_RSA_SHA256,
    find_signing_profile,
    get_signing_profile,
    list_signing_profiles,
)
from httpsig_sdk.exceptions import UnsupportedAlgorithmError


class TestAlgorithmRegistry:
    """Test algorithm lookup"""

    def test_lookup_by_portable_name(self):
        """Portable names resolve to their descriptors"""
        assert get_algorithm("rsa-sha256") is RSA_SHA256
        assert get_algorithm("hmac-sha256") is HMAC_SHA256
        assert get_algorithm("ed25519") is ED25519

    def test_lookup_ignores_case_and_punctuation(self):
        """Lookup is case-insensitive and ignores separators"""
        assert get_algorithm("RSA-SHA256") is RSA_SHA256
        assert get_algorithm("rsa_sha256") is RSA_SHA256
        assert get_algorithm("RsaSha256") is RSA_SHA256

    def test_algorithm_instance_passes_through(self):
        assert get_algorithm(ECDSA_SHA256) is ECDSA_SHA256

    def test_unknown_algorithm(self):
        """Unknown names raise UnsupportedAlgorithmError"""
        with pytest.raises(UnsupportedAlgorithmError) as exc_info:
            get_algorithm("rot13")
        assert exc_info.value.algorithm == "rot13"
        assert exc_info.value.error_code == "UNSUPPORTED_ALGORITHM"

    def test_find_returns_none_for_unknown(self):
        assert find_algorithm("rot13") is None
        assert find_algorithm("hs2019") is None

    def test_strict_lookup(self):
        """Strict lookup ignores case only"""
        assert find_algorithm("RSA-SHA256", strict=True) is RSA_SHA256
        assert find_algorithm("rsa_sha256", strict=True) is None
        assert find_algorithm("rsa_sha256") is RSA_SHA256

    def test_descriptor_fields(self):
        """Descriptors carry key type, digest, padding and encoding"""
        assert RSA_SHA256.key_type is KeyType.RSA
        assert RSA_SHA256.digest is DigestAlgorithm.SHA256
        assert RSA_SHA256.padding is RsaPadding.PKCS1V15
        assert RSA_PSS_SHA256.padding is RsaPadding.PSS
        assert RSA_PSS_SHA256.parameters["salt_length"] == 32
        assert ECDSA_SHA256.encoding is SignatureEncoding.DER
        assert ECDSA_SHA256_P1363.encoding is SignatureEncoding.P1363
        assert ED25519.digest is None
        assert str(ECDSA_SHA256_P1363) == "ecdsa-sha256-p1363"

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            ALGORITHMS["custom"] = RSA_SHA256

    def test_list_algorithms(self):
        """All registered portable names are listed"""
        names = list_algorithms()
        for name in ("hmac-sha1", "hmac-sha512", "rsa-sha1", "rsa-sha512",
                     "rsa-pss-sha384", "dsa-sha224", "ecdsa-sha1", "ecdsa-sha512",
                     "ecdsa-sha384-p1363", "ed25519"):
            assert name in names


class TestSigningProfileRegistry:
    """Test signing profile lookup and compatibility"""

    def test_hs2019_supports_every_algorithm(self):
        for algorithm in ALGORITHMS.values():
            assert HS2019.supports(algorithm)

    def test_legacy_profile_supports_only_its_algorithm(self):
        """Legacy profiles are tied to the algorithm of the same name"""
        assert LEGACY_RSA_SHA256.supports(RSA_SHA256)
        assert not LEGACY_RSA_SHA256.supports(HMAC_SHA256)
        assert not LEGACY_HMAC_SHA256.supports(RSA_SHA256)

    def test_profile_lookup(self):
        assert get_signing_profile("hs2019") is HS2019
        assert get_signing_profile("HS2019") is HS2019
        assert get_signing_profile(HS2019) is HS2019
        assert find_signing_profile("rsa-sha256") is LEGACY_RSA_SHA256

    def test_unknown_profile(self):
        assert find_signing_profile("rsa-pss-sha256") is None
        with pytest.raises(UnsupportedAlgorithmError):
            get_signing_profile("hs2020")

    def test_list_signing_profiles(self):
        assert set(list_signing_profiles()) == {
            "hs2019", "rsa-sha1", "rsa-sha256", "hmac-sha256", "ecdsa-sha256"
        }
