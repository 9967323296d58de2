"""
Crypto provider abstraction

Signers and verifiers never touch primitive cryptography themselves. They hand
an :class:`~httpsig_sdk.crypto.algorithms.Algorithm` descriptor, the key
material and the signing-string bytes to a provider. The default provider is
backed by the ``cryptography`` package; callers with HSM/PKCS#11 keys can
inject their own implementation of :class:`CryptoProvider`.
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, padding, rsa

from ..exceptions import AlgorithmMismatchError, ConfigurationError, UnsupportedAlgorithmError
from .algorithms import Algorithm, DigestAlgorithm, KeyType, RsaPadding, SignatureEncoding
from .encoding import decode_der_signature, der_to_p1363, p1363_to_der

ED25519_RAW_KEY_LENGTH = 32

_HASHES = {
    DigestAlgorithm.SHA1: hashes.SHA1,
    DigestAlgorithm.SHA224: hashes.SHA224,
    DigestAlgorithm.SHA256: hashes.SHA256,
    DigestAlgorithm.SHA384: hashes.SHA384,
    DigestAlgorithm.SHA512: hashes.SHA512,
}

_PSS_SALT_LENGTHS = {
    "max": padding.PSS.MAX_LENGTH,
    "digest": padding.PSS.DIGEST_LENGTH,
    "auto": padding.PSS.AUTO,
}

_PRIVATE_KEY_TYPES = {
    KeyType.RSA: rsa.RSAPrivateKey,
    KeyType.DSA: dsa.DSAPrivateKey,
    KeyType.EC: ec.EllipticCurvePrivateKey,
    KeyType.ED25519: ed25519.Ed25519PrivateKey,
}

_PUBLIC_KEY_TYPES = {
    KeyType.RSA: rsa.RSAPublicKey,
    KeyType.DSA: dsa.DSAPublicKey,
    KeyType.EC: ec.EllipticCurvePublicKey,
    KeyType.ED25519: ed25519.Ed25519PublicKey,
}


@runtime_checkable
class CryptoProvider(Protocol):
    """Protocol for crypto provider implementations"""

    def sign(
        self,
        algorithm: Algorithm,
        key: Any,
        data: bytes,
        parameters: Optional[Mapping[str, Any]] = None
    ) -> bytes:
        """Return the raw signature bytes over ``data``"""
        ...

    def verify(
        self,
        algorithm: Algorithm,
        key: Any,
        data: bytes,
        signature: bytes,
        parameters: Optional[Mapping[str, Any]] = None
    ) -> bool:
        """Return whether ``signature`` is valid; mismatch is ``False``, not an error"""
        ...


def effective_parameters(
    algorithm: Algorithm,
    parameters: Optional[Mapping[str, Any]] = None
) -> Mapping[str, Any]:
    """Algorithm defaults overlaid with caller-supplied parameters."""
    merged = dict(algorithm.parameters)
    if parameters:
        merged.update(parameters)
    return merged


class CryptographyProvider:
    """
    CryptoProvider backed by the ``cryptography`` package

    Key material:
        HMAC: secret as ``bytes`` or ``str``
        RSA/DSA/EC: ``cryptography`` key objects
        Ed25519: key objects or raw 32-byte keys

    A private key is accepted for verification; its public half is used.
    """

    name = "cryptography"

    def sign(
        self,
        algorithm: Algorithm,
        key: Any,
        data: bytes,
        parameters: Optional[Mapping[str, Any]] = None
    ) -> bytes:
        params = effective_parameters(algorithm, parameters)

        if algorithm.key_type is KeyType.HMAC:
            mac = hmac.HMAC(self._hmac_secret(key, algorithm), self._hash(algorithm))
            mac.update(data)
            return mac.finalize()

        private_key = self._private_key(key, algorithm)

        if algorithm.key_type is KeyType.ED25519:
            return private_key.sign(data)
        if algorithm.key_type is KeyType.RSA:
            return private_key.sign(data, self._rsa_padding(algorithm, params), self._hash(algorithm))
        if algorithm.key_type is KeyType.DSA:
            return private_key.sign(data, self._hash(algorithm))
        if algorithm.key_type is KeyType.EC:
            signature = private_key.sign(data, ec.ECDSA(self._hash(algorithm)))
            if algorithm.encoding is SignatureEncoding.P1363:
                return der_to_p1363(signature, private_key.curve.key_size)
            return signature

        raise UnsupportedAlgorithmError(algorithm.name)

    def verify(
        self,
        algorithm: Algorithm,
        key: Any,
        data: bytes,
        signature: bytes,
        parameters: Optional[Mapping[str, Any]] = None
    ) -> bool:
        params = effective_parameters(algorithm, parameters)

        try:
            if algorithm.key_type is KeyType.HMAC:
                mac = hmac.HMAC(self._hmac_secret(key, algorithm), self._hash(algorithm))
                mac.update(data)
                mac.verify(signature)
                return True

            public_key = self._public_key(key, algorithm)

            if algorithm.key_type is KeyType.ED25519:
                public_key.verify(signature, data)
            elif algorithm.key_type is KeyType.RSA:
                public_key.verify(signature, data, self._rsa_padding(algorithm, params), self._hash(algorithm))
            elif algorithm.key_type is KeyType.DSA:
                decode_der_signature(signature)
                public_key.verify(signature, data, self._hash(algorithm))
            elif algorithm.key_type is KeyType.EC:
                if algorithm.encoding is SignatureEncoding.P1363:
                    signature = p1363_to_der(signature, public_key.curve.key_size)
                else:
                    decode_der_signature(signature)
                public_key.verify(signature, data, ec.ECDSA(self._hash(algorithm)))
            else:
                raise UnsupportedAlgorithmError(algorithm.name)
            return True

        except InvalidSignature:
            return False

    def _hash(self, algorithm: Algorithm) -> hashes.HashAlgorithm:
        if algorithm.digest is None:
            raise UnsupportedAlgorithmError(algorithm.name, f"Algorithm {algorithm.name} has no digest")
        return _HASHES[algorithm.digest]()

    def _rsa_padding(self, algorithm: Algorithm, params: Mapping[str, Any]) -> padding.AsymmetricPadding:
        if algorithm.padding is RsaPadding.PSS:
            salt_length = params.get("salt_length", "digest")
            if isinstance(salt_length, str):
                if salt_length.lower() not in _PSS_SALT_LENGTHS:
                    raise ConfigurationError(
                        f"Unsupported PSS salt_length: {salt_length}",
                        "INVALID_PARAMETER",
                        {"salt_length": salt_length, "supported": sorted(_PSS_SALT_LENGTHS)}
                    )
                salt_length = _PSS_SALT_LENGTHS[salt_length.lower()]
            return padding.PSS(mgf=padding.MGF1(self._hash(algorithm)), salt_length=salt_length)
        return padding.PKCS1v15()

    def _hmac_secret(self, key: Any, algorithm: Algorithm) -> bytes:
        if isinstance(key, str):
            return key.encode("utf-8")
        if isinstance(key, (bytes, bytearray)):
            return bytes(key)
        raise AlgorithmMismatchError(
            f"Algorithm {algorithm.name} requires a shared secret, got {type(key).__name__}",
            details={"algorithm": algorithm.name, "key_type": type(key).__name__}
        )

    def _private_key(self, key: Any, algorithm: Algorithm):
        if algorithm.key_type is KeyType.ED25519 and _is_raw_ed25519(key):
            return ed25519.Ed25519PrivateKey.from_private_bytes(bytes(key))

        expected = _PRIVATE_KEY_TYPES.get(algorithm.key_type)
        if expected is None or not isinstance(key, expected):
            raise AlgorithmMismatchError(
                f"Algorithm {algorithm.name} cannot sign with {type(key).__name__}",
                details={"algorithm": algorithm.name, "key_type": type(key).__name__}
            )
        return key

    def _public_key(self, key: Any, algorithm: Algorithm):
        if algorithm.key_type is KeyType.ED25519 and _is_raw_ed25519(key):
            return ed25519.Ed25519PublicKey.from_public_bytes(bytes(key))

        private_type = _PRIVATE_KEY_TYPES.get(algorithm.key_type)
        if private_type is not None and isinstance(key, private_type):
            return key.public_key()

        expected = _PUBLIC_KEY_TYPES.get(algorithm.key_type)
        if expected is None or not isinstance(key, expected):
            raise AlgorithmMismatchError(
                f"Algorithm {algorithm.name} cannot verify with {type(key).__name__}",
                details={"algorithm": algorithm.name, "key_type": type(key).__name__}
            )
        return key


def _is_raw_ed25519(key: Any) -> bool:
    return isinstance(key, (bytes, bytearray)) and len(key) == ED25519_RAW_KEY_LENGTH


_default_provider = CryptographyProvider()


def get_default_provider() -> CryptographyProvider:
    """Return the shared, stateless default provider."""
    return _default_provider

