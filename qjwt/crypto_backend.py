from __future__ import annotations

import hmac
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .algorithms import AlgorithmDescriptor, Family
from .errors import AlgorithmNotSupportedError, InvalidKeyError
from .jose_utils import b64url_decode, b64url_encode
from .keys import KeyMaterial, hmac_secret, load_private_key, load_public_key

logger = logging.getLogger("qjwt.crypto_backend")


class CryptoBackend(ABC):
    """
    Abstract base class for one algorithm family (HMAC, RSA, ECDSA).

    Signatures go in and out of a backend in their base64url form, exactly
    as they appear in the third token segment.
    """

    @abstractmethod
    def sign(self, descriptor: AlgorithmDescriptor, data: bytes, key: KeyMaterial) -> str:
        """
        Sign the given data and return the encoded signature.
        Raises InvalidKeyError if the key is unusable for this family.
        """
        raise NotImplementedError

    @abstractmethod
    def verify(self, descriptor: AlgorithmDescriptor, data: bytes, signature: str,
               key: KeyMaterial) -> bool:
        """
        Verify the encoded signature for the given data and key.
        Raises InvalidKeyError if the key is unusable for this family.
        """
        raise NotImplementedError


class HmacBackend(CryptoBackend):
    def sign(self, descriptor: AlgorithmDescriptor, data: bytes, key: KeyMaterial) -> str:
        secret = hmac_secret(key)
        mac = hmac.new(secret, data, descriptor.hashlib_constructor()).digest()
        return b64url_encode(mac)

    def verify(self, descriptor: AlgorithmDescriptor, data: bytes, signature: str,
               key: KeyMaterial) -> bool:
        # compare the encoded forms; both sides went through the same encoding
        expected = self.sign(descriptor, data, key)
        return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))


class RsaBackend(CryptoBackend):
    """
    RSASSA-PKCS1-v1_5.
    """

    def sign(self, descriptor: AlgorithmDescriptor, data: bytes, key: KeyMaterial) -> str:
        priv = load_private_key(Family.RSA, key)
        raw = priv.sign(data, padding.PKCS1v15(), descriptor.crypto_hash())
        return b64url_encode(raw)

    def verify(self, descriptor: AlgorithmDescriptor, data: bytes, signature: str,
               key: KeyMaterial) -> bool:
        pub = load_public_key(Family.RSA, key)
        try:
            raw = b64url_decode(signature)
        except ValueError:
            return False

        try:
            pub.verify(raw, data, padding.PKCS1v15(), descriptor.crypto_hash())
            return True
        except InvalidSignature:
            return False


class EcdsaBackend(CryptoBackend):
    """
    ECDSA with JWS signature encoding: the DER structure produced by the
    primitive is converted to fixed-width big-endian r || s and back.
    """

    @staticmethod
    def _coordinate_size(key) -> int:
        return (key.curve.key_size + 7) // 8

    def sign(self, descriptor: AlgorithmDescriptor, data: bytes, key: KeyMaterial) -> str:
        priv = load_private_key(Family.ECDSA, key)
        der = priv.sign(data, ec.ECDSA(descriptor.crypto_hash()))

        r, s = decode_dss_signature(der)
        size = self._coordinate_size(priv)
        return b64url_encode(r.to_bytes(size, "big") + s.to_bytes(size, "big"))

    def verify(self, descriptor: AlgorithmDescriptor, data: bytes, signature: str,
               key: KeyMaterial) -> bool:
        pub = load_public_key(Family.ECDSA, key)
        try:
            raw = b64url_decode(signature)
        except ValueError:
            return False

        size = self._coordinate_size(pub)
        if len(raw) != 2 * size:
            return False

        r = int.from_bytes(raw[:size], "big")
        s = int.from_bytes(raw[size:], "big")
        try:
            pub.verify(encode_dss_signature(r, s), data, ec.ECDSA(descriptor.crypto_hash()))
            return True
        except InvalidSignature:
            return False


BACKENDS: Dict[Family, CryptoBackend] = {
    Family.HMAC: HmacBackend(),
    Family.RSA: RsaBackend(),
    Family.ECDSA: EcdsaBackend(),
}


def sign(descriptor: Optional[AlgorithmDescriptor], signing_input: bytes, key: KeyMaterial) -> str:
    """
    Produce the encoded signature for signing_input.

    Raises AlgorithmNotSupportedError when descriptor is None and
    InvalidKeyError when the key does not fit the family.
    """
    if descriptor is None:
        raise AlgorithmNotSupportedError("algorithm_not_supported")
    return BACKENDS[descriptor.family].sign(descriptor, signing_input, key)


def verify(descriptor: Optional[AlgorithmDescriptor], signing_input: bytes, signature: str,
           key: KeyMaterial) -> bool:
    """
    Check an encoded signature. Never raises: an unsupported algorithm, an
    unusable key or a malformed signature all verify to False.
    """
    if descriptor is None:
        logger.debug("Signature rejected: unsupported algorithm")
        return False

    try:
        return BACKENDS[descriptor.family].verify(descriptor, signing_input, signature, key)
    except InvalidKeyError as exc:
        logger.debug("Signature rejected: %s", exc)
        return False
    except Exception:
        logger.warning("Unexpected error verifying %s signature", descriptor.family.value, exc_info=True)
        return False
