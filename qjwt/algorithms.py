from __future__ import annotations

import enum
import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives import hashes


class Family(enum.Enum):
    HMAC = "hmac"
    RSA = "rsa"
    ECDSA = "ecdsa"


@dataclass(frozen=True)
class AlgorithmDescriptor:
    """
    (family, hash) pair an algorithm identifier resolves to.
    """
    family: Family
    hash_name: str

    def hashlib_constructor(self):
        return getattr(hashlib, self.hash_name)

    def crypto_hash(self) -> hashes.HashAlgorithm:
        return _CRYPTO_HASHES[self.hash_name]()


_CRYPTO_HASHES = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}

# Deliberately a subset of the JWA algorithm names.
_REGISTRY: Dict[str, AlgorithmDescriptor] = {
    "HS256": AlgorithmDescriptor(Family.HMAC, "sha256"),
    "HS384": AlgorithmDescriptor(Family.HMAC, "sha384"),
    "HS512": AlgorithmDescriptor(Family.HMAC, "sha512"),
    "RS256": AlgorithmDescriptor(Family.RSA, "sha256"),
    "ES256": AlgorithmDescriptor(Family.ECDSA, "sha256"),
}

SUPPORTED_ALGORITHMS = tuple(_REGISTRY)


def resolve(identifier: Any) -> Optional[AlgorithmDescriptor]:
    """
    Map an algorithm identifier ("HS256", ...) to its descriptor.
    Returns None for anything not in the registry, including non-strings.
    """
    if not isinstance(identifier, str):
        return None
    return _REGISTRY.get(identifier)
