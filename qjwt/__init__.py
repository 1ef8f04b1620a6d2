from .algorithms import SUPPORTED_ALGORITHMS, AlgorithmDescriptor, Family, resolve
from .codec import decode, encode
from .errors import (
    AlgorithmNotSupportedError,
    ExpiredTokenError,
    InvalidClaimsError,
    InvalidKeyError,
    InvalidSignatureError,
    InvalidTokenError,
    JWTError,
)
from .expiration import Daily, Hourly, compute_expiry, is_expired

__all__ = [
    "SUPPORTED_ALGORITHMS",
    "AlgorithmDescriptor",
    "Family",
    "resolve",
    "encode",
    "decode",
    "JWTError",
    "AlgorithmNotSupportedError",
    "InvalidClaimsError",
    "InvalidKeyError",
    "InvalidTokenError",
    "InvalidSignatureError",
    "ExpiredTokenError",
    "Hourly",
    "Daily",
    "compute_expiry",
    "is_expired",
]
