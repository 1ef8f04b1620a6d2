class JWTError(Exception):
    """Base class for every error raised by encode/decode."""

    code = "jwt_error"


class AlgorithmNotSupportedError(JWTError):
    """Raised when encode is asked for an algorithm outside the registry."""

    code = "algorithm_not_supported"


class InvalidClaimsError(JWTError):
    """Raised when claims cannot be turned into a JSON object."""

    code = "invalid_claims"


class InvalidKeyError(JWTError):
    """Raised when the signing key cannot be used with the requested algorithm."""

    code = "invalid_key"


class InvalidTokenError(JWTError):
    """Raised on structural problems: segment count, base64url or JSON."""

    code = "invalid_token"


class InvalidSignatureError(JWTError):
    """Raised when the signature does not verify against the selected key."""

    code = "invalid_signature"


class ExpiredTokenError(JWTError):
    """Raised when the signature is valid but the exp claim is in the past."""

    code = "expired"
