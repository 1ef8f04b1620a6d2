from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from .config import settings

ExpirationMode = Literal["relative", "hourly", "daily"]


class ExpirationSpec(BaseModel):
    mode: ExpirationMode = "relative"
    seconds: int = Field(..., ge=0, description="Lifetime, or offset into the current hour/day")


class SignRequest(BaseModel):
    """
    Request body for /sign
    """
    claims: Dict[str, Any] = Field(
        ..., description="JWT claims/payload to include in the token"
    )
    alg: str = Field(
        default=settings.default_alg,
        description="Algorithm to use: HS256, HS384, HS512, RS256 or ES256.",
    )
    expires_in: Optional[int] = Field(
        None, ge=1, description="Shorthand for expiration={mode: relative, seconds: expires_in}"
    )
    expiration: Optional[ExpirationSpec] = Field(
        None, description="Adds an exp claim; takes precedence over expires_in"
    )


class SignResponse(BaseModel):
    """
    Response from /sign
    """
    token: str
    alg: str
    token_size_bytes: int
    sign_time_ms: float


class VerifyRequest(BaseModel):
    token: str


class VerifyResponse(BaseModel):
    valid: bool
    alg: Optional[str] = None
    claims: Optional[Dict[str, Any]] = None
    verify_time_ms: Optional[float] = None
    error: Optional[str] = None
