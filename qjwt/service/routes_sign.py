from __future__ import annotations

import logging
import time

from fastapi import APIRouter, HTTPException, Request

from ..codec import encode
from ..errors import JWTError
from ..expiration import Daily, Expiration, Hourly
from .config import settings
from .keystore import KeyStore, KeyStoreError
from .metrics import ERRORS_TOTAL, SIGN_LATENCY_SECONDS
from .models import SignRequest, SignResponse

logger = logging.getLogger("qjwt.service.sign")

router = APIRouter(prefix="/sign", tags=["sign"])


def _expiration_for(body: SignRequest) -> Expiration | None:
    if body.expiration is not None:
        spec = body.expiration
        if spec.mode == "hourly":
            return Hourly(spec.seconds)
        if spec.mode == "daily":
            return Daily(spec.seconds)
        return spec.seconds

    if body.expires_in is not None:
        return body.expires_in

    if settings.default_expires_in > 0:
        return settings.default_expires_in
    return None


@router.post("", response_model=SignResponse)
def sign_token(body: SignRequest, request: Request) -> SignResponse:
    """
    Issue a signed JWT with the configured key for the requested alg.
    """
    store: KeyStore = request.app.state.keystore

    try:
        key = store.signing_key_for(body.alg)
    except KeyStoreError as exc:
        ERRORS_TOTAL.labels(type="missing_key").inc()
        logger.warning("Sign refused: %s", exc)
        raise HTTPException(status_code=400, detail="missing_key")

    t0 = time.perf_counter()
    try:
        token = encode(body.alg, body.claims, key, _expiration_for(body))
    except JWTError as exc:
        ERRORS_TOTAL.labels(type=exc.code).inc()
        logger.info("Sign refused alg=%s: %s", body.alg, exc.code)
        raise HTTPException(status_code=400, detail=exc.code)

    elapsed = time.perf_counter() - t0
    SIGN_LATENCY_SECONDS.labels(alg=body.alg).observe(elapsed)

    return SignResponse(
        token=token,
        alg=body.alg,
        token_size_bytes=len(token.encode("ascii")),
        sign_time_ms=elapsed * 1000.0,
    )
