from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import APIRouter, Request

from ..codec import decode
from ..errors import JWTError
from ..jose_utils import decode_segment
from .keystore import KeyStore
from .metrics import ERRORS_TOTAL, VERIFY_LATENCY_SECONDS
from .models import VerifyRequest, VerifyResponse

logger = logging.getLogger("qjwt.service.verify")

router = APIRouter(prefix="/verify", tags=["verify"])


def _peek_alg(token: str) -> Any:
    """
    Header alg, used only to pick the default key; decode re-checks everything.
    """
    try:
        return decode_segment(token.split(".", 1)[0]).get("alg")
    except JWTError:
        return None


@router.post("", response_model=VerifyResponse)
def verify_token(body: VerifyRequest, request: Request) -> VerifyResponse:
    store: KeyStore = request.app.state.keystore

    alg = _peek_alg(body.token)
    alg_out = alg if isinstance(alg, str) else None

    t0 = time.perf_counter()
    try:
        claims = decode(body.token, store.verify_key_for(alg), store.issuer_keys)
    except JWTError as exc:
        elapsed = time.perf_counter() - t0
        VERIFY_LATENCY_SECONDS.observe(elapsed)
        ERRORS_TOTAL.labels(type=exc.code).inc()
        logger.info("Token rejected alg=%s: %s", alg_out, exc.code)
        return VerifyResponse(
            valid=False,
            alg=alg_out,
            verify_time_ms=elapsed * 1000.0,
            error=exc.code,
        )

    elapsed = time.perf_counter() - t0
    VERIFY_LATENCY_SECONDS.observe(elapsed)

    return VerifyResponse(
        valid=True,
        alg=alg_out,
        claims=claims,
        verify_time_ms=elapsed * 1000.0,
    )
