import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import generate_latest

from ..algorithms import SUPPORTED_ALGORITHMS
from .config import settings
from .keystore import KeyStore
from .metrics import HTTP_REQUESTS_TOTAL, HTTP_REQUEST_LATENCY_SECONDS
from .routes_sign import router as sign_router
from .routes_verify import router as verify_router


def setup_logging() -> None:
    log_level = settings.log_level.upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
    logging.getLogger("qjwt").setLevel(log_level)


def create_app(store: Optional[KeyStore] = None) -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="JWT sign & verify (HS256/HS384/HS512/RS256/ES256).",
    )
    app.state.keystore = store if store is not None else KeyStore.from_settings(settings)

    app.include_router(sign_router)
    app.include_router(verify_router)

    @app.middleware("http")
    async def prometheus_middleware(request: Request, call_next):
        path = request.url.path
        method = request.method

        HTTP_REQUESTS_TOTAL.labels(method=method, path=path).inc()

        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            elapsed = time.perf_counter() - start
            HTTP_REQUEST_LATENCY_SECONDS.labels(path=path).observe(elapsed)

    @app.get("/metrics", response_class=PlainTextResponse, tags=["internal"])
    def metrics():
        # Prometheus scraping endpoint
        return PlainTextResponse(generate_latest().decode("utf-8"))

    @app.get("/health", tags=["internal"])
    def health():
        return {
            "status": "ok",
            "component": "qjwt",
            "environment": settings.environment,
            "default_alg": settings.default_alg,
            "algorithms": list(SUPPORTED_ALGORITHMS),
        }

    return app
