from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from backend.app.api.crud import iso_timestamp
from backend.app.api.errors import register_exception_handlers
from backend.app.api.v1.router import router as v1_router
from backend.app.core.config import Settings, get_settings
from backend.app.core.context import AppContext
from backend.app.core.logging import setup_logging

logger = logging.getLogger("stockbox")
access_logger = logging.getLogger("stockbox.access")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    settings = settings or get_settings()
    context = context or AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("StockBox API starting (env=%s)", settings.ENV)
        yield
        await context.close()
        logger.info("StockBox API stopped")

    app = FastAPI(title="StockBox API", version="1.0.0", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        access_logger.info(
            "%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy", "timestamp": iso_timestamp(), "service": "StockBox API"}

    app.include_router(v1_router, prefix=f"/api/{settings.API_VERSION}")
    return app


def _build_default_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    return create_app(settings)


app = _build_default_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().API_PORT)
