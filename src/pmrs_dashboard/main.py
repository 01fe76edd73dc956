"""FastAPI backend for the pmrs dashboard.

This module is a thin **presentation layer**. The proxy logic lives in
the ``use_cases`` package so it can be tested and reused independently of
any HTTP framework.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from pmrs_dashboard import __version__
from pmrs_dashboard.config import Settings, get_settings
from pmrs_dashboard.logging_config import setup_logging
from pmrs_dashboard.presentation.formatting import base_path
from pmrs_dashboard.presentation.routes.api import build_router
from pmrs_dashboard.services.upstream_client import UpstreamClient, build_async_client
from pmrs_dashboard.use_cases.proxy import ProxyUseCase


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the dashboard application.

    ``transport`` is handed to the upstream ``httpx.AsyncClient``; tests pass
    an ``httpx.MockTransport`` here.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    # ---------------------------------------------------------------------
    # Lifespan: the upstream connection pool lives as long as the app
    # ---------------------------------------------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings.validate_runtime()

        upstream = UpstreamClient(build_async_client(settings, transport=transport))
        app.state.settings = settings
        app.state.upstream = upstream
        app.state.proxy = ProxyUseCase(upstream)

        logger.info("Application startup complete | upstream={}", settings.upstream_base_url)
        yield

        await upstream.aclose()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="pmrs dashboard",
        description="Proxies the pmrs daemon's services and system status to the dashboard UI.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(build_router(), prefix=base_path(settings.production).rstrip("/"))

    @app.get("/health")
    async def health():
        """Simple liveness check; does not touch the upstream."""
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "pmrs_dashboard.main:app", host=_settings.host, port=_settings.port, log_config=None
    )
