"""Standalone echo server for exercising the process manager.

Answers every request with a running request index and the caller's
user-agent. Once more than ``limit`` requests have arrived, the process
exits with status 0 before the pending request is answered, which gives
the process manager a service that dies on a predictable schedule.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from pmrs_dashboard.config import EchoSettings
from pmrs_dashboard.logging_config import setup_logging

DEFAULT_REQUEST_LIMIT = 10

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


class RequestCounter:
    """Counts handled requests for one echo app."""

    def __init__(self, limit: int = DEFAULT_REQUEST_LIMIT) -> None:
        self.limit = limit
        self.count = 0

    def next(self) -> int:
        """Return the index of the current request and advance the counter."""
        index = self.count
        self.count += 1
        return index

    @property
    def exhausted(self) -> bool:
        return self.count > self.limit


def render_echo_body(index: int, user_agent: str | None) -> str:
    return f"{index}\nYour user-agent is:\n\n{user_agent if user_agent is not None else 'Unknown'}"


def terminate_process() -> None:
    logger.info("Request limit reached, exiting")
    os._exit(0)


def create_echo_app(
    *,
    limit: int = DEFAULT_REQUEST_LIMIT,
    on_exhausted: Callable[[], None] = terminate_process,
) -> FastAPI:
    """Build the echo app. ``on_exhausted`` runs once the limit is passed."""
    app = FastAPI(title="pmrs echo server", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.counter = RequestCounter(limit)

    @app.api_route("/{path:path}", methods=_ALL_METHODS)
    async def echo(request: Request, path: str) -> PlainTextResponse:
        counter: RequestCounter = request.app.state.counter
        body = render_echo_body(counter.next(), request.headers.get("user-agent"))

        if counter.exhausted:
            on_exhausted()

        return PlainTextResponse(body)

    return app


def run_echo_server(settings: EchoSettings, *, host: str = "0.0.0.0") -> None:
    """Serve the echo app until the request limit terminates the process."""
    import uvicorn

    setup_logging(settings)
    logger.info("HTTP server running. Access it at: http://localhost:{}/", settings.port)
    uvicorn.run(create_echo_app(), host=host, port=settings.port, log_config=None)
