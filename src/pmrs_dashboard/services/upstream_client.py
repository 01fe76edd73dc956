"""HTTP client for the upstream pmrs daemon.

This is the only module that speaks HTTP to the upstream. Every transport,
status or decoding problem leaves it as an ``UpstreamError`` subclass.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from loguru import logger

from pmrs_dashboard.config import Settings
from pmrs_dashboard.use_cases.exceptions import (
    MalformedUpstreamBodyError,
    UpstreamStatusError,
    UpstreamUnavailableError,
)


def _reject_constant(token: str) -> Any:
    """Refuse ``NaN`` / ``Infinity`` / ``-Infinity``, which are not JSON."""
    raise ValueError(f"non-standard JSON constant {token!r}")


def build_async_client(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared ``httpx.AsyncClient`` pointed at the upstream.

    ``transport`` lets tests swap in an ``httpx.MockTransport``.
    """
    return httpx.AsyncClient(
        base_url=settings.upstream_base_url,
        timeout=httpx.Timeout(settings.upstream_timeout_seconds),
        headers={"Accept": "application/json", "User-Agent": settings.user_agent},
        transport=transport,
    )


class UpstreamClient:
    """Fetches JSON resources from the upstream, one GET per call."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def fetch_json(self, path: str) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Raises:
            UpstreamUnavailableError: connection failure or timeout.
            UpstreamStatusError: the upstream answered with a non-2xx status.
            MalformedUpstreamBodyError: the body is not JSON, or is ``null``.
        """
        try:
            response = await self.http.get(path)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamUnavailableError(f"GET {path} failed: {exc!r}") from exc

        if response.is_error:
            raise UpstreamStatusError(response.status_code, str(response.request.url))

        # Deep nesting overflows the decoder with RecursionError, not ValueError.
        try:
            body = json.loads(response.content, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise MalformedUpstreamBodyError(f"GET {path} returned a non-JSON body") from exc

        if body is None:
            raise MalformedUpstreamBodyError(f"GET {path} returned JSON null")

        logger.debug("Upstream GET {} -> {}", path, response.status_code)
        return body

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http.aclose()
