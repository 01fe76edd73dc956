"""Proxy use case: fetch one upstream resource and wrap it in an envelope.

Every failure is absorbed here, so callers only ever receive an
``Envelope``. It has **no dependency on FastAPI** and can be driven from
any transport layer.
"""

from __future__ import annotations

from loguru import logger

from pmrs_dashboard.domain.models import Envelope, UpstreamResource
from pmrs_dashboard.services.upstream_client import UpstreamClient
from pmrs_dashboard.use_cases.exceptions import UpstreamError


class ProxyUseCase:
    """Single best-effort fetch of an upstream resource per call.

    Parameters
    ----------
    client:
        The upstream client shared by all requests.
    """

    def __init__(self, client: UpstreamClient) -> None:
        self.client = client

    async def execute(
        self,
        resource: UpstreamResource,
        *,
        request_url: str | None = None,
    ) -> Envelope:
        """Fetch ``resource`` and return its envelope. Never raises for upstream failures.

        Args:
            resource: Which upstream resource to fetch.
            request_url: URL of the inbound request, for debug logging only.
        """
        if request_url is not None:
            logger.debug("Proxying {} -> upstream {}", request_url, resource.path)

        try:
            payload = await self.client.fetch_json(resource.path)
        except UpstreamError as exc:
            logger.warning("Upstream fetch failed | resource={} | {}", resource.name, exc)
            return Envelope.failure()

        return Envelope.ok(payload)
