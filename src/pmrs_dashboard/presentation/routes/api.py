"""API routes: one proxied GET per upstream resource."""

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from pmrs_dashboard.domain.models import RESOURCES, UpstreamResource
from pmrs_dashboard.use_cases.proxy import ProxyUseCase


def _make_handler(resource: UpstreamResource) -> Callable[[Request], Awaitable[JSONResponse]]:
    async def handler(request: Request) -> JSONResponse:
        proxy: ProxyUseCase = request.app.state.proxy
        envelope = await proxy.execute(resource, request_url=str(request.url))
        # Always 200: the outcome lives in the body.
        return JSONResponse(envelope.to_response(resource.response_key))

    handler.__name__ = f"get_{resource.name}"
    handler.__doc__ = f"Proxy upstream ``{resource.path}`` as a ``{{success, payload}}`` envelope."
    return handler


def build_router(resources: dict[str, UpstreamResource] = RESOURCES) -> APIRouter:
    """Create the ``/api`` router with a GET route for every resource."""
    router = APIRouter(prefix="/api", tags=["api"])
    for name, resource in resources.items():
        router.add_api_route(f"/{name}", _make_handler(resource), methods=["GET"])
    return router
