"""Shared fixtures for dashboard tests."""

import sys
from collections.abc import Callable
from pathlib import Path

# Add src/ to sys.path so the package imports without an editable install.
_SRC = str(Path(__file__).resolve().parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

import httpx
import pytest

from pmrs_dashboard.config import Settings

UPSTREAM_URL = "http://upstream.test"

Handler = Callable[[httpx.Request], httpx.Response]


def pytest_configure(config):
    """Set pytest-asyncio mode to auto so async test functions work without markers."""
    config.option.asyncio_mode = "auto"


def make_settings(**overrides) -> Settings:
    """Create a Settings instance suitable for tests.

    Uses ``_env_file=None`` so a local .env is never loaded.
    """
    values = {
        "_env_file": None,
        "upstream_base_url": UPSTREAM_URL,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


class FakeUpstream:
    """Routes upstream paths to handlers and records every request it sees."""

    def __init__(self) -> None:
        self.routes: dict[str, Handler] = {}
        self.requests: list[httpx.Request] = []

    def json(self, path: str, body, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, json=body)

    def raw(self, path: str, content: bytes, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, content=content)

    def fail(self, path: str, exc_type: type[httpx.RequestError]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_type("simulated failure", request=request)

        self.routes[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404)
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture()
def upstream() -> FakeUpstream:
    """A scriptable stand-in for the pmrs daemon."""
    return FakeUpstream()


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def settings_factory() -> Callable[..., Settings]:
    """Build test settings with selected fields overridden."""
    return make_settings
