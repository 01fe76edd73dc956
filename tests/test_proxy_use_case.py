"""Tests for the ProxyUseCase: pure façade logic, no HTTP layer."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from pmrs_dashboard.domain.models import SERVICES, SYSTEM, Envelope
from pmrs_dashboard.use_cases.exceptions import (
    MalformedUpstreamBodyError,
    UpstreamStatusError,
    UpstreamUnavailableError,
)
from pmrs_dashboard.use_cases.proxy import ProxyUseCase


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_client() -> AsyncMock:
    """A mock UpstreamClient whose fetch_json() returns a canned body."""
    client = AsyncMock()
    client.fetch_json.return_value = [{"id": 1}]
    return client


@pytest.fixture()
def proxy(mock_client: AsyncMock) -> ProxyUseCase:
    return ProxyUseCase(mock_client)


# ---------------------------------------------------------------------------
# Success path
# ---------------------------------------------------------------------------


class TestSuccess:
    async def test_wraps_upstream_body(self, proxy: ProxyUseCase, mock_client: AsyncMock):
        envelope = await proxy.execute(SERVICES)

        assert envelope == Envelope(success=True, payload=[{"id": 1}])
        mock_client.fetch_json.assert_awaited_once_with("/services")

    @pytest.mark.parametrize(
        "body",
        [{"cpu": 12.5, "mem": 1024}, [], {}, 0, False, "text", [1, [2, [3]]]],
    )
    async def test_any_json_value_passes_through(self, proxy: ProxyUseCase, mock_client, body):
        mock_client.fetch_json.return_value = body

        envelope = await proxy.execute(SYSTEM)

        assert envelope.success is True
        assert envelope.payload == body

    async def test_request_url_does_not_change_the_fetch(self, proxy: ProxyUseCase, mock_client):
        await proxy.execute(SYSTEM, request_url="http://dash.local/api/system?x=1")

        mock_client.fetch_json.assert_awaited_once_with("/system")


# ---------------------------------------------------------------------------
# Failure path
# ---------------------------------------------------------------------------


class TestFailure:
    @pytest.mark.parametrize(
        "error",
        [
            UpstreamUnavailableError("connection refused"),
            UpstreamUnavailableError("read timeout"),
            UpstreamStatusError(500, "http://upstream.test/services"),
            MalformedUpstreamBodyError("not json"),
        ],
    )
    async def test_errors_collapse_to_failure(self, proxy: ProxyUseCase, mock_client, error):
        mock_client.fetch_json.side_effect = error

        envelope = await proxy.execute(SERVICES)

        assert envelope == Envelope.failure()
        assert envelope.to_response() == {"success": False, "payload": None}

    async def test_single_attempt_on_failure(self, proxy: ProxyUseCase, mock_client):
        mock_client.fetch_json.side_effect = UpstreamUnavailableError("down")

        await proxy.execute(SERVICES)

        assert mock_client.fetch_json.await_count == 1

    async def test_calls_are_independent(self, proxy: ProxyUseCase, mock_client):
        mock_client.fetch_json.side_effect = [
            UpstreamUnavailableError("down"),
            {"uptime": 42},
        ]

        first = await proxy.execute(SYSTEM)
        second = await proxy.execute(SYSTEM)

        assert first.success is False
        assert second == Envelope.ok({"uptime": 42})
