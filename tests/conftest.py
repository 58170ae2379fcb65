"""Shared pytest fixtures.

The UpGuard API is never contacted: every test routes upstream traffic
through an ``httpx.MockTransport`` that records the requests it served.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from vendor_risk_dashboard.config import Settings
from vendor_risk_dashboard.web import create_app


class FakeUpGuard:
    """Canned UpGuard responses keyed by the ``hostname`` query parameter."""

    def __init__(self):
        self.responses: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, hostname: str, response: httpx.Response | Exception) -> None:
        self.responses[hostname] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        hostname = request.url.params.get("hostname")
        response = self.responses.get(hostname)
        if response is None:
            return httpx.Response(404, text="vendor not found")
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def hostnames_requested(self) -> list[str]:
        return [r.url.params.get("hostname") for r in self.requests]


@pytest.fixture
def upstream():
    return FakeUpGuard()


@pytest.fixture
def settings():
    return Settings(
        upguard_api_key="test-key",
        default_vendors=("alpha.gov", "beta.gov"),
    )


@pytest.fixture
def make_client(upstream):
    """Factory for an in-process HTTP client around ``create_app``."""

    def _make(app_settings: Settings, **kwargs) -> httpx.AsyncClient:
        app = create_app(app_settings, upstream_transport=upstream.transport, **kwargs)
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def client(make_client, settings):
    async with make_client(settings) as c:
        yield c
