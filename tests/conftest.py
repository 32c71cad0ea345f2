"""Pytest fixtures for the AyuSetu service layer tests."""

import httpx
import pytest
import pytest_asyncio

from ayusetu.config import AyuSetuConfig
from ayusetu.integrations import build_services

API_ROOT = "/api"


class RecordingRouter:
    """Serves canned responses keyed by (method, path) and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, body=None, status=200):
        self.routes[(method, path)] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_ROOT):
            path = path[len(API_ROOT):]
        if (request.method, path) not in self.routes:
            return httpx.Response(404, json={"error": f"no route for {request.method} {path}"})
        status, body = self.routes[(request.method, path)]
        if body is None:
            return httpx.Response(status)
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def last(self, method, path):
        for request in reversed(self.requests):
            if request.method == method and request.url.path == f"{API_ROOT}{path}":
                return request
        raise AssertionError(f"{method} {path} was never requested")


@pytest.fixture
def config():
    """Developer-mode config with artificial delays switched off."""
    return AyuSetuConfig(mock_delay_scale=0)


@pytest.fixture
def live_config():
    return AyuSetuConfig(
        developer_mode=False,
        environment="sandbox",
        client_id="test-client",
        client_secret="test-secret",
    )


@pytest.fixture
def router():
    return RecordingRouter()


@pytest_asyncio.fixture
async def live_services(live_config, router):
    services = build_services(live_config, transport=httpx.MockTransport(router))
    yield services
    await services.aclose()


@pytest.fixture
def mock_services(config):
    return build_services(config)
