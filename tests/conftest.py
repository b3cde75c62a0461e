"""Pytest configuration and shared fixtures"""

import os
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from wolai_mcp.client import WolaiClient
from wolai_mcp.config import Config
from wolai_mcp.token_cache import TokenCache

BASE_URL = "https://test.wolai.io"


class FakeClock:
    """Clock whose time only moves when told to"""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 1, 1, tzinfo=UTC)
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_response(
    json_data=None, status_code: int = 200, method: str = "GET", url: str = BASE_URL
) -> httpx.Response:
    """Build a real httpx.Response bound to a request"""
    return httpx.Response(
        status_code, json=json_data, request=httpx.Request(method, url)
    )


@pytest.fixture
def response_factory():
    """Factory for real httpx.Response objects"""
    return make_response


@pytest.fixture
def clean_env():
    """Fixture that temporarily clears WOLAI_* environment variables.

    This ensures Config tests see the true defaults without interference
    from environment variables that might be set in the user's shell.
    """
    wolai_vars = {
        key: value for key, value in os.environ.items() if key.startswith("WOLAI_")
    }

    for key in wolai_vars:
        os.environ.pop(key, None)

    try:
        yield
    finally:
        for key in [k for k in os.environ if k.startswith("WOLAI_")]:
            os.environ.pop(key, None)
        for key, value in wolai_vars.items():
            os.environ[key] = value


@pytest.fixture
def clean_config(clean_env):
    """Config instance built with a clean environment"""
    return Config()


@pytest.fixture
def config(clean_env):
    """Config pointing at a test base URL with default targets set"""
    return Config(
        base_url=BASE_URL,
        app_id="test-app-id",
        app_secret="test-app-secret",
        block_id="default-block",
        database_id="default-database",
        log_level="DEBUG",
    )


@pytest.fixture
def clock():
    """Controllable clock"""
    return FakeClock()


@pytest.fixture
def token_cache(clock):
    """Fresh TokenCache on the fake clock"""
    return TokenCache(clock=clock)


@pytest.fixture
def mock_http_client():
    """Mock httpx AsyncClient"""
    http_client = Mock(spec=httpx.AsyncClient)
    http_client.get = AsyncMock(return_value=make_response({"data": {}}))
    http_client.post = AsyncMock(
        return_value=make_response({"data": {}}, method="POST")
    )
    http_client.put = AsyncMock(return_value=make_response({"data": {}}, method="PUT"))
    http_client.aclose = AsyncMock()
    return http_client


@pytest.fixture
def client(config, token_cache, mock_http_client):
    """WolaiClient with mocked HTTP and a fresh token cache"""
    return WolaiClient(
        config=config, token_store=token_cache, http_client=mock_http_client
    )
