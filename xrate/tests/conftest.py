"""Test configuration and fixtures."""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from xrate.core.config import RateFetcherConfig
from xrate.main import app
from xrate.routers.exchange import get_rate_fetcher
from xrate.services.rate_fetcher import RateFetcher

BASE_URL = "https://rates.test/api"
ACCESS_KEY = "test-key"


@pytest.fixture
def fetcher_config():
    """Configuration with a usable access key"""
    return RateFetcherConfig(base_url=BASE_URL, access_key=ACCESS_KEY)


@pytest.fixture
def recorded_requests():
    """Requests seen by the mock transport, in order"""
    return []


@pytest.fixture
def make_fetcher(fetcher_config, recorded_requests):
    """Build a RateFetcher whose HTTP traffic is answered by `handler`"""
    clients = []

    def _make(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_record))
        fetcher = RateFetcher(fetcher_config, client=client)
        clients.append(client)
        return fetcher

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def rates_handler():
    """Factory for handlers answering every request with a rates payload"""

    def _factory(rates, status_code=200):
        body = {"success": True, "base": "EUR", "date": "2010-06-05", "rates": rates}

        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, content=json.dumps(body).encode())

        return _handler

    return _factory


@pytest.fixture
def api_client():
    """Test client with the fetcher dependency replaced per test"""

    def _client(fetcher):
        app.dependency_overrides[get_rate_fetcher] = lambda: fetcher
        return TestClient(app)

    yield _client

    app.dependency_overrides.clear()
