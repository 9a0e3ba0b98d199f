"""
Pytest fixtures for the proxy tests
"""

from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app

UPSTREAM = "https://api.pokemontcg.io/v2"


class FakeUpstream:
    """Records every outbound request and answers with a canned response"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.respond: Callable = lambda request: httpx.Response(200, json={"data": []})

    async def __call__(self, request: httpx.Request):
        self.requests.append(request)
        response = self.respond(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(pokemon_tcg_api_url=UPSTREAM, pokemon_tcg_api_key="")


@pytest.fixture
def make_client(upstream):
    def _make(settings: Settings) -> TestClient:
        app = create_app(settings, transport=httpx.MockTransport(upstream))
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)
