"""Shared fixtures for Strava OAuth tests."""

import json
from collections.abc import Callable

import httpx
import pytest

TOKEN_URI = "https://www.strava.com/oauth/token"


@pytest.fixture
def client_config() -> dict:
    return {
        "client_id": 12345,
        "client_secret": "shh-secret",
        "redirect_uri": "http://localhost:8000/auth/strava/callback",
        "scopes": ["read", "activity:read_all"],
    }


@pytest.fixture
def token_payload() -> dict:
    return {
        "token_type": "Bearer",
        "expires_at": 1700000000,
        "expires_in": 21600,
        "refresh_token": "r1",
        "access_token": "a1",
        "athlete": {"id": 42, "username": "runner", "resource_state": 2, "premium": False},
    }


class TokenEndpoint:
    """Records requests sent to the token endpoint and replies with a fixed response."""

    def __init__(self, status_code: int = 200, json_body: object = None, content: bytes | None = None):
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content, request=request)
        return httpx.Response(self.status_code, json=self.json_body, request=request)

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def token_endpoint(token_payload) -> Callable[..., TokenEndpoint]:
    def _make(status_code: int = 200, json_body: object = None, content: bytes | None = None) -> TokenEndpoint:
        body = token_payload if json_body is None and content is None else json_body
        return TokenEndpoint(status_code=status_code, json_body=body, content=content)

    return _make
