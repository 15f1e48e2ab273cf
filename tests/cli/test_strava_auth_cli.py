"""Tests for the strava-auth command line helper."""

import httpx
import pytest
from typer.testing import CliRunner

from strava_auth.cli import app

runner = CliRunner()


@pytest.fixture
def strava_env(monkeypatch, tmp_path):
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STRAVA_CLIENT_ID", "12345")
    monkeypatch.setenv("STRAVA_CLIENT_SECRET", "shh-secret")
    monkeypatch.setenv("STRAVA_REDIRECT_URI", "http://localhost:8000/auth/strava/callback")
    monkeypatch.setenv("STRAVA_SCOPES", "read,activity:read_all")
    for name in ("STRAVA_AUTHORIZATION_URI", "STRAVA_TOKEN_URI", "STRAVA_HTTP_TIMEOUT", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_token_endpoint(strava_env):
    requests: list[httpx.Request] = []
    real_async_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "token_type": "Bearer",
                "expires_at": 1700000000,
                "expires_in": 21600,
                "refresh_token": "refresh-abcdef",
                "access_token": "access-abcdef",
                "athlete": {"id": 42},
            },
            request=request,
        )

    def fake_async_client(*args, **kwargs):
        return real_async_client(transport=httpx.MockTransport(handler))

    strava_env.setattr(httpx, "AsyncClient", fake_async_client)
    return requests


def test_authorize_url(strava_env):
    result = runner.invoke(app, ["authorize-url"])
    assert result.exit_code == 0
    assert "https://www.strava.com/oauth/authorize?client_id=12345" in result.stdout
    assert "scope=read%2Cactivity%3Aread_all" in result.stdout


def test_authorize_url_without_credentials(strava_env):
    strava_env.setenv("STRAVA_CLIENT_ID", "")
    result = runner.invoke(app, ["authorize-url"])
    assert result.exit_code == 1
    assert "client_id must be specified" in result.stdout


def test_exchange_masks_tokens(mock_token_endpoint):
    result = runner.invoke(app, ["exchange", "/callback?state=&code=abc&scope=read,activity:read_all"])
    assert result.exit_code == 0
    assert len(mock_token_endpoint) == 1
    assert "acce****" in result.stdout
    assert "access-abcdef" not in result.stdout
    assert "42" in result.stdout


def test_exchange_show_secrets(mock_token_endpoint):
    result = runner.invoke(
        app,
        ["exchange", "/callback?state=&code=abc&scope=read,activity:read_all", "--show-secrets"],
    )
    assert result.exit_code == 0
    assert "access-abcdef" in result.stdout


def test_exchange_scope_mismatch(mock_token_endpoint):
    result = runner.invoke(app, ["exchange", "/callback?state=&code=abc&scope=read"])
    assert result.exit_code == 1
    assert "Token exchange failed" in result.stdout
    assert mock_token_endpoint == []


def test_invalid_scope_setting_is_configuration_error(strava_env):
    strava_env.setenv("STRAVA_SCOPES", "read,everything")
    result = runner.invoke(app, ["authorize-url"])
    assert result.exit_code == 1
    assert "Configuration error" in result.stdout
    assert "STRAVA_SCOPES" in result.stdout


def test_invalid_timeout_setting_is_configuration_error(strava_env):
    strava_env.setenv("STRAVA_HTTP_TIMEOUT", "soon")
    result = runner.invoke(app, ["exchange", "/callback?code=abc&scope=read,activity:read_all"])
    assert result.exit_code == 1
    assert "Configuration error" in result.stdout
