from strava_auth.integrations.strava.client import StravaAuthClient
from strava_auth.integrations.strava.config import DEFAULT_CONFIG, ClientConfig
from strava_auth.integrations.strava.errors import (
    ConfigurationError,
    InvalidTokenResponseError,
    MalformedCallbackError,
    ScopeMismatchError,
    StravaAuthError,
)
from strava_auth.integrations.strava.scopes import Scope
from strava_auth.integrations.strava.tokens import Token

__all__ = [
    "DEFAULT_CONFIG",
    "ClientConfig",
    "ConfigurationError",
    "InvalidTokenResponseError",
    "MalformedCallbackError",
    "Scope",
    "ScopeMismatchError",
    "StravaAuthClient",
    "StravaAuthError",
    "Token",
]
