"""Strava OAuth2 authorization code client."""

from strava_auth.integrations.strava import (
    DEFAULT_CONFIG,
    ClientConfig,
    ConfigurationError,
    InvalidTokenResponseError,
    MalformedCallbackError,
    Scope,
    ScopeMismatchError,
    StravaAuthClient,
    StravaAuthError,
    Token,
)

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
