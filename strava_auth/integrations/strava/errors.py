"""Error types for the Strava OAuth flow.

Every failure raised by the client is a StravaAuthError subclass, except
transport errors, which come straight from httpx.
"""

from __future__ import annotations

from collections.abc import Sequence


class StravaAuthError(Exception):
    """Base exception for Strava OAuth errors."""

    pass


class ConfigurationError(StravaAuthError):
    """Raised when the client configuration is unusable (fatal at construction)."""

    pass


class MalformedCallbackError(StravaAuthError):
    """Raised when callback parameters are missing or malformed.

    Always raised before any request is sent to the token endpoint.
    """

    pass


class ScopeMismatchError(StravaAuthError):
    """Raised when the scopes granted by the athlete differ from those requested.

    Attributes:
        requested: Scopes configured on the client
        granted: Scopes returned in the callback
    """

    def __init__(self, requested: Sequence[str], granted: Sequence[str]):
        self.requested = list(requested)
        self.granted = list(granted)
        self.message = f"Requested scopes {','.join(self.requested)} not granted. Got: {','.join(self.granted)}"
        super().__init__(self.message)


class InvalidTokenResponseError(StravaAuthError):
    """Raised when the token endpoint returns a body without the required fields."""

    pass
