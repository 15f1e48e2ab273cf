from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal

from strava_auth.integrations.strava.schemas import TokenResponse


def is_token_expired(expires_at: int, now: dt.datetime | None = None) -> bool:
    """Check if token is expired based on expires_at timestamp.

    A naive now is taken to be UTC.
    """
    current = now or dt.datetime.now(dt.UTC)
    if current.tzinfo is None:
        current = current.replace(tzinfo=dt.UTC)
    return current >= get_token_expiry_datetime(expires_at)


def get_token_expiry_datetime(expires_at: int) -> dt.datetime:
    """Convert expires_at timestamp to datetime."""
    return dt.datetime.fromtimestamp(expires_at, tz=dt.UTC)


@dataclass(frozen=True)
class Token:
    """Result of a successful authorization code exchange.

    Created once per exchange and owned by the caller. The athlete payload is
    Strava's SummaryAthlete object as received, exposed through a read-only
    mapping. Immutability is shallow: nested objects inside athlete are the
    original lists/dicts.
    """

    token_type: Literal["Bearer"]
    expires_at: int  # Unix timestamp
    expires_in: int  # seconds
    refresh_token: str
    access_token: str
    athlete: Mapping[str, Any]

    def __post_init__(self) -> None:
        if not isinstance(self.athlete, MappingProxyType):
            object.__setattr__(self, "athlete", MappingProxyType(dict(self.athlete)))

    @classmethod
    def from_response(cls, response: TokenResponse) -> Token:
        return cls(
            token_type=response.token_type,
            expires_at=response.expires_at,
            expires_in=response.expires_in,
            refresh_token=response.refresh_token,
            access_token=response.access_token,
            athlete=response.athlete,
        )

    @property
    def expires_at_datetime(self) -> dt.datetime:
        return get_token_expiry_datetime(self.expires_at)

    def is_expired(self, now: dt.datetime | None = None) -> bool:
        """Return True once the current time has reached expires_at."""
        return is_token_expired(self.expires_at, now)
