from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# One or more "name" / "group:name" identifiers joined by commas, no blanks
SCOPE_STRING_PATTERN = r"^\w+(?::\w+)?(?:,\w+(?::\w+)?)*$"


class CallbackParams(BaseModel):
    """Query parameters Strava appends to the redirect URI after consent."""

    model_config = ConfigDict(frozen=True, strict=True)

    state: str = ""
    code: str = Field(min_length=1)
    scope: str = Field(pattern=SCOPE_STRING_PATTERN)


class TokenResponse(BaseModel):
    """Body returned by POST /oauth/token for the authorization_code grant.

    Only presence and primitive types are checked; the athlete payload is
    passed through untouched.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    token_type: Literal["Bearer"]
    expires_at: int
    expires_in: int
    refresh_token: str
    access_token: str
    athlete: dict[str, Any]
