"""Client configuration for the Strava OAuth flow.

Defaults are an explicit value handed to the client and merged field by field
with caller overrides; nothing here is mutated at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from strava_auth.integrations.strava.errors import ConfigurationError
from strava_auth.integrations.strava.scopes import Scope

STRAVA_AUTHORIZATION_URI = "https://www.strava.com/oauth/authorize"
STRAVA_TOKEN_URI = "https://www.strava.com/oauth/token"

DEFAULT_CONFIG: Mapping[str, Any] = MappingProxyType(
    {
        "authorization_uri": STRAVA_AUTHORIZATION_URI,
        "token_uri": STRAVA_TOKEN_URI,
        "scopes": (Scope.READ,),
    }
)


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: str | int
    client_secret: str
    redirect_uri: str
    authorization_uri: str
    token_uri: str
    scopes: tuple[Scope, ...]


def merge_config(
    overrides: Mapping[str, Any],
    defaults: Mapping[str, Any] = DEFAULT_CONFIG,
) -> ClientConfig:
    """Merge caller-supplied values over defaults and validate the result.

    Keys whose value is None count as unset and keep the default.

    Raises:
        ConfigurationError: If the merged configuration is incomplete or invalid
    """
    merged = dict(defaults)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return ClientConfig.model_validate(merged)
    except ValidationError as e:
        # Only field names and reasons: input values would include the client secret
        problems = "; ".join(f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ConfigurationError(f"Invalid Strava client configuration: {problems}") from e
