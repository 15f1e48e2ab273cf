from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx
from loguru import logger
from pydantic import ValidationError

from strava_auth.integrations.strava.callback import build_callback_params, parse_callback_url
from strava_auth.integrations.strava.config import DEFAULT_CONFIG, ClientConfig, merge_config
from strava_auth.integrations.strava.errors import (
    ConfigurationError,
    InvalidTokenResponseError,
    ScopeMismatchError,
)
from strava_auth.integrations.strava.schemas import CallbackParams, TokenResponse
from strava_auth.integrations.strava.scopes import SCOPE_SEPARATOR
from strava_auth.integrations.strava.tokens import Token

if TYPE_CHECKING:
    from strava_auth.config.settings import Settings

RESPONSE_TYPE_CODE = "code"
APPROVAL_PROMPT_AUTO = "auto"
GRANT_TYPE_AUTHORIZATION_CODE = "authorization_code"
DEFAULT_HTTP_TIMEOUT = 10.0


def parse_token_response(payload: Any) -> TokenResponse:
    """Validate a token endpoint body.

    Raises:
        InvalidTokenResponseError: If a required field is missing or has the wrong type
    """
    try:
        return TokenResponse.model_validate(payload)
    except ValidationError as e:
        # Field names only; values may be credentials
        fields = ", ".join(sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})) or "body"
        raise InvalidTokenResponseError(f"Invalid token response from Strava: {fields}") from e


class StravaAuthClient:
    """Strava OAuth2 authorization code client.

    - Builds the authorization URI
    - Checks granted scopes against requested scopes
    - Exchanges the code for a Token (one request, no retries)

    Configuration is fixed at construction. The client keeps no state between
    calls, so concurrent exchanges on one instance are independent.
    """

    def __init__(
        self,
        config: Mapping[str, Any] | ClientConfig,
        defaults: Mapping[str, Any] = DEFAULT_CONFIG,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        if isinstance(config, ClientConfig):
            config = config.model_dump()
        self.validate_config(config)
        # Supplied configuration wins over defaults
        self._config = merge_config(config, defaults)
        self._http_client = http_client
        self._timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        defaults: Mapping[str, Any] = DEFAULT_CONFIG,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> StravaAuthClient:
        """Create a client from environment-backed settings."""
        return cls(
            settings.to_client_config(),
            defaults,
            http_client=http_client,
            timeout=settings.http_timeout,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def scopes_to_string(self, scopes: Sequence[str]) -> str:
        """Convert scopes to the CSV format Strava expects.

        Args:
            scopes: e.g. ["read", "activity:read_all"]

        Returns:
            e.g. "read,activity:read_all"
        """
        return SCOPE_SEPARATOR.join(scopes)

    def string_to_scopes(self, scope_string: str) -> list[str]:
        """Split a CSV scope string into a list.

        No validation or filtering: "" becomes [""].
        """
        return scope_string.split(SCOPE_SEPARATOR)

    def validate_config(self, config: Mapping[str, Any]) -> bool:
        """Check that the supplied config has a client_id and a client_secret.

        Returns:
            True if both are present

        Raises:
            ConfigurationError: If either is missing or empty
        """
        if not config.get("client_id"):
            raise ConfigurationError("client_id must be specified")
        if not config.get("client_secret"):
            raise ConfigurationError("client_secret must be specified")
        return True

    def get_authorization_uri(self) -> str:
        """Build the URI to redirect the athlete to for authorization."""
        params = [
            ("client_id", str(self._config.client_id)),
            ("redirect_uri", self._config.redirect_uri),
            ("response_type", RESPONSE_TYPE_CODE),
            ("approval_prompt", APPROVAL_PROMPT_AUTO),
            ("scope", self.scopes_to_string(self._config.scopes)),
        ]
        parts = urlsplit(self._config.authorization_uri)
        query = f"{parts.query}&{urlencode(params)}" if parts.query else urlencode(params)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))

    async def get_token(self, callback_url: str, base_url: str | None = None) -> Token:
        """Exchange the code carried by a Strava callback URL for a Token.

        Args:
            callback_url: Absolute URL, or a path like "/callback?state=..&code=..&scope=.."
            base_url: Optional base to resolve a relative callback_url against

        Returns:
            Token for the athlete

        Raises:
            MalformedCallbackError: If code or scope is missing or malformed
            ScopeMismatchError: If granted scopes differ from the configured ones
            InvalidTokenResponseError: If Strava's response lacks required fields
            httpx.HTTPError: On transport failure or non-2xx status
        """
        params = parse_callback_url(callback_url, base_url)
        return await self.get_token_from_object(params)

    async def get_token_from_object(self, params: CallbackParams | Mapping[str, Any]) -> Token:
        """Check granted scopes, then exchange the authorization code for a Token.

        Args:
            params: state, code and scope as sent by Strava on the callback

        Returns:
            Token for the athlete
        """
        params = build_callback_params(params)

        granted = self.string_to_scopes(params.scope)
        self._check_scopes(granted)

        payload = await self._request_token(params.code)
        token = Token.from_response(parse_token_response(payload))
        logger.info(f"Strava token obtained for athlete_id={token.athlete.get('id')}, expires_at={token.expires_at}")
        return token

    def _check_scopes(self, granted: Sequence[str]) -> None:
        # Count plus membership, not multiset equality
        requested = self._config.scopes
        if len(granted) != len(requested):
            raise ScopeMismatchError(requested, granted)
        for scope in granted:
            if scope not in requested:
                raise ScopeMismatchError(requested, granted)

    async def _request_token(self, code: str) -> Any:
        body = {
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "code": code,
            "grant_type": GRANT_TYPE_AUTHORIZATION_CODE,
        }
        logger.debug(f"Exchanging authorization code at {self._config.token_uri}")

        if self._http_client is not None:
            resp = await self._http_client.post(self._config.token_uri, json=body)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._config.token_uri, json=body)

        resp.raise_for_status()
        try:
            return resp.json()
        except ValueError as e:
            raise InvalidTokenResponseError("Strava token endpoint returned a non-JSON body") from e
