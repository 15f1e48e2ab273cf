from typing import Any

from loguru import logger
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from strava_auth.integrations.strava.errors import ConfigurationError
from strava_auth.integrations.strava.scopes import Scope


class Settings(BaseSettings):
    strava_client_id: str = Field(default="", validation_alias="STRAVA_CLIENT_ID")
    strava_client_secret: str = Field(default="", validation_alias="STRAVA_CLIENT_SECRET")
    strava_redirect_uri: str = Field(
        default="http://localhost:8000/auth/strava/callback",  # Default for local dev; MUST be set in production
        validation_alias="STRAVA_REDIRECT_URI",
    )
    strava_scopes: str = Field(default="", validation_alias="STRAVA_SCOPES")  # Comma-separated list
    strava_authorization_uri: str = Field(default="", validation_alias="STRAVA_AUTHORIZATION_URI")
    strava_token_uri: str = Field(default="", validation_alias="STRAVA_TOKEN_URI")
    http_timeout: float = Field(
        default=10.0,
        validation_alias="STRAVA_HTTP_TIMEOUT",
        description="Timeout in seconds for the token exchange request",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("strava_client_id", "strava_client_secret")
    @classmethod
    def validate_required(cls, value: str) -> str:
        """Warn when Strava credentials are missing.

        Empty values are allowed here; the client refuses to start without them.
        """
        if not value:
            logger.warning(
                "⚠️ STRAVA_CLIENT_ID and/or STRAVA_CLIENT_SECRET are not set. "
                "Set them in .env file or environment variables to enable Strava OAuth."
            )
        return value

    @field_validator("strava_redirect_uri")
    @classmethod
    def validate_redirect_uri(cls, value: str) -> str:
        """Warn if redirect URI does not look like a callback endpoint."""
        if value and "callback" not in value:
            logger.warning(f"STRAVA_REDIRECT_URI usually points to a callback endpoint, but got: {value}. This may cause OAuth failures.")
        return value

    @field_validator("strava_scopes")
    @classmethod
    def validate_scopes(cls, value: str) -> str:
        """Reject unknown scope names early."""
        Scope.parse_list(value)
        return value

    def to_client_config(self) -> dict[str, Any]:
        """Return client overrides; unset settings are left to the client defaults."""
        overrides: dict[str, Any] = {
            "client_id": self.strava_client_id,
            "client_secret": self.strava_client_secret,
            "redirect_uri": self.strava_redirect_uri,
        }
        if self.strava_scopes:
            overrides["scopes"] = tuple(Scope.parse_list(self.strava_scopes))
        if self.strava_authorization_uri:
            overrides["authorization_uri"] = self.strava_authorization_uri
        if self.strava_token_uri:
            overrides["token_uri"] = self.strava_token_uri
        return overrides


def get_settings() -> Settings:
    """Load settings from the environment and .env file.

    Raises:
        ConfigurationError: If a setting is invalid (only the variable names are reported)
    """
    try:
        return Settings()
    except ValidationError as e:
        names = ", ".join(sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}))
        raise ConfigurationError(f"Invalid settings: {names}") from e
