"""Process configuration read from environment variables."""

from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from beget_webhook.exceptions import ConfigError

DEFAULT_API_URL = "https://api.beget.com/api/dns"
DEFAULT_PORT = 8080
DEFAULT_TIMEOUT = 30


class Settings(BaseSettings):
    """Immutable settings, built once at startup.

    BEGET_LOGIN and BEGET_PASSWORD are required and must be non-empty.
    """

    beget_login: str = Field(min_length=1, validation_alias="BEGET_LOGIN")
    beget_password: str = Field(min_length=1, repr=False, validation_alias="BEGET_PASSWORD")
    api_url: str = Field(default=DEFAULT_API_URL, validation_alias="BEGET_API_URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, validation_alias="BEGET_TIMEOUT")

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, validation_alias="PORT")

    # Only affects log timestamps
    tz: str | None = Field(default=None, validation_alias="TZ")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_color: bool = Field(default=False, validation_alias="LOG_COLOR")

    model_config = SettingsConfigDict(extra="ignore", frozen=True, populate_by_name=True)


def load_settings(**overrides: Any) -> Settings:
    """Load settings from the environment.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If a required variable is missing or a value is invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        names = [str(err["loc"][0]) for err in exc.errors() if err["loc"]]
        if {"BEGET_LOGIN", "BEGET_PASSWORD"} & set(names):
            message = "BEGET_LOGIN and BEGET_PASSWORD required"
        else:
            message = f"Invalid configuration: {', '.join(names)}"
        raise ConfigError(message, missing=names) from exc
