# refloom/config.py
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import CROSSREF_API_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


class CrossrefSettings(BaseSettings):
    """
    Manages user-configurable settings for the refloom client, loaded from
    environment variables (prefixed with 'REFLOOM_') or .env/secrets.env files.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "secrets.env"),  # Look in both .env and secrets.env
        env_file_encoding="utf-8",
        env_prefix="REFLOOM_",
        extra="ignore",  # Ignore extra fields found in environment
        case_sensitive=False,
    )

    base_url: str = Field(
        default=CROSSREF_API_BASE_URL, description="Root URL of the Crossref REST API"
    )
    request_timeout: float = Field(
        default=float(DEFAULT_TIMEOUT), description="Default request timeout in seconds"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header for requests",
    )
    # Crossref routes requests that identify a contact to its "polite" pool
    mailto: str | None = Field(
        default=None, description="Contact email sent as the 'mailto' query parameter"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("mailto")
    @classmethod
    def check_mailto(cls, v: str | None) -> str | None:
        if v is not None and "@" not in v:
            raise ValueError(f"mailto must be an email address, got '{v}'")
        return v


# Create a single, cached instance of settings
@lru_cache
def get_settings() -> CrossrefSettings:
    """
    Provides access to the library settings.

    Returns:
        CrossrefSettings: The cached settings instance.
    """
    return CrossrefSettings()
