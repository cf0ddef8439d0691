"""
Runtime configuration for the Reddit thing client.

Settings are read from environment variables once, validated with
pydantic, and passed explicitly to the client. The request interval and
page size are fixed by Reddit's API guidelines and are not read from the
environment.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://www.reddit.com"
# Descriptive user agent per Reddit API guidelines
DEFAULT_USER_AGENT = "reddit-thing-client/1.0 (by /u/reddit-thing-client)"


class Settings(BaseModel):
    """
    Client configuration.

    Example:
        >>> settings = Settings.from_env()
        >>> settings.min_interval_ms
        2000
    """

    model_config = {"frozen": True}

    base_url: str = Field(
        DEFAULT_BASE_URL,
        description="Root URL that resource paths are appended to",
    )
    user_agent: str = Field(
        DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header identifying the client and its maintainer",
    )
    min_interval_ms: int = Field(
        2000,
        ge=0,
        description="Minimum spacing between any two requests, process-wide",
    )
    page_limit: int = Field(
        100,
        ge=1,
        le=100,
        description="Items requested per listing page",
    )
    timeout_seconds: float = Field(
        30.0,
        gt=0,
        description="Transport timeout per request",
    )
    log_level: str = Field(
        "INFO",
        description="Log level name for setup_logging()",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined with '/', so the base never ends with one."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Returns:
            Validated Settings instance
        """
        env = os.environ if environ is None else environ
        values = {
            "base_url": env.get("REDDIT_BASE_URL"),
            "user_agent": env.get("REDDIT_USER_AGENT"),
            "timeout_seconds": env.get("REDDIT_TIMEOUT"),
            "log_level": env.get("LOG_LEVEL"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})
