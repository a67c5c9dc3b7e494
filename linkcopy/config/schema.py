"""Pydantic models for linkcopy configuration validation."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from linkcopy import __version__
from linkcopy.core.constants import (
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_MAX_BODY_BYTES,
    DEFAULT_MAX_TITLE_LENGTH,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TRIGGER_COUNT,
)


class PollingConfig(BaseModel):
    """Configuration for the clipboard polling loop."""

    model_config = ConfigDict(extra="forbid")

    interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        gt=0,
        le=5.0,
        description="Seconds between clipboard change-counter samples",
    )


class FetchConfig(BaseModel):
    """Configuration for page title fetching."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(
        default=DEFAULT_FETCH_TIMEOUT,
        gt=0,
        le=120.0,
        description="Seconds allowed for the whole request/response cycle",
    )
    user_agent: str = Field(
        default=f"linkcopy/{__version__}",
        min_length=1,
        description="User-Agent header sent with title requests",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify TLS certificates",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects inside a single fetch",
    )
    max_body_bytes: int = Field(
        default=DEFAULT_MAX_BODY_BYTES,
        ge=1024,
        le=16 * 1024 * 1024,
        description="Stop reading a page body after this many bytes",
    )


class HistoryConfig(BaseModel):
    """Configuration for the in-memory clipboard history."""

    model_config = ConfigDict(extra="forbid")

    capacity: int = Field(
        default=DEFAULT_HISTORY_CAPACITY,
        ge=1,
        le=10_000,
        description="Maximum number of history entries kept",
    )


class ConversionConfig(BaseModel):
    """Configuration for the double-copy URL conversion."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(
        default=True,
        description="Convert URLs automatically on a repeated copy",
    )
    trigger_count: int = Field(
        default=DEFAULT_TRIGGER_COUNT,
        ge=2,
        le=10,
        description="Consecutive copies of the same URL needed to convert it",
    )


class NotificationConfig(BaseModel):
    """Configuration for user-facing notifications."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(
        default=True,
        description="Show success and warning notifications",
    )
    max_title_length: int = Field(
        default=DEFAULT_MAX_TITLE_LENGTH,
        ge=4,
        le=500,
        description="Titles longer than this are shortened in notifications",
    )


class Config(BaseModel):
    """Root configuration model.

    Example config.json:
        {
            "polling": {"interval": 0.25},
            "fetch": {"timeout": 10.0},
            "history": {"capacity": 50},
            "conversion": {"enabled": true, "trigger_count": 2},
            "notifications": {"enabled": true, "max_title_length": 50}
        }
    """

    model_config = ConfigDict(extra="forbid")

    polling: PollingConfig = PollingConfig()
    fetch: FetchConfig = FetchConfig()
    history: HistoryConfig = HistoryConfig()
    conversion: ConversionConfig = ConversionConfig()
    notifications: NotificationConfig = NotificationConfig()

    @model_validator(mode="after")
    def validate_poll_faster_than_fetch(self) -> "Config":
        """Ensure a poll tick can happen while a fetch is in flight."""
        if self.polling.interval >= self.fetch.timeout:
            raise ValueError(
                f"polling.interval ({self.polling.interval}) must be shorter than "
                f"fetch.timeout ({self.fetch.timeout})"
            )
        return self
