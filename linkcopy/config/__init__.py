"""Configuration loading and validation."""

from linkcopy.config.loader import DEFAULT_CONFIG, DEFAULTS_DIR, load_config
from linkcopy.config.schema import (
    Config,
    ConversionConfig,
    FetchConfig,
    HistoryConfig,
    NotificationConfig,
    PollingConfig,
)

__all__ = [
    "Config",
    "ConversionConfig",
    "DEFAULT_CONFIG",
    "DEFAULTS_DIR",
    "FetchConfig",
    "HistoryConfig",
    "NotificationConfig",
    "PollingConfig",
    "load_config",
]
