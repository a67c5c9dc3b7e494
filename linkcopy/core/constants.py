"""Core constants and paths for linkcopy.

Single source of truth for global paths and engine defaults.
"""

from pathlib import Path

LINKCOPY_DIR_NAME = ".linkcopy"

# Engine defaults (overridable through config)
DEFAULT_POLL_INTERVAL = 0.25  # seconds
DEFAULT_FETCH_TIMEOUT = 10.0  # seconds
DEFAULT_HISTORY_CAPACITY = 50
DEFAULT_TRIGGER_COUNT = 2
DEFAULT_MAX_BODY_BYTES = 1024 * 1024  # 1 MB
DEFAULT_MAX_TITLE_LENGTH = 50


def get_linkcopy_dir() -> Path:
    """Get ~/.linkcopy (global config directory)."""
    return Path.home() / LINKCOPY_DIR_NAME


def get_defaults_dir() -> Path:
    """Get package defaults directory (shipped with package)."""
    import linkcopy
    return Path(linkcopy.__file__).parent / "defaults"


def get_log_dir() -> Path:
    """Get log directory."""
    return get_linkcopy_dir() / "logs"
