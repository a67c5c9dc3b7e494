"""Logging setup and object graph construction for the linkcopy CLI.

Usage:
    log_file = configure_logging(Path("~/.linkcopy/logs").expanduser())
    monitor, transport = build_monitor(config)
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from linkcopy.clipboard.monitor import ClipboardMonitor
from linkcopy.clipboard.system import SystemClipboard
from linkcopy.config.schema import Config
from linkcopy.core.interfaces import ClipboardDevice, Notifier
from linkcopy.display.notifier import ConsoleNotifier
from linkcopy.fetch.transport import HttpxTransport

logger = logging.getLogger(__name__)

LOGGER_NAMESPACE = "linkcopy"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    log_dir: Path,
    level: int = logging.INFO,
    console_level: int = logging.WARNING,
) -> Path:
    """Configure file and console logging for the linkcopy namespace.

    Logs are written to `{log_dir}/linkcopy.log` with automatic rotation
    (max 5MB per file, 3 backup files). Calling again replaces the handlers.

    Args:
        log_dir: Directory for linkcopy.log. Created if it doesn't exist.
        level: Logging level for file output (default INFO).
        console_level: Logging level for stderr output (default WARNING).

    Returns:
        Path to the linkcopy.log file.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "linkcopy.log"

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(min(level, console_level))

    # Remove any existing handlers to avoid duplicates on reconfigure
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.addHandler(file_handler)
    package_logger.addHandler(console_handler)
    package_logger.propagate = False

    logger.info("Logging configured: %s", log_file)
    return log_file


def build_monitor(
    config: Config,
    device: ClipboardDevice | None = None,
    notifier: Notifier | None = None,
) -> tuple[ClipboardMonitor, HttpxTransport]:
    """Create the monitor and its HTTP transport from configuration.

    Args:
        config: Validated configuration.
        device: Clipboard to watch (the system clipboard if omitted).
        notifier: Notification sink (a console notifier if omitted).

    Returns:
        The monitor and the transport, which the caller must aclose().
    """
    if device is None:
        device = SystemClipboard()
        if not device.has_host_counter:
            logger.warning(
                "No clipboard sequence number on this platform; "
                "copying identical text twice cannot be detected"
            )
    if notifier is None:
        notifier = ConsoleNotifier(
            max_title_length=config.notifications.max_title_length,
            enabled=config.notifications.enabled,
        )

    transport = HttpxTransport(
        user_agent=config.fetch.user_agent,
        verify_ssl=config.fetch.verify_ssl,
        follow_redirects=config.fetch.follow_redirects,
        max_body_bytes=config.fetch.max_body_bytes,
    )
    monitor = ClipboardMonitor.from_config(config, device, transport, notifier)
    return monitor, transport
