"""Tests for CLI argument parsing, overrides and bootstrap."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from linkcopy.cli import bootstrap
from linkcopy.cli.arg_parser import parse_args
from linkcopy.cli.bootstrap import LOGGER_NAMESPACE, build_monitor, configure_logging
from linkcopy.cli.main import apply_overrides
from linkcopy.config.schema import Config
from linkcopy.core.errors import ConfigError
from linkcopy.display.notifier import ConsoleNotifier
from linkcopy.fetch.transport import HttpxTransport


class TestParseArgs:
    """Tests for parse_args()."""

    def test_defaults(self) -> None:
        args = parse_args([])

        assert args.config is None
        assert args.interval is None
        assert args.timeout is None
        assert args.capacity is None
        assert args.convert is None
        assert args.quiet is False
        assert args.verbose is False

    def test_all_options(self) -> None:
        args = parse_args(
            [
                "-c", "cfg.json",
                "--interval", "0.5",
                "--timeout", "3",
                "--capacity", "10",
                "--no-convert",
                "-q",
                "-v",
                "--log-dir", "logs",
            ]
        )

        assert args.config == Path("cfg.json")
        assert args.interval == 0.5
        assert args.timeout == 3.0
        assert args.capacity == 10
        assert args.convert is False
        assert args.quiet is True
        assert args.verbose is True
        assert args.log_dir == Path("logs")

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "linkcopy" in capsys.readouterr().out


class TestApplyOverrides:
    """Tests for apply_overrides()."""

    def test_no_overrides_returns_same_config(self) -> None:
        config = Config()
        assert apply_overrides(config, parse_args([])) is config

    def test_overrides(self) -> None:
        args = parse_args(["--interval", "0.5", "--capacity", "5", "--no-convert", "-q"])

        config = apply_overrides(Config(), args)

        assert config.polling.interval == 0.5
        assert config.history.capacity == 5
        assert config.conversion.enabled is False
        assert config.notifications.enabled is False
        assert config.fetch.timeout == 10.0

    def test_invalid_override(self) -> None:
        with pytest.raises(ConfigError, match="Invalid command line option"):
            apply_overrides(Config(), parse_args(["--capacity", "0"]))

    def test_override_breaking_cross_field_rule(self) -> None:
        with pytest.raises(ConfigError):
            apply_overrides(Config(), parse_args(["--interval", "2", "--timeout", "1"]))


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        package_logger = logging.getLogger(LOGGER_NAMESPACE)
        saved_handlers = package_logger.handlers[:]
        saved_level = package_logger.level
        saved_propagate = package_logger.propagate
        yield
        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            package_logger.addHandler(handler)
        package_logger.setLevel(saved_level)
        package_logger.propagate = saved_propagate

    def test_creates_log_file(self, tmp_path: Path) -> None:
        log_file = configure_logging(tmp_path / "logs")

        assert log_file == tmp_path / "logs" / "linkcopy.log"
        logging.getLogger("linkcopy.test").info("hello log")
        for handler in logging.getLogger(LOGGER_NAMESPACE).handlers:
            handler.flush()
        assert "hello log" in log_file.read_text(encoding="utf-8")

    def test_reconfigure_replaces_handlers(self, tmp_path: Path) -> None:
        configure_logging(tmp_path)
        configure_logging(tmp_path)

        handlers = logging.getLogger(LOGGER_NAMESPACE).handlers
        assert len(handlers) == 2
        assert sum(isinstance(h, RotatingFileHandler) for h in handlers) == 1

    def test_levels(self, tmp_path: Path) -> None:
        configure_logging(tmp_path, level=logging.DEBUG, console_level=logging.ERROR)

        package_logger = logging.getLogger(LOGGER_NAMESPACE)
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False


class TestBuildMonitor:
    """Tests for build_monitor()."""

    @pytest.mark.asyncio
    async def test_with_injected_device(self, clipboard, notifier) -> None:
        config = Config.model_validate({"history": {"capacity": 7}})

        monitor, transport = build_monitor(config, device=clipboard, notifier=notifier)

        assert isinstance(transport, HttpxTransport)
        assert monitor.history.capacity == 7
        assert monitor.is_running is False
        await transport.aclose()

    def test_default_notifier_follows_config(
        self, clipboard, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        created: list[ConsoleNotifier] = []

        class RecordingConsoleNotifier(ConsoleNotifier):
            def __init__(self, *args, **kwargs) -> None:
                super().__init__(*args, **kwargs)
                created.append(self)

        monkeypatch.setattr(bootstrap, "ConsoleNotifier", RecordingConsoleNotifier)
        config = Config.model_validate(
            {"notifications": {"enabled": False, "max_title_length": 20}}
        )

        build_monitor(config, device=clipboard)

        assert len(created) == 1
        assert created[0].enabled is False
