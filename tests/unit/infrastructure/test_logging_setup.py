"""Tests for structlog + stdlib logging configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from videolinks.infrastructure.config import AppConfig
from videolinks.infrastructure.logging import setup as logging_setup


@pytest.fixture()
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    logging_setup._stop_async_listener()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestBuildLoggingConfig:
    def test_uses_structlog_formatter(self) -> None:
        cfg = logging_setup.build_logging_config(AppConfig())
        assert "structlog" in cfg["formatters"]
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"

    def test_level_applied_to_all_loggers(self) -> None:
        cfg = logging_setup.build_logging_config(AppConfig(log_level="WARNING"))
        assert cfg["root"]["level"] == "WARNING"
        assert all(
            logger["level"] == "WARNING" for logger in cfg["loggers"].values()
        )

    def test_base_config_not_mutated(self) -> None:
        logging_setup.build_logging_config(AppConfig(log_level="ERROR"))
        assert logging_setup.BASE_LOGGING_CONFIG["loggers"]["uvicorn"]["level"] == "INFO"
        assert "structlog" not in logging_setup.BASE_LOGGING_CONFIG["formatters"]

    @pytest.mark.parametrize(
        ("environment", "renderer"),
        [
            ("prod", structlog.processors.JSONRenderer),
            ("dev", structlog.dev.ConsoleRenderer),
        ],
    )
    def test_renderer_follows_format(self, environment: str, renderer: type) -> None:
        cfg = logging_setup.build_logging_config(AppConfig(environment=environment))
        processors = cfg["formatters"]["structlog"]["processors"]
        assert isinstance(processors[-1], renderer)


class TestProcessors:
    def test_drop_color_message(self) -> None:
        event = {"event": "x", "color_message": "\x1b[32mx"}
        assert logging_setup._drop_color_message(None, None, event) == {"event": "x"}

    def test_record_timestamp_is_utc(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "m", None, None)
        record.created = 0.0
        event = logging_setup._add_record_created_timestamp_utc(
            None, None, {"_record": record}
        )
        assert event["timestamp"] == "1970-01-01T00:00:00Z"

    def test_level_range_filter(self) -> None:
        flt = logging_setup._LevelRangeFilter(max_level=logging.WARNING)
        info = logging.LogRecord("t", logging.INFO, __file__, 1, "m", None, None)
        error = logging.LogRecord("t", logging.ERROR, __file__, 1, "m", None, None)
        assert flt.filter(info)
        assert not flt.filter(error)


@pytest.mark.usefixtures("_restore_logging")
class TestConfigureLogging:
    def test_routes_root_through_queue(self) -> None:
        cfg = logging_setup.configure_logging(AppConfig(log_level="DEBUG"))

        root = logging.getLogger()
        assert cfg["root"]["level"] == "DEBUG"
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(
            root.handlers[0], logging_setup._StructlogPreservingQueueHandler
        )
        assert logging_setup._QUEUE_LISTENER is not None

    def test_reconfigure_replaces_listener(self) -> None:
        logging_setup.configure_logging(AppConfig())
        first = logging_setup._QUEUE_LISTENER
        logging_setup.configure_logging(AppConfig())
        assert logging_setup._QUEUE_LISTENER is not first
