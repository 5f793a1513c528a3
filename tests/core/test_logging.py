# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging
from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo configure_logging() so later tests see default structlog."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        from streamsconfig.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs structured JSON."""
        from streamsconfig.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        log_line = captured.out.strip().split("\n")[-1]
        data = json.loads(log_line)
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert "_record" not in data
        assert "_from_structlog" not in data

    def test_logger_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs human-readable in console mode."""
        from streamsconfig.core.logging import configure_logging, get_logger

        configure_logging(json_output=False)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        assert "test message" in captured.out
        assert not captured.out.strip().startswith("{")

    def test_stdlib_loggers_emit_json_when_json_output_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Modules using logging.getLogger(__name__) produce the same JSON format."""
        from streamsconfig.core.logging import configure_logging

        configure_logging(json_output=True)

        logging.getLogger("test.stdlib.module").info("message from stdlib logger")

        captured = capsys.readouterr()
        data = json.loads(captured.out.strip().split("\n")[-1])
        assert data["event"] == "message from stdlib logger"
        assert "level" in data
        assert "timestamp" in data

    def test_library_debug_events_need_verbose(self) -> None:
        """Per-role DEBUG events stay hidden at DEBUG unless verbose is set."""
        from streamsconfig.core.logging import configure_logging

        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("streamsconfig.core.config").level == logging.INFO

        configure_logging(level="DEBUG", verbose=True)
        assert logging.getLogger("streamsconfig.core.config").level == logging.DEBUG

    def test_library_loggers_never_less_restrictive_than_root(self) -> None:
        from streamsconfig.core.logging import configure_logging

        configure_logging(level="ERROR")

        for name in ("streamsconfig.core.config", "streamsconfig.plugins.instantiator"):
            assert logging.getLogger(name).level == logging.ERROR

    def test_deprecation_warning_reaches_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Library warnings are rendered through the configured pipeline."""
        from streamsconfig.core.config import StreamsConfig
        from streamsconfig.core.logging import configure_logging

        configure_logging(json_output=True, level="WARNING")

        StreamsConfig(
            {
                "application.id": "app",
                "bootstrap.servers": "localhost:9092",
                "partition.grouper": "streamsconfig.plugins.serdes.ByteArraySerde",
            }
        )

        lines = [json.loads(line) for line in capsys.readouterr().out.strip().split("\n") if line]
        assert any("partition.grouper" in line["event"] and line["level"] == "warning" for line in lines)

    def test_events_name_their_module(self, capsys: pytest.CaptureFixture[str]) -> None:
        from streamsconfig.core.config import StreamsConfig
        from streamsconfig.core.logging import configure_logging

        configure_logging(json_output=True, level="WARNING")

        StreamsConfig(
            {
                "application.id": "app",
                "bootstrap.servers": "localhost:9092",
                "processing.guarantee": "exactly_once",
                "consumer.isolation.level": "read_uncommitted",
            }
        ).get_restore_consumer_configs("client")

        lines = [json.loads(line) for line in capsys.readouterr().out.strip().split("\n") if line]
        superseded = [line for line in lines if line["event"] == "User value superseded by processing guarantee"]
        assert superseded[0]["logger"] == "streamsconfig.core.guarantee"
        assert superseded[0]["key"] == "isolation.level"


class TestConfigValueRendering:
    def test_password_masked_in_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        from streamsconfig.contracts import Password
        from streamsconfig.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").info("secret seen", supplied=Password("hunter2"))

        output = capsys.readouterr().out
        assert "hunter2" not in output
        assert json.loads(output.strip().split("\n")[-1])["supplied"] == str(Password("hunter2"))

    def test_class_rendered_as_dotted_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        from streamsconfig.core.logging import configure_logging, get_logger
        from streamsconfig.plugins.serdes import StringSerde

        configure_logging(json_output=True)
        get_logger("test").info("class seen", supplied=StringSerde)

        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert data["supplied"] == "streamsconfig.plugins.serdes.StringSerde"
