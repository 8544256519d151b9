"""Tests for civiltime.core.logging: structlog configuration."""

import json

import pytest

from civiltime.core.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    configure_logging(level="WARNING", json_format=False)


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(level="DEBUG", json_format=True)
        get_logger("civiltime.test").info("bridge.to_absolute", timezone="UTC")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "bridge.to_absolute"
        assert record["timezone"] == "UTC"
        assert record["log.level"] == "info"
        assert record["service.name"] == "civiltime"
        assert record["logger"] == "civiltime.test"
        assert "@timestamp" in record

    def test_level_filters(self, capsys):
        configure_logging(level="WARNING", json_format=True)
        get_logger("civiltime.test").debug("hidden")
        assert capsys.readouterr().err == ""

    def test_console_output(self, capsys):
        configure_logging(level="INFO", json_format=False, add_timestamp=False)
        get_logger("civiltime.test").info("iso.parse_failed", text="2022-05")
        err = capsys.readouterr().err
        assert "iso.parse_failed" in err
        assert "2022-05" in err

    def test_service_name(self, capsys):
        configure_logging(level="INFO", json_format=True, service="scheduler")
        get_logger("civiltime.test").info("ping")
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["service.name"] == "scheduler"

    def test_stdout_stays_clean(self, capsys):
        configure_logging(level="DEBUG", json_format=True)
        get_logger("civiltime.test").warning("noisy")
        assert capsys.readouterr().out == ""

    def test_logger_created_before_configure(self, capsys):
        early = get_logger("civiltime.early")
        configure_logging(level="INFO", json_format=True)
        early.info("ping")
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["logger"] == "civiltime.early"
        assert "logger_name" not in record

    def test_unnamed_logger(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger().info("ping")
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert "logger" not in record

    def test_library_modules_import(self):
        from civiltime.core import bridge, formatting, temporal

        for module in (bridge, formatting, temporal):
            assert module.logger is not None
