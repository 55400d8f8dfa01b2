"""Tests for logging setup."""

import json
import logging

import pytest
import structlog

from bridge.core import configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    root.handlers = []
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_lines(self, capsys, restore_logging):
        configure_logging("INFO", "json")

        structlog.get_logger().info("state_published", device="room1")

        line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert line["event"] == "state_published"
        assert line["device"] == "room1"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_level_filters(self, capsys, restore_logging):
        configure_logging("WARNING", "json")

        structlog.get_logger().info("hidden")
        structlog.get_logger().warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_unknown_level_falls_back_to_info(self, capsys, restore_logging):
        configure_logging("LOUD", "console")

        structlog.get_logger().info("visible")

        assert "visible" in capsys.readouterr().err
