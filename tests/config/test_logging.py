"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from iniconf import ConfSet
from iniconf.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("iniconf").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("iniconf").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("iniconf.test")
        log.warning("hello world", key="val")
        # Smoke test: format depends on terminal

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("iniconf.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "iniconf.test"
        assert "timestamp" in parsed

    def test_parser_debug_records_become_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        conf = ConfSet()
        conf.add_int("db", "port")
        capfd.readouterr()
        conf.parse_string("[db]\nport = 1\n")

        captured = capfd.readouterr()
        records = [json.loads(line) for line in captured.err.strip().splitlines()]
        assert {rec["logger"] for rec in records} == {"iniconf.parser"}
        assert all(rec["level"] == "debug" for rec in records)
        assert records[-1]["event"] == "Parsed <string>: 1 value(s) assigned"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        conf = ConfSet()
        conf.add_int("db", "port")
        conf.parse_string("[db]\nport = 1\n")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1

    def test_custom_stream(self) -> None:
        buffer = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=buffer)
        logging.getLogger("iniconf.registry").debug("Registered %s", "x")
        record = json.loads(buffer.getvalue().strip())
        assert record["event"] == "Registered x"
        assert record["logger"] == "iniconf.registry"
