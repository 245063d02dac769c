"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from lifeplan.config.logging import configure_logging, short_id, user_context


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("lifeplan")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("lifeplan").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("lifeplan").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("lifeplan.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "lifeplan.test"
        assert "timestamp" in parsed

    def test_stdlib_records_get_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("lifeplan.services.ordering").debug("Deleted life area %s", "abcd1234")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Deleted life area abcd1234"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "lifeplan.services.ordering"

    def test_sqlalchemy_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sqlalchemy.engine").info("SELECT 1")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestUserContext:
    def test_short_id(self) -> None:
        assert short_id("0f8fad5b-d9cb-469f-a165-70867728950e") == "0f8fad5b"
        assert short_id(None) == ""

    def test_bound_within_block(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        with user_context("0f8fad5b-d9cb-469f-a165-70867728950e"):
            logging.getLogger("lifeplan.services").warning("inside")
        logging.getLogger("lifeplan.services").warning("outside")

        inside, outside = (json.loads(line) for line in capfd.readouterr().err.splitlines())
        assert inside["user"] == "0f8fad5b"
        assert "user" not in outside
