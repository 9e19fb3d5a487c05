"""
Tests for the logging setup.

Validates:
- ContextFilter stamps the session id of the current context only
- session_context() restores the previous id
- JSON and dev output carry the adapter's extras (mode, event_count)
- configure_logging() picks JSON or dev output from RECIPE_FINDER_ENV
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

from recipe_finder.browser.config import ExecutionMode
from recipe_finder.observability.logging_config import (
    ContextFilter,
    DevFormatter,
    JSONFormatter,
    configure_logging,
    get_session_id,
    session_context,
)


def _record(msg: str = "session_finished", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="recipe_finder.agent.stream",
        level=logging.INFO,
        pathname="stream.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


# ─── Session Context ─────────────────────────────────────────────────


class TestSessionContext:
    """The session id follows the current context."""

    def test_filter_adds_session_id(self):
        record = _record()
        with session_context("sess-1"):
            assert ContextFilter().filter(record) is True
        assert record.session_id == "sess-1"

    def test_filter_leaves_record_alone_outside_session(self):
        record = _record()
        ContextFilter().filter(record)
        assert not hasattr(record, "session_id")

    def test_previous_id_restored(self):
        with session_context("outer"):
            with session_context("inner"):
                assert get_session_id() == "inner"
            assert get_session_id() == "outer"
        assert get_session_id() is None

    @pytest.mark.asyncio
    async def test_concurrent_tasks_do_not_share_id(self):
        seen = {}

        async def _session(name):
            with session_context(name):
                await asyncio.sleep(0)
                seen[name] = get_session_id()

        await asyncio.gather(_session("A"), _session("B"))
        assert seen == {"A": "A", "B": "B"}


# ─── Formatters ──────────────────────────────────────────────────────


class TestFormatters:
    """Both formatters render the fields the adapter logs."""

    def test_json_includes_session_and_extras(self):
        record = _record(session_id="sess-1", event_count=3, mode=ExecutionMode.CONTAINER)
        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "session_finished"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "recipe_finder.agent.stream"
        assert entry["session_id"] == "sess-1"
        assert entry["event_count"] == 3
        assert entry["mode"] == "container"

    def test_json_includes_exception(self):
        try:
            raise RuntimeError("engine down")
        except RuntimeError:
            record = _record("session_failed")
            record.exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(record))
        assert "engine down" in entry["exception"]

    def test_dev_lists_session_first(self):
        record = _record(event_count=3, mode="container", session_id="sess-1")
        line = DevFormatter().format(record)
        assert "recipe_finder.agent.stream: session_finished" in line
        assert line.endswith("[session_id=sess-1 event_count=3 mode=container]")

    def test_dev_without_extras(self):
        line = DevFormatter().format(_record("session_started"))
        assert line.endswith("session_started")


# ─── configure_logging ───────────────────────────────────────────────


class TestConfigureLogging:
    """Output selection from RECIPE_FINDER_ENV."""

    def test_production_uses_json(self, root_logger):
        with patch.dict(os.environ, {"RECIPE_FINDER_ENV": "Production"}):
            configure_logging()
        (handler,) = root_logger.handlers
        assert isinstance(handler.formatter, JSONFormatter)
        assert any(isinstance(f, ContextFilter) for f in handler.filters)

    def test_default_is_dev(self, root_logger):
        with patch.dict(os.environ, {}, clear=True):
            configure_logging(level=logging.WARNING)
        (handler,) = root_logger.handlers
        assert isinstance(handler.formatter, DevFormatter)
        assert root_logger.level == logging.WARNING

    def test_explicit_env_wins(self, root_logger):
        with patch.dict(os.environ, {"RECIPE_FINDER_ENV": "development"}):
            configure_logging(env="production")
        assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)

    def test_repeated_calls_keep_one_handler(self, root_logger):
        configure_logging(env="development")
        configure_logging(env="development")
        assert len(root_logger.handlers) == 1

    def test_engine_logger_quieted(self, root_logger):
        configure_logging(env="development")
        assert logging.getLogger("claude_agent_sdk").level == logging.WARNING
