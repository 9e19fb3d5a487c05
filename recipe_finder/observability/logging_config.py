"""
Logging setup for Recipe Finder.

Modules log through logging.getLogger(__name__) with flat ``extra`` fields
(model, mode, event_count, ...). configure_logging() installs one handler
on the root logger:

- RECIPE_FINDER_ENV=production: one JSON object per line on stdout
- anything else: short colored lines on stderr

The engine session id is kept in a ContextVar, so concurrent sessions on
one event loop each stamp their own records.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

_session_id: ContextVar[Optional[str]] = ContextVar(
    "recipe_finder_session_id", default=None
)


def get_session_id() -> Optional[str]:
    """Session id of the current context, or None outside a session."""
    return _session_id.get()


def set_session_id(session_id: Optional[str]) -> Token:
    """Set the session id for the current context; pass the token to reset_session_id()."""
    return _session_id.set(session_id)


def reset_session_id(token: Token) -> None:
    _session_id.reset(token)


@contextmanager
def session_context(session_id: Optional[str]) -> Iterator[None]:
    """Scope the session id to a block, restoring the previous value on exit."""
    token = set_session_id(session_id)
    try:
        yield
    finally:
        reset_session_id(token)


class ContextFilter(logging.Filter):
    """Adds ``session_id`` to records emitted inside a session."""

    def filter(self, record: logging.LogRecord) -> bool:
        session_id = get_session_id()
        if session_id:
            record.session_id = session_id  # type: ignore[attr-defined]
        return True


# Attributes every LogRecord has; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record:

        {"timestamp": "...", "level": "INFO", "logger": "recipe_finder.agent.stream",
         "message": "session_finished", "session_id": "...", "event_count": 12}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_extras(record))
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        # extras that json cannot encode (enums, paths) fall back to str()
        return json.dumps(entry, default=str)


class DevFormatter(logging.Formatter):
    """[HH:MM:SS] LEVEL logger: message [session_id=... mode=... event_count=...]"""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, self.RESET)
        extras = _extras(record)
        # session first, the rest in the order they were logged
        session_id = extras.pop("session_id", None)
        pairs = [f"session_id={session_id}"] if session_id else []
        pairs += [f"{key}={value}" for key, value in extras.items() if value is not None]
        suffix = f" [{' '.join(pairs)}]" if pairs else ""

        line = (
            f"[{self.formatTime(record, '%H:%M:%S')}] "
            f"{color}{record.levelname:<8}{self.RESET} "
            f"{record.name}: {record.getMessage()}{suffix}"
        )
        if record.exc_info and record.exc_info[1]:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(env: Optional[str] = None, level: int = logging.INFO) -> None:
    """
    Replace the root logger's handlers with one for the given environment.

    Args:
        env: "production" for JSON output. Defaults to RECIPE_FINDER_ENV,
             then "development".
        level: Root log level.
    """
    env = (env or os.environ.get("RECIPE_FINDER_ENV", "development")).lower().strip()

    if env == "production":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(DevFormatter())
    handler.addFilter(ContextFilter())

    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)

    # the engine and its transport log every request at INFO
    for name in ("claude_agent_sdk", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
