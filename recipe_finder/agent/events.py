"""
Normalized session events.

The stream adapter turns whatever the agent engine produces into these
five event types. They are the only thing callers ever see.

Wire shapes (``to_dict()``):
    {"type": "text", "text": "..."}
    {"type": "tool", "name": "mcp__chrome-devtools__click"}
    {"type": "usage", "input": 10, "output": 5}
    {"type": "result", "text": "..."}
    {"type": "done"}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class TextEvent:
    """A text fragment from an assistant turn."""

    text: str
    type: ClassVar[str] = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ToolEvent:
    """The agent invoked a tool."""

    name: str
    type: ClassVar[str] = "tool"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "name": self.name}


@dataclass(frozen=True)
class UsageEvent:
    """Token counters reported by the engine."""

    input_tokens: int = 0
    output_tokens: int = 0
    type: ClassVar[str] = "usage"

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "input": self.input_tokens,
            "output": self.output_tokens,
        }


@dataclass(frozen=True)
class ResultEvent:
    """The final answer of the session."""

    text: str
    type: ClassVar[str] = "result"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class DoneEvent:
    """Terminal marker. Emitted once, last, only when the stream ends cleanly."""

    type: ClassVar[str] = "done"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


SessionEvent = Union[TextEvent, ToolEvent, UsageEvent, ResultEvent, DoneEvent]
