"""
Tests for the normalized session events and their wire shapes.
"""

from __future__ import annotations

import json

import pytest

from recipe_finder.agent.events import (
    DoneEvent,
    ResultEvent,
    TextEvent,
    ToolEvent,
    UsageEvent,
)


class TestWireShapes:
    """to_dict() produces the stable event protocol."""

    def test_text(self):
        assert TextEvent("Hello").to_dict() == {"type": "text", "text": "Hello"}

    def test_tool(self):
        assert ToolEvent("mcp__chrome-devtools__click").to_dict() == {
            "type": "tool",
            "name": "mcp__chrome-devtools__click",
        }

    def test_usage(self):
        assert UsageEvent(10, 5).to_dict() == {"type": "usage", "input": 10, "output": 5}

    def test_result(self):
        assert ResultEvent("# Pancakes").to_dict() == {"type": "result", "text": "# Pancakes"}

    def test_done(self):
        assert DoneEvent().to_dict() == {"type": "done"}

    def test_all_json_serializable(self):
        events = [TextEvent("a"), ToolEvent("b"), UsageEvent(1, 2), ResultEvent("c"), DoneEvent()]
        lines = [json.dumps(e.to_dict()) for e in events]
        assert [json.loads(line)["type"] for line in lines] == ["text", "tool", "usage", "result", "done"]


class TestEventValues:
    """Events are immutable values."""

    def test_frozen(self):
        event = TextEvent("a")
        with pytest.raises(Exception):
            event.text = "b"

    def test_equality(self):
        assert UsageEvent(1, 2) == UsageEvent(input_tokens=1, output_tokens=2)
        assert DoneEvent() == DoneEvent()
        assert TextEvent("a") != ResultEvent("a")

    def test_usage_defaults_and_total(self):
        assert UsageEvent() == UsageEvent(0, 0)
        assert UsageEvent(10, 5).total_tokens == 15

    def test_type_is_not_a_field(self):
        """The discriminator is fixed per class, not settable per instance."""
        assert TextEvent("x").type == "text"
        with pytest.raises(TypeError):
            TextEvent("x", "tool")
