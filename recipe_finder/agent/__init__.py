"""
Recipe Finder agent session layer.

Modules:
- prompts: behavioral instructions for the agent
- options: SessionConfig and its conversion to ClaudeAgentOptions
- messages: typed view of raw engine messages
- events: the five normalized event types
- stream: SessionStreamAdapter / stream_session
"""

from recipe_finder.agent.events import (
    DoneEvent,
    ResultEvent,
    SessionEvent,
    TextEvent,
    ToolEvent,
    UsageEvent,
)
from recipe_finder.agent.options import SessionConfig, build_session_config
from recipe_finder.agent.stream import SessionStreamAdapter, stream_session

__all__ = [
    "DoneEvent",
    "ResultEvent",
    "SessionConfig",
    "SessionEvent",
    "SessionStreamAdapter",
    "TextEvent",
    "ToolEvent",
    "UsageEvent",
    "build_session_config",
    "stream_session",
]
