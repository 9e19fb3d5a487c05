"""
Typed view of agent engine messages.

The engine yields SDK dataclasses (AssistantMessage, ResultMessage, ...)
or, when replaying captured stream-json output, plain dicts shaped like
``{"type": "assistant", "message": {"content": [...], "usage": {...}}}``.
parse_message() is the only place that looks at those shapes; everything
downstream works on EngineMessage.

Dicts with a ``type`` this module does not know still have their usage
and result read, so newer engine message types keep reporting tokens.
A dict that carries neither, or an object that is not an SDK message,
parses to MessageKind.UNRECOGNIZED and carries no data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from claude_agent_sdk import (
    AssistantMessage,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolUseBlock,
    UserMessage,
)


class MessageKind(str, Enum):
    ASSISTANT = "assistant"
    RESULT = "result"
    OTHER = "other"
    UNRECOGNIZED = "unrecognized"


_OTHER_TYPES = frozenset({"system", "user", "stream_event"})


@dataclass(frozen=True)
class ContentBlock:
    """
    One block of an assistant turn.

    Text and tool-use fields are read independently; a block normally has
    only one of them set.
    """

    text: Optional[str] = None
    tool_name: Optional[str] = None


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass(frozen=True)
class EngineMessage:
    """Closed, typed view of one raw engine message."""

    kind: MessageKind
    blocks: tuple[ContentBlock, ...] = ()
    usage: Optional[TokenUsage] = None
    result: Optional[str] = None
    session_id: Optional[str] = None


UNRECOGNIZED = EngineMessage(kind=MessageKind.UNRECOGNIZED)


def parse_message(raw: Any) -> EngineMessage:
    """Convert a raw engine message into an EngineMessage."""
    if isinstance(raw, Mapping):
        return _parse_mapping(raw)

    if isinstance(raw, AssistantMessage):
        return EngineMessage(
            kind=MessageKind.ASSISTANT,
            blocks=_parse_blocks(raw.content or ()),
            usage=_parse_usage(getattr(raw, "usage", None)),
        )

    if isinstance(raw, ResultMessage):
        return EngineMessage(
            kind=MessageKind.RESULT,
            usage=_parse_usage(raw.usage),
            result=raw.result,
            session_id=raw.session_id,
        )

    if isinstance(raw, SystemMessage):
        data = raw.data if isinstance(raw.data, Mapping) else {}
        return EngineMessage(kind=MessageKind.OTHER, session_id=data.get("session_id"))

    if isinstance(raw, UserMessage):
        return EngineMessage(kind=MessageKind.OTHER)

    return UNRECOGNIZED


def _parse_mapping(raw: Mapping[str, Any]) -> EngineMessage:
    msg_type = raw.get("type")
    inner = raw.get("message")
    if not isinstance(inner, Mapping):
        inner = {}

    usage = _parse_usage(inner.get("usage") or raw.get("usage"))
    result = raw.get("result")
    if not isinstance(result, str):
        result = None

    if msg_type == "assistant":
        kind = MessageKind.ASSISTANT
    elif msg_type == "result":
        kind = MessageKind.RESULT
    elif msg_type in _OTHER_TYPES:
        kind = MessageKind.OTHER
    elif usage is not None or result is not None:
        # unknown type, but its usage and result are still reported
        kind = MessageKind.OTHER
    else:
        return UNRECOGNIZED

    blocks: tuple[ContentBlock, ...] = ()
    content = inner.get("content")
    if kind is MessageKind.ASSISTANT and isinstance(content, list):
        blocks = _parse_blocks(content)

    return EngineMessage(
        kind=kind,
        blocks=blocks,
        usage=usage,
        result=result,
        session_id=raw.get("session_id"),
    )


def _parse_blocks(content: Iterable[Any]) -> tuple[ContentBlock, ...]:
    return tuple(_parse_block(block) for block in content)


def _parse_block(block: Any) -> ContentBlock:
    if isinstance(block, TextBlock):
        return ContentBlock(text=block.text)
    if isinstance(block, ToolUseBlock):
        return ContentBlock(tool_name=block.name)
    if isinstance(block, Mapping):
        block_type = block.get("type")
        if block_type == "text":
            text = block.get("text")
            return ContentBlock(text=text if isinstance(text, str) else None)
        if block_type == "tool_use":
            name = block.get("name")
            return ContentBlock(tool_name=name if isinstance(name, str) else "")
    # thinking, tool_result and future block types
    return ContentBlock()


def _parse_usage(usage: Any) -> Optional[TokenUsage]:
    if not usage:
        return None
    if isinstance(usage, Mapping):
        input_tokens = usage.get("input_tokens")
        output_tokens = usage.get("output_tokens")
    else:
        input_tokens = getattr(usage, "input_tokens", None)
        output_tokens = getattr(usage, "output_tokens", None)
    return TokenUsage(
        input_tokens=int(input_tokens or 0),
        output_tokens=int(output_tokens or 0),
    )
