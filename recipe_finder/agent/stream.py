"""
Session stream adapter: agent engine messages in, normalized events out.

Opens one Claude Agent SDK session with the chrome-devtools browser server
attached and republishes its messages as TextEvent, ToolEvent, UsageEvent
and ResultEvent, followed by a single DoneEvent once the engine closes
the stream.

Events are produced lazily, one engine message at a time. Engine faults
are not caught here: they propagate to the caller and no DoneEvent is
emitted, so a missing DoneEvent always means the session failed.

Usage:
    from recipe_finder.agent.stream import stream_session

    async for event in stream_session("Find a lasagna recipe"):
        if event.type == "text":
            print(event.text, end="", flush=True)
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterable, AsyncIterator, Callable, Iterator, Mapping, Optional

from claude_agent_sdk import query

from recipe_finder.agent.events import (
    DoneEvent,
    ResultEvent,
    SessionEvent,
    TextEvent,
    ToolEvent,
    UsageEvent,
)
from recipe_finder.agent.messages import EngineMessage, MessageKind, parse_message
from recipe_finder.agent.options import build_session_config
from recipe_finder.config.settings import AgentSettings
from recipe_finder.observability.logging_config import session_context, set_session_id

logger = logging.getLogger(__name__)

QueryFn = Callable[..., AsyncIterable[Any]]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def translate_message(message: EngineMessage) -> Iterator[SessionEvent]:
    """
    Yield the events for one engine message.

    Order is fixed: every text block, then every tool call, then usage,
    then result. Texts and tool calls each keep their list order.
    """
    if message.kind is MessageKind.UNRECOGNIZED:
        return

    if message.kind is MessageKind.ASSISTANT:
        for block in message.blocks:
            if block.text:
                yield TextEvent(text=block.text)
        for block in message.blocks:
            if block.tool_name is not None:
                yield ToolEvent(name=block.tool_name)

    if message.usage is not None:
        yield UsageEvent(
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )

    if message.result:
        yield ResultEvent(text=message.result)


async def translate_messages(
    messages: AsyncIterable[Any],
    on_message: Optional[Callable[[EngineMessage], None]] = None,
) -> AsyncIterator[SessionEvent]:
    """
    Translate a raw engine message stream, ending with one DoneEvent.

    on_message, when given, sees every parsed message before its events
    are yielded.
    """
    async for raw in messages:
        message = parse_message(raw)
        if on_message is not None:
            on_message(message)
        for event in translate_message(message):
            yield event
    yield DoneEvent()


# ---------------------------------------------------------------------------
# Session Stream Adapter
# ---------------------------------------------------------------------------

class SessionStreamAdapter:
    """
    Runs one standalone agent session per stream() call.

    The engine entry point is injectable so tests and alternative
    transports can feed their own message streams.
    """

    def __init__(
        self,
        query_fn: Optional[QueryFn] = None,
        env: Optional[Mapping[str, str]] = None,
        settings: Optional[AgentSettings] = None,
    ):
        self._query = query_fn or query
        self._env = env
        self._settings = settings or AgentSettings()

    async def stream(self, prompt: str) -> AsyncIterator[SessionEvent]:
        """
        Stream normalized events for a single session.

        The engine's session id is applied to log records only while this
        generator runs, so streams interleaved on one event loop never see
        each other's id.

        Args:
            prompt: Natural-language request, forwarded to the engine as-is.

        Yields:
            SessionEvent values in arrival order; DoneEvent last.
        """
        config = build_session_config(
            standalone=True,
            env=self._env,
            settings=self._settings,
        )
        options = config.to_agent_options()

        logger.info(
            "session_started",
            extra={
                "model": config.model,
                "max_turns": config.max_turns,
                "tool_count": len(config.allowed_tools),
            },
        )

        session_id: Optional[str] = None

        def _track(message: EngineMessage) -> None:
            nonlocal session_id
            if message.session_id and message.session_id != session_id:
                session_id = message.session_id
                # undone by the enclosing session_context on exit
                set_session_id(session_id)

        events = translate_messages(
            self._query(prompt=prompt, options=options), on_message=_track
        )
        event_count = 0
        try:
            while True:
                with session_context(session_id):
                    try:
                        event = await events.__anext__()
                    except StopAsyncIteration:
                        logger.info("session_finished", extra={"event_count": event_count})
                        break
                    except Exception as e:
                        logger.error(
                            "session_failed",
                            extra={"event_count": event_count, "error": str(e)[:200]},
                        )
                        raise
                event_count += 1
                yield event
        finally:
            await events.aclose()


async def stream_session(
    prompt: str,
    *,
    query_fn: Optional[QueryFn] = None,
    env: Optional[Mapping[str, str]] = None,
    settings: Optional[AgentSettings] = None,
) -> AsyncIterator[SessionEvent]:
    """Stream one session with a fresh SessionStreamAdapter."""
    adapter = SessionStreamAdapter(query_fn=query_fn, env=env, settings=settings)
    async for event in adapter.stream(prompt):
        yield event
