"""
Session configuration for the Recipe Finder agent.

SessionConfig gathers everything the agent engine needs to start a
session and converts it to ClaudeAgentOptions. A standalone session
also carries the chrome-devtools server launch descriptor; a shared
session expects the caller to provide the server.

Usage:
    from recipe_finder.agent.options import build_session_config

    config = build_session_config(standalone=True)
    options = config.to_agent_options()
"""

from __future__ import annotations

import copy
import os
from typing import Any, Mapping, Optional

from claude_agent_sdk import ClaudeAgentOptions
from pydantic import BaseModel, ConfigDict, Field, model_validator

from recipe_finder.agent.prompts import SYSTEM_PROMPT
from recipe_finder.browser.config import SERVER_NAME, allow_list, build_launch_args
from recipe_finder.config.settings import DEFAULT_MAX_TURNS, DEFAULT_MODEL, AgentSettings


class SessionConfig(BaseModel):
    """
    Configuration for one agent session.

    Attributes:
        env: Environment variables forwarded to the engine as-is.
        system_prompt: Behavioral instructions for the agent.
        model: Model selector.
        max_turns: Upper bound on conversation turns.
        allowed_tools: Tool identifiers the agent may call.
        mcp_servers: Server descriptors by name; only set for standalone sessions.
    """

    model_config = ConfigDict(frozen=True)

    env: dict[str, str] = Field(default_factory=dict)
    system_prompt: str = SYSTEM_PROMPT
    model: str = DEFAULT_MODEL
    max_turns: int = Field(DEFAULT_MAX_TURNS, gt=0)
    allowed_tools: tuple[str, ...] = Field(default_factory=allow_list)
    mcp_servers: Optional[dict[str, dict[str, Any]]] = None

    @model_validator(mode="after")
    def _servers_are_named(self) -> "SessionConfig":
        if self.mcp_servers is not None and not self.mcp_servers:
            raise ValueError("mcp_servers must name at least one server when set")
        return self

    @property
    def standalone(self) -> bool:
        return self.mcp_servers is not None

    def to_agent_options(self) -> ClaudeAgentOptions:
        """Convert to the engine's options object."""
        kwargs: dict[str, Any] = {
            "env": dict(self.env),
            "system_prompt": self.system_prompt,
            "model": self.model,
            "allowed_tools": list(self.allowed_tools),
            "max_turns": self.max_turns,
        }
        if self.mcp_servers is not None:
            kwargs["mcp_servers"] = copy.deepcopy(self.mcp_servers)
        return ClaudeAgentOptions(**kwargs)


def build_session_config(
    standalone: bool = False,
    *,
    env: Optional[Mapping[str, str]] = None,
    settings: Optional[AgentSettings] = None,
) -> SessionConfig:
    """
    Build the session configuration.

    Args:
        standalone: Attach the chrome-devtools launch descriptor. When False
            the caller supplies the browser server.
        env: Environment snapshot, used both for container detection and
            for forwarding. Defaults to os.environ.
        settings: Model and turn settings. Defaults to AgentSettings().
    """
    env = dict(os.environ if env is None else env)
    settings = settings or AgentSettings()

    mcp_servers = None
    if standalone:
        mcp_servers = {SERVER_NAME: build_launch_args(env).to_server_config()}

    return SessionConfig(
        env=env if settings.forward_env else {},
        model=settings.model,
        max_turns=settings.max_turns,
        allowed_tools=allow_list(),
        mcp_servers=mcp_servers,
    )
