"""
Browser capability configuration for Recipe Finder.

Describes how the chrome-devtools MCP server is launched and which of its
tools the agent may call. Nothing here spawns a process: the agent engine
starts the server from the stdio descriptor built below.

Inside the container image Chromium lives at /usr/bin/chromium and needs
its sandbox disabled; on a workstation chrome-devtools-mcp finds Chrome
on its own.

Usage:
    from recipe_finder.browser.config import allow_list, build_launch_args

    spec = build_launch_args()                                # reads os.environ
    spec = build_launch_args({"CHROME_PATH": "/usr/bin/chromium"})
    spec.to_server_config()  # {"type": "stdio", "command": "npx", "args": [...]}
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


# ─── Server Identity ────────────────────────────────────────────────

SERVER_NAME = "chrome-devtools"
SERVER_PACKAGE = "chrome-devtools-mcp@latest"
PACKAGE_RUNNER = "npx"

# ─── Container Detection ────────────────────────────────────────────

CHROME_PATH_ENV = "CHROME_PATH"
CONTAINER_CHROME_PATH = "/usr/bin/chromium"

# ─── Launch Flags ───────────────────────────────────────────────────

BASE_ARGS: tuple[str, ...] = (
    "-y",
    SERVER_PACKAGE,
    "--headless",
    "--isolated",
    "--no-category-emulation",
    "--no-category-performance",
    "--no-category-network",
)

CONTAINER_ARGS: tuple[str, ...] = (
    f"--executable-path={CONTAINER_CHROME_PATH}",
    "--chrome-arg=--no-sandbox",
    "--chrome-arg=--disable-setuid-sandbox",
    "--chrome-arg=--disable-dev-shm-usage",
    "--chrome-arg=--disable-gpu",
)

# ─── Tool Allow-List ────────────────────────────────────────────────

BROWSER_TOOLS: tuple[str, ...] = (
    "click",
    "fill",
    "fill_form",
    "hover",
    "press_key",
    "navigate_page",
    "new_page",
    "list_pages",
    "select_page",
    "close_page",
    "wait_for",
    "take_screenshot",
    "take_snapshot",
)


def qualify_tool_name(tool: str, server: str = SERVER_NAME) -> str:
    """Return the engine-facing name of an MCP tool: mcp__<server>__<tool>."""
    return f"mcp__{server}__{tool}"


ALLOWED_TOOLS: tuple[str, ...] = tuple(qualify_tool_name(t) for t in BROWSER_TOOLS)


class ExecutionMode(str, Enum):
    """Where the browser runs."""

    CONTAINER = "container"
    LOCAL = "local"


class LaunchSpec(BaseModel):
    """
    Immutable launch description for the chrome-devtools MCP subprocess.

    Attributes:
        command: Package runner used to start the server.
        args: Ordered command-line arguments passed to the runner.
        mode: Container or local execution, as detected from the environment.
    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(PACKAGE_RUNNER, description="Package runner executable")
    args: tuple[str, ...] = Field(BASE_ARGS, description="Runner arguments, in order")
    mode: ExecutionMode = Field(ExecutionMode.LOCAL, description="Detected execution mode")

    def to_server_config(self) -> dict[str, Any]:
        """Render the stdio server descriptor understood by the agent engine."""
        return {
            "type": "stdio",
            "command": self.command,
            "args": list(self.args),
        }


def detect_execution_mode(env: Optional[Mapping[str, str]] = None) -> ExecutionMode:
    """CONTAINER only when CHROME_PATH points at the image's Chromium."""
    env = os.environ if env is None else env
    if env.get(CHROME_PATH_ENV) == CONTAINER_CHROME_PATH:
        return ExecutionMode.CONTAINER
    return ExecutionMode.LOCAL


def build_launch_args(env: Optional[Mapping[str, str]] = None) -> LaunchSpec:
    """
    Build the launch spec for the chrome-devtools MCP server.

    Args:
        env: Environment snapshot to inspect. Defaults to os.environ.

    Returns:
        LaunchSpec with the baseline flags, followed by the explicit
        executable path and sandbox flags when running in the container.
    """
    mode = detect_execution_mode(env)
    args = BASE_ARGS
    if mode is ExecutionMode.CONTAINER:
        args = BASE_ARGS + CONTAINER_ARGS

    logger.debug(
        "browser_launch_args_built",
        extra={"mode": mode.value, "arg_count": len(args)},
    )
    return LaunchSpec(args=args, mode=mode)


def allow_list() -> tuple[str, ...]:
    """The fixed set of chrome-devtools tools the agent may invoke."""
    return ALLOWED_TOOLS


def browser_server_config(env: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Stdio descriptor for the chrome-devtools server in this environment."""
    return build_launch_args(env).to_server_config()
