"""
Browser capability module for Recipe Finder.

Describes the chrome-devtools MCP server the agent drives: how to launch
it (container vs. local Chrome) and which of its tools are allowed.

Components:
- LaunchSpec: immutable launch description (runner, args, mode)
- build_launch_args: environment-sensitive LaunchSpec builder
- allow_list: the 13 permitted tool identifiers

Usage:
    from recipe_finder.browser import build_launch_args, allow_list
"""

from recipe_finder.browser.config import (
    ALLOWED_TOOLS,
    SERVER_NAME,
    ExecutionMode,
    LaunchSpec,
    allow_list,
    browser_server_config,
    build_launch_args,
)

__all__ = [
    "ALLOWED_TOOLS",
    "SERVER_NAME",
    "ExecutionMode",
    "LaunchSpec",
    "allow_list",
    "browser_server_config",
    "build_launch_args",
]
