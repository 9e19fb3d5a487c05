"""
Recipe Finder - Main Entry Point

CLI for running a Recipe Finder agent session and inspecting the browser
configuration it would use.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from recipe_finder.agent.events import UsageEvent
from recipe_finder.agent.stream import stream_session
from recipe_finder.browser.config import SERVER_NAME, allow_list, build_launch_args
from recipe_finder.config.settings import AgentSettings, load_settings
from recipe_finder.exceptions import RecipeFinderError
from recipe_finder.observability.logging_config import configure_logging

app = typer.Typer(
    name="recipe-finder",
    help="Recipe Finder - browser agent for AllRecipes",
)
console = Console()
logger = logging.getLogger("recipe_finder")

_TOOL_PREFIX = f"mcp__{SERVER_NAME}__"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log session progress"),
):
    """Load .env and configure logging before any command runs."""
    load_dotenv()
    configure_logging(level=logging.INFO if verbose else logging.WARNING)


def _get_settings(config_path: Optional[Path]) -> AgentSettings:
    """Load settings from a YAML file or the environment, with a friendly error."""
    try:
        if config_path is not None:
            return load_settings(config_path)
        return AgentSettings.from_env()
    except (FileNotFoundError, RecipeFinderError) as e:
        console.print(Panel(
            f"[red]{e}[/]",
            title="⚠ Configuration Error",
            border_style="red",
        ))
        raise typer.Exit(code=1)


def _short_tool_name(name: str) -> str:
    return name[len(_TOOL_PREFIX):] if name.startswith(_TOOL_PREFIX) else name


# =========================================================================
# Commands
# =========================================================================


@app.command()
def find(
    prompt: str = typer.Argument(..., help="What to look for, e.g. 'vegan lasagna'"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    as_json: bool = typer.Option(False, "--json", help="Print events as JSON lines"),
):
    """Run one agent session and stream its output."""
    settings = _get_settings(config)

    async def _run():
        last_usage: Optional[UsageEvent] = None
        tool_calls = 0

        async for event in stream_session(prompt, settings=settings):
            if as_json:
                typer.echo(json.dumps(event.to_dict()))
                continue

            if event.type == "text":
                console.print(event.text, markup=False)
            elif event.type == "tool":
                tool_calls += 1
                console.print(f"[dim]→ {_short_tool_name(event.name)}[/]")
            elif event.type == "usage":
                last_usage = event
            elif event.type == "result":
                console.print(Panel(Text(event.text), title="Result", border_style="green"))

        if as_json:
            return

        table = Table(title="Session Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Model", settings.model)
        table.add_row("Tool calls", str(tool_calls))
        if last_usage is not None:
            table.add_row("Input tokens", str(last_usage.input_tokens))
            table.add_row("Output tokens", str(last_usage.output_tokens))
        console.print(table)

    try:
        asyncio.run(_run())
    except Exception as e:
        logger.exception("find_failed")
        console.print(Panel(
            f"[red]Session failed:[/] {e}",
            title="⚠ Agent Error",
            border_style="red",
        ))
        raise typer.Exit(code=1)


@app.command()
def tools():
    """List the browser tools the agent is allowed to call."""
    table = Table(title=f"Allowed Tools ({SERVER_NAME})")
    table.add_column("#", style="dim")
    table.add_column("Tool", style="cyan")
    table.add_column("Identifier", style="white")

    for i, name in enumerate(allow_list(), 1):
        table.add_row(str(i), _short_tool_name(name), name)

    console.print(table)


@app.command()
def launch(
    as_json: bool = typer.Option(False, "--json", help="Print the stdio server descriptor"),
):
    """Show how the chrome-devtools server would be launched here."""
    spec = build_launch_args()
    if as_json:
        typer.echo(json.dumps(spec.to_server_config(), indent=2))
        return

    console.print(Panel(
        f"Mode: [cyan]{spec.mode.value}[/]\n"
        f"Command: [bold]{spec.command} {' '.join(spec.args)}[/]",
        title=f"Launch: {SERVER_NAME}",
    ))


if __name__ == "__main__":
    app()
