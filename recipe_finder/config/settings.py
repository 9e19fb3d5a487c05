"""
Agent settings for Recipe Finder.

The tunable parts of a session: which model drives the browser and how
many turns it gets. Settings come from defaults, the environment, or an
optional YAML file; all three paths are validated by the same Pydantic
model.

Usage:
    from recipe_finder.config.settings import AgentSettings, load_settings

    settings = AgentSettings()                       # haiku, 50 turns
    settings = AgentSettings.from_env()              # RECIPE_FINDER_* vars
    settings = load_settings("recipe_finder.yaml")   # YAML file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from recipe_finder.exceptions import SettingsError

DEFAULT_MODEL = "haiku"
DEFAULT_MAX_TURNS = 50

MODEL_ENV = "RECIPE_FINDER_MODEL"
MAX_TURNS_ENV = "RECIPE_FINDER_MAX_TURNS"


class AgentSettings(BaseModel):
    """
    Settings for one agent session.

    Attributes:
        model: Model selector passed to the agent engine.
        max_turns: Upper bound on conversation turns; must be positive.
        forward_env: Forward the process environment to the engine.
    """

    model: str = Field(
        DEFAULT_MODEL,
        min_length=1,
        description="Model selector for the agent engine",
    )
    max_turns: int = Field(
        DEFAULT_MAX_TURNS,
        gt=0,
        description="Maximum conversation turns per session",
    )
    forward_env: bool = Field(
        True,
        description="Forward the process environment to the engine",
    )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AgentSettings":
        """
        Create settings from environment variables.

        Reads:
            RECIPE_FINDER_MODEL: model selector (default: "haiku")
            RECIPE_FINDER_MAX_TURNS: positive integer (default: 50)
        """
        env = os.environ if env is None else env
        kwargs: dict[str, Any] = {}

        model = env.get(MODEL_ENV, "").strip()
        if model:
            kwargs["model"] = model

        raw_turns = env.get(MAX_TURNS_ENV, "").strip()
        if raw_turns:
            try:
                kwargs["max_turns"] = int(raw_turns)
            except ValueError as e:
                raise SettingsError(
                    f"{MAX_TURNS_ENV} must be an integer, got {raw_turns!r}",
                    source=MAX_TURNS_ENV,
                ) from e

        return _validate(kwargs, source="environment")


def load_settings(path: str | Path) -> AgentSettings:
    """
    Load and validate settings from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SettingsError: If the file is empty, not a mapping, or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SettingsError(
                f"Settings file is not valid YAML: {path}",
                source=str(path),
            ) from e

    if raw is None:
        raise SettingsError(f"Settings file is empty: {path}", source=str(path))
    if not isinstance(raw, dict):
        raise SettingsError(
            f"Settings file must contain a mapping: {path}",
            source=str(path),
        )

    return _validate(raw, source=str(path))


def _validate(raw: dict[str, Any], *, source: str) -> AgentSettings:
    try:
        return AgentSettings(**raw)
    except ValidationError as e:
        raise SettingsError(
            f"Invalid agent settings from {source}:\n{e}",
            source=source,
            details={"errors": e.errors(include_url=False)},
        ) from e
