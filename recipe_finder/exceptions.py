"""
Custom exception hierarchy for Recipe Finder.

Only local configuration problems are raised from here. Faults coming
out of the agent engine's message stream are never wrapped: they reach
the caller unchanged.

Usage:
    from recipe_finder.exceptions import SettingsError

    try:
        settings = load_settings("recipe_finder.yaml")
    except SettingsError as e:
        print(e.source, e.details)
"""

from __future__ import annotations

from typing import Optional


class RecipeFinderError(Exception):
    """
    Base exception for all Recipe Finder errors.

    Catch `RecipeFinderError` to handle any project-specific error.
    """

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


# ── Configuration Errors ──────────────────────────────────────────


class SettingsError(RecipeFinderError):
    """
    Raised when agent settings from YAML or the environment are invalid.

    Examples:
    - RECIPE_FINDER_MAX_TURNS is not an integer
    - max_turns <= 0 in a settings file
    - settings file is empty or not a mapping
    """

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.source = source
