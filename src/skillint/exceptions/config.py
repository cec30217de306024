"""Configuration-related exceptions."""

from __future__ import annotations

from skillint.exceptions.base import SkillintError


class ConfigError(SkillintError, ValueError):
    """Raised when linter configuration is invalid."""
