"""Shared exception hierarchy for skillint."""

from __future__ import annotations

from .base import SkillintError
from .config import ConfigError
from .parsing import DocParseError, PlanParseError, SkillParseError

__all__ = [
    "ConfigError",
    "DocParseError",
    "PlanParseError",
    "SkillParseError",
    "SkillintError",
]
