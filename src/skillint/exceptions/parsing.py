"""Parsing-related exceptions."""

from __future__ import annotations

from skillint.exceptions.base import SkillintError


class SkillParseError(SkillintError, ValueError):
    """Raised when a SKILL.md file cannot be parsed."""


class DocParseError(SkillintError, ValueError):
    """Raised when a docs/plan or docs/spec document cannot be read."""


class PlanParseError(SkillintError, ValueError):
    """Raised when a pgpm plan file cannot be read."""
