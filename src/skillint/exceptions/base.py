"""Root exception type."""

from __future__ import annotations


class SkillintError(Exception):
    """Base class for all skillint errors."""
