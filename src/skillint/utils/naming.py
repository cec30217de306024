"""String helpers for skill names."""

from __future__ import annotations

from skillint.constants.naming import KEBAB_CASE_PATTERN


def is_kebab_case(name: str) -> bool:
    """Return True for lowercase alphanumeric words joined by single dashes."""
    return KEBAB_CASE_PATTERN.match(name) is not None
