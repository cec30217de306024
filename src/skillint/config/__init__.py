"""Configuration loading, validation, and normalization for lint runs.

This package facade re-exports all public names so that
``from skillint.config import ...`` works for every config API.
"""

from __future__ import annotations

from skillint.config.loader import load_config
from skillint.config.model import SkillintConfig, effective_rule_ids
from skillint.config.validator import suggest_key, validate_config_file

__all__ = [
    "SkillintConfig",
    "effective_rule_ids",
    "load_config",
    "suggest_key",
    "validate_config_file",
]
