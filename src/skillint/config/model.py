"""Config data model for lint runs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from skillint.constants.config import (
    DEFAULT_DOC_GLOBS,
    DEFAULT_DOC_IGNORE_NAMES,
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_PLAN_GLOBS,
    DEFAULT_SKILL_GLOBS,
)
from skillint.types.config import DocsConfig, RuleOverrideConfig, RulesConfig, SkillsConfig


@dataclass(frozen=True)
class SkillintConfig:
    """Resolved linter config."""

    skill_globs: tuple[str, ...] = DEFAULT_SKILL_GLOBS
    doc_globs: tuple[str, ...] = DEFAULT_DOC_GLOBS
    plan_globs: tuple[str, ...] = DEFAULT_PLAN_GLOBS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    doc_ignore_names: tuple[str, ...] = DEFAULT_DOC_IGNORE_NAMES
    max_file_mb: int = DEFAULT_MAX_FILE_MB
    rules: RulesConfig = RulesConfig()
    rule_overrides: dict[str, RuleOverrideConfig] = field(default_factory=dict)
    skills: SkillsConfig = SkillsConfig()
    docs: DocsConfig = DocsConfig()


def effective_rule_ids(config: SkillintConfig, available: Iterable[str]) -> tuple[str, ...]:
    """Resolve enabled rules with config overrides, preserving registry order."""
    available_ids = tuple(available)
    enabled = set(config.rules.enabled) if config.rules.enabled else set(available_ids)
    disabled = set(config.rules.disabled)
    return tuple(rule_id for rule_id in available_ids if rule_id in enabled and rule_id not in disabled)
