"""Typed configuration structures for skillint settings."""

from __future__ import annotations

from dataclasses import dataclass

from skillint.constants.config import (
    DEFAULT_ALLOWED_FRONTMATTER_KEYS,
    DEFAULT_TRIGGER_PHRASES,
    SKILL_DESCRIPTION_MAX_LENGTH,
    SKILL_MAX_LINES,
    SKILL_NAME_MAX_LENGTH,
)
from skillint.constants.docs import (
    DEFAULT_DATE_FIELDS,
    DEFAULT_DECISION_STATUSES,
    DEFAULT_IMPLEMENTATION_STATUSES,
    DEFAULT_PLAN_SECTIONS,
    DEFAULT_REQUIRED_STATUS_FIELDS,
    DEFAULT_SPEC_SECTIONS,
)
from skillint.types.common import Severity


@dataclass(frozen=True)
class SkillsConfig:
    """Limits and vocabularies for SKILL.md checks."""

    max_lines: int = SKILL_MAX_LINES
    name_max_length: int = SKILL_NAME_MAX_LENGTH
    description_max_length: int = SKILL_DESCRIPTION_MAX_LENGTH
    allowed_frontmatter_keys: tuple[str, ...] = DEFAULT_ALLOWED_FRONTMATTER_KEYS
    trigger_phrases: tuple[str, ...] = DEFAULT_TRIGGER_PHRASES
    require_archive: bool = True


@dataclass(frozen=True)
class DocsConfig:
    """Template vocabulary for docs/plan and docs/spec documents."""

    decision_statuses: tuple[str, ...] = DEFAULT_DECISION_STATUSES
    implementation_statuses: tuple[str, ...] = DEFAULT_IMPLEMENTATION_STATUSES
    required_fields: tuple[str, ...] = DEFAULT_REQUIRED_STATUS_FIELDS
    date_fields: tuple[str, ...] = DEFAULT_DATE_FIELDS
    plan_sections: tuple[str, ...] = DEFAULT_PLAN_SECTIONS
    spec_sections: tuple[str, ...] = DEFAULT_SPEC_SECTIONS


@dataclass(frozen=True)
class RulesConfig:
    """Rule enablement toggles."""

    enabled: tuple[str, ...] = ()
    disabled: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleOverrideConfig:
    """Per-rule override settings from ``skillint.yaml``."""

    max_severity: Severity | None = None
    min_severity: Severity | None = None
