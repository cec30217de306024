"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # contradictory rule config
CFG009: str = "CFG009"  # invalid nested mapping
CFG010: str = "CFG010"  # root directory not found

ALL_CFG_CODES: tuple[str, ...] = (
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    CFG010,
)

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "skill_globs",
        "doc_globs",
        "plan_globs",
        "exclude_dirs",
        "doc_ignore_names",
        "max_file_mb",
        "rules",
        "rule_overrides",
        "skills",
        "docs",
    }
)

ALLOWED_RULES_KEYS: frozenset[str] = frozenset({"enabled", "disabled"})
ALLOWED_SKILLS_KEYS: frozenset[str] = frozenset(
    {
        "max_lines",
        "name_max_length",
        "description_max_length",
        "allowed_frontmatter_keys",
        "trigger_phrases",
        "require_archive",
    }
)
ALLOWED_DOCS_KEYS: frozenset[str] = frozenset(
    {
        "decision_statuses",
        "implementation_statuses",
        "required_fields",
        "date_fields",
        "plan_sections",
        "spec_sections",
    }
)

LIST_OF_STRINGS_KEYS: tuple[str, ...] = (
    "skill_globs",
    "doc_globs",
    "plan_globs",
    "exclude_dirs",
    "doc_ignore_names",
)
SKILLS_LIST_KEYS: tuple[str, ...] = ("allowed_frontmatter_keys", "trigger_phrases")
SKILLS_INT_KEYS: tuple[str, ...] = ("max_lines", "name_max_length", "description_max_length")
DOCS_LIST_KEYS: tuple[str, ...] = (
    "decision_statuses",
    "implementation_statuses",
    "required_fields",
    "date_fields",
    "plan_sections",
    "spec_sections",
)
