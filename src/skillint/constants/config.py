"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "skillint.yaml"
DEFAULT_MAX_FILE_MB: int = 2

RULE_OVERRIDE_ALLOWED_KEYS: frozenset[str] = frozenset({"max_severity", "min_severity"})
RULE_OVERRIDE_ALLOWED_SEVERITIES: frozenset[str] = frozenset({"high", "medium", "low"})

DEFAULT_SKILL_GLOBS: tuple[str, ...] = ("**/SKILL.md",)
DEFAULT_DOC_GLOBS: tuple[str, ...] = ("docs/plan/*.md", "docs/spec/*.md")
DEFAULT_PLAN_GLOBS: tuple[str, ...] = ("**/pgpm.plan",)
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (".git", "node_modules", "dist")
DEFAULT_DOC_IGNORE_NAMES: tuple[str, ...] = ("README.md",)

SKILL_MAX_LINES: int = 500
SKILL_NAME_MAX_LENGTH: int = 64
SKILL_DESCRIPTION_MAX_LENGTH: int = 1024
SKILL_COMPATIBILITY_MAX_LENGTH: int = 500

DEFAULT_ALLOWED_FRONTMATTER_KEYS: tuple[str, ...] = (
    "name",
    "description",
    "compatibility",
    "metadata",
    "license",
    "allowed-tools",
)

DEFAULT_TRIGGER_PHRASES: tuple[str, ...] = (
    "use when",
    "use this when",
    "use this skill",
    "when the user",
    "when asked",
    "trigger",
    "use for",
)
