"""Constants for filesystem discovery and subject naming."""

from __future__ import annotations

SKILL_MARKDOWN_FILENAME: str = "SKILL.md"
SKILL_ARCHIVE_SUFFIX: str = ".zip"

DOC_KIND_PLAN: str = "plan"
DOC_KIND_SPEC: str = "spec"
DOC_KINDS: frozenset[str] = frozenset({DOC_KIND_PLAN, DOC_KIND_SPEC})
