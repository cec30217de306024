"""Rule identifiers, categories, and default scores for bundled lint rules."""

from __future__ import annotations

CATEGORY_SKILL: str = "skill"
CATEGORY_ARCHIVE: str = "archive"
CATEGORY_DOCS: str = "docs"
CATEGORY_PLAN: str = "plan"
VALID_CATEGORIES: tuple[str, ...] = (CATEGORY_SKILL, CATEGORY_ARCHIVE, CATEGORY_DOCS, CATEGORY_PLAN)

SKILL_PARSE_ERROR_SCORE: int = 90
FRONTMATTER_MISSING_SCORE: int = 85
NAME_MISSING_SCORE: int = 85
NAME_FORMAT_SCORE: int = 75
NAME_TOO_LONG_SCORE: int = 70
NAME_DIR_MISMATCH_SCORE: int = 80
DESCRIPTION_MISSING_SCORE: int = 85
DESCRIPTION_TOO_LONG_SCORE: int = 70
DESCRIPTION_NO_TRIGGER_SCORE: int = 30
FRONTMATTER_UNKNOWN_KEY_SCORE: int = 25
METADATA_INVALID_SCORE: int = 50
SKILL_TOO_LONG_SCORE: int = 55
REFERENCE_BROKEN_SCORE: int = 45

ARCHIVE_MISSING_SCORE: int = 75
ARCHIVE_INVALID_SCORE: int = 80
ARCHIVE_LAYOUT_SCORE: int = 60
ARCHIVE_STALE_SCORE: int = 50

DUPLICATE_SKILL_NAME_SCORE: int = 80

DOC_STATUS_MISSING_SCORE: int = 75
DOC_STATUS_INVALID_SCORE: int = 70
DOC_DATE_INVALID_SCORE: int = 45
DOC_SECTION_MISSING_SCORE: int = 50
DOC_LINK_BROKEN_SCORE: int = 35
DOC_LIFECYCLE_SPEC_SCORE: int = 40
DOC_LIFECYCLE_PLAN_SCORE: int = 30

PLAN_SYNTAX_SCORE: int = 85
PLAN_PRAGMA_MISSING_SCORE: int = 50
PLAN_DUPLICATE_CHANGE_SCORE: int = 80
PLAN_DUPLICATE_TAG_SCORE: int = 50
PLAN_UNKNOWN_DEPENDENCY_SCORE: int = 75
PLAN_SCRIPT_MISSING_SCORE: int = 55

SEMVER_PATTERN_TEXT: str = r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?$"

# Archive members produced by OS tooling that never count as stale content.
ARCHIVE_IGNORED_NAMES: frozenset[str] = frozenset({".DS_Store", "Thumbs.db"})
ARCHIVE_IGNORED_DIR_PREFIXES: tuple[str, ...] = ("__MACOSX/",)
