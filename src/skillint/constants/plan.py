"""Grammar for pgpm ``.plan`` files.

Each non-blank, non-comment line is a pragma, a change, or a tag::

    %syntax-version=1.0.0
    schemas/app/tables/users [schemas/app] 2024-01-01T00:00:00Z Jane Doe <jane@example.com> # Add users
    @v1.0.0 2024-01-02T00:00:00Z Jane Doe <jane@example.com> # First release
"""

from __future__ import annotations

import re
from re import Pattern

PLAN_COMMENT_PREFIX: str = "#"
PLAN_PRAGMA_PATTERN: Pattern[str] = re.compile(r"^%\s*([A-Za-z][A-Za-z0-9_-]*)\s*=\s*(.*?)\s*$")
PLAN_CHANGE_PATTERN: Pattern[str] = re.compile(
    r"^(?P<name>[^\s@%#\[\]][^\s\[\]]*)"
    r"\s+(?:\[(?P<deps>[^\]]*)\]\s+)?"
    r"(?P<timestamp>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z)"
    r"\s+(?P<planner>[^<]+?)\s+<(?P<email>[^>]*)>"
    r"(?:\s+#\s?(?P<note>.*))?\s*$"
)
PLAN_TAG_PATTERN: Pattern[str] = re.compile(
    r"^@(?P<name>[^\s@]+)"
    r"\s+(?P<timestamp>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z)"
    r"\s+(?P<planner>[^<]+?)\s+<(?P<email>[^>]*)>"
    r"(?:\s+#\s?(?P<note>.*))?\s*$"
)

PRAGMA_SYNTAX_VERSION: str = "syntax-version"
PRAGMA_PROJECT: str = "project"
PRAGMA_URI: str = "uri"
REQUIRED_PRAGMAS: tuple[str, ...] = (PRAGMA_SYNTAX_VERSION, PRAGMA_PROJECT)

DEPENDENCY_CONFLICT_PREFIX: str = "!"
DEPENDENCY_PROJECT_SEPARATOR: str = ":"
DEPENDENCY_TAG_SEPARATOR: str = "@"

PLAN_SCRIPT_DIRS: tuple[str, ...] = ("deploy", "revert", "verify")
PLAN_SCRIPT_SUFFIX: str = ".sql"
