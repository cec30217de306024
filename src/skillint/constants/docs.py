"""Defaults for docs/plan and docs/spec template checks."""

from __future__ import annotations

import re
from re import Pattern

DECISION_STATUS_FIELD: str = "Decision Status"
IMPLEMENTATION_STATUS_FIELD: str = "Implementation Status"
LINKS_FIELD: str = "Links"

DEFAULT_DECISION_STATUSES: tuple[str, ...] = ("Proposed", "Accepted", "Rejected", "Superseded")
DEFAULT_IMPLEMENTATION_STATUSES: tuple[str, ...] = ("Not Started", "In Progress", "Implemented", "Abandoned")

DEFAULT_REQUIRED_STATUS_FIELDS: tuple[str, ...] = (
    DECISION_STATUS_FIELD,
    IMPLEMENTATION_STATUS_FIELD,
    "Created",
    "Last Updated",
)
DEFAULT_DATE_FIELDS: tuple[str, ...] = ("Created", "Last Updated")

DEFAULT_PLAN_SECTIONS: tuple[str, ...] = ("Summary", "Motivation", "Proposal", "Open Questions")
DEFAULT_SPEC_SECTIONS: tuple[str, ...] = ("Summary", "Specification", "Rationale")

# Decision statuses a document under docs/spec/ may carry.
SPEC_SETTLED_STATUSES: frozenset[str] = frozenset({"accepted", "superseded"})
PLAN_PROMOTE_STATUS: str = "accepted"

DATE_VALUE_PATTERN: Pattern[str] = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TABLE_ROW_PATTERN: Pattern[str] = re.compile(r"^\|(.+)\|\s*$")
TABLE_SEPARATOR_CELL_PATTERN: Pattern[str] = re.compile(r"^:?-{3,}:?$")
TABLE_HEADER_FIELD_NAMES: frozenset[str] = frozenset({"field", "key", "property"})
