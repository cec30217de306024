"""Parser for pgpm ``.plan`` files.

Malformed lines are collected as :class:`PlanLineError` entries instead of
aborting the parse, so a single bad line does not hide the rest of the plan.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from skillint.constants.plan import (
    DEPENDENCY_CONFLICT_PREFIX,
    DEPENDENCY_PROJECT_SEPARATOR,
    DEPENDENCY_TAG_SEPARATOR,
    PLAN_CHANGE_PATTERN,
    PLAN_COMMENT_PREFIX,
    PLAN_PRAGMA_PATTERN,
    PLAN_TAG_PATTERN,
)
from skillint.exceptions import PlanParseError
from skillint.model import ParsedPlan, PlanChange, PlanDependency, PlanLineError, PlanTag

logger = logging.getLogger(__name__)


def parse_plan_file(path: Path) -> ParsedPlan:
    """Read and parse a plan file from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PlanParseError(f"Cannot read {path}: {exc}") from exc
    return parse_plan_text(text, path)


def parse_plan_text(text: str, path: Path) -> ParsedPlan:
    """Parse plan text line by line."""
    pragmas: dict[str, str] = {}
    pragma_lines: dict[str, int] = {}
    changes: list[PlanChange] = []
    tags: list[PlanTag] = []
    errors: list[PlanLineError] = []
    pending_tags: dict[int, list[str]] = {}

    for index, raw_line in enumerate(text.lstrip("\ufeff").splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(PLAN_COMMENT_PREFIX):
            continue

        if line.startswith("%"):
            pragma = PLAN_PRAGMA_PATTERN.match(line)
            if pragma is None:
                errors.append(PlanLineError(line=index, text=line, message="malformed pragma"))
                continue
            key = pragma.group(1)
            pragmas.setdefault(key, pragma.group(2))
            pragma_lines.setdefault(key, index)
            continue

        if line.startswith("@"):
            tag_match = PLAN_TAG_PATTERN.match(line)
            if tag_match is None:
                errors.append(PlanLineError(line=index, text=line, message="malformed tag"))
                continue
            owner = changes[-1].name if changes else None
            tags.append(
                PlanTag(
                    name=tag_match.group("name"),
                    timestamp=tag_match.group("timestamp"),
                    planner_name=tag_match.group("planner").strip(),
                    planner_email=tag_match.group("email").strip(),
                    note=(tag_match.group("note") or "").strip(),
                    line=index,
                    change=owner,
                )
            )
            if changes:
                pending_tags.setdefault(len(changes) - 1, []).append(tag_match.group("name"))
            continue

        change_match = PLAN_CHANGE_PATTERN.match(line)
        if change_match is None:
            errors.append(PlanLineError(line=index, text=line, message="line does not match change syntax"))
            continue
        changes.append(
            PlanChange(
                name=change_match.group("name"),
                dependencies=parse_dependencies(change_match.group("deps") or ""),
                timestamp=change_match.group("timestamp"),
                planner_name=change_match.group("planner").strip(),
                planner_email=change_match.group("email").strip(),
                note=(change_match.group("note") or "").strip(),
                line=index,
            )
        )

    if pending_tags:
        changes = [
            replace(change, tags=tuple(pending_tags[position])) if position in pending_tags else change
            for position, change in enumerate(changes)
        ]

    logger.debug("Parsed plan %s: %d changes, %d tags, %d errors", path, len(changes), len(tags), len(errors))
    return ParsedPlan(
        file_path=path,
        pragmas=pragmas,
        changes=tuple(changes),
        tags=tuple(tags),
        errors=tuple(errors),
        pragma_lines=pragma_lines,
    )


def parse_dependencies(raw: str) -> tuple[PlanDependency, ...]:
    """Split a bracketed dependency list into structured references."""
    dependencies: list[PlanDependency] = []
    for token in raw.split():
        reference = token
        conflict = reference.startswith(DEPENDENCY_CONFLICT_PREFIX)
        if conflict:
            reference = reference[len(DEPENDENCY_CONFLICT_PREFIX) :]
        project: str | None = None
        if DEPENDENCY_PROJECT_SEPARATOR in reference:
            project, reference = reference.split(DEPENDENCY_PROJECT_SEPARATOR, 1)
        tag: str | None = None
        if DEPENDENCY_TAG_SEPARATOR in reference:
            reference, tag = reference.split(DEPENDENCY_TAG_SEPARATOR, 1)
        dependencies.append(
            PlanDependency(raw=token, change=reference, project=project or None, tag=tag or None, conflict=conflict)
        )
    return tuple(dependencies)

