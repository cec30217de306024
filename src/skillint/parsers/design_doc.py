"""Parser for docs/plan and docs/spec Markdown documents."""

from __future__ import annotations

from pathlib import Path

from skillint.constants.docs import (
    TABLE_HEADER_FIELD_NAMES,
    TABLE_ROW_PATTERN,
    TABLE_SEPARATOR_CELL_PATTERN,
)
from skillint.exceptions import DocParseError
from skillint.model import ParsedDesignDoc, StatusField
from skillint.parsers.markdown import extract_headings, extract_links, iter_prose_lines
from skillint.types import DocKind


def parse_design_doc_file(path: Path, kind: DocKind) -> ParsedDesignDoc:
    """Parse a design document's title, status table, headings, and links."""
    try:
        raw_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocParseError(f"Cannot read {path}: {exc}") from exc

    lines = raw_text.lstrip("\ufeff").splitlines()
    headings = extract_headings(lines)
    title = next((heading.text for heading in headings if heading.level == 1), None)

    return ParsedDesignDoc(
        file_path=path,
        kind=kind,
        title=title,
        status=_parse_status_rows(lines),
        headings=headings,
        links=extract_links(lines),
    )


def _parse_status_rows(lines: list[str]) -> dict[str, StatusField]:
    """Collect two-column table rows keyed by lowercased field name.

    The first occurrence of a field wins so later tables in the body cannot
    shadow the status block.
    """
    status: dict[str, StatusField] = {}
    for index, line in iter_prose_lines(lines):
        match = TABLE_ROW_PATTERN.match(line.strip())
        if not match:
            continue
        cells = [cell.strip() for cell in match.group(1).split("|")]
        if len(cells) < 2:
            continue
        name = _strip_emphasis(cells[0])
        value = _strip_emphasis(cells[1])
        if not name or TABLE_SEPARATOR_CELL_PATTERN.match(name):
            continue
        if name.lower() in TABLE_HEADER_FIELD_NAMES:
            continue
        status.setdefault(name.lower(), StatusField(name=name, value=value, line=index))
    return status


def _strip_emphasis(cell: str) -> str:
    return cell.strip().strip("*_`").strip()
