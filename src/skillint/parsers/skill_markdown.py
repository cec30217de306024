"""Parser for SKILL.md files with YAML frontmatter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillint.constants.parsing import (
    FRONTMATTER_ALT_DELIMITER,
    FRONTMATTER_DELIMITER,
    FRONTMATTER_KEY_PATTERN,
)
from skillint.exceptions import SkillParseError
from skillint.model import ParsedSkillDocument
from skillint.parsers.markdown import extract_links


def parse_skill_markdown_file(path: Path) -> ParsedSkillDocument:
    """Parse a SKILL.md file and extract frontmatter plus line metadata."""
    try:
        raw_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SkillParseError(f"Cannot read {path}: {exc}") from exc

    normalized = raw_text.lstrip("\ufeff")
    lines = normalized.splitlines()

    frontmatter: dict[str, Any] | None = None
    frontmatter_lines: dict[str, int] = {}
    body_lines = lines

    if lines and lines[0].strip() == FRONTMATTER_DELIMITER:
        frontmatter_end = _find_frontmatter_end(lines)
        if frontmatter_end is None:
            raise SkillParseError(f"Unterminated frontmatter block in {path}")

        frontmatter_block = lines[1:frontmatter_end]
        frontmatter_text = "\n".join(frontmatter_block)
        try:
            frontmatter_payload = yaml.safe_load(frontmatter_text) if frontmatter_text.strip() else None
        except yaml.YAMLError as exc:
            raise SkillParseError(f"Failed to parse frontmatter in {path}: {exc}") from exc

        if frontmatter_payload is None:
            frontmatter = None
        elif isinstance(frontmatter_payload, dict):
            frontmatter = frontmatter_payload
            frontmatter_lines = _top_level_key_lines(frontmatter_block)
        else:
            raise SkillParseError(f"Frontmatter in {path} must be a YAML mapping")

        body_lines = lines[frontmatter_end + 1 :]

    body_start = len(lines) - len(body_lines) + 1

    return ParsedSkillDocument(
        file_path=path,
        raw_text=raw_text,
        frontmatter=frontmatter,
        frontmatter_lines=frontmatter_lines,
        body="\n".join(body_lines).strip(),
        line_count=len(lines),
        links=extract_links(body_lines, first_line=body_start),
    )


def _find_frontmatter_end(lines: list[str]) -> int | None:
    for index in range(1, len(lines)):
        if lines[index].strip() in {FRONTMATTER_DELIMITER, FRONTMATTER_ALT_DELIMITER}:
            return index
    return None


def _top_level_key_lines(block: list[str]) -> dict[str, int]:
    """Map unindented frontmatter keys to file line numbers (delimiter is line 1)."""
    key_lines: dict[str, int] = {}
    for offset, line in enumerate(block):
        if not line or line[0].isspace():
            continue
        match = FRONTMATTER_KEY_PATTERN.match(line)
        if match:
            key_lines.setdefault(match.group(1), offset + 2)
    return key_lines
