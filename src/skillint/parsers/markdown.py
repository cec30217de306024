"""Line-level Markdown helpers shared by the document parsers."""

from __future__ import annotations

from collections.abc import Iterator

from skillint.constants.parsing import (
    FENCED_CODE_BLOCK_PATTERN,
    HEADING_PATTERN,
    MARKDOWN_LINK_PATTERN,
    SNIPPET_MAX_LENGTH,
    URL_SCHEME_PATTERN,
)
from skillint.model import DocHeading, DocumentLink


def iter_prose_lines(lines: list[str], *, first_line: int = 1) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` for lines outside fenced code blocks."""
    active_fence_char: str | None = None
    for offset, line in enumerate(lines):
        stripped = line.strip()
        fence_char = _extract_fence_char(stripped)
        if fence_char is not None:
            if active_fence_char is None:
                active_fence_char = fence_char
            elif fence_char == active_fence_char:
                active_fence_char = None
            continue
        if active_fence_char is not None:
            continue
        yield first_line + offset, line


def extract_links(lines: list[str], *, first_line: int = 1) -> tuple[DocumentLink, ...]:
    """Collect relative file links, skipping URLs, anchors, and code blocks."""
    links: list[DocumentLink] = []
    for index, line in iter_prose_lines(lines, first_line=first_line):
        for match in MARKDOWN_LINK_PATTERN.finditer(line):
            target = match.group(1).strip()
            if not target or target.startswith("#") or URL_SCHEME_PATTERN.match(target):
                continue
            links.append(DocumentLink(target=target, line=index, snippet=line_snippet(line.strip())))
    return tuple(links)


def extract_headings(lines: list[str], *, first_line: int = 1) -> tuple[DocHeading, ...]:
    """Collect ATX headings outside fenced code blocks."""
    headings: list[DocHeading] = []
    for index, line in iter_prose_lines(lines, first_line=first_line):
        match = HEADING_PATTERN.match(line.strip())
        if match:
            headings.append(DocHeading(level=len(match.group(1)), text=match.group(2).strip(), line=index))
    return tuple(headings)


def link_path(target: str) -> str:
    """Strip a ``#fragment`` or ``?query`` from a link target."""
    for separator in ("#", "?"):
        target = target.split(separator, 1)[0]
    return target


def line_snippet(line: str) -> str:
    return line[:SNIPPET_MAX_LENGTH]


def _extract_fence_char(line: str) -> str | None:
    match = FENCED_CODE_BLOCK_PATTERN.match(line)
    if not match:
        return None
    return match.group(1)[0]
