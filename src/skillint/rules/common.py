"""Shared helpers for rule implementations."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote

from skillint.constants.parsing import SNIPPET_MAX_LENGTH
from skillint.model import DocumentLink, Evidence, FindingCandidate, ParsedSkillDocument, SkillPackage
from skillint.parsers.markdown import link_path


def line_text(raw_text: str, line: int | None) -> str:
    """Return the stripped text of a 1-based line, or an empty string."""
    if line is None or line < 1:
        return ""
    lines = raw_text.lstrip("\ufeff").splitlines()
    if line > len(lines):
        return ""
    return lines[line - 1].strip()[:SNIPPET_MAX_LENGTH]


def skill_evidence(skill: SkillPackage, line: int | None = None) -> Evidence:
    """Build evidence pointing at a skill's SKILL.md."""
    snippet = line_text(skill.parsed.raw_text, line) if skill.parsed is not None else ""
    return Evidence(path=str(skill.skill_file), line=line, snippet=snippet)


def frontmatter_evidence(parsed: ParsedSkillDocument, key: str) -> Evidence:
    """Build evidence for a frontmatter key, falling back to the opening delimiter."""
    line = parsed.key_line(key) or 1
    return Evidence(path=str(parsed.file_path), line=line, snippet=line_text(parsed.raw_text, line))


def link_evidence(path: Path, link: DocumentLink) -> Evidence:
    return Evidence(path=str(path), line=link.line, snippet=link.snippet)


def resolve_link(base_dir: Path, link: DocumentLink) -> Path | None:
    """Resolve a relative link against *base_dir*; absolute paths are not resolved."""
    target = unquote(link_path(link.target))
    if not target or target.startswith("/"):
        return None
    return (base_dir / target).resolve()


def is_within(path: Path, directory: Path) -> bool:
    """Return True when *path* is *directory* or sits below it."""
    try:
        path.relative_to(directory.resolve())
    except ValueError:
        return False
    return True


def dedupe_candidates(candidates: list[FindingCandidate]) -> list[FindingCandidate]:
    """Drop duplicate candidates sharing rule, location, and description."""
    seen: set[tuple[str, str, int | None, str]] = set()
    deduped: list[FindingCandidate] = []

    for candidate in candidates:
        key = (
            candidate.rule_id,
            candidate.evidence.path,
            candidate.evidence.line,
            candidate.description,
        )
        if key in seen:
            continue
        seen.add(key)
        deduped.append(candidate)

    return deduped
