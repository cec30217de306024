"""Distribution archive rules: every skill ships as ``{skill-name}.zip``."""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path

from skillint.config import SkillintConfig
from skillint.constants.discovery import SKILL_MARKDOWN_FILENAME
from skillint.constants.rules import (
    ARCHIVE_IGNORED_DIR_PREFIXES,
    ARCHIVE_IGNORED_NAMES,
    ARCHIVE_INVALID_SCORE,
    ARCHIVE_LAYOUT_SCORE,
    ARCHIVE_MISSING_SCORE,
    ARCHIVE_STALE_SCORE,
    CATEGORY_ARCHIVE,
)
from skillint.model import Evidence, FindingCandidate, SkillPackage
from skillint.rules.base import SkillRule

logger = logging.getLogger(__name__)

_PREVIEW_LIMIT: int = 3


def read_archive_members(path: Path) -> dict[str, int] | None:
    """Return ``{member_name: crc32}`` for file entries, or None when unreadable."""
    try:
        with zipfile.ZipFile(path) as archive:
            return {info.filename: info.CRC for info in archive.infolist() if not info.is_dir()}
    except (OSError, zipfile.BadZipFile) as exc:
        logger.debug("Cannot read archive %s: %s", path, exc)
        return None


def directory_members(directory: Path) -> dict[str, Path]:
    """Map archive-style member names (``<dir>/<relative>``) to files on disk."""
    members: dict[str, Path] = {}
    for path in sorted(directory.rglob("*")):
        if not path.is_file():
            continue
        relative = path.relative_to(directory.parent).as_posix()
        if _is_ignored(relative):
            continue
        members[relative] = path
    return members


def file_crc32(path: Path) -> int:
    crc = 0
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            crc = zlib.crc32(chunk, crc)
    return crc & 0xFFFFFFFF


def _is_ignored(member: str) -> bool:
    if member.startswith(ARCHIVE_IGNORED_DIR_PREFIXES):
        return True
    return member.rsplit("/", 1)[-1] in ARCHIVE_IGNORED_NAMES


def _archive_evidence(skill: SkillPackage) -> Evidence:
    return Evidence(path=str(skill.archive_path), line=None, snippet=skill.archive_path.name)


def _preview(names: list[str]) -> str:
    shown = ", ".join(names[:_PREVIEW_LIMIT])
    if len(names) > _PREVIEW_LIMIT:
        shown = f"{shown}, +{len(names) - _PREVIEW_LIMIT} more"
    return shown


class ArchiveMissingRule(SkillRule):
    """Each skill directory needs a sibling ``{skill-name}.zip``."""

    rule_id = "ARCHIVE_MISSING"
    category = CATEGORY_ARCHIVE
    title = "Skill archive missing"
    default_score = ARCHIVE_MISSING_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if not config.skills.require_archive or skill.archive_path.is_file():
            return []
        name = skill.directory_name
        return [
            self.candidate(
                description=f"No distribution archive '{skill.archive_path.name}' next to '{name}/'.",
                evidence=_archive_evidence(skill),
                recommendation=f"Run `zip -r {name}.zip {name}/` from the skill's parent directory.",
            )
        ]


class ArchiveInvalidRule(SkillRule):
    """Existing archives must be readable zip files."""

    rule_id = "ARCHIVE_INVALID"
    category = CATEGORY_ARCHIVE
    title = "Skill archive unreadable"
    default_score = ARCHIVE_INVALID_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if not skill.archive_path.is_file() or read_archive_members(skill.archive_path) is not None:
            return []
        return [
            self.candidate(
                description=f"'{skill.archive_path.name}' is not a valid zip archive.",
                evidence=_archive_evidence(skill),
                recommendation="Delete the file and rebuild it with `zip -r`.",
            )
        ]


class ArchiveLayoutRule(SkillRule):
    """Archives must contain a single ``{skill-name}/`` tree with SKILL.md."""

    rule_id = "ARCHIVE_LAYOUT"
    category = CATEGORY_ARCHIVE
    title = "Skill archive has wrong layout"
    default_score = ARCHIVE_LAYOUT_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if not skill.archive_path.is_file():
            return []
        members = read_archive_members(skill.archive_path)
        if members is None:
            return []

        prefix = f"{skill.directory_name}/"
        findings: list[FindingCandidate] = []
        stray = sorted(name for name in members if not name.startswith(prefix) and not _is_ignored(name))
        if stray:
            findings.append(
                self.candidate(
                    description=f"Archive has {len(stray)} entries outside '{prefix}': {_preview(stray)}.",
                    evidence=_archive_evidence(skill),
                    recommendation=f"Zip the directory itself (`zip -r {skill.directory_name}.zip {prefix}`).",
                )
            )
        if f"{prefix}{SKILL_MARKDOWN_FILENAME}" not in members:
            findings.append(
                self.candidate(
                    description=f"Archive does not contain '{prefix}{SKILL_MARKDOWN_FILENAME}'.",
                    evidence=_archive_evidence(skill),
                    recommendation="Rebuild the archive from the skill directory.",
                )
            )
        return findings


class ArchiveStaleRule(SkillRule):
    """Archive contents must match the skill directory byte for byte."""

    rule_id = "ARCHIVE_STALE"
    category = CATEGORY_ARCHIVE
    title = "Skill archive out of date"
    default_score = ARCHIVE_STALE_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if not skill.archive_path.is_file():
            return []
        archived = read_archive_members(skill.archive_path)
        if archived is None:
            return []

        prefix = f"{skill.directory_name}/"
        archived = {name: crc for name, crc in archived.items() if name.startswith(prefix) and not _is_ignored(name)}
        on_disk = directory_members(skill.directory)

        missing = sorted(set(on_disk) - set(archived))
        extra = sorted(set(archived) - set(on_disk))
        changed = sorted(
            name for name in set(on_disk) & set(archived) if file_crc32(on_disk[name]) != archived[name]
        )
        if not (missing or extra or changed):
            return []

        parts: list[str] = []
        if changed:
            parts.append(f"{len(changed)} changed ({_preview(changed)})")
        if missing:
            parts.append(f"{len(missing)} not archived ({_preview(missing)})")
        if extra:
            parts.append(f"{len(extra)} deleted from disk ({_preview(extra)})")
        return [
            self.candidate(
                description=f"Archive differs from '{prefix}': {'; '.join(parts)}.",
                evidence=_archive_evidence(skill),
                recommendation=f"Rebuild with `rm {skill.directory_name}.zip && zip -r {skill.directory_name}.zip {prefix}`.",
            )
        ]
