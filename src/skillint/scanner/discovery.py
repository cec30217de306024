"""File discovery for skills, design docs, and pgpm plans."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from skillint.constants.discovery import DOC_KINDS, SKILL_ARCHIVE_SUFFIX, SKILL_MARKDOWN_FILENAME
from skillint.types import DocKind

logger = logging.getLogger(__name__)


def discover_skill_files(
    root: Path,
    skill_globs: tuple[str, ...],
    *,
    exclude_dirs: tuple[str, ...] = (),
    max_file_mb: int,
) -> list[Path]:
    """Discover SKILL.md files by configured glob patterns."""
    return _discover(
        root,
        skill_globs,
        exclude_dirs=exclude_dirs,
        max_file_mb=max_file_mb,
        accept=lambda path: path.name == SKILL_MARKDOWN_FILENAME,
    )


def discover_doc_files(
    root: Path,
    doc_globs: tuple[str, ...],
    *,
    exclude_dirs: tuple[str, ...] = (),
    ignore_names: tuple[str, ...] = (),
    max_file_mb: int,
) -> list[tuple[Path, DocKind]]:
    """Discover docs/plan and docs/spec Markdown files with their kind."""
    ignored = set(ignore_names)
    paths = _discover(
        root,
        doc_globs,
        exclude_dirs=exclude_dirs,
        max_file_mb=max_file_mb,
        accept=lambda path: path.suffix.lower() == ".md" and path.name not in ignored and doc_kind_for(path) is not None,
    )
    discovered: list[tuple[Path, DocKind]] = []
    for path in paths:
        kind = doc_kind_for(path)
        if kind is not None:
            discovered.append((path, kind))
    return discovered


def discover_plan_files(
    root: Path,
    plan_globs: tuple[str, ...],
    *,
    exclude_dirs: tuple[str, ...] = (),
    max_file_mb: int,
) -> list[Path]:
    """Discover pgpm plan files by configured glob patterns."""
    return _discover(
        root,
        plan_globs,
        exclude_dirs=exclude_dirs,
        max_file_mb=max_file_mb,
        accept=lambda path: path.suffix == ".plan",
    )


def doc_kind_for(path: Path) -> DocKind | None:
    """Derive the document kind from its parent directory (``plan`` or ``spec``)."""
    parent = path.parent.name.lower()
    if parent in DOC_KINDS:
        return parent  # type: ignore[return-value]
    return None


def skill_archive_path(skill_dir: Path) -> Path:
    """Return the expected ``{skill-name}.zip`` beside a skill directory."""
    return skill_dir.parent / f"{skill_dir.name}{SKILL_ARCHIVE_SUFFIX}"


def relative_posix(path: Path, root: Path) -> str:
    """Return a deterministic path key relative to *root* when possible."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _discover(
    root: Path,
    patterns: tuple[str, ...],
    *,
    exclude_dirs: tuple[str, ...],
    max_file_mb: int,
    accept: Callable[[Path], bool],
) -> list[Path]:
    discovered: set[Path] = set()
    size_limit_bytes = max_file_mb * 1024 * 1024
    resolved_root = root.resolve()
    excluded = set(exclude_dirs)

    for pattern in patterns:
        for path in resolved_root.glob(pattern):
            if not path.is_file() or not accept(path):
                continue
            if _is_excluded(path, resolved_root, excluded):
                continue
            try:
                if path.stat().st_size > size_limit_bytes:
                    logger.debug("Skipping %s: larger than %d MB", path, max_file_mb)
                    continue
            except OSError:
                continue
            discovered.add(path.resolve())

    return sorted(discovered, key=lambda path: relative_posix(path, resolved_root))


def _is_excluded(path: Path, root: Path, excluded: set[str]) -> bool:
    if not excluded:
        return False
    try:
        parts = path.relative_to(root).parts[:-1]
    except ValueError:
        parts = path.parts[:-1]
    return any(part in excluded for part in parts)
