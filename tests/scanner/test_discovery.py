"""Tests for skill, doc, and plan discovery."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from skillint.constants.config import DEFAULT_DOC_GLOBS, DEFAULT_PLAN_GLOBS, DEFAULT_SKILL_GLOBS
from skillint.scanner.discovery import (
    discover_doc_files,
    discover_plan_files,
    discover_skill_files,
    doc_kind_for,
    relative_posix,
    skill_archive_path,
)


def test_discovers_skills_sorted_and_skips_excluded_dirs(
    make_skill: Callable[..., Path], corpus_root: Path
) -> None:
    make_skill("zeta")
    make_skill("alpha")
    make_skill("vendored", parent="node_modules/pkg")

    found = discover_skill_files(
        corpus_root,
        DEFAULT_SKILL_GLOBS,
        exclude_dirs=("node_modules",),
        max_file_mb=2,
    )

    assert [relative_posix(path, corpus_root) for path in found] == [
        "skills/alpha/SKILL.md",
        "skills/zeta/SKILL.md",
    ]


def test_oversized_files_are_skipped(make_skill: Callable[..., Path], corpus_root: Path) -> None:
    make_skill("huge", body="x" * (1024 * 1024 + 10))

    found = discover_skill_files(corpus_root, DEFAULT_SKILL_GLOBS, max_file_mb=1)

    assert found == []


def test_discovers_docs_with_kind_and_ignores_readme(make_doc: Callable[..., Path], corpus_root: Path) -> None:
    make_doc("plan", "b.md")
    make_doc("spec", "a.md")
    make_doc("plan", "README.md", text="# Index\n")
    (corpus_root / "docs" / "plan" / "notes.txt").write_text("not markdown\n", encoding="utf-8")

    found = discover_doc_files(corpus_root, DEFAULT_DOC_GLOBS, ignore_names=("README.md",), max_file_mb=2)

    assert [(relative_posix(path, corpus_root), kind) for path, kind in found] == [
        ("docs/plan/b.md", "plan"),
        ("docs/spec/a.md", "spec"),
    ]


def test_discovers_plans(make_plan: Callable[..., Path], corpus_root: Path) -> None:
    make_plan("%project=app\n", module="app")
    make_plan("%project=core\n", module="core")

    found = discover_plan_files(corpus_root, DEFAULT_PLAN_GLOBS, max_file_mb=2)

    assert [relative_posix(path, corpus_root) for path in found] == [
        "packages/app/pgpm.plan",
        "packages/core/pgpm.plan",
    ]


def test_path_helpers(tmp_path: Path) -> None:
    assert doc_kind_for(tmp_path / "docs" / "Spec" / "a.md") == "spec"
    assert doc_kind_for(tmp_path / "docs" / "a.md") is None
    assert skill_archive_path(tmp_path / "skills" / "foo") == tmp_path / "skills" / "foo.zip"
    assert relative_posix(tmp_path / "a" / "b.md", tmp_path) == "a/b.md"
    assert relative_posix(Path("/elsewhere/x.md"), tmp_path) == "/elsewhere/x.md"
