"""Shared pytest fixtures that build small skill corpora on disk."""

from __future__ import annotations

import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from skillint.config import SkillintConfig
from skillint.scanner.orchestrator import load_skill_package

PLANNER = "Dana Ops <dana@example.com>"
STAMP = "2024-01-01T00:00:00Z"

DEFAULT_DESCRIPTION = "Generate typed GraphQL hooks for a schema. Use when the user asks for client codegen."


def render_skill(frontmatter: dict[str, Any] | None, body: str = "# Skill\n\nInstructions.\n") -> str:
    """Render SKILL.md text from a frontmatter mapping and a body."""
    if frontmatter is None:
        return body
    block = yaml.safe_dump(frontmatter, sort_keys=False, width=4096).strip()
    return f"---\n{block}\n---\n{body}"


def build_archive(skill_dir: Path, *, extra: dict[str, str] | None = None) -> Path:
    """Zip *skill_dir* into ``{parent}/{name}.zip`` with a ``{name}/`` prefix."""
    archive_path = skill_dir.parent / f"{skill_dir.name}.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        for path in sorted(skill_dir.rglob("*")):
            if path.is_file():
                archive.write(path, path.relative_to(skill_dir.parent).as_posix())
        for name, content in (extra or {}).items():
            archive.writestr(name, content)
    return archive_path


def render_design_doc(
    *,
    title: str = "Widget catalog",
    status: dict[str, str] | None = None,
    sections: tuple[str, ...] = ("Summary", "Motivation", "Proposal", "Open Questions"),
    body: str = "",
) -> str:
    """Render a design document with a status table and ``##`` sections."""
    rows = status if status is not None else {
        "Decision Status": "Proposed",
        "Implementation Status": "Not Started",
        "Created": "2025-01-10",
        "Last Updated": "2025-02-01",
    }
    lines = [f"# {title}", ""]
    if rows:
        lines.extend(["| Field | Value |", "|---|---|"])
        lines.extend(f"| {name} | {value} |" for name, value in rows.items())
        lines.append("")
    for section in sections:
        lines.extend([f"## {section}", "", "Text.", ""])
    if body:
        lines.append(body)
    return "\n".join(lines) + "\n"


def render_plan(changes: list[str], *, project: str | None = "app", syntax: bool = True) -> str:
    """Render a plan with optional pragmas; entries are ``name [deps]`` or ``@tag``."""
    lines: list[str] = []
    if syntax:
        lines.append("%syntax-version=1.0.0")
    if project is not None:
        lines.append(f"%project={project}")
    if lines:
        lines.append("")
    for entry in changes:
        lines.append(f"{entry} {STAMP} {PLANNER} # note")
    return "\n".join(lines) + "\n"


@pytest.fixture
def corpus_root(tmp_path: Path) -> Path:
    """Return an empty, resolved corpus root."""
    root = tmp_path / "corpus"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def config() -> SkillintConfig:
    return SkillintConfig()


@pytest.fixture
def make_skill(corpus_root: Path) -> Callable[..., Path]:
    """Factory writing ``skills/<name>/SKILL.md`` and, by default, its archive."""

    def _make(
        name: str = "graphql-codegen",
        *,
        frontmatter: dict[str, Any] | None = None,
        raw: str | None = None,
        body: str = "# Skill\n\nInstructions.\n",
        files: dict[str, str] | None = None,
        archive: bool = True,
        parent: str = "skills",
    ) -> Path:
        skill_dir = corpus_root / parent / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        if raw is None:
            payload = frontmatter if frontmatter is not None else {"name": name, "description": DEFAULT_DESCRIPTION}
            raw = render_skill(payload, body)
        (skill_dir / "SKILL.md").write_text(raw, encoding="utf-8")
        for relative, content in (files or {}).items():
            target = skill_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        if archive:
            build_archive(skill_dir)
        return skill_dir

    return _make


@pytest.fixture
def load_skill() -> Callable[[Path], Any]:
    """Load a skill directory into a ``SkillPackage``."""

    def _load(skill_dir: Path) -> Any:
        return load_skill_package(skill_dir / "SKILL.md")

    return _load


@pytest.fixture
def make_doc(corpus_root: Path) -> Callable[..., Path]:
    """Factory writing ``docs/<kind>/<filename>``."""

    def _make(kind: str = "plan", filename: str = "widgets.md", text: str | None = None, **kwargs: Any) -> Path:
        path = corpus_root / "docs" / kind / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        if text is None:
            if kind == "spec":
                kwargs.setdefault("sections", ("Summary", "Specification", "Rationale"))
                kwargs.setdefault(
                    "status",
                    {
                        "Decision Status": "Accepted",
                        "Implementation Status": "Implemented",
                        "Created": "2025-01-10",
                        "Last Updated": "2025-02-01",
                    },
                )
            text = render_design_doc(**kwargs)
        path.write_text(text, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def make_plan(corpus_root: Path) -> Callable[..., Path]:
    """Factory writing ``packages/<module>/pgpm.plan`` plus change scripts."""

    def _make(
        text: str,
        *,
        module: str = "app",
        scripts: tuple[str, ...] | None = None,
        script_dirs: tuple[str, ...] = ("deploy", "revert", "verify"),
    ) -> Path:
        module_dir = corpus_root / "packages" / module
        module_dir.mkdir(parents=True, exist_ok=True)
        plan_path = module_dir / "pgpm.plan"
        plan_path.write_text(text, encoding="utf-8")
        for change in scripts or ():
            for directory in script_dirs:
                script = module_dir / directory / f"{change}.sql"
                script.parent.mkdir(parents=True, exist_ok=True)
                script.write_text(f"-- {directory} {change}\n", encoding="utf-8")
        return plan_path

    return _make


@pytest.fixture
def plan_text() -> Callable[..., str]:
    return render_plan


@pytest.fixture
def doc_text() -> Callable[..., str]:
    return render_design_doc


@pytest.fixture
def rebuild_archive() -> Callable[..., Path]:
    return build_archive
