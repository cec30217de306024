"""Frozen dataclasses shared by parsers, rules, and reporters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skillint.types.common import Category, DocKind, Severity


@dataclass(frozen=True)
class Evidence:
    """Location of a finding inside the corpus."""

    path: str
    line: int | None
    snippet: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "line": self.line, "snippet": self.snippet}


@dataclass(frozen=True)
class DocumentLink:
    """A relative Markdown link found in a document body."""

    target: str
    line: int
    snippet: str


@dataclass(frozen=True)
class ParsedSkillDocument:
    """Parsed SKILL.md with frontmatter and body metadata."""

    file_path: Path
    raw_text: str
    frontmatter: dict[str, Any] | None
    frontmatter_lines: dict[str, int]
    body: str
    line_count: int
    links: tuple[DocumentLink, ...] = ()

    def key_line(self, key: str) -> int | None:
        """Return the 1-based line of a top-level frontmatter key."""
        return self.frontmatter_lines.get(key)


@dataclass(frozen=True)
class SkillPackage:
    """A discovered skill directory and everything parsed from it."""

    directory: Path
    skill_file: Path
    archive_path: Path
    parsed: ParsedSkillDocument | None = None
    parse_error: str | None = None

    @property
    def directory_name(self) -> str:
        return self.directory.name

    @property
    def declared_name(self) -> str | None:
        """Frontmatter ``name`` when it is a non-blank string."""
        if self.parsed is None or self.parsed.frontmatter is None:
            return None
        value = self.parsed.frontmatter.get("name")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None


@dataclass(frozen=True)
class StatusField:
    """One row of a design-doc status table."""

    name: str
    value: str
    line: int


@dataclass(frozen=True)
class DocHeading:
    """A Markdown ATX heading."""

    level: int
    text: str
    line: int


@dataclass(frozen=True)
class ParsedDesignDoc:
    """Parsed docs/plan or docs/spec document."""

    file_path: Path
    kind: DocKind
    title: str | None
    status: dict[str, StatusField]
    headings: tuple[DocHeading, ...]
    links: tuple[DocumentLink, ...] = ()

    def status_value(self, name: str) -> str | None:
        """Look up a status field case-insensitively."""
        entry = self.status.get(name.lower())
        return entry.value if entry is not None else None


@dataclass(frozen=True)
class PlanDependency:
    """A dependency reference inside a plan change."""

    raw: str
    change: str
    project: str | None = None
    tag: str | None = None
    conflict: bool = False


@dataclass(frozen=True)
class PlanTag:
    """A ``@tag`` line in a plan."""

    name: str
    timestamp: str
    planner_name: str
    planner_email: str
    note: str
    line: int
    change: str | None = None


@dataclass(frozen=True)
class PlanChange:
    """A change line in a plan."""

    name: str
    dependencies: tuple[PlanDependency, ...]
    timestamp: str
    planner_name: str
    planner_email: str
    note: str
    line: int
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlanLineError:
    """A plan line that matched no grammar."""

    line: int
    text: str
    message: str


@dataclass(frozen=True)
class ParsedPlan:
    """Parsed pgpm plan file."""

    file_path: Path
    pragmas: dict[str, str]
    changes: tuple[PlanChange, ...]
    tags: tuple[PlanTag, ...]
    errors: tuple[PlanLineError, ...] = ()
    pragma_lines: dict[str, int] = field(default_factory=dict)

    @property
    def project(self) -> str | None:
        return self.pragmas.get("project")

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.file_path),
            "pragmas": dict(sorted(self.pragmas.items())),
            "changes": [
                {
                    "name": change.name,
                    "dependencies": [dependency.raw for dependency in change.dependencies],
                    "timestamp": change.timestamp,
                    "planner": {"name": change.planner_name, "email": change.planner_email},
                    "note": change.note,
                    "line": change.line,
                    "tags": list(change.tags),
                }
                for change in self.changes
            ],
            "errors": [{"line": error.line, "text": error.text, "message": error.message} for error in self.errors],
        }


@dataclass(frozen=True)
class FindingCandidate:
    """Raw rule output before scoring and identity are assigned."""

    rule_id: str
    score: int
    title: str
    description: str
    evidence: Evidence
    recommendation: str
    category: Category
    subject: str | None = None


@dataclass(frozen=True)
class SeverityOverride:
    """Audit record for a severity changed by ``rule_overrides``."""

    original: Severity
    applied: Severity
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"original": self.original, "applied": self.applied, "reason": self.reason}


@dataclass(frozen=True)
class Finding:
    """A scored lint finding."""

    id: str
    severity: Severity
    score: int
    title: str
    description: str
    evidence: Evidence
    subject: str
    rule_id: str
    recommendation: str
    category: Category
    severity_override: SeverityOverride | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "severity": self.severity,
            "score": self.score,
            "title": self.title,
            "description": self.description,
            "evidence": self.evidence.to_dict(),
            "subject": self.subject,
            "rule_id": self.rule_id,
            "recommendation": self.recommendation,
            "category": self.category,
        }
        if self.severity_override is not None:
            payload["severity_override"] = self.severity_override.to_dict()
        return payload


@dataclass(frozen=True)
class Summary:
    """Run-level summary persisted as ``summary.json``."""

    schema_version: str
    finding_count: int
    counts_by_severity: dict[Severity, int]
    counts_by_category: dict[str, int]
    counts_by_rule: dict[str, int]
    top_findings: tuple[dict[str, Any], ...]
    scanned: dict[str, int]
    shown_finding_count: int | None = None
    output_filter: dict[str, object] | None = None
    rule_overrides: dict[str, dict[str, Severity]] | None = None
    rules_executed: tuple[str, ...] | None = None
    rules_disabled: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "schema_version": self.schema_version,
            "finding_count": self.finding_count,
            "counts_by_severity": dict(self.counts_by_severity),
            "counts_by_category": dict(self.counts_by_category),
            "counts_by_rule": dict(self.counts_by_rule),
            "top_findings": list(self.top_findings),
            "scanned": dict(self.scanned),
        }
        if self.shown_finding_count is not None:
            payload["shown_finding_count"] = self.shown_finding_count
        if self.output_filter is not None:
            payload["output_filter"] = self.output_filter
        if self.rule_overrides:
            payload["rule_overrides"] = self.rule_overrides
        if self.rules_executed is not None:
            payload["rules_executed"] = list(self.rules_executed)
        if self.rules_disabled is not None:
            payload["rules_disabled"] = list(self.rules_disabled)
        return payload


@dataclass(frozen=True)
class LintResult:
    """Aggregate outcome of a lint run."""

    scanned_skills: int
    scanned_docs: int
    scanned_plans: int
    total_findings: int
    counts_by_severity: dict[Severity, int]
    findings: tuple[Finding, ...]
    duration_seconds: float
    warnings: tuple[str, ...] = ()
    counts_by_rule: dict[str, int] = field(default_factory=dict)
    rules_executed: tuple[str, ...] = ()
    rules_disabled: tuple[str, ...] = ()
    active_rule_overrides: dict[str, dict[str, Severity]] = field(default_factory=dict)

    @property
    def scanned_files(self) -> int:
        return self.scanned_skills + self.scanned_docs + self.scanned_plans
