"""End-to-end tests for lint_workspace."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from skillint.exceptions import ConfigError
from skillint.scanner import lint_workspace

DESCRIPTION = "Generate typed hooks. Use when the user asks for codegen."


@pytest.fixture
def corpus(
    corpus_root: Path,
    make_skill: Callable[..., Path],
    make_doc: Callable[..., Path],
    make_plan: Callable[..., Path],
    plan_text: Callable[..., str],
) -> Path:
    make_skill("good")
    make_skill("bad-skill", frontmatter={"name": "Bad_Skill", "description": DESCRIPTION}, archive=False)
    make_doc("plan")
    make_plan(plan_text(["a", "b [a]"]), scripts=("a", "b"))
    return corpus_root


def test_lint_reports_findings_per_subject(corpus: Path) -> None:
    result = lint_workspace(root=corpus)

    assert (result.scanned_skills, result.scanned_docs, result.scanned_plans) == (2, 1, 1)
    assert result.scanned_files == 4
    assert sorted(finding.rule_id for finding in result.findings) == [
        "ARCHIVE_MISSING",
        "NAME_DIR_MISMATCH",
        "NAME_FORMAT",
    ]
    assert {finding.subject for finding in result.findings} == {"bad-skill"}
    assert [finding.score for finding in result.findings] == sorted(
        (finding.score for finding in result.findings), reverse=True
    )
    assert result.counts_by_severity == {"high": 3, "medium": 0, "low": 0}
    assert result.warnings == ()
    assert len(result.rules_executed) == 30


def test_evidence_paths_are_root_relative(corpus: Path) -> None:
    result = lint_workspace(root=corpus)

    paths = {finding.rule_id: finding.evidence.path for finding in result.findings}
    assert paths["NAME_FORMAT"] == "skills/bad-skill/SKILL.md"
    assert paths["ARCHIVE_MISSING"] == "skills/bad-skill.zip"


def test_writes_json_csv_and_sarif(corpus: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    lint_workspace(root=corpus, out=out, output_formats=("json", "csv", "sarif"))

    findings = json.loads((out / "findings.json").read_text(encoding="utf-8"))
    summary = json.loads((out / "summary.json").read_text(encoding="utf-8"))
    assert len(findings) == 3
    assert summary["finding_count"] == 3
    assert summary["scanned"] == {"skills": 2, "docs": 1, "plans": 1}
    assert summary["counts_by_category"] == {"archive": 1, "skill": 2}
    assert len(summary["rules_executed"]) == 30
    assert summary["rules_disabled"] == []
    assert (out / "findings.csv").read_text(encoding="utf-8").startswith("id,subject,category,rule_id")
    sarif = json.loads((out / "findings.sarif").read_text(encoding="utf-8"))
    assert len(sarif["runs"][0]["results"]) == 3


def test_output_filters_only_affect_written_findings(corpus: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = lint_workspace(root=corpus, out=out, category="archive")

    findings = json.loads((out / "findings.json").read_text(encoding="utf-8"))
    summary = json.loads((out / "summary.json").read_text(encoding="utf-8"))
    assert [finding["rule_id"] for finding in findings] == ["ARCHIVE_MISSING"]
    assert summary["finding_count"] == 3
    assert summary["shown_finding_count"] == 1
    assert summary["output_filter"] == {
        "min_severity": None,
        "category": "archive",
        "shown": 1,
        "total": 3,
        "filtered": 2,
    }
    assert result.total_findings == 3


def test_rule_selection_and_overrides_from_config(corpus: Path) -> None:
    (corpus / "skillint.yaml").write_text(
        "rules:\n"
        "  disabled: [NAME_FORMAT, RETIRED_RULE]\n"
        "rule_overrides:\n"
        "  ARCHIVE_MISSING:\n"
        "    max_severity: low\n",
        encoding="utf-8",
    )

    result = lint_workspace(root=corpus, disable_rules=("name_dir_mismatch",))

    assert [finding.rule_id for finding in result.findings] == ["ARCHIVE_MISSING"]
    assert result.findings[0].severity == "low"
    assert result.findings[0].severity_override is not None
    assert result.active_rule_overrides == {"ARCHIVE_MISSING": {"max_severity": "low"}}
    assert set(result.rules_disabled) == {"NAME_FORMAT", "NAME_DIR_MISMATCH"}
    assert result.warnings == (
        "Unknown rule ID 'RETIRED_RULE' in config has no bundled rule and will be ignored.",
    )


def test_only_rules_narrows_execution(corpus: Path) -> None:
    result = lint_workspace(root=corpus, only_rules=("ARCHIVE_MISSING",))

    assert result.rules_executed == ("ARCHIVE_MISSING",)
    assert [finding.rule_id for finding in result.findings] == ["ARCHIVE_MISSING"]


def test_plan_findings_use_project_as_subject(corpus: Path, make_plan: Callable[..., Path]) -> None:
    make_plan("%syntax-version=1.0.0\n%project=billing\n\nbroken line\n", module="billing")

    result = lint_workspace(root=corpus, only_rules=("PLAN_SYNTAX",))

    assert [(finding.subject, finding.evidence.path) for finding in result.findings] == [
        ("billing", "packages/billing/pgpm.plan")
    ]


def test_unreadable_doc_becomes_warning(corpus: Path) -> None:
    (corpus / "docs" / "plan" / "garbled.md").write_bytes(b"\xff\xfe\xfa")

    result = lint_workspace(root=corpus)

    assert result.scanned_docs == 1
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("Skipping docs/plan/garbled.md: Cannot read")


def test_duplicate_names_across_skills(corpus: Path, make_skill: Callable[..., Path]) -> None:
    make_skill("good-copy", frontmatter={"name": "good", "description": DESCRIPTION})

    result = lint_workspace(root=corpus, only_rules=("DUPLICATE_SKILL_NAME",))

    assert sorted(finding.subject for finding in result.findings) == ["good", "good-copy"]


def test_invalid_inputs_raise_config_error(corpus: Path, tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unknown output format"):
        lint_workspace(root=corpus, output_formats=("xml",))
    with pytest.raises(ConfigError, match="not a directory"):
        lint_workspace(root=tmp_path / "missing")
    with pytest.raises(ConfigError, match="Unknown rule IDs for --disable"):
        lint_workspace(root=corpus, disable_rules=("NOPE",))


def test_non_string_override_severity_raises_config_error(corpus: Path) -> None:
    config_text = "rule_overrides:\n  NAME_FORMAT:\n    max_severity: [low]\n"
    (corpus / "skillint.yaml").write_text(config_text, encoding="utf-8")

    with pytest.raises(ConfigError, match="max_severity must be one of"):
        lint_workspace(root=corpus)
