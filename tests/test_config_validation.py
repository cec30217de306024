"""Tests for collect-all config validation and preflight checks."""

from __future__ import annotations

from pathlib import Path

from skillint.config import suggest_key, validate_config_file
from skillint.exceptions.validation import ValidationError, format_errors, sort_errors
from skillint.validation import preflight_validate


def _write_config(root: Path, text: str) -> Path:
    path = root / "skillint.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def _codes(errors: list[ValidationError]) -> list[str]:
    return [error.code for error in errors]


def test_valid_config_has_no_errors(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "skill_globs: ['**/SKILL.md']\nrules:\n  disabled: [PLAN_SYNTAX]\nskills:\n  require_archive: true\n",
    )

    assert validate_config_file(tmp_path) == []


def test_missing_default_config_is_fine_but_explicit_is_not(tmp_path: Path) -> None:
    assert validate_config_file(tmp_path) == []

    errors = validate_config_file(tmp_path, tmp_path / "custom.yaml", config_explicit=True)

    assert _codes(errors) == ["CFG001"]


def test_yaml_and_shape_errors(tmp_path: Path) -> None:
    _write_config(tmp_path, "rules: [unclosed\n")
    assert _codes(validate_config_file(tmp_path)) == ["CFG002"]

    _write_config(tmp_path, "- a\n")
    assert _codes(validate_config_file(tmp_path)) == ["CFG003"]


def test_unknown_keys_get_suggestions(tmp_path: Path) -> None:
    _write_config(tmp_path, "skill_glob: ['**/SKILL.md']\nskills:\n  max_line: 10\n")

    errors = validate_config_file(tmp_path)

    assert [(error.code, error.field, error.hint) for error in errors] == [
        ("CFG004", "skill_glob", "did you mean `skill_globs`?"),
        ("CFG004", "skills.max_line", "did you mean `max_lines`?"),
    ]


def test_collects_every_problem(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
max_file_mb: 0
doc_globs: docs/*.md
rules:
  enabled: [A]
  disabled: [A]
skills:
  max_lines: nope
  require_archive: 1
docs: []
rule_overrides:
  ARCHIVE_STALE:
    max_severity: low
    min_severity: high
  NAME_FORMAT:
    max_severity: critical
  PLAN_SYNTAX: low
""",
    )

    errors = sort_errors(validate_config_file(tmp_path))

    assert [(error.code, error.field) for error in errors] == [
        ("CFG005", "doc_globs"),
        ("CFG005", "skills.max_lines"),
        ("CFG005", "skills.require_archive"),
        ("CFG006", "rule_overrides.NAME_FORMAT.max_severity"),
        ("CFG007", "max_file_mb"),
        ("CFG008", "rule_overrides.ARCHIVE_STALE"),
        ("CFG008", "rules"),
        ("CFG009", "docs"),
        ("CFG009", "rule_overrides.PLAN_SYNTAX"),
    ]


def test_empty_decision_statuses_out_of_range(tmp_path: Path) -> None:
    _write_config(tmp_path, "docs:\n  decision_statuses: []\n")

    assert _codes(validate_config_file(tmp_path)) == ["CFG007"]


def test_preflight_reports_missing_root(tmp_path: Path) -> None:
    errors = preflight_validate(tmp_path / "missing")

    assert _codes(errors) == ["CFG010"]


def test_preflight_marks_explicit_config(tmp_path: Path) -> None:
    assert _codes(preflight_validate(tmp_path, tmp_path / "absent.yaml")) == ["CFG001"]


def test_format_errors_counts() -> None:
    error = ValidationError(code="CFG004", path="skillint.yaml", field="skill_glob", message="unknown key", hint="h")

    assert error.format() == "[CFG004] skillint.yaml (skill_glob): unknown key (h)"
    assert format_errors([error]).splitlines()[-1] == "1 configuration error found."
    assert format_errors([error, error]).splitlines()[-1] == "2 configuration errors found."


def test_suggest_key_without_close_match() -> None:
    assert suggest_key("zzz", frozenset({"rules", "skills"})) == ""
