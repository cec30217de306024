"""Tests for pgpm plan rules."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from skillint.config import SkillintConfig
from skillint.model import FindingCandidate
from skillint.parsers import parse_plan_file
from skillint.rules.base import PlanRule
from skillint.rules.plan import (
    PlanDuplicateChangeRule,
    PlanDuplicateTagRule,
    PlanPragmaMissingRule,
    PlanScriptMissingRule,
    PlanSyntaxRule,
    PlanUnknownDependencyRule,
)


def _run(rule: PlanRule, path: Path) -> list[FindingCandidate]:
    return rule.run(plan=parse_plan_file(path), config=SkillintConfig())


def test_clean_plan_passes(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(
        plan_text(["schemas/app", "schemas/app/tables/users [schemas/app]", "@v1.0.0", "helpers [other:core !legacy]"]),
        scripts=("schemas/app", "schemas/app/tables/users", "helpers"),
    )

    for rule in (
        PlanSyntaxRule(),
        PlanPragmaMissingRule(),
        PlanDuplicateChangeRule(),
        PlanDuplicateTagRule(),
        PlanUnknownDependencyRule(),
        PlanScriptMissingRule(),
    ):
        assert _run(rule, path) == []


def test_syntax_errors_reported_per_line(make_plan: Callable[..., Path]) -> None:
    path = make_plan("%project=app\nnot a change\n@bad\n")

    findings = _run(PlanSyntaxRule(), path)

    assert [finding.description for finding in findings] == [
        "Plan line 2: line does not match change syntax.",
        "Plan line 3: malformed tag.",
    ]
    assert findings[0].evidence.line == 2
    assert findings[0].evidence.snippet == "not a change"


def test_missing_pragmas(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["a"], project=None, syntax=False))

    findings = _run(PlanPragmaMissingRule(), path)

    assert [finding.description for finding in findings] == [
        "Plan does not declare `%syntax-version`.",
        "Plan does not declare `%project`.",
    ]


def test_duplicate_change_without_tag(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["a", "b", "a"]))

    findings = _run(PlanDuplicateChangeRule(), path)

    assert len(findings) == 1
    assert findings[0].description == "Change 'a' is declared again without an intervening tag (first at line 4)."
    assert findings[0].evidence.line == 6


def test_rework_after_tag_is_allowed(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["a", "b", "@v1", "a [a@v1]"]))

    assert _run(PlanDuplicateChangeRule(), path) == []
    assert _run(PlanUnknownDependencyRule(), path) == []


def test_duplicate_and_orphan_tags(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["@early", "@earlier", "a", "@v1", "b", "@v1"]))

    findings = _run(PlanDuplicateTagRule(), path)

    assert [finding.description for finding in findings] == [
        "Tag '@v1' already declared at line 7.",
        "Tag '@early' appears before any change.",
        "Tag '@earlier' appears before any change.",
    ]
    assert [finding.evidence.line for finding in findings] == [9, 4, 5]


def test_unknown_dependencies(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["a [later]", "b [b]", "c [@v9]", "d [app:a]", "later"]))

    findings = _run(PlanUnknownDependencyRule(), path)

    assert [finding.description for finding in findings] == [
        "Change 'a' requires 'later', which is not declared above it.",
        "Change 'b' depends on itself.",
        "Change 'c' requires tag '@v9', which is not declared above it.",
    ]
    assert findings[0].evidence.snippet == "a [later]"


def test_missing_scripts_listed_per_change(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["a", "b"]), scripts=("a",))
    (path.parent / "verify" / "a.sql").unlink()

    findings = _run(PlanScriptMissingRule(), path)

    assert [finding.description for finding in findings] == [
        "Change 'a' is missing verify/a.sql.",
        "Change 'b' is missing deploy/b.sql, revert/b.sql, verify/b.sql.",
    ]


def test_plan_outside_module_checkout_is_skipped(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["a", "b"]))

    assert _run(PlanScriptMissingRule(), path) == []


def test_single_script_dir_checks_every_change(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    path = make_plan(plan_text(["a"]), scripts=("a",), script_dirs=("deploy",))

    findings = _run(PlanScriptMissingRule(), path)

    assert [finding.description for finding in findings] == ["Change 'a' is missing revert/a.sql, verify/a.sql."]


def test_empty_plan_needs_no_scripts(make_plan: Callable[..., Path], plan_text: Callable[..., str]) -> None:
    assert _run(PlanScriptMissingRule(), make_plan(plan_text([]))) == []
