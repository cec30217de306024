"""Tests for pgpm plan parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillint.exceptions import PlanParseError
from skillint.parsers import parse_plan_file, parse_plan_text
from skillint.parsers.plan import parse_dependencies

PLAN = """%syntax-version=1.0.0
%project=app
%uri=https://example.com/app

# schema first
schemas/app 2024-01-01T00:00:00Z Dana Ops <dana@example.com> # Add schema
schemas/app/tables/users [schemas/app] 2024-01-02T00:00:00Z Dana Ops <dana@example.com> # Add users
@v1.0.0 2024-01-03T00:00:00Z Dana Ops <dana@example.com> # First release
schemas/app/tables/posts [schemas/app/tables/users @v1.0.0] 2024-01-04T00:00:00Z Lee <lee@example.com>
"""


def test_parses_pragmas_changes_and_tags() -> None:
    plan = parse_plan_text(PLAN, Path("pgpm.plan"))

    assert plan.project == "app"
    assert plan.pragmas["syntax-version"] == "1.0.0"
    assert plan.pragma_lines == {"syntax-version": 1, "project": 2, "uri": 3}
    assert [change.name for change in plan.changes] == [
        "schemas/app",
        "schemas/app/tables/users",
        "schemas/app/tables/posts",
    ]
    users = plan.changes[1]
    assert users.line == 7
    assert users.planner_name == "Dana Ops"
    assert users.planner_email == "dana@example.com"
    assert users.note == "Add users"
    assert users.tags == ("v1.0.0",)
    assert plan.changes[2].note == ""
    assert [dep.raw for dep in plan.changes[2].dependencies] == ["schemas/app/tables/users", "@v1.0.0"]

    assert len(plan.tags) == 1
    assert plan.tags[0].name == "v1.0.0"
    assert plan.tags[0].change == "schemas/app/tables/users"
    assert plan.errors == ()


def test_malformed_lines_are_collected_not_raised() -> None:
    text = "%project\nbroken-change\n@tag-without-stamp\ngood 2024-01-01T00:00:00Z A <a@b.c>\n"

    plan = parse_plan_text(text, Path("pgpm.plan"))

    assert [(error.line, error.message) for error in plan.errors] == [
        (1, "malformed pragma"),
        (2, "line does not match change syntax"),
        (3, "malformed tag"),
    ]
    assert [change.name for change in plan.changes] == ["good"]


def test_tag_before_any_change_has_no_owner() -> None:
    plan = parse_plan_text("@v0 2024-01-01T00:00:00Z A <a@b.c>\n", Path("pgpm.plan"))

    assert plan.tags[0].change is None
    assert plan.changes == ()


def test_parse_dependencies_handles_tags_projects_and_conflicts() -> None:
    deps = parse_dependencies("a b@v1 other:c !d @v2")

    assert [(dep.change, dep.project, dep.tag, dep.conflict) for dep in deps] == [
        ("a", None, None, False),
        ("b", None, "v1", False),
        ("c", "other", None, False),
        ("d", None, None, True),
        ("", None, "v2", False),
    ]


def test_to_dict_is_json_friendly() -> None:
    payload = parse_plan_text(PLAN, Path("pgpm.plan")).to_dict()

    assert payload["pragmas"]["project"] == "app"
    assert payload["changes"][1]["dependencies"] == ["schemas/app"]
    assert payload["changes"][1]["planner"] == {"name": "Dana Ops", "email": "dana@example.com"}
    assert payload["errors"] == []


def test_missing_plan_file_raises(tmp_path: Path) -> None:
    with pytest.raises(PlanParseError, match="Cannot read"):
        parse_plan_file(tmp_path / "pgpm.plan")
