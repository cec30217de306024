"""Tests for SKILL.md rules."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest

from skillint.config import SkillintConfig
from skillint.model import FindingCandidate
from skillint.rules.base import SkillRule
from skillint.rules.skill import (
    DescriptionMissingRule,
    DescriptionNoTriggerRule,
    DescriptionTooLongRule,
    DuplicateSkillNameRule,
    FrontmatterMissingRule,
    FrontmatterUnknownKeyRule,
    MetadataInvalidRule,
    NameDirMismatchRule,
    NameFormatRule,
    NameMissingRule,
    NameTooLongRule,
    ReferenceBrokenRule,
    SkillParseErrorRule,
    SkillTooLongRule,
)
from skillint.types import SkillsConfig

DESCRIPTION = "Generate typed hooks. Use when the user asks for codegen."


def _run(rule: SkillRule, skill: Any, config: SkillintConfig | None = None) -> list[FindingCandidate]:
    return rule.run(skill=skill, config=config or SkillintConfig())


def test_well_formed_skill_passes_every_skill_rule(
    make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]
) -> None:
    skill = load_skill(
        make_skill(
            frontmatter={
                "name": "graphql-codegen",
                "description": DESCRIPTION,
                "license": "MIT",
                "metadata": {"author": "dana", "version": "1.2.0"},
            },
            body="# Codegen\n\nRead [the guide](references/guide.md).\n",
            files={"references/guide.md": "# Guide\n"},
        )
    )

    rules: list[SkillRule] = [
        SkillParseErrorRule(),
        FrontmatterMissingRule(),
        NameMissingRule(),
        NameFormatRule(),
        NameTooLongRule(),
        NameDirMismatchRule(),
        DescriptionMissingRule(),
        DescriptionTooLongRule(),
        DescriptionNoTriggerRule(),
        FrontmatterUnknownKeyRule(),
        MetadataInvalidRule(),
        SkillTooLongRule(),
        ReferenceBrokenRule(),
    ]

    assert [candidate for rule in rules for candidate in _run(rule, skill)] == []


def test_parse_error_is_reported_once(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(make_skill(raw="---\nname: broken\n"))

    findings = _run(SkillParseErrorRule(), skill)

    assert len(findings) == 1
    assert "Unterminated frontmatter" in findings[0].description
    assert findings[0].evidence.line == 1
    assert _run(FrontmatterMissingRule(), skill) == []
    assert _run(NameMissingRule(), skill) == []


def test_frontmatter_missing(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(make_skill("plain", raw="# No frontmatter\n"))

    findings = _run(FrontmatterMissingRule(), skill)

    assert len(findings) == 1
    assert findings[0].score == 85
    assert "'plain'" in findings[0].description


def test_name_and_description_missing(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(make_skill(frontmatter={"name": "  ", "description": 42}))

    name = _run(NameMissingRule(), skill)
    description = _run(DescriptionMissingRule(), skill)

    assert len(name) == 1
    assert name[0].evidence.line == 2
    assert "name: graphql-codegen" in name[0].recommendation
    assert len(description) == 1
    assert description[0].evidence.line == 3


def test_name_format_and_directory_mismatch(
    make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]
) -> None:
    skill = load_skill(make_skill("graphql-codegen", frontmatter={"name": "GraphQL_Codegen", "description": DESCRIPTION}))

    format_findings = _run(NameFormatRule(), skill)
    mismatch = _run(NameDirMismatchRule(), skill)

    assert len(format_findings) == 1
    assert "not kebab-case" in format_findings[0].description
    assert len(mismatch) == 1
    assert "differs from directory 'graphql-codegen'" in mismatch[0].description


def test_name_too_long_honours_config(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    name = "a-" * 40 + "z"
    skill = load_skill(make_skill(name, frontmatter={"name": name, "description": DESCRIPTION}))

    assert len(_run(NameTooLongRule(), skill)) == 1
    relaxed = replace(SkillintConfig(), skills=SkillsConfig(name_max_length=200))
    assert _run(NameTooLongRule(), skill, relaxed) == []


def test_description_too_long(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(make_skill(frontmatter={"name": "graphql-codegen", "description": "Use when " + "x" * 1100}))

    findings = _run(DescriptionTooLongRule(), skill)

    assert len(findings) == 1
    assert "the limit is 1024" in findings[0].description


def test_description_without_trigger_phrase(
    make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]
) -> None:
    skill = load_skill(make_skill(frontmatter={"name": "graphql-codegen", "description": "Generates hooks."}))

    assert len(_run(DescriptionNoTriggerRule(), skill)) == 1
    custom = replace(SkillintConfig(), skills=SkillsConfig(trigger_phrases=("generates",)))
    assert _run(DescriptionNoTriggerRule(), skill, custom) == []


def test_trigger_match_is_case_insensitive(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(
        make_skill(frontmatter={"name": "graphql-codegen", "description": "Hooks. USE WHEN asked for codegen."})
    )

    assert _run(DescriptionNoTriggerRule(), skill) == []


def test_unknown_frontmatter_keys_sorted(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(
        make_skill(
            frontmatter={"name": "graphql-codegen", "description": DESCRIPTION, "zeta": 1, "author": "dana"},
        )
    )

    findings = _run(FrontmatterUnknownKeyRule(), skill)

    assert [finding.description for finding in findings] == [
        "Frontmatter key 'author' is not part of the skill format.",
        "Frontmatter key 'zeta' is not part of the skill format.",
    ]
    assert findings[0].evidence.line == 5


def test_metadata_shape_problems(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(
        make_skill(
            frontmatter={
                "name": "graphql-codegen",
                "description": DESCRIPTION,
                "metadata": {"author": ["a"], "version": "v1"},
                "license": 3,
                "compatibility": "c" * 501,
            },
        )
    )

    descriptions = [finding.description for finding in _run(MetadataInvalidRule(), skill)]

    assert "`metadata.author` must be a string." in descriptions
    assert "`metadata.version` 'v1' is not a semantic version." in descriptions
    assert "`license` must be a string." in descriptions
    assert any(description.startswith("`compatibility` is 501 characters") for description in descriptions)


def test_metadata_must_be_mapping(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    skill = load_skill(
        make_skill(frontmatter={"name": "graphql-codegen", "description": DESCRIPTION, "metadata": "dana"})
    )

    findings = _run(MetadataInvalidRule(), skill)

    assert [finding.description for finding in findings] == ["`metadata` must be a mapping."]


def test_skill_too_long_at_limit(make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]) -> None:
    body = "\n".join(f"line {index}" for index in range(600)) + "\n"
    skill = load_skill(make_skill(body=body))

    findings = _run(SkillTooLongRule(), skill)

    assert len(findings) == 1
    assert findings[0].evidence.line == 500
    short = replace(SkillintConfig(), skills=SkillsConfig(max_lines=1000))
    assert _run(SkillTooLongRule(), skill, short) == []


@pytest.mark.parametrize(("line_count", "expected"), [(499, 0), (500, 1)])
def test_skill_too_long_boundary(
    make_skill: Callable[..., Path], load_skill: Callable[[Path], Any], line_count: int, expected: int
) -> None:
    header = f"---\nname: graphql-codegen\ndescription: {DESCRIPTION}\n---\n"
    raw = header + "line\n" * (line_count - 4)
    skill = load_skill(make_skill(raw=raw))

    assert skill.parsed.line_count == line_count
    assert len(_run(SkillTooLongRule(), skill)) == expected


def test_reference_broken_for_missing_and_escaping_links(
    make_skill: Callable[..., Path], load_skill: Callable[[Path], Any], corpus_root: Path
) -> None:
    (corpus_root / "skills" / "shared.md").parent.mkdir(parents=True, exist_ok=True)
    (corpus_root / "skills" / "shared.md").write_text("shared\n", encoding="utf-8")
    body = (
        "# Skill\n"
        "[missing](references/missing.md)\n"
        "[again](references/missing.md)\n"
        "[outside](../shared.md)\n"
        "[ok](references/ok.md)\n"
        "[absolute](/etc/hosts)\n"
    )
    skill = load_skill(make_skill(body=body, files={"references/ok.md": "ok\n"}))

    findings = _run(ReferenceBrokenRule(), skill)

    assert [finding.description for finding in findings] == [
        "Link target 'references/missing.md' does not exist.",
        "Link target 'references/missing.md' does not exist.",
        "Link target '../shared.md' is outside the skill directory and will not be packaged.",
    ]
    assert [finding.evidence.line for finding in findings] == [6, 7, 8]


def test_duplicate_skill_names_attribute_each_member(
    make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]
) -> None:
    first = load_skill(make_skill("alpha", frontmatter={"name": "shared-name", "description": DESCRIPTION}))
    second = load_skill(make_skill("beta", frontmatter={"name": "shared-name", "description": DESCRIPTION}))
    third = load_skill(make_skill("gamma"))

    findings = DuplicateSkillNameRule().run(skills=[first, second, third], config=SkillintConfig())

    assert [finding.subject for finding in findings] == ["alpha", "beta"]
    expected = "Skill name 'shared-name' is declared by 2 skills (alpha, beta)."
    assert [finding.description for finding in findings] == [expected, expected]
    assert [finding.evidence.line for finding in findings] == [2, 2]


def test_names_that_differ_only_after_normalization_are_distinct(
    make_skill: Callable[..., Path], load_skill: Callable[[Path], Any]
) -> None:
    first = load_skill(make_skill("alpha", frontmatter={"name": "My Skill", "description": DESCRIPTION}))
    second = load_skill(make_skill("beta", frontmatter={"name": "my-skill", "description": DESCRIPTION}))

    assert DuplicateSkillNameRule().run(skills=[first, second], config=SkillintConfig()) == []
