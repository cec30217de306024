"""SKILL.md frontmatter, size, and reference rules."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from skillint.config import SkillintConfig
from skillint.constants.config import SKILL_COMPATIBILITY_MAX_LENGTH
from skillint.constants.rules import (
    CATEGORY_SKILL,
    DESCRIPTION_MISSING_SCORE,
    DESCRIPTION_NO_TRIGGER_SCORE,
    DESCRIPTION_TOO_LONG_SCORE,
    DUPLICATE_SKILL_NAME_SCORE,
    FRONTMATTER_MISSING_SCORE,
    FRONTMATTER_UNKNOWN_KEY_SCORE,
    METADATA_INVALID_SCORE,
    NAME_DIR_MISMATCH_SCORE,
    NAME_FORMAT_SCORE,
    NAME_MISSING_SCORE,
    NAME_TOO_LONG_SCORE,
    REFERENCE_BROKEN_SCORE,
    SEMVER_PATTERN_TEXT,
    SKILL_PARSE_ERROR_SCORE,
    SKILL_TOO_LONG_SCORE,
)
from skillint.model import FindingCandidate, ParsedSkillDocument, SkillPackage
from skillint.rules.base import CorpusRule, SkillRule
from skillint.rules.common import (
    dedupe_candidates,
    frontmatter_evidence,
    is_within,
    link_evidence,
    resolve_link,
    skill_evidence,
)
from skillint.utils import is_kebab_case

_SEMVER_PATTERN: re.Pattern[str] = re.compile(SEMVER_PATTERN_TEXT)


def _frontmatter(skill: SkillPackage) -> tuple[ParsedSkillDocument, dict[str, Any]] | None:
    """Return the parsed document and its frontmatter when both exist."""
    if skill.parsed is None or skill.parsed.frontmatter is None:
        return None
    return skill.parsed, skill.parsed.frontmatter


def _string_field(frontmatter: dict[str, Any], key: str) -> str | None:
    value = frontmatter.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class SkillParseErrorRule(SkillRule):
    """Report SKILL.md files that could not be read or parsed."""

    rule_id = "SKILL_PARSE_ERROR"
    category = CATEGORY_SKILL
    title = "SKILL.md could not be parsed"
    default_score = SKILL_PARSE_ERROR_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if skill.parse_error is None:
            return []
        return [
            self.candidate(
                description=skill.parse_error,
                evidence=skill_evidence(skill, line=1),
                recommendation="Fix the YAML frontmatter so it is a mapping closed by a `---` line.",
            )
        ]


class FrontmatterMissingRule(SkillRule):
    """Require a YAML frontmatter block at the top of SKILL.md."""

    rule_id = "FRONTMATTER_MISSING"
    category = CATEGORY_SKILL
    title = "SKILL.md has no frontmatter"
    default_score = FRONTMATTER_MISSING_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if skill.parsed is None or skill.parsed.frontmatter is not None:
            return []
        return [
            self.candidate(
                description=f"Skill '{skill.directory_name}' has no YAML frontmatter block.",
                evidence=skill_evidence(skill, line=1),
                recommendation="Start SKILL.md with a `---` block declaring at least `name` and `description`.",
            )
        ]


class NameMissingRule(SkillRule):
    """Require a non-empty string ``name``."""

    rule_id = "NAME_MISSING"
    category = CATEGORY_SKILL
    title = "Skill name missing"
    default_score = NAME_MISSING_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        if _string_field(frontmatter, "name") is not None:
            return []
        return [
            self.candidate(
                description="Frontmatter `name` is missing or is not a non-empty string.",
                evidence=frontmatter_evidence(parsed, "name"),
                recommendation=f"Add `name: {skill.directory_name}` to the frontmatter.",
            )
        ]


class NameFormatRule(SkillRule):
    """Require kebab-case skill names."""

    rule_id = "NAME_FORMAT"
    category = CATEGORY_SKILL
    title = "Skill name is not kebab-case"
    default_score = NAME_FORMAT_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        name = _string_field(frontmatter, "name")
        if name is None or is_kebab_case(name):
            return []
        return [
            self.candidate(
                description=f"Skill name '{name}' is not kebab-case.",
                evidence=frontmatter_evidence(parsed, "name"),
                recommendation="Use lowercase letters, digits, and single hyphens (for example `my-skill`).",
            )
        ]


class NameTooLongRule(SkillRule):
    """Cap skill name length."""

    rule_id = "NAME_TOO_LONG"
    category = CATEGORY_SKILL
    title = "Skill name too long"
    default_score = NAME_TOO_LONG_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        name = _string_field(frontmatter, "name")
        limit = config.skills.name_max_length
        if name is None or len(name) <= limit:
            return []
        return [
            self.candidate(
                description=f"Skill name is {len(name)} characters; the limit is {limit}.",
                evidence=frontmatter_evidence(parsed, "name"),
                recommendation=f"Shorten the name to at most {limit} characters and rename the directory to match.",
            )
        ]


class NameDirMismatchRule(SkillRule):
    """Require the declared name to equal the skill directory name."""

    rule_id = "NAME_DIR_MISMATCH"
    category = CATEGORY_SKILL
    title = "Skill name does not match directory"
    default_score = NAME_DIR_MISMATCH_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        name = _string_field(frontmatter, "name")
        if name is None or name == skill.directory_name:
            return []
        return [
            self.candidate(
                description=f"Frontmatter name '{name}' differs from directory '{skill.directory_name}'.",
                evidence=frontmatter_evidence(parsed, "name"),
                recommendation="Rename the directory or the `name` field so they are identical.",
            )
        ]


class DescriptionMissingRule(SkillRule):
    """Require a non-empty string ``description``."""

    rule_id = "DESCRIPTION_MISSING"
    category = CATEGORY_SKILL
    title = "Skill description missing"
    default_score = DESCRIPTION_MISSING_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        if _string_field(frontmatter, "description") is not None:
            return []
        return [
            self.candidate(
                description="Frontmatter `description` is missing or is not a non-empty string.",
                evidence=frontmatter_evidence(parsed, "description"),
                recommendation="Describe what the skill does and when an agent should load it.",
            )
        ]


class DescriptionTooLongRule(SkillRule):
    """Cap description length."""

    rule_id = "DESCRIPTION_TOO_LONG"
    category = CATEGORY_SKILL
    title = "Skill description too long"
    default_score = DESCRIPTION_TOO_LONG_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        description = _string_field(frontmatter, "description")
        limit = config.skills.description_max_length
        if description is None or len(description) <= limit:
            return []
        return [
            self.candidate(
                description=f"Description is {len(description)} characters; the limit is {limit}.",
                evidence=frontmatter_evidence(parsed, "description"),
                recommendation="Move detail into the SKILL.md body and keep the description to triggers and scope.",
            )
        ]


class DescriptionNoTriggerRule(SkillRule):
    """Descriptions should tell the agent when to load the skill."""

    rule_id = "DESCRIPTION_NO_TRIGGER"
    category = CATEGORY_SKILL
    title = "Description has no trigger phrase"
    default_score = DESCRIPTION_NO_TRIGGER_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        description = _string_field(frontmatter, "description")
        if description is None:
            return []
        lowered = description.lower()
        phrases = config.skills.trigger_phrases
        if not phrases or any(phrase in lowered for phrase in phrases):
            return []
        return [
            self.candidate(
                description="Description does not say when the skill should be used.",
                evidence=frontmatter_evidence(parsed, "description"),
                recommendation=f"Add a trigger sentence, for example \"Use when ...\" (known phrases: {', '.join(phrases)}).",
            )
        ]


class FrontmatterUnknownKeyRule(SkillRule):
    """Flag frontmatter keys outside the packaging convention."""

    rule_id = "FRONTMATTER_UNKNOWN_KEY"
    category = CATEGORY_SKILL
    title = "Unknown frontmatter key"
    default_score = FRONTMATTER_UNKNOWN_KEY_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        allowed = set(config.skills.allowed_frontmatter_keys)
        findings: list[FindingCandidate] = []
        for key in sorted(map(str, frontmatter)):
            if key in allowed:
                continue
            findings.append(
                self.candidate(
                    description=f"Frontmatter key '{key}' is not part of the skill format.",
                    evidence=frontmatter_evidence(parsed, key),
                    recommendation="Move custom data under `metadata` or remove the key.",
                )
            )
        return findings


class MetadataInvalidRule(SkillRule):
    """Validate optional ``metadata``, ``compatibility``, and ``license`` shapes."""

    rule_id = "METADATA_INVALID"
    category = CATEGORY_SKILL
    title = "Invalid optional frontmatter field"
    default_score = METADATA_INVALID_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        resolved = _frontmatter(skill)
        if resolved is None:
            return []
        parsed, frontmatter = resolved
        problems: list[tuple[str, str]] = []

        if "metadata" in frontmatter:
            metadata = frontmatter["metadata"]
            if not isinstance(metadata, dict):
                problems.append(("metadata", "`metadata` must be a mapping."))
            else:
                for key in ("author", "version"):
                    if key in metadata and not isinstance(metadata[key], str):
                        problems.append(("metadata", f"`metadata.{key}` must be a string."))
                version = metadata.get("version")
                if isinstance(version, str) and not _SEMVER_PATTERN.match(version.strip()):
                    problems.append(("metadata", f"`metadata.version` '{version}' is not a semantic version."))

        for key in ("compatibility", "license"):
            if key in frontmatter and not isinstance(frontmatter[key], str):
                problems.append((key, f"`{key}` must be a string."))

        compatibility = frontmatter.get("compatibility")
        if isinstance(compatibility, str) and len(compatibility) > SKILL_COMPATIBILITY_MAX_LENGTH:
            problems.append(
                (
                    "compatibility",
                    f"`compatibility` is {len(compatibility)} characters; the limit is {SKILL_COMPATIBILITY_MAX_LENGTH}.",
                )
            )

        return [
            self.candidate(
                description=message,
                evidence=frontmatter_evidence(parsed, key),
                recommendation="Use `metadata: {author: <name>, version: <x.y.z>}` and plain strings elsewhere.",
            )
            for key, message in problems
        ]


class SkillTooLongRule(SkillRule):
    """Keep SKILL.md under the line budget."""

    rule_id = "SKILL_TOO_LONG"
    category = CATEGORY_SKILL
    title = "SKILL.md too long"
    default_score = SKILL_TOO_LONG_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if skill.parsed is None:
            return []
        limit = config.skills.max_lines
        if skill.parsed.line_count < limit:
            return []
        return [
            self.candidate(
                description=f"SKILL.md has {skill.parsed.line_count} lines; it must stay under {limit}.",
                evidence=skill_evidence(skill, line=limit),
                recommendation="Split detail into reference files under the skill directory and link to them.",
            )
        ]


class ReferenceBrokenRule(SkillRule):
    """Relative links in SKILL.md must resolve inside the skill directory."""

    rule_id = "REFERENCE_BROKEN"
    category = CATEGORY_SKILL
    title = "Broken reference link"
    default_score = REFERENCE_BROKEN_SCORE

    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        if skill.parsed is None:
            return []
        findings: list[FindingCandidate] = []
        for link in skill.parsed.links:
            resolved = resolve_link(skill.directory, link)
            if resolved is None:
                continue
            if not resolved.exists():
                description = f"Link target '{link.target}' does not exist."
            elif not is_within(resolved, skill.directory):
                description = f"Link target '{link.target}' is outside the skill directory and will not be packaged."
            else:
                continue
            findings.append(
                self.candidate(
                    description=description,
                    evidence=link_evidence(skill.skill_file, link),
                    recommendation="Point the link at a file inside the skill directory, such as `references/<topic>.md`.",
                )
            )
        return dedupe_candidates(findings)


class DuplicateSkillNameRule(CorpusRule):
    """Declared skill names must be unique across the corpus."""

    rule_id = "DUPLICATE_SKILL_NAME"
    category = CATEGORY_SKILL
    title = "Duplicate skill name"
    default_score = DUPLICATE_SKILL_NAME_SCORE

    def run(self, *, skills: Sequence[SkillPackage], config: SkillintConfig) -> list[FindingCandidate]:
        groups: dict[str, list[tuple[SkillPackage, ParsedSkillDocument]]] = {}
        for skill in skills:
            declared = skill.declared_name
            if declared is None or skill.parsed is None:
                continue
            groups.setdefault(declared, []).append((skill, skill.parsed))

        findings: list[FindingCandidate] = []
        for name, members in sorted(groups.items()):
            if len(members) < 2:
                continue
            locations = ", ".join(member.directory_name for member, _ in members)
            for member, parsed in members:
                findings.append(
                    self.candidate(
                        description=f"Skill name '{name}' is declared by {len(members)} skills ({locations}).",
                        evidence=frontmatter_evidence(parsed, "name"),
                        recommendation="Give every skill a unique name that matches its directory.",
                        subject=member.directory_name,
                    )
                )
        return findings
