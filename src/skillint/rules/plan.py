"""Rules for pgpm ``.plan`` files."""

from __future__ import annotations

from skillint.config import SkillintConfig
from skillint.constants.plan import PLAN_SCRIPT_DIRS, PLAN_SCRIPT_SUFFIX, REQUIRED_PRAGMAS
from skillint.constants.rules import (
    CATEGORY_PLAN,
    PLAN_DUPLICATE_CHANGE_SCORE,
    PLAN_DUPLICATE_TAG_SCORE,
    PLAN_PRAGMA_MISSING_SCORE,
    PLAN_SCRIPT_MISSING_SCORE,
    PLAN_SYNTAX_SCORE,
    PLAN_UNKNOWN_DEPENDENCY_SCORE,
)
from skillint.model import Evidence, FindingCandidate, ParsedPlan, PlanChange
from skillint.rules.base import PlanRule
from skillint.rules.common import line_text


def _plan_evidence(plan: ParsedPlan, line: int | None, snippet: str = "") -> Evidence:
    return Evidence(path=str(plan.file_path), line=line, snippet=snippet)


def _change_evidence(plan: ParsedPlan, change: PlanChange) -> Evidence:
    snippet = f"{change.name} [{' '.join(dep.raw for dep in change.dependencies)}]" if change.dependencies else change.name
    return _plan_evidence(plan, change.line, snippet)


class PlanSyntaxRule(PlanRule):
    """Every non-comment plan line is a pragma, change, or tag."""

    rule_id = "PLAN_SYNTAX"
    category = CATEGORY_PLAN
    title = "Malformed plan line"
    default_score = PLAN_SYNTAX_SCORE

    def run(self, *, plan: ParsedPlan, config: SkillintConfig) -> list[FindingCandidate]:
        return [
            self.candidate(
                description=f"Plan line {error.line}: {error.message}.",
                evidence=_plan_evidence(plan, error.line, line_text(error.text, 1)),
                recommendation=(
                    "Use `name [deps] YYYY-MM-DDTHH:MM:SSZ Planner <email> # note`, "
                    "or regenerate the entry with `pgpm add`."
                ),
            )
            for error in plan.errors
        ]


class PlanPragmaMissingRule(PlanRule):
    """Plans declare ``%syntax-version`` and ``%project``."""

    rule_id = "PLAN_PRAGMA_MISSING"
    category = CATEGORY_PLAN
    title = "Plan pragma missing"
    default_score = PLAN_PRAGMA_MISSING_SCORE

    def run(self, *, plan: ParsedPlan, config: SkillintConfig) -> list[FindingCandidate]:
        return [
            self.candidate(
                description=f"Plan does not declare `%{pragma}`.",
                evidence=_plan_evidence(plan, 1),
                recommendation=f"Add `%{pragma}=<value>` to the top of the plan.",
            )
            for pragma in REQUIRED_PRAGMAS
            if pragma not in plan.pragmas
        ]


class PlanDuplicateChangeRule(PlanRule):
    """Change names are unique unless reworked after a tag."""

    rule_id = "PLAN_DUPLICATE_CHANGE"
    category = CATEGORY_PLAN
    title = "Duplicate plan change"
    default_score = PLAN_DUPLICATE_CHANGE_SCORE

    def run(self, *, plan: ParsedPlan, config: SkillintConfig) -> list[FindingCandidate]:
        findings: list[FindingCandidate] = []
        last_seen: dict[str, int] = {}
        tagged_positions = {position for position, change in enumerate(plan.changes) if change.tags}

        for position, change in enumerate(plan.changes):
            previous = last_seen.get(change.name)
            last_seen[change.name] = position
            if previous is None:
                continue
            # A rework is legal once a tag separates the two declarations.
            if any(previous <= tagged < position for tagged in tagged_positions):
                continue
            findings.append(
                self.candidate(
                    description=(
                        f"Change '{change.name}' is declared again without an intervening tag "
                        f"(first at line {plan.changes[previous].line})."
                    ),
                    evidence=_change_evidence(plan, change),
                    recommendation="Rename the change, or tag the plan before reworking it.",
                )
            )
        return findings


class PlanDuplicateTagRule(PlanRule):
    """Tag names are unique."""

    rule_id = "PLAN_DUPLICATE_TAG"
    category = CATEGORY_PLAN
    title = "Duplicate plan tag"
    default_score = PLAN_DUPLICATE_TAG_SCORE

    def run(self, *, plan: ParsedPlan, config: SkillintConfig) -> list[FindingCandidate]:
        findings: list[FindingCandidate] = []
        first_line: dict[str, int] = {}
        for tag in plan.tags:
            if tag.name not in first_line:
                first_line[tag.name] = tag.line
                continue
            findings.append(
                self.candidate(
                    description=f"Tag '@{tag.name}' already declared at line {first_line[tag.name]}.",
                    evidence=_plan_evidence(plan, tag.line, f"@{tag.name}"),
                    recommendation="Use a new tag name for each release.",
                )
            )
        for orphan in (tag for tag in plan.tags if tag.change is None):
            findings.append(
                self.candidate(
                    description=f"Tag '@{orphan.name}' appears before any change.",
                    evidence=_plan_evidence(plan, orphan.line, f"@{orphan.name}"),
                    recommendation="Move the tag below the change it marks.",
                )
            )
        return findings


class PlanUnknownDependencyRule(PlanRule):
    """In-project dependencies refer to changes declared earlier in the plan."""

    rule_id = "PLAN_UNKNOWN_DEPENDENCY"
    category = CATEGORY_PLAN
    title = "Unknown plan dependency"
    default_score = PLAN_UNKNOWN_DEPENDENCY_SCORE

    def run(self, *, plan: ParsedPlan, config: SkillintConfig) -> list[FindingCandidate]:
        findings: list[FindingCandidate] = []
        declared: set[str] = set()
        declared_tags: set[str] = set()

        for change in plan.changes:
            for dependency in change.dependencies:
                if dependency.conflict:
                    continue
                if dependency.project is not None and dependency.project != plan.project:
                    continue
                problem: str | None = None
                if dependency.change == change.name and dependency.tag is None:
                    problem = f"Change '{change.name}' depends on itself."
                elif dependency.change and dependency.change not in declared:
                    problem = f"Change '{change.name}' requires '{dependency.change}', which is not declared above it."
                elif dependency.tag is not None and dependency.tag not in declared_tags:
                    problem = f"Change '{change.name}' requires tag '@{dependency.tag}', which is not declared above it."
                if problem is None:
                    continue
                findings.append(
                    self.candidate(
                        description=problem,
                        evidence=_change_evidence(plan, change),
                        recommendation="Declare the dependency earlier in the plan or fix its name.",
                    )
                )
            declared.add(change.name)
            declared_tags.update(change.tags)
        return findings


class PlanScriptMissingRule(PlanRule):
    """Each change has deploy, revert, and verify SQL scripts."""

    rule_id = "PLAN_SCRIPT_MISSING"
    category = CATEGORY_PLAN
    title = "Change script missing"
    default_score = PLAN_SCRIPT_MISSING_SCORE

    def run(self, *, plan: ParsedPlan, config: SkillintConfig) -> list[FindingCandidate]:
        if not plan.changes:
            return []
        module_dir = plan.file_path.parent
        script_dirs = [module_dir / name for name in PLAN_SCRIPT_DIRS]
        # Without any script directory the plan is not a pgpm module checkout.
        if not any(directory.is_dir() for directory in script_dirs):
            return []

        findings: list[FindingCandidate] = []
        seen: set[str] = set()
        for change in plan.changes:
            if change.name in seen:
                continue
            seen.add(change.name)
            missing = [
                f"{directory.name}/{change.name}{PLAN_SCRIPT_SUFFIX}"
                for directory in script_dirs
                if not (directory / f"{change.name}{PLAN_SCRIPT_SUFFIX}").is_file()
            ]
            if not missing:
                continue
            findings.append(
                self.candidate(
                    description=f"Change '{change.name}' is missing {', '.join(missing)}.",
                    evidence=_change_evidence(plan, change),
                    recommendation="Add the missing scripts or remove the change from the plan.",
                )
            )
        return findings
