"""End-to-end lint orchestration for skillint.

``lint_workspace`` discovers skills, design docs, and pgpm plans under a
root, runs the selected rules against each, and optionally writes reports.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from skillint.config import SkillintConfig, load_config
from skillint.constants.reporting import VALID_OUTPUT_FORMATS
from skillint.exceptions import ConfigError, DocParseError, PlanParseError, SkillParseError
from skillint.model import Finding, FindingCandidate, LintResult, ParsedDesignDoc, ParsedPlan, SkillPackage
from skillint.parsers import parse_design_doc_file, parse_plan_file, parse_skill_markdown_file
from skillint.reporting.filters import OutputFilters, build_filter_metadata, filter_findings
from skillint.rules import RULE_IDS, CorpusRule, DocRule, PlanRule, Rule, SkillRule, build_rules
from skillint.scanner.discovery import (
    discover_doc_files,
    discover_plan_files,
    discover_skill_files,
    relative_posix,
    skill_archive_path,
)
from skillint.scanner.pipeline.conversion import candidate_to_finding
from skillint.scanner.pipeline.rule_selection import resolve_effective_rule_selection
from skillint.scanner.score import rule_counts, severity_counts, sorted_findings
from skillint.types import Category, RuleOverrideConfig, Severity

logger = logging.getLogger(__name__)


def lint_workspace(
    *,
    root: Path,
    out: Path | None = None,
    config_path: Path | None = None,
    output_formats: tuple[str, ...] = ("json",),
    only_rules: tuple[str, ...] = (),
    disable_rules: tuple[str, ...] = (),
    min_severity: Severity | None = None,
    category: Category | None = None,
) -> LintResult:
    """Lint a corpus root and optionally write findings and summary reports."""
    invalid_formats = set(output_formats) - VALID_OUTPUT_FORMATS
    if invalid_formats:
        raise ConfigError(
            f"Unknown output format(s): {', '.join(sorted(invalid_formats))}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )

    started_at = time.perf_counter()
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Lint root does not exist or is not a directory: {root}")

    if out is not None:
        out = out.resolve()
        try:
            out.mkdir(parents=True, exist_ok=True)
            probe = out / ".skillint_write_probe"
            probe.touch()
            probe.unlink()
        except OSError as exc:
            raise ConfigError(f"Output directory is not writable: {out} ({exc})") from exc

    config = load_config(root, config_path)
    warnings: list[str] = []

    selection = resolve_effective_rule_selection(
        config=config,
        available_rule_ids=RULE_IDS,
        cli_only_rules=only_rules,
        cli_disable_rules=disable_rules,
    )
    for rule_id in selection.unknown_config_rule_ids:
        _warn(warnings, f"Unknown rule ID '{rule_id}' in config has no bundled rule and will be ignored.")
    rules = build_rules(selection.executed_rule_ids)
    logger.debug("Executing %d rules: %s", len(rules), ", ".join(selection.executed_rule_ids))

    skills = _load_skills(root, config)
    docs = _load_docs(root, config, warnings)
    plans = _load_plans(root, config, warnings)
    logger.info("Discovered %d skills, %d docs, %d plans under %s", len(skills), len(docs), len(plans), root)

    findings: list[Finding] = []
    overrides = selection.active_rule_overrides

    for skill in skills:
        subject = skill.directory_name
        for rule in _rules_of(rules, SkillRule):
            findings.extend(_convert(subject, rule.run(skill=skill, config=config), root, overrides))
    for rule in _rules_of(rules, CorpusRule):
        findings.extend(_convert("", rule.run(skills=skills, config=config), root, overrides))
    for doc in docs:
        subject = relative_posix(doc.file_path, root)
        for rule in _rules_of(rules, DocRule):
            findings.extend(_convert(subject, rule.run(doc=doc, config=config), root, overrides))
    for plan in plans:
        subject = plan.project or relative_posix(plan.file_path, root)
        for rule in _rules_of(rules, PlanRule):
            findings.extend(_convert(subject, rule.run(plan=plan, config=config), root, overrides))

    all_findings = sorted_findings(findings)
    serialized_rule_overrides = _serialize_rule_overrides(overrides)

    if out is not None:
        _write_outputs(
            out,
            all_findings,
            output_formats=output_formats,
            filters=OutputFilters(min_severity=min_severity, category=category),
            scanned={"skills": len(skills), "docs": len(docs), "plans": len(plans)},
            rule_overrides=serialized_rule_overrides,
            rules_executed=selection.executed_rule_ids,
            rules_disabled=selection.disabled_rule_ids,
        )

    duration_seconds = time.perf_counter() - started_at
    logger.info("Lint finished with %d findings in %.3fs", len(all_findings), duration_seconds)

    return LintResult(
        scanned_skills=len(skills),
        scanned_docs=len(docs),
        scanned_plans=len(plans),
        total_findings=len(all_findings),
        counts_by_severity=severity_counts(all_findings),
        findings=tuple(all_findings),
        duration_seconds=duration_seconds,
        warnings=tuple(warnings),
        counts_by_rule=rule_counts(all_findings),
        rules_executed=selection.executed_rule_ids,
        rules_disabled=selection.disabled_rule_ids,
        active_rule_overrides=serialized_rule_overrides,
    )


def load_skill_package(skill_file: Path) -> SkillPackage:
    """Parse a SKILL.md into a package; parse failures are kept on the package."""
    directory = skill_file.parent
    archive_path = skill_archive_path(directory)
    try:
        parsed = parse_skill_markdown_file(skill_file)
    except SkillParseError as exc:
        logger.debug("Parse error in %s: %s", skill_file, exc)
        return SkillPackage(directory=directory, skill_file=skill_file, archive_path=archive_path, parse_error=str(exc))
    return SkillPackage(directory=directory, skill_file=skill_file, archive_path=archive_path, parsed=parsed)


def _load_skills(root: Path, config: SkillintConfig) -> list[SkillPackage]:
    skill_files = discover_skill_files(
        root,
        config.skill_globs,
        exclude_dirs=config.exclude_dirs,
        max_file_mb=config.max_file_mb,
    )
    return [load_skill_package(path) for path in skill_files]


def _load_docs(root: Path, config: SkillintConfig, warnings: list[str]) -> list[ParsedDesignDoc]:
    docs: list[ParsedDesignDoc] = []
    doc_files = discover_doc_files(
        root,
        config.doc_globs,
        exclude_dirs=config.exclude_dirs,
        ignore_names=config.doc_ignore_names,
        max_file_mb=config.max_file_mb,
    )
    for path, kind in doc_files:
        try:
            docs.append(parse_design_doc_file(path, kind))
        except DocParseError as exc:
            _warn(warnings, f"Skipping {relative_posix(path, root)}: {exc}")
    return docs


def _load_plans(root: Path, config: SkillintConfig, warnings: list[str]) -> list[ParsedPlan]:
    plans: list[ParsedPlan] = []
    plan_files = discover_plan_files(
        root,
        config.plan_globs,
        exclude_dirs=config.exclude_dirs,
        max_file_mb=config.max_file_mb,
    )
    for path in plan_files:
        try:
            plans.append(parse_plan_file(path))
        except PlanParseError as exc:
            _warn(warnings, f"Skipping {relative_posix(path, root)}: {exc}")
    return plans


def _rules_of(rules: list[Rule], family: type[Rule]) -> list[Any]:
    return [rule for rule in rules if isinstance(rule, family)]


def _convert(
    subject: str,
    candidates: list[FindingCandidate],
    root: Path,
    overrides: dict[str, RuleOverrideConfig],
) -> list[Finding]:
    return [
        candidate_to_finding(
            subject,
            candidate,
            root=root,
            rule_override=overrides.get(candidate.rule_id),
        )
        for candidate in candidates
    ]


def _write_outputs(
    out: Path,
    all_findings: list[Finding],
    *,
    output_formats: tuple[str, ...],
    filters: OutputFilters,
    scanned: dict[str, int],
    rule_overrides: dict[str, dict[str, Severity]],
    rules_executed: tuple[str, ...],
    rules_disabled: tuple[str, ...],
) -> None:
    shown = filter_findings(all_findings, filters)
    filter_metadata = build_filter_metadata(total=len(all_findings), shown=len(shown), filters=filters)

    if "json" in output_formats:
        from skillint.reporting.writer import write_reports

        write_reports(
            out,
            shown,
            all_findings=all_findings,
            scanned=scanned,
            output_filter=filter_metadata,
            rule_overrides=rule_overrides,
            rules_executed=rules_executed,
            rules_disabled=rules_disabled,
        )

    if "csv" in output_formats:
        from skillint.reporting.csv_writer import write_csv_findings

        write_csv_findings(out, shown)

    if "sarif" in output_formats:
        from skillint.reporting.sarif_writer import write_sarif_findings

        write_sarif_findings(
            out,
            shown,
            rule_distribution=rule_counts(all_findings),
            filter_metadata=filter_metadata,
            rule_overrides=rule_overrides,
        )


def _warn(warnings: list[str], message: str) -> None:
    warnings.append(message)
    logger.warning(message)


def _serialize_rule_overrides(
    active_rule_overrides: dict[str, RuleOverrideConfig],
) -> dict[str, dict[str, Severity]]:
    """Render active rule overrides for report metadata."""
    serialized: dict[str, dict[str, Severity]] = {}
    for rule_id, override in sorted(active_rule_overrides.items()):
        values: dict[str, Severity] = {}
        if override.max_severity is not None:
            values["max_severity"] = override.max_severity
        if override.min_severity is not None:
            values["min_severity"] = override.min_severity
        if values:
            serialized[rule_id] = values
    return serialized
