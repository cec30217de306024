"""Output writers for findings and summary JSON artifacts."""

from __future__ import annotations

from pathlib import Path

from skillint.constants.reporting import (
    FINDINGS_FILENAME,
    REPORT_TEMP_PREFIX,
    REPORT_TEMP_SUFFIX,
    SCHEMA_VERSION,
    SUMMARY_FILENAME,
)
from skillint.io import write_json_atomic
from skillint.model import Finding, Summary
from skillint.scanner.score import category_counts, rule_counts, severity_counts, sorted_findings, sorted_top_findings
from skillint.types import Severity


def write_reports(
    out_root: Path,
    findings: list[Finding],
    *,
    all_findings: list[Finding] | None = None,
    scanned: dict[str, int] | None = None,
    output_filter: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
    rules_executed: tuple[str, ...] | None = None,
    rules_disabled: tuple[str, ...] | None = None,
) -> Summary:
    """Write ``findings.json`` and ``summary.json`` under *out_root* and return the summary."""
    out_root.mkdir(parents=True, exist_ok=True)

    ordered = sorted_findings(findings)
    write_json_atomic(
        path=out_root / FINDINGS_FILENAME,
        payload=[finding.to_dict() for finding in ordered],
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )

    summary = build_summary(
        ordered,
        all_findings=all_findings,
        scanned=scanned,
        output_filter=output_filter,
        rule_overrides=rule_overrides,
        rules_executed=rules_executed,
        rules_disabled=rules_disabled,
    )
    write_json_atomic(
        path=out_root / SUMMARY_FILENAME,
        payload=summary.to_dict(),
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )
    return summary


def build_summary(
    findings: list[Finding],
    *,
    all_findings: list[Finding] | None = None,
    scanned: dict[str, int] | None = None,
    output_filter: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
    rules_executed: tuple[str, ...] | None = None,
    rules_disabled: tuple[str, ...] | None = None,
) -> Summary:
    """Build a deterministic run summary.

    Counts always come from *all_findings* when given, so output filters only
    change ``shown_finding_count``.
    """
    source_findings = all_findings if all_findings is not None else findings

    top_findings = [
        {
            "id": finding.id,
            "rule_id": finding.rule_id,
            "subject": finding.subject,
            "title": finding.title,
            "severity": finding.severity,
            "score": finding.score,
            "evidence": finding.evidence.to_dict(),
        }
        for finding in sorted_top_findings(source_findings)
    ]

    return Summary(
        schema_version=SCHEMA_VERSION,
        finding_count=len(source_findings),
        counts_by_severity=severity_counts(source_findings),
        counts_by_category=category_counts(source_findings),
        counts_by_rule=rule_counts(source_findings),
        top_findings=tuple(top_findings),
        scanned=dict(scanned or {}),
        shown_finding_count=(len(findings) if all_findings is not None else None),
        output_filter=output_filter,
        rule_overrides=rule_overrides,
        rules_executed=rules_executed,
        rules_disabled=rules_disabled,
    )
