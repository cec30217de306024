"""SARIF 2.1.0 export writer for lint findings."""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any

from skillint import __version__
from skillint.constants.reporting import (
    SARIF_FINDINGS_FILENAME,
    SARIF_SCHEMA_URI,
    SARIF_SEVERITY_MAP,
    SARIF_TOOL_NAME,
    SARIF_VERSION,
)
from skillint.io import write_text_atomic
from skillint.model import Finding
from skillint.scanner.score import sorted_findings
from skillint.types import Severity


def _build_sarif_result(finding: Finding) -> dict[str, Any]:
    """Map a single Finding to a SARIF result object."""
    physical_location: dict[str, Any] = {"artifactLocation": {"uri": finding.evidence.path}}
    if finding.evidence.line is not None:
        physical_location["region"] = {"startLine": finding.evidence.line}

    properties: dict[str, Any] = {
        "score": finding.score,
        "subject": finding.subject,
        "category": finding.category,
        "recommendation": finding.recommendation,
    }
    if finding.severity_override is not None:
        properties["severity_override"] = finding.severity_override.to_dict()

    return {
        "ruleId": finding.rule_id,
        "level": SARIF_SEVERITY_MAP.get(finding.severity, "note"),
        "message": {"text": finding.description},
        "locations": [{"physicalLocation": physical_location}],
        "partialFingerprints": {"findingId": finding.id},
        "properties": properties,
    }


def _build_sarif_rules(findings: list[Finding]) -> list[dict[str, Any]]:
    """Derive SARIF rule descriptors from observed rule IDs."""
    seen: dict[str, Finding] = {}
    for f in findings:
        seen.setdefault(f.rule_id, f)

    return [
        {
            "id": rule_id,
            "shortDescription": {"text": seen[rule_id].title},
            "properties": {"category": seen[rule_id].category},
        }
        for rule_id in sorted(seen)
    ]


def build_sarif_envelope(
    findings: list[Finding],
    *,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
) -> dict[str, Any]:
    """Build a complete SARIF 2.1.0 document from findings."""
    ordered = sorted_findings(findings)
    if rule_distribution is None:
        counts = Counter(finding.rule_id for finding in ordered)
        rule_distribution = {rule_id: int(count) for rule_id, count in sorted(counts.items())}

    run_properties: dict[str, object] = {"ruleDistribution": rule_distribution}
    if filter_metadata is not None:
        run_properties["filter"] = filter_metadata
    if rule_overrides:
        run_properties["ruleOverrides"] = rule_overrides

    return {
        "$schema": SARIF_SCHEMA_URI,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": SARIF_TOOL_NAME,
                        "version": __version__,
                        "rules": _build_sarif_rules(ordered),
                    },
                },
                "results": [_build_sarif_result(f) for f in ordered],
                "properties": run_properties,
            }
        ],
    }


def write_sarif_findings(
    out_root: Path,
    findings: list[Finding],
    *,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
) -> Path:
    """Write findings.sarif under the output root and return the path."""
    sarif_path = out_root / SARIF_FINDINGS_FILENAME
    envelope = build_sarif_envelope(
        findings,
        rule_distribution=rule_distribution,
        filter_metadata=filter_metadata,
        rule_overrides=rule_overrides,
    )
    write_text_atomic(
        path=sarif_path,
        content=json.dumps(envelope, indent=2) + "\n",
        temp_prefix=".sarif_tmp_",
        temp_suffix=".sarif",
    )
    return sarif_path
