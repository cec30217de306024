"""Scoring utilities for findings and summaries."""

from __future__ import annotations

from collections import Counter

from skillint.constants.scoring import (
    HIGH_SEVERITY_MIN_SCORE,
    MEDIUM_SEVERITY_MIN_SCORE,
    TOP_FINDINGS_DEFAULT_LIMIT,
)
from skillint.model import Finding
from skillint.types import Severity


def severity_from_score(score: int) -> Severity:
    """Map a 0-100 score to a severity label using fixed thresholds."""
    if score >= HIGH_SEVERITY_MIN_SCORE:
        return "high"
    if score >= MEDIUM_SEVERITY_MIN_SCORE:
        return "medium"
    return "low"


def severity_counts(findings: list[Finding]) -> dict[Severity, int]:
    """Count findings by severity with stable keys."""
    counts = Counter(finding.severity for finding in findings)
    return {
        "high": int(counts.get("high", 0)),
        "medium": int(counts.get("medium", 0)),
        "low": int(counts.get("low", 0)),
    }


def rule_counts(findings: list[Finding]) -> dict[str, int]:
    """Count findings by rule ID, sorted by count descending then name."""
    counts = Counter(finding.rule_id for finding in findings)
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


def category_counts(findings: list[Finding]) -> dict[str, int]:
    """Count findings by category, sorted by category name."""
    counts = Counter(finding.category for finding in findings)
    return dict(sorted(counts.items()))


def sorted_findings(findings: list[Finding]) -> list[Finding]:
    """Order findings by descending score, then ID."""
    return sorted(findings, key=lambda finding: (-finding.score, finding.id))


def sorted_top_findings(
    findings: list[Finding],
    limit: int = TOP_FINDINGS_DEFAULT_LIMIT,
) -> list[Finding]:
    """Return the highest-scoring findings sorted deterministically."""
    return sorted_findings(findings)[:limit]
