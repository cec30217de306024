"""Candidate-to-finding conversion for the lint pipeline."""

from __future__ import annotations

import hashlib
from dataclasses import replace
from pathlib import Path

from skillint.constants.ids import FINDING_ID_HEX_LENGTH
from skillint.constants.scoring import (
    HIGH_SEVERITY_MIN_SCORE,
    MEDIUM_SEVERITY_MIN_SCORE,
    SEVERITY_RANK,
)
from skillint.model import Evidence, Finding, FindingCandidate, SeverityOverride
from skillint.scanner.discovery import relative_posix
from skillint.scanner.score import severity_from_score
from skillint.types import RuleOverrideConfig, Severity


def candidate_to_finding(
    subject: str,
    candidate: FindingCandidate,
    *,
    root: Path | None = None,
    rule_override: RuleOverrideConfig | None = None,
) -> Finding:
    """Convert a finding candidate into a stable, serialized finding.

    A candidate-level ``subject`` wins over the one passed in, so corpus rules
    can attribute findings to individual skills. Evidence paths are made
    relative to *root* when it is given.
    """
    subject = candidate.subject or subject
    evidence = _relative_evidence(candidate.evidence, root) if root is not None else candidate.evidence
    score = max(0, min(100, int(candidate.score)))
    severity = severity_from_score(score)
    severity_override: SeverityOverride | None = None

    if rule_override is not None and (rule_override.max_severity is not None or rule_override.min_severity is not None):
        score, severity, severity_override = apply_rule_override(
            score=score,
            severity=severity,
            rule_override=rule_override,
        )

    identity = "|".join(
        [
            subject,
            candidate.rule_id,
            candidate.title,
            candidate.description,
            evidence.path,
            str(evidence.line),
            evidence.snippet,
        ]
    )
    finding_id = hashlib.sha256(identity.encode("utf-8")).hexdigest()[:FINDING_ID_HEX_LENGTH]

    return Finding(
        id=finding_id,
        severity=severity,
        score=score,
        title=candidate.title,
        description=candidate.description,
        evidence=evidence,
        subject=subject,
        rule_id=candidate.rule_id,
        recommendation=candidate.recommendation,
        category=candidate.category,
        severity_override=severity_override,
    )


def apply_rule_override(
    *,
    score: int,
    severity: Severity,
    rule_override: RuleOverrideConfig,
) -> tuple[int, Severity, SeverityOverride | None]:
    """Apply per-rule min/max severity policy and emit audit metadata when changed."""
    adjusted_score = score
    adjusted_severity = severity
    min_severity = rule_override.min_severity
    max_severity = rule_override.max_severity

    if min_severity is not None and SEVERITY_RANK[adjusted_severity] < SEVERITY_RANK[min_severity]:
        adjusted_score = _raise_score_to_min_severity(adjusted_score, min_severity)
        adjusted_severity = severity_from_score(adjusted_score)

    if max_severity is not None and SEVERITY_RANK[adjusted_severity] > SEVERITY_RANK[max_severity]:
        adjusted_score = _cap_score_to_max_severity(adjusted_score, max_severity)
        adjusted_severity = severity_from_score(adjusted_score)

    if adjusted_score == score and adjusted_severity == severity:
        return score, severity, None

    return (
        adjusted_score,
        adjusted_severity,
        SeverityOverride(original=severity, applied=adjusted_severity, reason="rule_override"),
    )


def _cap_score_to_max_severity(score: int, max_severity: Severity) -> int:
    if max_severity == "high":
        return score
    if max_severity == "medium":
        return min(score, HIGH_SEVERITY_MIN_SCORE - 1)
    return min(score, MEDIUM_SEVERITY_MIN_SCORE - 1)


def _raise_score_to_min_severity(score: int, min_severity: Severity) -> int:
    if min_severity == "low":
        return score
    if min_severity == "medium":
        return max(score, MEDIUM_SEVERITY_MIN_SCORE)
    return max(score, HIGH_SEVERITY_MIN_SCORE)


def _relative_evidence(evidence: Evidence, root: Path) -> Evidence:
    path = Path(evidence.path)
    if not path.is_absolute():
        return evidence
    return replace(evidence, path=relative_posix(path, root))
