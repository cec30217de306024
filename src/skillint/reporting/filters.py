"""Shared output-filter helpers for reporters and file writers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from skillint.constants.scoring import SEVERITY_RANK
from skillint.model import Finding
from skillint.types import Category, Severity


@dataclass(frozen=True)
class OutputFilters:
    """Display/output filters that do not affect rule execution."""

    min_severity: Severity | None = None
    category: Category | None = None

    def active(self) -> bool:
        """Whether any filter is enabled."""
        return self.min_severity is not None or self.category is not None


def finding_passes_filters(finding: Finding, filters: OutputFilters) -> bool:
    """Return whether a finding should be shown under the configured filters."""
    if filters.min_severity is not None:
        threshold = SEVERITY_RANK[filters.min_severity]
        if SEVERITY_RANK[finding.severity] < threshold:
            return False
    return filters.category is None or finding.category == filters.category


def filter_findings(findings: Sequence[Finding], filters: OutputFilters) -> list[Finding]:
    """Return findings that pass all configured output filters."""
    return [finding for finding in findings if finding_passes_filters(finding, filters)]


def count_filtered_reasons(findings: Sequence[Finding], filters: OutputFilters) -> dict[str, int]:
    """Count findings hidden by each filter reason.

    Counts are non-overlapping: severity filtering is applied first, then
    category filtering.
    """
    counts = {
        "below_min_severity": 0,
        "other_category": 0,
    }
    for finding in findings:
        if filters.min_severity is not None:
            threshold = SEVERITY_RANK[filters.min_severity]
            if SEVERITY_RANK[finding.severity] < threshold:
                counts["below_min_severity"] += 1
                continue
        if filters.category is not None and finding.category != filters.category:
            counts["other_category"] += 1
    return counts


def build_filter_metadata(
    *,
    total: int,
    shown: int,
    filters: OutputFilters,
) -> dict[str, object] | None:
    """Build stable filter metadata for JSON/SARIF payloads."""
    if not filters.active():
        return None
    return {
        "min_severity": filters.min_severity,
        "category": filters.category,
        "shown": shown,
        "total": total,
        "filtered": max(0, total - shown),
    }
