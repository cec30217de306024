"""Human-readable stdout reporter for lint results."""

from __future__ import annotations

from skillint.constants.branding import ASCII_LOGO_LINES, LINT_SUMMARY_TITLE
from skillint.constants.reporting import (
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    ANSI_YELLOW,
    SEVERITY_COLORS,
)
from skillint.constants.scoring import HIGH_SEVERITY_MIN_SCORE, MEDIUM_SEVERITY_MIN_SCORE, SEVERITY_RANK
from skillint.model import Finding, LintResult
from skillint.reporting.filters import OutputFilters, count_filtered_reasons, filter_findings
from skillint.scanner.score import rule_counts, severity_counts
from skillint.types import Category, Severity


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


def _color_severity(severity: Severity) -> str:
    color = SEVERITY_COLORS.get(severity, "")
    return _colorize(severity, color) if color else severity


def _color_score(score: int) -> str:
    if score >= HIGH_SEVERITY_MIN_SCORE:
        return _colorize(str(score), ANSI_RED)
    if score >= MEDIUM_SEVERITY_MIN_SCORE:
        return _colorize(str(score), ANSI_YELLOW)
    return _colorize(str(score), ANSI_GREEN)


def _fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


class StdoutReporter:
    """Formats lint results as human-readable stdout output."""

    def __init__(
        self,
        result: LintResult,
        *,
        color: bool = True,
        group_by: str | None = None,
        min_severity: Severity | None = None,
        category: Category | None = None,
        fail_on: Severity | None = None,
        exit_code: int = 0,
    ) -> None:
        self._result = result
        self._color = color
        self._group_by = group_by
        self._fail_on = fail_on
        self._exit_code = exit_code
        self._filters = OutputFilters(min_severity=min_severity, category=category)
        self._shown_findings = filter_findings(result.findings, self._filters)

    def render(self) -> str:
        """Render the full stdout report as a single string."""
        sections = [
            self._render_header(),
            self._render_grouped_table() if self._group_by else self._render_findings_table(),
            self._render_warnings(),
        ]
        return "\n".join(section for section in sections if section)

    def _render_header(self) -> str:
        r = self._result
        sep = "  " + "─" * 38

        subjects_with_findings = len({finding.subject for finding in r.findings})
        total_findings = r.total_findings
        shown_findings = len(self._shown_findings)

        lines = [
            "",
            f"  {ASCII_LOGO_LINES[0]}",
            f"  {ASCII_LOGO_LINES[1]}",
            f"  {LINT_SUMMARY_TITLE}",
            sep,
            "",
            (
                f"  Scanned     {r.scanned_skills} skills / {r.scanned_docs} docs / "
                f"{r.scanned_plans} plans ({subjects_with_findings} with findings)"
            ),
        ]

        if self._filters.active():
            filtered_summary = self._format_filtered_summary(total_findings, shown_findings)
            lines.append(f"  Findings    {shown_findings} shown / {total_findings} total ({filtered_summary})")
        else:
            lines.append(f"  Findings    {total_findings}")

        lines.append(f"  Severities  {self._format_severity_breakdown(r.counts_by_severity)}")

        all_rule_counts = r.counts_by_rule if r.counts_by_rule else rule_counts(list(r.findings))
        lines.append(f"  Top rules   {self._format_top_rules(all_rule_counts)}")

        if r.active_rule_overrides:
            override_parts: list[str] = []
            for rule_id, override in sorted(r.active_rule_overrides.items()):
                parts = [f"{key.split('_')[0]}={value}" for key, value in sorted(override.items())]
                override_parts.append(f"{rule_id} ({', '.join(parts)})")
            lines.append(f"  Overrides   {', '.join(override_parts)}")

        if r.rules_disabled:
            lines.append(f"  Rules off   {len(r.rules_disabled)} ({self._format_rule_list(r.rules_disabled)})")

        verdict = self._render_verdict()
        if verdict is not None:
            lines.append(f"  Verdict     {verdict}")

        lines.append(f"  Duration    {r.duration_seconds:.3f}s")
        lines.append("")
        return "\n".join(lines)

    def _render_findings_table(self) -> str:
        findings = self._shown_findings
        if not findings:
            return ""

        w_subject = 28
        w_rule = 24
        w_score = 5
        w_sev = 8
        w_loc = 36

        def _hline(left: str, mid: str, right: str) -> str:
            return (
                f"  {left}{'─' * (w_subject + 2)}{mid}{'─' * (w_rule + 2)}"
                f"{mid}{'─' * (w_score + 2)}{mid}{'─' * (w_sev + 2)}"
                f"{mid}{'─' * (w_loc + 2)}{right}"
            )

        hdr = (
            f"  │ {'Subject':<{w_subject}} │ {'Rule':<{w_rule}}"
            f" │ {'Score':>{w_score}} │ {'Severity':<{w_sev}} │ {'Location':<{w_loc}} │"
        )

        lines = ["  Findings", _hline("┌", "┬", "┐"), hdr, _hline("├", "┼", "┤")]
        for finding in findings:
            # Pad before colouring so escape codes do not skew column widths.
            score_str = f"{finding.score:>{w_score}}"
            sev_str = f"{finding.severity:<{w_sev}}"
            if self._color:
                score_str = score_str.replace(str(finding.score), _color_score(finding.score))
                sev_str = sev_str.replace(finding.severity, _color_severity(finding.severity))
            lines.append(
                f"  │ {_fit(finding.subject, w_subject):<{w_subject}} │ {_fit(finding.rule_id, w_rule):<{w_rule}}"
                f" │ {score_str} │ {sev_str} │ {_fit(self._location(finding), w_loc):<{w_loc}} │"
            )
        lines.append(_hline("└", "┴", "┘"))
        return "\n".join(lines)

    def _render_grouped_table(self) -> str:
        """Render findings grouped by subject or rule."""
        findings = self._shown_findings
        if not findings:
            return ""

        groups: dict[str, list[Finding]] = {}
        for finding in findings:
            key = finding.subject if self._group_by == "subject" else finding.rule_id
            groups.setdefault(key, []).append(finding)

        lines: list[str] = [f"  Findings (grouped by {self._group_by})", ""]

        for group_key in sorted(groups, key=lambda key: (-max(f.score for f in groups[key]), key)):
            group = groups[group_key]
            top = max(finding.score for finding in group)
            counts = severity_counts(group)
            score_str = _color_score(top) if self._color else str(top)
            lines.append(
                f"  [{group_key}]  max={score_str}  findings={len(group)}"
                f"  ({counts['high']} high · {counts['medium']} medium · {counts['low']} low)"
            )

            for finding in sorted(group, key=lambda item: (-item.score, item.id)):
                detail = finding.rule_id if self._group_by == "subject" else finding.subject
                finding_score = _color_score(finding.score) if self._color else str(finding.score)
                lines.append(f"    {detail:<28}  {finding_score:>7}  {self._location(finding)}")
                lines.append(f"      {finding.description}")
            lines.append("")

        return "\n".join(lines)

    def _render_warnings(self) -> str:
        if not self._result.warnings:
            return ""
        lines = ["  Warnings"]
        lines.extend(f"    - {warning}" for warning in self._result.warnings)
        lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _location(finding: Finding) -> str:
        if finding.evidence.line is None:
            return finding.evidence.path
        return f"{finding.evidence.path}:{finding.evidence.line}"

    def _format_severity_breakdown(self, counts: dict[Severity, int]) -> str:
        """Render ``high/medium/low`` finding counts in fixed order."""
        parts: list[str] = []
        for severity in ("high", "medium", "low"):
            count = counts.get(severity, 0)
            label = _color_severity(severity) if self._color else severity
            parts.append(f"{count} {label}")
        return " · ".join(parts)

    def _format_filtered_summary(self, total_findings: int, shown_findings: int) -> str:
        """Render deterministic filtered-count details for header output."""
        filtered_count = max(0, total_findings - shown_findings)
        reason_counts = count_filtered_reasons(self._result.findings, self._filters)
        parts: list[str] = []
        if reason_counts["below_min_severity"] > 0 and self._filters.min_severity is not None:
            parts.append(f"{reason_counts['below_min_severity']} below {self._filters.min_severity}")
        if reason_counts["other_category"] > 0 and self._filters.category is not None:
            parts.append(f"{reason_counts['other_category']} outside {self._filters.category}")
        if not parts:
            parts.append(str(filtered_count))
        return f"{' + '.join(parts)} filtered"

    @staticmethod
    def _format_top_rules(counts: dict[str, int], limit: int = 5) -> str:
        """Render top-N rules sorted by descending count, then rule id."""
        if not counts:
            return "none"
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        head = ranked[:limit]
        parts = [f"{rule_id} {count}" for rule_id, count in head]
        remaining = len(ranked) - len(head)
        if remaining > 0:
            parts.append(f"(+{remaining} more)")
        return " · ".join(parts)

    @staticmethod
    def _format_rule_list(rule_ids: tuple[str, ...], limit: int = 6) -> str:
        if len(rule_ids) <= limit:
            return ", ".join(rule_ids)
        return f"{', '.join(rule_ids[:limit])}, +{len(rule_ids) - limit} more"

    def _render_verdict(self) -> str | None:
        """Render CI threshold verdict when ``--fail-on`` is configured."""
        if self._fail_on is None:
            return None

        threshold = SEVERITY_RANK[self._fail_on]
        matched = [finding for finding in self._result.findings if SEVERITY_RANK.get(finding.severity, 0) >= threshold]
        clause = f"{len(matched)} finding(s) >= {self._fail_on}" if matched else f"no findings >= {self._fail_on}"
        state = "FAIL" if self._exit_code == 1 else "PASS"
        return f"{state} ({clause})"
