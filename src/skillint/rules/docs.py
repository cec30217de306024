"""Rules for docs/plan and docs/spec status-table templates."""

from __future__ import annotations

import datetime as dt
import re

from skillint.config import SkillintConfig
from skillint.constants.discovery import DOC_KIND_PLAN, DOC_KIND_SPEC
from skillint.constants.docs import (
    DATE_VALUE_PATTERN,
    DECISION_STATUS_FIELD,
    IMPLEMENTATION_STATUS_FIELD,
    PLAN_PROMOTE_STATUS,
    SPEC_SETTLED_STATUSES,
)
from skillint.constants.rules import (
    CATEGORY_DOCS,
    DOC_DATE_INVALID_SCORE,
    DOC_LIFECYCLE_PLAN_SCORE,
    DOC_LIFECYCLE_SPEC_SCORE,
    DOC_LINK_BROKEN_SCORE,
    DOC_SECTION_MISSING_SCORE,
    DOC_STATUS_INVALID_SCORE,
    DOC_STATUS_MISSING_SCORE,
)
from skillint.model import Evidence, FindingCandidate, ParsedDesignDoc, StatusField
from skillint.rules.base import DocRule
from skillint.rules.common import dedupe_candidates, link_evidence, resolve_link

_SECTION_NUMBER_PATTERN: re.Pattern[str] = re.compile(r"^\d+(?:\.\d+)*\.?\s+")


def _doc_evidence(doc: ParsedDesignDoc, field: StatusField | None = None) -> Evidence:
    if field is None:
        return Evidence(path=str(doc.file_path), line=1, snippet=doc.title or doc.file_path.name)
    return Evidence(path=str(doc.file_path), line=field.line, snippet=f"| {field.name} | {field.value} |")


def _normalize_section(text: str) -> str:
    return _SECTION_NUMBER_PATTERN.sub("", text).strip().lower()


def _matches_allowed(value: str, allowed: tuple[str, ...]) -> bool:
    lowered = value.strip().lower()
    return any(lowered == option.lower() for option in allowed)


def _parse_date(value: str) -> dt.date | None:
    if not DATE_VALUE_PATTERN.match(value.strip()):
        return None
    try:
        return dt.date.fromisoformat(value.strip())
    except ValueError:
        return None


class DocStatusMissingRule(DocRule):
    """Design docs open with a status table carrying every required field."""

    rule_id = "DOC_STATUS_MISSING"
    category = CATEGORY_DOCS
    title = "Status table incomplete"
    default_score = DOC_STATUS_MISSING_SCORE

    def run(self, *, doc: ParsedDesignDoc, config: SkillintConfig) -> list[FindingCandidate]:
        if not doc.status:
            return [
                self.candidate(
                    description=f"{doc.kind.capitalize()} document has no status table.",
                    evidence=_doc_evidence(doc),
                    recommendation="Add the `| Field | Value |` status table from the document template.",
                )
            ]
        return [
            self.candidate(
                description=f"Status table has no '{field_name}' row.",
                evidence=_doc_evidence(doc),
                recommendation=f"Add a `| {field_name} | ... |` row to the status table.",
            )
            for field_name in config.docs.required_fields
            if field_name.lower() not in doc.status
        ]


class DocStatusInvalidRule(DocRule):
    """Status values must come from the enumerated vocabularies."""

    rule_id = "DOC_STATUS_INVALID"
    category = CATEGORY_DOCS
    title = "Invalid status value"
    default_score = DOC_STATUS_INVALID_SCORE

    def run(self, *, doc: ParsedDesignDoc, config: SkillintConfig) -> list[FindingCandidate]:
        findings: list[FindingCandidate] = []
        checks = (
            (DECISION_STATUS_FIELD, config.docs.decision_statuses),
            (IMPLEMENTATION_STATUS_FIELD, config.docs.implementation_statuses),
        )
        for field_name, allowed in checks:
            field = doc.status.get(field_name.lower())
            if field is None or not allowed or _matches_allowed(field.value, allowed):
                continue
            shown = field.value or "<blank>"
            findings.append(
                self.candidate(
                    description=f"{field_name} '{shown}' is not one of: {', '.join(allowed)}.",
                    evidence=_doc_evidence(doc, field),
                    recommendation=f"Set {field_name} to one of {', '.join(allowed)}.",
                )
            )
        return findings


class DocDateInvalidRule(DocRule):
    """Date fields are ISO ``YYYY-MM-DD`` and never run backwards."""

    rule_id = "DOC_DATE_INVALID"
    category = CATEGORY_DOCS
    title = "Invalid status date"
    default_score = DOC_DATE_INVALID_SCORE

    def run(self, *, doc: ParsedDesignDoc, config: SkillintConfig) -> list[FindingCandidate]:
        findings: list[FindingCandidate] = []
        parsed_dates: list[tuple[StatusField, dt.date]] = []
        for field_name in config.docs.date_fields:
            field = doc.status.get(field_name.lower())
            if field is None:
                continue
            value = _parse_date(field.value)
            if value is None:
                findings.append(
                    self.candidate(
                        description=f"{field.name} '{field.value or '<blank>'}' is not a valid YYYY-MM-DD date.",
                        evidence=_doc_evidence(doc, field),
                        recommendation="Write dates as ISO 8601 calendar dates, for example 2025-01-31.",
                    )
                )
                continue
            parsed_dates.append((field, value))

        # date_fields are listed oldest-first (Created before Last Updated).
        for (earlier_field, earlier), (later_field, later) in zip(parsed_dates, parsed_dates[1:]):
            if later < earlier:
                findings.append(
                    self.candidate(
                        description=f"{later_field.name} {later.isoformat()} precedes {earlier_field.name} {earlier.isoformat()}.",
                        evidence=_doc_evidence(doc, later_field),
                        recommendation=f"Update {later_field.name} to the date of the latest edit.",
                    )
                )
        return findings


class DocSectionMissingRule(DocRule):
    """Each document kind carries its fixed section headers."""

    rule_id = "DOC_SECTION_MISSING"
    category = CATEGORY_DOCS
    title = "Template section missing"
    default_score = DOC_SECTION_MISSING_SCORE

    def run(self, *, doc: ParsedDesignDoc, config: SkillintConfig) -> list[FindingCandidate]:
        required = config.docs.plan_sections if doc.kind == DOC_KIND_PLAN else config.docs.spec_sections
        present = {_normalize_section(heading.text) for heading in doc.headings if heading.level >= 2}
        return [
            self.candidate(
                description=f"{doc.kind.capitalize()} document is missing the '{section}' section.",
                evidence=_doc_evidence(doc),
                recommendation=f"Add a `## {section}` heading, even if the section is short.",
            )
            for section in required
            if _normalize_section(section) not in present
        ]


class DocLinkBrokenRule(DocRule):
    """Relative links in design docs must resolve."""

    rule_id = "DOC_LINK_BROKEN"
    category = CATEGORY_DOCS
    title = "Broken document link"
    default_score = DOC_LINK_BROKEN_SCORE

    def run(self, *, doc: ParsedDesignDoc, config: SkillintConfig) -> list[FindingCandidate]:
        findings: list[FindingCandidate] = []
        for link in doc.links:
            resolved = resolve_link(doc.file_path.parent, link)
            if resolved is None or resolved.exists():
                continue
            findings.append(
                self.candidate(
                    description=f"Link target '{link.target}' does not exist.",
                    evidence=link_evidence(doc.file_path, link),
                    recommendation="Fix the relative path or drop the link.",
                )
            )
        return dedupe_candidates(findings)


class DocLifecycleRule(DocRule):
    """Specs hold settled decisions; accepted plans get promoted to specs."""

    rule_id = "DOC_LIFECYCLE"
    category = CATEGORY_DOCS
    title = "Document in wrong lifecycle stage"
    default_score = DOC_LIFECYCLE_SPEC_SCORE

    def run(self, *, doc: ParsedDesignDoc, config: SkillintConfig) -> list[FindingCandidate]:
        field = doc.status.get(DECISION_STATUS_FIELD.lower())
        if field is None or not _matches_allowed(field.value, config.docs.decision_statuses):
            return []
        status = field.value.strip().lower()

        if doc.kind == DOC_KIND_SPEC and status not in SPEC_SETTLED_STATUSES:
            return [
                self.candidate(
                    description=f"Spec has Decision Status '{field.value}'; specs must be Accepted or Superseded.",
                    evidence=_doc_evidence(doc, field),
                    recommendation="Move undecided work back to docs/plan/ until it is accepted.",
                )
            ]

        if doc.kind == DOC_KIND_PLAN and status == PLAN_PROMOTE_STATUS:
            spec_path = doc.file_path.parent.parent / DOC_KIND_SPEC / doc.file_path.name
            if spec_path.exists():
                return []
            return [
                self.candidate(
                    description="Plan is Accepted but has no matching document in docs/spec/.",
                    evidence=_doc_evidence(doc, field),
                    recommendation=f"Promote the plan to docs/spec/{doc.file_path.name}.",
                    score=DOC_LIFECYCLE_PLAN_SCORE,
                )
            ]
        return []
