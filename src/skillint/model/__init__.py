"""Core data models for skillint."""

from .entities import (
    DocHeading,
    DocumentLink,
    Evidence,
    Finding,
    FindingCandidate,
    LintResult,
    ParsedDesignDoc,
    ParsedPlan,
    ParsedSkillDocument,
    PlanChange,
    PlanDependency,
    PlanLineError,
    PlanTag,
    SeverityOverride,
    SkillPackage,
    StatusField,
    Summary,
)

__all__ = [
    "DocHeading",
    "DocumentLink",
    "Evidence",
    "Finding",
    "FindingCandidate",
    "LintResult",
    "ParsedDesignDoc",
    "ParsedPlan",
    "ParsedSkillDocument",
    "PlanChange",
    "PlanDependency",
    "PlanLineError",
    "PlanTag",
    "SeverityOverride",
    "SkillPackage",
    "StatusField",
    "Summary",
]
