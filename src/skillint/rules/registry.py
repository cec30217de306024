"""Registry of bundled rules and rule-set construction."""

from __future__ import annotations

import logging

from skillint.rules.archive import ArchiveInvalidRule, ArchiveLayoutRule, ArchiveMissingRule, ArchiveStaleRule
from skillint.rules.base import Rule
from skillint.rules.docs import (
    DocDateInvalidRule,
    DocLifecycleRule,
    DocLinkBrokenRule,
    DocSectionMissingRule,
    DocStatusInvalidRule,
    DocStatusMissingRule,
)
from skillint.rules.plan import (
    PlanDuplicateChangeRule,
    PlanDuplicateTagRule,
    PlanPragmaMissingRule,
    PlanScriptMissingRule,
    PlanSyntaxRule,
    PlanUnknownDependencyRule,
)
from skillint.rules.skill import (
    DescriptionMissingRule,
    DescriptionNoTriggerRule,
    DescriptionTooLongRule,
    DuplicateSkillNameRule,
    FrontmatterMissingRule,
    FrontmatterUnknownKeyRule,
    MetadataInvalidRule,
    NameDirMismatchRule,
    NameFormatRule,
    NameMissingRule,
    NameTooLongRule,
    ReferenceBrokenRule,
    SkillParseErrorRule,
    SkillTooLongRule,
)

logger = logging.getLogger(__name__)

RULE_CLASSES: tuple[type[Rule], ...] = (
    SkillParseErrorRule,
    FrontmatterMissingRule,
    NameMissingRule,
    NameFormatRule,
    NameTooLongRule,
    NameDirMismatchRule,
    DescriptionMissingRule,
    DescriptionTooLongRule,
    DescriptionNoTriggerRule,
    FrontmatterUnknownKeyRule,
    MetadataInvalidRule,
    SkillTooLongRule,
    ReferenceBrokenRule,
    ArchiveMissingRule,
    ArchiveInvalidRule,
    ArchiveLayoutRule,
    ArchiveStaleRule,
    DuplicateSkillNameRule,
    DocStatusMissingRule,
    DocStatusInvalidRule,
    DocDateInvalidRule,
    DocSectionMissingRule,
    DocLinkBrokenRule,
    DocLifecycleRule,
    PlanSyntaxRule,
    PlanPragmaMissingRule,
    PlanDuplicateChangeRule,
    PlanDuplicateTagRule,
    PlanUnknownDependencyRule,
    PlanScriptMissingRule,
)

RULE_IDS: tuple[str, ...] = tuple(rule_cls.rule_id for rule_cls in RULE_CLASSES)


def build_rules(rule_ids: tuple[str, ...]) -> list[Rule]:
    """Build rule instances for the given IDs, preserving order."""
    known = {rule_cls.rule_id: rule_cls for rule_cls in RULE_CLASSES}
    rules: list[Rule] = []

    for rule_id in rule_ids:
        rule_cls = known.get(rule_id)
        if rule_cls is None:
            logger.warning("Unknown rule ID ignored: %s", rule_id)
            continue
        rules.append(rule_cls())

    return rules


def rule_catalog() -> list[dict[str, object]]:
    """Describe every bundled rule for listings."""
    return [
        {
            "rule_id": rule_cls.rule_id,
            "category": rule_cls.category,
            "score": rule_cls.default_score,
            "title": rule_cls.title,
        }
        for rule_cls in RULE_CLASSES
    ]
