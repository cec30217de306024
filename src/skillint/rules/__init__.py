"""Lint rules for skills, archives, design docs, and pgpm plans."""

from .base import CorpusRule, DocRule, PlanRule, Rule, SkillRule
from .registry import RULE_CLASSES, RULE_IDS, build_rules, rule_catalog

__all__ = [
    "RULE_CLASSES",
    "RULE_IDS",
    "CorpusRule",
    "DocRule",
    "PlanRule",
    "Rule",
    "SkillRule",
    "build_rules",
    "rule_catalog",
]
