"""Shared type aliases for skillint."""

from .common import Category, DocKind, JsonObject, JsonScalar, JsonValue, Severity
from .config import DocsConfig, RuleOverrideConfig, RulesConfig, SkillsConfig

__all__ = [
    "Category",
    "DocKind",
    "DocsConfig",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "RuleOverrideConfig",
    "RulesConfig",
    "Severity",
    "SkillsConfig",
]
