"""Rule interfaces for corpus lint checks."""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar

from skillint.config import SkillintConfig
from skillint.model import Evidence, FindingCandidate, ParsedDesignDoc, ParsedPlan, SkillPackage
from skillint.types import Category

_RULE_ID_PATTERN: re.Pattern[str] = re.compile(r"^[A-Z][A-Z0-9_]+$")


class Rule(ABC):
    """Abstract base class for lint rules."""

    rule_id: ClassVar[str]
    category: ClassVar[Category]
    title: ClassVar[str]
    default_score: ClassVar[int]

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate concrete rules define an UPPER_SNAKE_CASE `rule_id` and a title."""
        super().__init_subclass__(**kwargs)
        if inspect.isabstract(cls):
            return

        rule_id = getattr(cls, "rule_id", None)
        if not isinstance(rule_id, str) or not rule_id.strip():
            raise TypeError(f"{cls.__name__} must define a non-empty class attribute `rule_id`")
        if not _RULE_ID_PATTERN.match(rule_id):
            raise TypeError(f"{cls.__name__}.rule_id must be UPPER_SNAKE_CASE (got {rule_id!r})")
        if not isinstance(getattr(cls, "title", None), str):
            raise TypeError(f"{cls.__name__} must define a class attribute `title`")

    def candidate(
        self,
        *,
        description: str,
        evidence: Evidence,
        recommendation: str,
        score: int | None = None,
        subject: str | None = None,
    ) -> FindingCandidate:
        """Build a candidate carrying this rule's identity."""
        return FindingCandidate(
            rule_id=self.rule_id,
            score=self.default_score if score is None else score,
            title=self.title,
            description=description,
            evidence=evidence,
            recommendation=recommendation,
            category=self.category,
            subject=subject,
        )


class SkillRule(Rule):
    """Rule evaluated once per discovered skill package."""

    @abstractmethod
    def run(self, *, skill: SkillPackage, config: SkillintConfig) -> list[FindingCandidate]:
        """Run the rule on one skill package."""


class CorpusRule(Rule):
    """Rule evaluated once across every discovered skill package."""

    @abstractmethod
    def run(self, *, skills: Sequence[SkillPackage], config: SkillintConfig) -> list[FindingCandidate]:
        """Run the rule on the whole skill set."""


class DocRule(Rule):
    """Rule evaluated once per docs/plan or docs/spec document."""

    @abstractmethod
    def run(self, *, doc: ParsedDesignDoc, config: SkillintConfig) -> list[FindingCandidate]:
        """Run the rule on one design document."""


class PlanRule(Rule):
    """Rule evaluated once per pgpm plan file."""

    @abstractmethod
    def run(self, *, plan: ParsedPlan, config: SkillintConfig) -> list[FindingCandidate]:
        """Run the rule on one parsed plan."""
