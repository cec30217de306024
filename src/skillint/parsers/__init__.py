"""Parsers for SKILL.md files, design docs, and pgpm plans."""

from __future__ import annotations

from .design_doc import parse_design_doc_file
from .plan import parse_plan_file, parse_plan_text
from .skill_markdown import parse_skill_markdown_file

__all__ = ["parse_design_doc_file", "parse_plan_file", "parse_plan_text", "parse_skill_markdown_file"]
