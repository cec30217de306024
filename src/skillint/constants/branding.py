"""Branding constants for docs and terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SKILLINT"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SKILLINT",
    "     // lint for agent skill corpora",
)
LINT_SUMMARY_TITLE: str = "Lint summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} corpus linter"))
