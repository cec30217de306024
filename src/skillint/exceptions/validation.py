"""Structured validation errors reported by ``skillint validate-config``."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One config problem with a stable code, the file, and the offending field."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""

    def format(self) -> str:
        """Render as ``[CODE] path (field): message (hint)``."""
        location = f"{self.path} ({self.field})" if self.field else self.path
        text = f"[{self.code}] {location}: {self.message}"
        if self.hint:
            text = f"{text} ({self.hint})"
        return text


def sort_errors(errors: list[ValidationError]) -> list[ValidationError]:
    """Order errors by code, then path, then field."""
    return sorted(errors, key=lambda e: (e.code, e.path, e.field))


def format_errors(errors: list[ValidationError]) -> str:
    """Render errors one per line, followed by a count line."""
    lines = [error.format() for error in sort_errors(errors)]
    noun = "error" if len(errors) == 1 else "errors"
    lines.append(f"{len(errors)} configuration {noun} found.")
    return "\n".join(lines)
