"""Reporting package for skillint outputs."""

from __future__ import annotations

from typing import Any

__all__ = ["build_summary", "write_reports"]


def __getattr__(name: str) -> Any:
    """Lazily expose reporting APIs to avoid import cycles at package import time."""
    if name in {"build_summary", "write_reports"}:
        from .writer import build_summary, write_reports

        exports = {
            "build_summary": build_summary,
            "write_reports": write_reports,
        }
        return exports[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
