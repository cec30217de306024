"""Utility helpers."""

from .naming import is_kebab_case

__all__ = ["is_kebab_case"]
