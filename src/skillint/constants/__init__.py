"""Constant values shared across skillint modules."""
