"""Lint pipeline stages."""
