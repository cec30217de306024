"""Command-line interface for skillint."""
