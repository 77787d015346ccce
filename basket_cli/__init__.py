"""Command-line interface for the basket engine."""
