"""Command-line interface for Loki."""
