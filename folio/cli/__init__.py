"""Command-line interface for the portfolio API."""
