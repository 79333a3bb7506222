"""Command-line interface for mdvars."""
