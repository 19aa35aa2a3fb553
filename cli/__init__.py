"""Subcommand parsers and handlers for the smoother CLI."""
