"""
Web interface module for the image smoothing filter.

Provides a Flask app with an upload form and a small JSON/PNG API around
the filter pipeline.
"""

from .app import create_app, main, run_server

__all__ = ["create_app", "main", "run_server"]
