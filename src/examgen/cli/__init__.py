"""CLI module for examgen.

This module provides the command-line interface using Typer.
"""

from __future__ import annotations

from examgen.cli.main import app

__all__ = ["app"]
