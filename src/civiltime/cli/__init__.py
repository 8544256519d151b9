"""
CLI layer for civiltime.

Provides a Typer application whose commands delegate to the value types in
``civiltime.core``. This package handles only terminal transport: argument
parsing, coloured output and table formatting.

Entry point::

    civiltime --help
"""

from civiltime.cli.app import app

__all__ = ["app"]
