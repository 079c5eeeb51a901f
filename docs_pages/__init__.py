"""Build static documentation sites from Markdown pages with front matter.

This package exposes the CLI entry point used by ``uv run pages`` to render a
directory of Markdown pages into linked HTML documents plus a Navigation
Index artifact.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docs_pages import main
>>> main()  # doctest: +SKIP
>>> from docs_pages.cli import app
>>> app(["build", "--config", "config/site.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
