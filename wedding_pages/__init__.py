"""Build and serve the CMS-driven wedding site.

This package exposes the CLI entry points used by `uv run pages` to render
page documents to static HTML and to run the request-time application that
backs the site's forms and the content editor.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from wedding_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
