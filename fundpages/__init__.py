"""Compose and publish CMS sections for the fundraising directory.

This package stores titled sections (rich HTML descriptions plus owned data
tables), composes them by inlining ``{{table-id}}`` placeholders, and renders
the result into static HTML and JSON artefacts via the ``sections`` CLI.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from fundpages import main
>>> main()  # doctest: +SKIP
>>> from fundpages import app
>>> app.name[0]  # doctest: +SKIP
'sections'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
