"""Move a Jekyll/Liquid documentation tree into a Hugo content layout.

This package exposes the CLI entry points used by the ``docs-migrate``
console script.

Exports
-------
- ``app``: Cyclopts application holding the ``run`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docs_migrate import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
