"""Cyclopts CLI entrypoint for migrating a Jekyll content tree to Hugo.

The ``docs-migrate`` console script runs every migration step against a
website checkout. ``--try`` walks the same steps without touching the disk and
prints the intended changes as a two-column table.

Examples
--------
Preview the migration of the current checkout:

>>> from docs_migrate.cli import app
>>> app(["run", "--try"])  # doctest: +SKIP

Migrate another checkout with a custom layout:

>>> app(["run", "--root", "../website", "--config", "migrate.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from rich.console import Console
from ruamel.yaml.error import YAMLError

from .config import MigrationConfigError, load_migration_config
from .content_tree import MigrationError
from .data import DataError
from .migrator import Migrator
from .report import render_change_report

LOG_FORMAT = "docs-migrate: %(message)s"

app = App(name="docs-migrate", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a prefixed stream handler to the package logger once."""
    logger = logging.getLogger("docs_migrate")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


@app.command(help="Migrate the legacy content tree into the Hugo layout.")
def run(
    *,
    root: typ.Annotated[
        Path, Parameter(help="Root of the website checkout")
    ] = Path(),
    config: typ.Annotated[
        Path | None, Parameter(help="Path to a migration config (YAML)")
    ] = None,
    dry_run: typ.Annotated[
        bool,
        Parameter(
            name=["--try", "--dry-run"],
            negative="",
            help="Report the changes without writing anything",
        ),
    ] = False,
) -> None:
    """Run the migration for the checkout at ``root``.

    Parameters
    ----------
    root : Path, optional
        Website checkout to migrate. Defaults to the current directory.
    config : Path or None, optional
        Migration config overriding the built-in layout.
    dry_run : bool, optional
        When ``True`` nothing is written and the intended changes are printed.

    Raises
    ------
    SystemExit
        With status 1 when the run cannot complete.
    """
    configure_logging()
    try:
        migration_config = load_migration_config(config, project_root=root.resolve())
        result = Migrator(migration_config, dry_run=dry_run).run()
    except (
        MigrationError,
        MigrationConfigError,
        DataError,
        YAMLError,
        OSError,
    ) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if dry_run:
        render_change_report(
            result.changes,
            Console(),
            relative_to=migration_config.project_root,
        )
    if result.failures:
        print(
            f"{len(result.failures)} file(s) need manual follow-up;"
            " see the warnings above."
        )


def main() -> None:
    """Run the ``docs-migrate`` CLI application.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
