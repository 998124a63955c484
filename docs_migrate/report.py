"""Render the change log of a migration run as a two-column table."""

from __future__ import annotations

import typing as typ

from rich.console import Console
from rich.table import Table

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .content_tree import ChangeRecord


def _relative(path: Path, root: Path | None) -> str:
    if root is None:
        return str(path)
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def build_change_table(
    changes: cabc.Sequence[ChangeRecord], *, relative_to: Path | None = None
) -> Table:
    """Return a borderless ``From``/``To`` table with one row per change."""
    table = Table(title=f"Changes ({len(changes)})", box=None)
    table.add_column("From", style="cyan", overflow="fold")
    table.add_column("To", style="green", overflow="fold")
    for change in changes:
        table.add_row(
            _relative(change.origin, relative_to),
            _relative(change.destination, relative_to),
        )
    return table


def render_change_report(
    changes: cabc.Sequence[ChangeRecord],
    console: Console | None = None,
    *,
    relative_to: Path | None = None,
) -> None:
    """Print the change table to ``console`` (stdout by default)."""
    console = console or Console()
    console.print(build_change_table(changes, relative_to=relative_to))


__all__ = ["build_change_table", "render_change_report"]
