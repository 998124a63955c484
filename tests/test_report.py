"""Unit tests for the two-column change report."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from docs_migrate.content_tree import ChangeRecord
from docs_migrate.report import build_change_table, render_change_report

ROOT = Path("/srv/site")
CHANGES = [
    ChangeRecord(ROOT / "docs", ROOT / "content/en/docs", "copy"),
    ChangeRecord(ROOT / "content/a/index.md", ROOT / "content/a/_index.md", "rename"),
]


def test_table_has_from_and_to_columns() -> None:
    table = build_change_table(CHANGES, relative_to=ROOT)

    assert [column.header for column in table.columns] == ["From", "To"]
    assert table.row_count == 2
    assert list(table.columns[0].cells) == ["docs", "content/a/index.md"]
    assert list(table.columns[1].cells) == ["content/en/docs", "content/a/_index.md"]


def test_paths_outside_root_stay_absolute() -> None:
    table = build_change_table(
        [ChangeRecord(Path("/tmp/x"), ROOT / "y", "copy")], relative_to=ROOT
    )
    assert list(table.columns[0].cells) == [str(Path("/tmp/x"))]


def test_render_prints_every_change() -> None:
    console = Console(record=True, width=200)
    render_change_report(CHANGES, console, relative_to=ROOT)
    output = console.export_text()

    assert "From" in output
    assert "To" in output
    assert "content/en/docs" in output
    assert "content/a/_index.md" in output
