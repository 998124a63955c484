"""Behaviour tests for converting callout annotations during a migration.

The scenarios in ``features/callout_conversion.feature`` write a single page
into a temporary content tree, run the main fixer chain the migrator uses for
Markdown files, and check the rewritten page and the reported failures.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docs_migrate.config import load_migration_config
from docs_migrate.content_tree import ContentTree
from docs_migrate.migrator import Migrator

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "callout_conversion.feature"
)
scenarios(FEATURE_FILE)

PAGE = "content/en/docs/concepts/overview.md"


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write_page(tmp_path: Path, state: dict[str, object], text: str) -> None:
    page = tmp_path / PAGE
    page.parent.mkdir(parents=True, exist_ok=True)
    page.write_text(text, encoding="utf-8")
    state["page"] = page
    state["original"] = text


def _page(state: dict[str, object]) -> Path:
    page = state["page"]
    assert isinstance(page, Path)
    return page


@given(
    parsers.parse('a page with the paragraph "{text}" followed by a "{kind}" annotation')
)
def given_trailing_annotation(
    tmp_path: Path, scenario_state: dict[str, object], text: str, kind: str
) -> None:
    _write_page(tmp_path, scenario_state, f"{text}\n{{: .{kind}}}\n")


@given(
    parsers.parse(
        'a page whose "{kind}" annotation opens the paragraph "{first}" and "{second}"'
    )
)
def given_leading_annotation(
    tmp_path: Path,
    scenario_state: dict[str, object],
    kind: str,
    first: str,
    second: str,
) -> None:
    _write_page(
        tmp_path, scenario_state, f"{{: .{kind}}}\n{first}\n{second}\n\nAfter\n"
    )


@given(parsers.parse('a page where a "{inner}" annotation starts inside an open "{outer}"'))
def given_overlapping_annotations(
    tmp_path: Path, scenario_state: dict[str, object], inner: str, outer: str
) -> None:
    _write_page(tmp_path, scenario_state, f"{{: .{outer}}}\ntext\n{{: .{inner}}}\n")


@when("the main fixers run over the page")
def when_main_fixers_run(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    config = load_migration_config(None, project_root=tmp_path)
    chain = Migrator(config).main_fixers()
    tree = ContentTree(tmp_path)
    scenario_state["result"] = tree.apply_fixers(chain, config.main_fixer_pattern)


@then(parsers.parse('the page reads "{expected}"'))
def then_page_reads(scenario_state: dict[str, object], expected: str) -> None:
    page = _page(scenario_state)
    text = page.read_text(encoding="utf-8")
    assert text == expected.replace("\\n", "\n"), f"unexpected page text: {text!r}"


@then("the page is unchanged")
def then_page_unchanged(scenario_state: dict[str, object]) -> None:
    page = _page(scenario_state)
    assert page.read_text(encoding="utf-8") == scenario_state["original"]


@then("no fixer failures are reported")
def then_no_failures(scenario_state: dict[str, object]) -> None:
    assert scenario_state["result"].failures == []  # type: ignore[attr-defined]


@then("a callout failure is reported for the page")
def then_callout_failure(scenario_state: dict[str, object]) -> None:
    failures = scenario_state["result"].failures  # type: ignore[attr-defined]
    assert [failure.fixer for failure in failures] == ["callouts_to_shortcodes"]
    assert failures[0].path == _page(scenario_state).resolve()
    assert failures[0].error.field == "callout"
