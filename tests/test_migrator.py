"""End-to-end tests running every migration step over a legacy checkout."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from docs_migrate.config import load_migration_config
from docs_migrate.content_tree import MigrationError
from docs_migrate.data import DataError
from docs_migrate.migrator import Migrator

if typ.TYPE_CHECKING:
    from pathlib import Path


def _migrate(root: Path, *, dry_run: bool = False):
    config = load_migration_config(None, project_root=root)
    return Migrator(config, dry_run=dry_run).run()


def _read(root: Path, rel: str) -> str:
    return (root / rel).read_text(encoding="utf-8")


def test_full_run_produces_hugo_layout(legacy_site: Path) -> None:
    result = _migrate(legacy_site)

    assert result.failures == []
    content = legacy_site / "content"
    assert (content / "en/docs/concepts/_index.md").is_file()
    assert not (content / "en/docs/concepts/index.md").exists()
    assert (content / "cn/docs/_index.md").is_file()
    assert (legacy_site / "static/reference/generated/kubectl.html").is_file()
    assert not (content / "en/docs/reference/generated").exists()
    assert not (content / "en/docs/reference/glossary.md").exists()
    assert (content / "en/docs/reference/glossary/pod.md").is_file()


def test_landing_page_front_matter_accumulates(legacy_site: Path) -> None:
    _migrate(legacy_site)

    assert _read(legacy_site, "content/en/docs/home/_index.md") == (
        "---\n"
        "title: Home\n"
        "layout: docsportal_home\n"
        'linkTitle: "Home"\n'
        "main_menu: true\n"
        "weight: 20\n"
        "toc_hide: true\n"
        "---\n"
        "Welcome\n"
    )
    reference = _read(legacy_site, "content/en/docs/reference/_index.md")
    assert 'linkTitle: "Reference"\nmain_menu: true\nweight: 70\n' in reference


def test_liquid_syntax_and_callouts_are_rewritten(legacy_site: Path) -> None:
    _migrate(legacy_site)

    assert _read(legacy_site, "content/en/docs/concepts/overview.md") == (
        "---\n"
        "title: Overview\n"
        "weight: 10\n"
        "---\n"
        'A {{< glossary_tooltip text="pod" term_id="pod" >}} runs containers.\n'
        "\n"
        "{{< caution >}}\n"
        "Careful here.\n"
        "{{< /caution >}}\n"
    )


def test_blog_dates_and_tutorial_includes(legacy_site: Path) -> None:
    _migrate(legacy_site)

    assert _read(legacy_site, "content/en/blog/2015-07-02-post.md") == (
        "---\ntitle: Post\ndate: 2015-07-02\n---\nHello\n"
    )
    assert _read(legacy_site, "content/en/docs/tutorials/hello.md") == (
        "---\ntitle: Hello\ncontent_template: templates/tutorial\n---\n\nBody\n"
    )


def test_sections_and_overlay(
    legacy_site: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="docs_migrate"):
        _migrate(legacy_site)

    assert _read(legacy_site, "content/en/docs/concepts/workloads/_index.md") == (
        '---\ntitle: "Workloads"\nweight: 30\n---\n\n'
    )
    assert "toc_hide" not in _read(legacy_site, "content/en/docs/concepts/_index.md")
    assert _read(legacy_site, "content/en/blog/_index.md") == (
        "---\ntitle: Blog\n---\n"
    ), "overlay files replace migrated ones"
    assert "work/content_preserved not found" in caplog.text


def test_previous_output_is_removed_first(legacy_site: Path) -> None:
    stale = legacy_site / "content/en/docs/stale.md"
    stale.parent.mkdir(parents=True)
    stale.write_text("stale\n", encoding="utf-8")

    _migrate(legacy_site)

    assert not stale.exists()


def test_per_file_failures_do_not_stop_the_run(legacy_site: Path) -> None:
    (legacy_site / "blog/2016-01-01-broken.md").write_text(
        "---\ntitle: Broken\ndate: some day\n---\n", encoding="utf-8"
    )

    result = _migrate(legacy_site)

    assert [failure.path.name for failure in result.failures] == [
        "2016-01-01-broken.md"
    ]
    assert (legacy_site / "content/en/docs/concepts/workloads/_index.md").is_file(), (
        "later steps must still run"
    )
    assert "date: some day" in _read(legacy_site, "content/en/blog/2016-01-01-broken.md")


def test_files_that_are_not_utf8_are_migrated_byte_for_byte(legacy_site: Path) -> None:
    (legacy_site / "docs/concepts/latin1.md").write_bytes(
        b"---\ntitle: caf\xe9\n---\n"
        b'See {% glossary_tooltip text="pods" term_id="pod" %}.\n'
        b"{% include templates/tutorial.md %}\n"
    )

    result = _migrate(legacy_site)

    assert result.failures == []
    migrated = (legacy_site / "content/en/docs/concepts/latin1.md").read_bytes()
    assert b"title: caf\xe9\n" in migrated
    assert b'{{< glossary_tooltip text="pods" term_id="pod" >}}' in migrated
    assert b"content_template: templates/tutorial\n---\n" in migrated
    assert b"{% include" not in migrated
    assert (legacy_site / "content/en/docs/concepts/workloads/_index.md").is_file(), (
        "later steps must still run"
    )


def test_missing_landing_page_is_fatal(legacy_site: Path) -> None:
    (legacy_site / "docs/tasks/index.md").unlink()
    with pytest.raises(MigrationError, match="file not found"):
        _migrate(legacy_site)


def test_missing_data_directory_is_fatal(legacy_site: Path) -> None:
    for path in (legacy_site / "data/glossary").iterdir():
        path.unlink()
    (legacy_site / "data/glossary").rmdir()
    with pytest.raises(DataError):
        _migrate(legacy_site)


def test_dry_run_touches_nothing_but_reports_changes(legacy_site: Path) -> None:
    result = _migrate(legacy_site, dry_run=True)

    assert not (legacy_site / "content").exists()
    assert not (legacy_site / "static").exists()
    actions = {change.action for change in result.changes}
    assert {"copy", "move", "rename", "write"} <= actions
    copies = [c for c in result.changes if c.action == "copy"]
    assert copies[0].origin == (legacy_site / "docs").resolve()
    assert copies[0].destination == (legacy_site / "content/en/docs").resolve()
