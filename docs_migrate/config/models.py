"""Typed dataclasses describing a content migration run."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .helpers import (
    DEFAULT_BLOG_FIXER_PATTERN,
    DEFAULT_CALLOUT_EXCLUSIONS,
    DEFAULT_CONTENT_DIR,
    DEFAULT_DATA_DIR,
    DEFAULT_GLOSSARY_DATA_DIR,
    DEFAULT_GLOSSARY_DIR,
    DEFAULT_LOCALE,
    DEFAULT_MAIN_FIXER_PATTERN,
    _default_copy_dirs,
    _default_file_renames,
    _default_layout_overrides,
    _default_link_titles,
    _default_main_menu,
    _default_move_dirs,
    _default_overlay_dirs,
    _default_remove_files,
    _default_rename_rules,
    _default_template_includes,
)


class MigrationConfigError(ValueError):
    """Raised when the migration configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class DirMapping:
    """Source and destination directories, both relative to the project root."""

    source: str
    destination: str


@dc.dataclass(slots=True)
class RenameRule:
    """Rename every content file matching ``pattern`` to ``rename_to``.

    Attributes
    ----------
    pattern : str
        Regular expression searched in the POSIX path of each file relative to
        the content root.
    rename_to : str
        New filename, kept in the same directory as the matched file.
    """

    pattern: str
    rename_to: str


@dc.dataclass(slots=True)
class LayoutOverride:
    """Literal replacement applied to a single content file."""

    path: str
    old: str
    new: str


@dc.dataclass(slots=True)
class TemplateInclude:
    """Liquid include directive replaced by a front-matter key."""

    directive: str
    key: str
    value: str


@dc.dataclass(slots=True)
class MigrationConfig:
    """Everything a migration run needs to know about the project layout.

    Paths named ``*_dir``/``*_dirs`` are relative to ``project_root``; the
    per-file settings (``link_titles``, ``main_menu``, ``layout_overrides``,
    ``remove_files``) are relative to the content directory.
    """

    project_root: Path
    content_dir: str = DEFAULT_CONTENT_DIR
    data_dir: str = DEFAULT_DATA_DIR
    glossary_data_dir: str = DEFAULT_GLOSSARY_DATA_DIR
    glossary_dir: str = DEFAULT_GLOSSARY_DIR
    locale: str = DEFAULT_LOCALE
    copy_dirs: list[DirMapping] = dc.field(
        default_factory=lambda: _build(DirMapping, _default_copy_dirs())
    )
    move_dirs: list[DirMapping] = dc.field(
        default_factory=lambda: _build(DirMapping, _default_move_dirs())
    )
    rename_rules: list[RenameRule] = dc.field(
        default_factory=lambda: _build(RenameRule, _default_rename_rules())
    )
    file_renames: list[DirMapping] = dc.field(
        default_factory=lambda: _build(DirMapping, _default_file_renames())
    )
    link_titles: dict[str, str] = dc.field(default_factory=_default_link_titles)
    main_menu: list[str] = dc.field(default_factory=_default_main_menu)
    layout_overrides: list[LayoutOverride] = dc.field(
        default_factory=lambda: _build(LayoutOverride, _default_layout_overrides())
    )
    remove_files: list[str] = dc.field(default_factory=_default_remove_files)
    template_includes: list[TemplateInclude] = dc.field(
        default_factory=lambda: _build(TemplateInclude, _default_template_includes())
    )
    callout_exclusions: list[str] = dc.field(
        default_factory=lambda: list(DEFAULT_CALLOUT_EXCLUSIONS)
    )
    overlay_dirs: list[str] = dc.field(default_factory=_default_overlay_dirs)
    main_fixer_pattern: str = DEFAULT_MAIN_FIXER_PATTERN
    blog_fixer_pattern: str = DEFAULT_BLOG_FIXER_PATTERN

    @property
    def data_path(self) -> Path:
        """Return the absolute sidecar data directory."""
        return self.project_root / self.data_dir

    @property
    def glossary_data_path(self) -> Path:
        """Return the absolute glossary records directory."""
        return self.data_path / self.glossary_data_dir

    def content_rel(self, rel: str) -> str:
        """Return ``rel`` (relative to the content dir) relative to the project root."""
        return f"{self.content_dir}/{rel.lstrip('/')}"


def _build(factory: type, rows: list[tuple[str, ...]]) -> list:
    return [factory(*row) for row in rows]


__all__ = [
    "DirMapping",
    "LayoutOverride",
    "MigrationConfig",
    "MigrationConfigError",
    "RenameRule",
    "TemplateInclude",
]
