"""Load migration configuration YAML into typed dataclasses."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import (
    DirMapping,
    LayoutOverride,
    MigrationConfig,
    MigrationConfigError,
    RenameRule,
    TemplateInclude,
)

_SCALAR_FIELDS = (
    "content_dir",
    "data_dir",
    "glossary_data_dir",
    "glossary_dir",
    "locale",
    "main_fixer_pattern",
    "blog_fixer_pattern",
)


def load_migration_config(
    path: Path | None, *, project_root: Path
) -> MigrationConfig:
    """Load the YAML file describing the legacy and target content layout.

    Parameters
    ----------
    path : Path or None
        Filesystem path to the YAML configuration file (for example,
        ``migrate.yaml``). When ``None`` the built-in defaults are used.
    project_root : Path
        Root of the website checkout; every relative path in the config is
        resolved against it.

    Returns
    -------
    MigrationConfig
        Parsed configuration where every key missing from the YAML keeps its
        default value.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    MigrationConfigError
        If a field has the wrong shape or a pattern does not compile.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_migration_config(None, project_root=Path("/srv/website"))
    >>> config.locale
    'en'
    """
    if path is None:
        return MigrationConfig(project_root=project_root)

    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    overrides: dict[str, typ.Any] = {}
    for field in _SCALAR_FIELDS:
        if field in raw:
            overrides[field] = _require_str(raw[field], field=field)

    if "copy_dirs" in raw:
        overrides["copy_dirs"] = _dir_mappings(raw["copy_dirs"], field="copy_dirs")
    if "move_dirs" in raw:
        overrides["move_dirs"] = _dir_mappings(raw["move_dirs"], field="move_dirs")
    if "file_renames" in raw:
        overrides["file_renames"] = _dir_mappings(
            raw["file_renames"], field="file_renames"
        )
    if "rename_rules" in raw:
        rows = _record_rows(
            raw["rename_rules"], field="rename_rules", keys=("pattern", "rename_to")
        )
        overrides["rename_rules"] = [RenameRule(*row) for row in rows]
    if "layout_overrides" in raw:
        rows = _record_rows(
            raw["layout_overrides"],
            field="layout_overrides",
            keys=("path", "old", "new"),
        )
        overrides["layout_overrides"] = [LayoutOverride(*row) for row in rows]
    if "template_includes" in raw:
        rows = _record_rows(
            raw["template_includes"],
            field="template_includes",
            keys=("directive", "key", "value"),
        )
        overrides["template_includes"] = [TemplateInclude(*row) for row in rows]
    if "link_titles" in raw:
        overrides["link_titles"] = _string_map(raw["link_titles"], field="link_titles")
    for field in ("main_menu", "remove_files", "callout_exclusions", "overlay_dirs"):
        if field in raw:
            overrides[field] = _string_list(raw[field] or [], field=field)

    config = MigrationConfig(project_root=project_root, **overrides)
    _validate_patterns(config)
    return config


def _dir_mappings(value: object, *, field: str) -> list[DirMapping]:
    rows = _record_rows(value, field=field, keys=("source", "destination"))
    return [DirMapping(*row) for row in rows]


def _validate_patterns(config: MigrationConfig) -> None:
    """Compile every configured regular expression once so typos fail early."""
    patterns = [
        ("main_fixer_pattern", config.main_fixer_pattern),
        ("blog_fixer_pattern", config.blog_fixer_pattern),
        *(("rename_rules", rule.pattern) for rule in config.rename_rules),
    ]
    for field, pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as exc:
            msg = f"Invalid regular expression for '{field}': {pattern!r} ({exc})"
            raise MigrationConfigError(msg) from exc


def _require_str(value: object, *, field: str) -> str:
    """Return ``value`` when it is a non-empty string, else raise."""
    if not isinstance(value, str) or not value.strip():
        msg = f"Expected a non-empty string for '{field}', got {value!r}."
        raise MigrationConfigError(msg)
    return value


def _string_list(value: object, *, field: str) -> list[str]:
    if not isinstance(value, list):
        msg = f"Expected a list for '{field}', got {type(value).__name__}."
        raise MigrationConfigError(msg)
    return [_require_str(item, field=field) for item in value]


def _string_map(value: object, *, field: str) -> dict[str, str]:
    if not isinstance(value, dict):
        msg = f"Expected a mapping for '{field}', got {type(value).__name__}."
        raise MigrationConfigError(msg)
    return {
        _require_str(key, field=field): _require_str(item, field=f"{field}.{key}")
        for key, item in value.items()
    }


def _record_rows(
    value: object, *, field: str, keys: tuple[str, ...]
) -> list[tuple[str, ...]]:
    """Return one tuple per mapping in a YAML list, ordered by ``keys``."""
    if not isinstance(value, list):
        msg = f"Expected a list for '{field}', got {type(value).__name__}."
        raise MigrationConfigError(msg)
    rows: list[tuple[str, ...]] = []
    for index, item in enumerate(value):
        match item:
            case dict():
                missing = [key for key in keys if key not in item]
                if missing:
                    msg = f"Entry {index} of '{field}' is missing {', '.join(missing)}."
                    raise MigrationConfigError(msg)
                rows.append(
                    tuple(_require_str(item[key], field=f"{field}.{key}") for key in keys)
                )
            case _:
                msg = f"Entry {index} of '{field}' must be a mapping."
                raise MigrationConfigError(msg)
    return rows


__all__ = ["load_migration_config"]
