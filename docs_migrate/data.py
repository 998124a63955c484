"""Decode sidecar YAML data files into explicit record types.

Two record shapes are consumed: glossary terms (one file per term under
``data/glossary``) and per-section tables of contents (one file per top-level
section directly under ``data``). Files are read with ruamel.yaml's safe loader
and converted with :func:`msgspec.convert`, so a record with the wrong shape
fails at load time with a message naming the file instead of surfacing later
as a surprise type in the section builder.

Example
-------
>>> from pathlib import Path
>>> from docs_migrate.data import load_sections
>>> sections = load_sections(Path("data"))  # doctest: +SKIP
>>> sections["concepts"].toc[1].title  # doctest: +SKIP
'Overview'
"""

from __future__ import annotations

import typing as typ

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .frontmatter import format_value

if typ.TYPE_CHECKING:
    from pathlib import Path

RecordT = typ.TypeVar("RecordT")

DATA_SUFFIXES = frozenset({".yml", ".yaml"})
EXAMPLE_RECORD = "_example"
GLOSSARY_LIST_FIELDS = frozenset({"aka", "tags"})


class DataError(RuntimeError):
    """Raised when a sidecar data directory or record cannot be loaded."""


class GlossaryEntry(msgspec.Struct, rename="kebab"):
    """A glossary term as stored in ``data/glossary/<key>.yml``."""

    name: str | None = None
    id: str | None = None
    short_description: str | None = None
    long_description: str | None = None
    full_link: str | None = None
    aka: str | list[str] | None = None
    tags: list[str] = msgspec.field(default_factory=list)

    @property
    def aka_text(self) -> str:
        """Return ``aka`` flattened to a comma-separated string."""
        if isinstance(self.aka, list):
            return ", ".join(self.aka)
        return self.aka or ""


class TocNode(msgspec.Struct):
    """A titled group of table-of-contents entries.

    ``section`` holds either content paths (``docs/concepts/foo.md``) or nested
    nodes, in display order.
    """

    title: str = ""
    landing_page: str | None = None
    section: list[str | TocNode] = msgspec.field(default_factory=list)


class SectionData(msgspec.Struct):
    """Table of contents for one top-level documentation section."""

    bigheader: str | None = None
    abstract: str | None = None
    landing_page: str | None = None
    toc: list[str | TocNode] = msgspec.field(default_factory=list)


def read_data_dir(
    directory: Path,
    record_type: type[RecordT],
    *,
    prepare: typ.Callable[[typ.Any], typ.Any] | None = None,
) -> dict[str, RecordT]:
    """Load every YAML file in ``directory`` into ``record_type``.

    Parameters
    ----------
    directory : Path
        Directory whose regular ``.yml``/``.yaml`` files are read; nested
        directories are ignored.
    record_type : type
        msgspec-convertible type each file is decoded into.
    prepare : Callable, optional
        Applied to each loaded document before conversion.

    Returns
    -------
    dict[str, RecordT]
        Records keyed by filename without extension, in filename order.

    Raises
    ------
    DataError
        If the directory is missing, a file is not valid YAML, or a record
        does not match ``record_type``.
    """
    if not directory.is_dir():
        msg = f"Data directory '{directory}' not found."
        raise DataError(msg)

    loader = YAML(typ="safe")
    records: dict[str, RecordT] = {}
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix not in DATA_SUFFIXES:
            continue
        try:
            with path.open("r", encoding="utf-8") as handle:
                loaded = loader.load(handle)
        except YAMLError as exc:
            msg = f"Cannot parse data file '{path}': {exc}"
            raise DataError(msg) from exc
        try:
            document = loaded or {}
            if prepare is not None:
                document = prepare(document)
            records[path.stem] = msgspec.convert(document, type=record_type)
        except msgspec.ValidationError as exc:
            msg = f"Unexpected record shape in '{path}': {exc}"
            raise DataError(msg) from exc
    return records


def glossary_fields_as_text(document: object) -> object:
    """Read glossary scalars as text, the way the site templates do.

    ``id: 123`` becomes ``"123"``, ``true`` becomes ``"true"`` and dates keep
    their ISO form. A null ``tags`` is an empty list and a string ``tags`` is
    split on whitespace. Nested mappings are left for conversion to reject.
    """
    if not isinstance(document, dict):
        return document
    fields: dict[object, object] = {}
    for key, value in document.items():
        if value is None:
            fields[key] = [] if key == "tags" else None
        elif key in GLOSSARY_LIST_FIELDS and isinstance(value, list):
            fields[key] = [format_value(item) for item in value if item is not None]
        elif key == "tags" and not isinstance(value, dict):
            fields[key] = format_value(value).split()
        elif isinstance(value, (list, dict)):
            fields[key] = value
        else:
            fields[key] = format_value(value)
    return fields


def load_glossary(directory: Path) -> dict[str, GlossaryEntry]:
    """Return glossary records, skipping the ``_example`` template record."""
    entries = read_data_dir(directory, GlossaryEntry, prepare=glossary_fields_as_text)
    entries.pop(EXAMPLE_RECORD, None)
    return entries


def load_sections(directory: Path) -> dict[str, SectionData]:
    """Return the table-of-contents records stored directly in ``directory``."""
    return read_data_dir(directory, SectionData)


__all__ = [
    "DataError",
    "GlossaryEntry",
    "SectionData",
    "TocNode",
    "glossary_fields_as_text",
    "load_glossary",
    "load_sections",
    "read_data_dir",
]
