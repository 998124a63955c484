r"""Locate the front-matter block of a content file and append keys to it.

The block is never parsed: everything between the opening and closing ``---``
lines is treated as opaque text, and additions are appended as new lines just
before the closing delimiter. That keeps comments, key order and quoting in
legacy files exactly as they were.

Example
-------
>>> from docs_migrate.frontmatter import append_to_front_matter
>>> append_to_front_matter("---\ntitle: Home\n---\nBody\n", "weight: 20")
'---\ntitle: Home\nweight: 20\n---\nBody\n'
"""

from __future__ import annotations

import json
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .fixers import Fixer

FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_PATTERN = re.compile(
    r"\A---(\r?\n)(?:(.*?)\r?\n)?---(\r?\n|\Z)", re.DOTALL
)


def has_front_matter(text: str) -> bool:
    """Return ``True`` when ``text`` opens with a front-matter block."""
    return FRONT_MATTER_PATTERN.match(text) is not None


def append_to_front_matter(text: str, addition: str) -> str:
    """Insert ``addition`` immediately before the closing delimiter.

    Parameters
    ----------
    text : str
        Full document text.
    addition : str
        One or more ``key: value`` lines. A trailing newline is ignored.

    Returns
    -------
    str
        The document with the addition appended to its front matter, or
        ``text`` unchanged when the document has no front matter. Added
        lines use the line ending of the opening delimiter.
    """
    addition = addition.rstrip("\r\n")
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None or not addition:
        return text
    newline, body, tail = match.group(1), match.group(2), match.group(3)
    addition = newline.join(addition.splitlines())
    head = f"{body}{newline}{addition}" if body is not None else addition
    return f"---{newline}{head}{newline}---{tail}{text[match.end():]}"


def quote_value(value: str) -> str:
    """Return ``value`` as a double-quoted YAML scalar."""
    return json.dumps(value, ensure_ascii=False)


def format_value(value: object) -> str:
    """Render a scalar the way it should appear after ``key: ``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def add_key_value(key: str, value: object) -> Fixer:
    """Return a fixer appending ``key: value`` to the front matter."""

    def add_key_value_fixer(path: Path, text: str) -> str:
        return append_to_front_matter(text, f"{key}: {format_value(value)}")

    add_key_value_fixer.__name__ = f"add_{key}"
    return add_key_value_fixer


def add_weight(weight: int) -> Fixer:
    """Return a fixer appending an ordering weight."""

    def add_weight_fixer(path: Path, text: str) -> str:
        return append_to_front_matter(text, f"weight: {weight}")

    return add_weight_fixer


def add_link_title(title: str) -> Fixer:
    """Return a fixer appending a quoted ``linkTitle``."""

    def add_link_title_fixer(path: Path, text: str) -> str:
        return append_to_front_matter(text, f"linkTitle: {quote_value(title)}")

    return add_link_title_fixer


def add_to_docs_main_menu(weight: int) -> Fixer:
    """Return a fixer placing the page in the docs main menu at ``weight``."""

    def add_to_docs_main_menu_fixer(path: Path, text: str) -> str:
        return append_to_front_matter(text, f"main_menu: true\nweight: {weight}")

    return add_to_docs_main_menu_fixer


__all__ = [
    "FRONT_MATTER_DELIMITER",
    "FRONT_MATTER_PATTERN",
    "add_key_value",
    "add_link_title",
    "add_to_docs_main_menu",
    "add_weight",
    "append_to_front_matter",
    "format_value",
    "has_front_matter",
    "quote_value",
]
