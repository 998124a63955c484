"""Derive section index files and ordering weights from table-of-contents data.

Every top-level :class:`~docs_migrate.data.TocNode` of a section becomes a Hugo
section: the directory of its first listed page gets an ``_index.md`` carrying
the node title and a weight derived from the node position, and every listed
page gets a weight derived from its own position. Section indexes that no table
of contents mentions are hidden from the navigation afterwards.
"""

from __future__ import annotations

import logging
import posixpath
import typing as typ

from .content_tree import StepResult
from .data import TocNode
from .frontmatter import add_key_value, add_weight
from .rendering import ContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .content_tree import ContentTree
    from .data import SectionData

logger = logging.getLogger(__name__)

SECTION_INDEX_TEMPLATE = "section_index.md.jinja"
SECTION_INDEX_NAMES = ("_index.md", "_index.html")
WEIGHT_STEP = 10


def position_weight(index: int) -> int:
    """Return the ordering weight for the zero-based ``index``."""
    return (index + 1) * WEIGHT_STEP


def title_from_folder(folder: str) -> str:
    """Turn a folder name into a title: ``foo-bar`` becomes ``Foo Bar``."""
    words = folder.replace("-", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def is_section_page(entry: str) -> bool:
    """Return ``True`` for toc entries that should shape a section.

    Entries outside ``docs``, bundle indexes and generated reference output
    are not weighted.
    """
    if not entry.startswith("docs"):
        logger.info("skip toc file: %s", entry)
        return False
    return not entry.endswith("index.md") and "generated" not in entry


class SectionBuilder:
    """Apply table-of-contents data to a content tree.

    Attributes
    ----------
    added_files : set[str]
        Section indexes written by this builder, relative to the project root.
    toc_dirs : set[str]
        Directories (relative to the locale root) that some toc entry lists.
    """

    def __init__(
        self,
        tree: ContentTree,
        *,
        locale: str = "en",
        renderer: ContentRenderer | None = None,
    ) -> None:
        self.tree = tree
        self.locale = locale
        self.renderer = renderer or ContentRenderer()
        self.added_files: set[str] = set()
        self.toc_dirs: set[str] = set()

    @property
    def locale_root(self) -> str:
        return f"{self.tree.content_dir}/{self.locale}"

    def run(self, sections: cabc.Mapping[str, SectionData]) -> StepResult:
        """Create section indexes and weights, then hide untracked sections."""
        result = StepResult()
        for name in sorted(sections):
            for index, node in enumerate(sections[name].toc):
                # Plain strings at the top level are section landing pages.
                if isinstance(node, TocNode):
                    result.extend(self.handle_node(index, node))
        result.extend(self.hide_untracked_sections())
        return result

    def handle_node(self, index: int, node: TocNode) -> StepResult:
        """Process one toc node found at position ``index`` of its parent."""
        result = StepResult()
        section_weight = position_weight(index)
        index_written = False
        for position, entry in enumerate(node.section):
            if isinstance(entry, TocNode):
                result.extend(self.handle_node(position, entry))
                continue
            entry = entry.strip()
            if not is_section_page(entry):
                continue
            folder = posixpath.dirname(entry)
            self.toc_dirs.add(folder)
            if not index_written:
                index_written = True
                result.extend(self._write_section_index(folder, node.title, section_weight))
            result.extend(self._weight_page(entry, position_weight(position)))
        return result

    def hide_untracked_sections(self) -> StepResult:
        """Add ``toc_hide: true`` to section indexes outside every toc."""
        result = StepResult()
        locale_root = self.tree.resolve(self.locale_root)
        hide = add_key_value("toc_hide", True)
        for path in self.tree.walk(f"{self.locale}/docs"):
            if not path.name.startswith("_index"):
                continue
            folder = path.parent.relative_to(locale_root).as_posix()
            if self._is_listed(folder):
                continue
            result.extend(self.tree.replace_in_file(path, hide))
        return result

    def _is_listed(self, folder: str) -> bool:
        return any(
            listed == folder or listed.startswith(f"{folder}/")
            for listed in self.toc_dirs
        )

    def _write_section_index(self, folder: str, title: str, weight: int) -> StepResult:
        rel = f"{self.locale_root}/{folder}/_index.md"
        if rel in self.added_files:
            title = title_from_folder(posixpath.basename(folder))
            logger.warning("%s section already added; using title %r", rel, title)
        elif any(
            self.tree.exists(f"{self.locale_root}/{folder}/{name}")
            for name in SECTION_INDEX_NAMES
        ):
            return StepResult()
        self.added_files.add(rel)
        content = self.renderer.render(SECTION_INDEX_TEMPLATE, title=title, weight=weight)
        return self.tree.write_file(rel, content)

    def _weight_page(self, entry: str, weight: int) -> StepResult:
        rel = f"{self.locale_root}/{entry}"
        if not self.tree.exists(rel):
            logger.info("content file in toc does not exist: %s", rel)
            return StepResult()
        return self.tree.replace_in_file_rel(rel, add_weight(weight))


__all__ = [
    "SectionBuilder",
    "is_section_page",
    "position_weight",
    "title_from_folder",
]
