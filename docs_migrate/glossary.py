"""Synthesize glossary term pages from the sidecar glossary records."""

from __future__ import annotations

import logging
import typing as typ

from .content_tree import StepResult
from .rendering import ContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .content_tree import ContentTree
    from .data import GlossaryEntry

logger = logging.getLogger(__name__)

GLOSSARY_INDEX_TEMPLATE = "glossary_index.md.jinja"
GLOSSARY_ENTRY_TEMPLATE = "glossary_entry.md.jinja"
GLOSSARY_DATE = "2018-04-12"


class GlossaryBuilder:
    """Write the glossary bundle index and one page per glossary entry."""

    def __init__(
        self,
        tree: ContentTree,
        glossary_dir: str,
        *,
        renderer: ContentRenderer | None = None,
    ) -> None:
        self.tree = tree
        self.glossary_dir = glossary_dir
        self.renderer = renderer or ContentRenderer()

    def run(self, entries: cabc.Mapping[str, GlossaryEntry]) -> StepResult:
        """Write ``index.md`` and ``<key>.md`` for every entry, in key order.

        Parameters
        ----------
        entries : Mapping[str, GlossaryEntry]
            Glossary records keyed by their data filename stem.

        Returns
        -------
        StepResult
            A ``write`` record per generated page.
        """
        result = StepResult()
        index = self.renderer.render(GLOSSARY_INDEX_TEMPLATE)
        result.extend(self.tree.write_file(f"{self.glossary_dir}/index.md", index))
        for key in sorted(entries):
            page = self.renderer.render(
                GLOSSARY_ENTRY_TEMPLATE, entry=entries[key], date=GLOSSARY_DATE
            )
            result.extend(self.tree.write_file(f"{self.glossary_dir}/{key}.md", page))
        logger.info("wrote %d glossary entries to %s", len(entries), self.glossary_dir)
        return result


__all__ = ["GLOSSARY_DATE", "GlossaryBuilder"]
