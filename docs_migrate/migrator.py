"""Run the content migration steps in order.

Example
-------
>>> from pathlib import Path
>>> from docs_migrate.config import load_migration_config
>>> from docs_migrate.migrator import Migrator
>>> config = load_migration_config(None, project_root=Path("/srv/website"))
>>> result = Migrator(config, dry_run=True).run()  # doctest: +SKIP
>>> len(result.failures)  # doctest: +SKIP
0
"""

from __future__ import annotations

import functools
import logging
import re
import typing as typ

from .callouts import callouts_to_shortcodes
from .content_tree import FILE_ERRORS, ContentTree, StepResult
from .data import load_glossary, load_sections
from .fixers import (
    FixerChain,
    captures_to_shortcode,
    code_include_to_shortcode,
    fix_broken_glossary_tooltip,
    fix_dates,
    glossary_definition_to_shortcode,
    glossary_tooltip_to_shortcode,
    remove_pattern,
    replace_string,
)
from .frontmatter import add_key_value, add_link_title, add_to_docs_main_menu
from .glossary import GlossaryBuilder
from .rendering import ContentRenderer
from .sections import SectionBuilder

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import MigrationConfig, TemplateInclude

logger = logging.getLogger(__name__)

MAIN_MENU_BASE_WEIGHT = 20
MAIN_MENU_WEIGHT_STEP = 10


class Migrator:
    """Drive one migration run over a website checkout."""

    def __init__(self, config: MigrationConfig, *, dry_run: bool = False) -> None:
        self.config = config
        self.dry_run = dry_run
        self.tree = ContentTree(
            config.project_root, content_dir=config.content_dir, dry_run=dry_run
        )
        self.renderer = ContentRenderer()

    @property
    def steps(self) -> list[tuple[str, cabc.Callable[[], StepResult]]]:
        return [
            ("start fresh", self.start_fresh),
            ("copy and rename", self.copy_and_rename),
            ("glossary", self.create_glossary),
            ("replacements", self.replacements),
            ("sections", self.create_sections),
            ("final overlay", self.final_overlay),
        ]

    def run(self) -> StepResult:
        """Run every step and return the aggregated changes and failures.

        Raises
        ------
        MigrationError
            If a step's precondition fails (missing source directory, missing
            target file).
        DataError
            If the sidecar data cannot be loaded.
        """
        result = StepResult()
        for name, step in self.steps:
            logger.info("start %s step%s", name, " (dry run)" if self.dry_run else "")
            result.extend(step())
        logger.info(
            "migration finished: %d changes, %d failures",
            len(result.changes),
            len(result.failures),
        )
        return result

    def start_fresh(self) -> StepResult:
        """Remove the content directory left by any previous run."""
        return self.tree.remove_tree(self.config.content_dir)

    def copy_and_rename(self) -> StepResult:
        result = StepResult()
        for mapping in self.config.copy_dirs:
            result.extend(self.tree.copy_dir(mapping.source, mapping.destination))
        for mapping in self.config.move_dirs:
            result.extend(self.tree.move_dir(mapping.source, mapping.destination))
        for rule in self.config.rename_rules:
            result.extend(self.tree.rename_content_files(rule.pattern, rule.rename_to))
        for mapping in self.config.file_renames:
            result.extend(self.tree.rename_file(mapping.source, mapping.destination))
        return result

    def create_glossary(self) -> StepResult:
        entries = load_glossary(self.config.glossary_data_path)
        builder = GlossaryBuilder(
            self.tree, self.config.glossary_dir, renderer=self.renderer
        )
        return builder.run(entries)

    def replacements(self) -> StepResult:
        """Inject front matter, remove stale pages and rewrite Liquid syntax."""
        config = self.config
        result = StepResult()
        for rel, title in config.link_titles.items():
            result.extend(
                self.tree.replace_in_file_rel(config.content_rel(rel), add_link_title(title))
            )
        for index, rel in enumerate(config.main_menu):
            weight = MAIN_MENU_BASE_WEIGHT + index * MAIN_MENU_WEIGHT_STEP
            result.extend(
                self.tree.replace_in_file_rel(
                    config.content_rel(rel), add_to_docs_main_menu(weight)
                )
            )
        for override in config.layout_overrides:
            result.extend(
                self.tree.replace_in_file_rel(
                    config.content_rel(override.path),
                    replace_string(override.old, override.new),
                )
            )
        for rel in config.remove_files:
            result.extend(self.tree.remove_file(config.content_rel(rel)))
        result.extend(
            self.tree.apply_fixers(self.main_fixers(), config.main_fixer_pattern)
        )
        result.extend(
            self.tree.apply_fixers(FixerChain([fix_dates]), config.blog_fixer_pattern)
        )
        for include in config.template_includes:
            result.extend(self.replace_template_include(include))
        return result

    def main_fixers(self) -> FixerChain:
        """Return the Liquid-to-shortcode chain applied to every Markdown file."""
        callouts = functools.partial(
            callouts_to_shortcodes, exclusions=tuple(self.config.callout_exclusions)
        )
        return FixerChain(
            [
                fix_broken_glossary_tooltip,
                glossary_tooltip_to_shortcode,
                glossary_definition_to_shortcode,
                code_include_to_shortcode,
                captures_to_shortcode,
                callouts,
            ]
        )

    def replace_template_include(self, include: TemplateInclude) -> StepResult:
        """Turn a Liquid include directive into a front-matter key.

        Every Markdown content file containing ``include.directive`` gets
        ``include.key: include.value`` appended to its front matter and loses
        the directive itself.
        """
        chain = FixerChain(
            [
                add_key_value(include.key, include.value),
                remove_pattern(re.escape(include.directive)),
            ]
        )
        result = StepResult()
        for path in self.tree.walk_matching(self.config.main_fixer_pattern):
            text = path.read_text(encoding="utf-8", errors=FILE_ERRORS)
            if include.directive in text:
                result.extend(self.tree.replace_in_file(path, chain))
        return result

    def create_sections(self) -> StepResult:
        sections = load_sections(self.config.data_path)
        builder = SectionBuilder(
            self.tree, locale=self.config.locale, renderer=self.renderer
        )
        return builder.run(sections)

    def final_overlay(self) -> StepResult:
        """Merge hand-maintained replacement trees over the content directory.

        Overlay files win over anything earlier steps produced.
        """
        result = StepResult()
        for overlay in self.config.overlay_dirs:
            if not self.tree.exists(overlay):
                logger.warning("overlay directory %s not found; skipping", overlay)
                continue
            result.extend(self.tree.copy_dir(overlay, self.config.content_dir))
        return result


__all__ = ["Migrator"]
