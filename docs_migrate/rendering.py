"""Jinja rendering for the content files the migration generates."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .frontmatter import quote_value

TEMPLATES_DIR = Path(__file__).parent / "templates"


class ContentRenderer:
    """Render generated Markdown files from the bundled templates."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the renderer and its Jinja environment."""
        self.templates_dir = templates_dir or TEMPLATES_DIR
        # Output is Markdown with YAML front matter, never HTML.
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["quoted"] = quote_value

    def render(self, template_name: str, **context: object) -> str:
        """Render ``template_name`` and guarantee a trailing newline."""
        text = self.env.get_template(template_name).render(**context)
        if not text.endswith("\n"):
            text += "\n"
        return text


__all__ = ["TEMPLATES_DIR", "ContentRenderer"]
