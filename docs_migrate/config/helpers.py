"""Default layout values used when the migration config omits a setting.

The defaults reproduce the Kubernetes website move from Jekyll to Hugo: the
legacy ``docs``/``blog``/``cn/docs`` roots land under ``content/<locale>``,
generated API reference output moves to ``static``, and a handful of landing
pages get menu placement and link titles.
"""

from __future__ import annotations

DEFAULT_CONTENT_DIR = "content"
DEFAULT_DATA_DIR = "data"
DEFAULT_GLOSSARY_DATA_DIR = "glossary"
DEFAULT_GLOSSARY_DIR = "content/en/docs/reference/glossary"
DEFAULT_LOCALE = "en"
DEFAULT_MAIN_FIXER_PATTERN = r"md$"
DEFAULT_BLOG_FIXER_PATTERN = r".*blog/.*md$"
DEFAULT_CALLOUT_EXCLUSIONS = ("style-guide",)


def _default_copy_dirs() -> list[tuple[str, str]]:
    return [
        ("docs", "content/en/docs"),
        ("blog", "content/en/blog"),
        ("cn/docs", "content/cn/docs"),
    ]


def _default_move_dirs() -> list[tuple[str, str]]:
    return [("content/en/docs/reference/generated", "static/reference/generated")]


def _default_rename_rules() -> list[tuple[str, str]]:
    return [
        (r"(^|/)index\.md$", "_index.md"),
        (r"doc.*/index\.html$", "_index.html"),
    ]


def _default_file_renames() -> list[tuple[str, str]]:
    # Replaced by an overlay file later; only the name matters here.
    return [("content/en/blog/index.html", "content/en/blog/_index.md")]


def _default_link_titles() -> dict[str, str]:
    return {
        "en/docs/home/_index.md": "Home",
        "en/docs/reference/_index.md": "Reference",
    }


def _default_main_menu() -> list[str]:
    return [
        "en/docs/home/_index.md",
        "en/docs/setup/_index.md",
        "en/docs/concepts/_index.md",
        "en/docs/tasks/_index.md",
        "en/docs/tutorials/_index.md",
        "en/docs/reference/_index.md",
    ]


def _default_layout_overrides() -> list[tuple[str, str, str]]:
    return [("en/docs/home/_index.md", "layout: docsportal", "layout: docsportal_home")]


def _default_remove_files() -> list[str]:
    # Superseded by the generated glossary bundle.
    return ["en/docs/reference/glossary.md"]


def _default_template_includes() -> list[tuple[str, str, str]]:
    return [
        ("{% include templates/tutorial.md %}", "content_template", "templates/tutorial"),
    ]


def _default_overlay_dirs() -> list[str]:
    return ["work/content", "work/content_preserved"]


__all__ = [
    "DEFAULT_BLOG_FIXER_PATTERN",
    "DEFAULT_CALLOUT_EXCLUSIONS",
    "DEFAULT_CONTENT_DIR",
    "DEFAULT_DATA_DIR",
    "DEFAULT_GLOSSARY_DATA_DIR",
    "DEFAULT_GLOSSARY_DIR",
    "DEFAULT_LOCALE",
    "DEFAULT_MAIN_FIXER_PATTERN",
]
