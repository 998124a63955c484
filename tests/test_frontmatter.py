"""Unit tests for front-matter location and key injection."""

from __future__ import annotations

from pathlib import Path

import pytest

from docs_migrate.frontmatter import (
    add_key_value,
    add_link_title,
    add_to_docs_main_menu,
    add_weight,
    append_to_front_matter,
    has_front_matter,
)

DOC = "---\ntitle: Home\nlayout: docsportal\n---\n\nBody with --- inside\n"


def test_append_inserts_before_closing_delimiter() -> None:
    result = append_to_front_matter(DOC, "weight: 20")
    assert result == (
        "---\ntitle: Home\nlayout: docsportal\nweight: 20\n---\n\nBody with --- inside\n"
    ), f"unexpected document: {result!r}"


def test_append_preserves_everything_outside_the_block() -> None:
    result = append_to_front_matter(DOC, "a: 1\nb: 2\n")
    head, _, rest = result.partition("\n---")
    assert rest == "\n\nBody with --- inside\n", "body after the block must be untouched"
    assert head.endswith("layout: docsportal\na: 1\nb: 2"), (
        f"additions should sit right before the closing delimiter, got {head!r}"
    )


@pytest.mark.parametrize(
    "text",
    [
        "No front matter here\n",
        "",
        "title: Home\n---\n",
        "\n---\ntitle: Home\n---\n",
    ],
)
def test_append_without_front_matter_is_identity(text: str) -> None:
    assert append_to_front_matter(text, "weight: 10") == text, (
        "documents without a leading block must come back unchanged"
    )


def test_append_handles_block_at_end_of_file() -> None:
    assert append_to_front_matter("---\ntitle: x\n---", "weight: 1") == (
        "---\ntitle: x\nweight: 1\n---"
    )


def test_append_handles_empty_block() -> None:
    assert append_to_front_matter("---\n---\nBody\n", "weight: 1") == (
        "---\nweight: 1\n---\nBody\n"
    )


def test_append_uses_crlf_in_crlf_documents() -> None:
    text = "---\r\ntitle: Home\r\n---\r\nBody\r\n"
    assert append_to_front_matter(text, "linkTitle: Home\nweight: 20\n") == (
        "---\r\ntitle: Home\r\nlinkTitle: Home\r\nweight: 20\r\n---\r\nBody\r\n"
    )
    assert has_front_matter(text)


def test_additions_accumulate_in_order() -> None:
    path = Path("content/en/docs/home/_index.md")
    text = "---\ntitle: Home\n---\n"
    for fixer in (add_link_title("Home"), add_to_docs_main_menu(20)):
        text = fixer(path, text)
    assert text == (
        '---\ntitle: Home\nlinkTitle: "Home"\nmain_menu: true\nweight: 20\n---\n'
    ), f"unexpected accumulated block: {text!r}"


def test_add_key_value_formats_booleans_and_names_fixer() -> None:
    fixer = add_key_value("toc_hide", True)
    assert fixer.__name__ == "add_toc_hide"
    assert fixer(Path("a.md"), "---\ntitle: a\n---\n") == (
        "---\ntitle: a\ntoc_hide: true\n---\n"
    )


def test_add_weight_appends_integer_weight() -> None:
    assert add_weight(30)(Path("a.md"), "---\n---\n") == "---\nweight: 30\n---\n"


def test_link_title_is_quoted() -> None:
    fixer = add_link_title('Say "hi"')
    assert fixer(Path("a.md"), "---\n---\n") == '---\nlinkTitle: "Say \\"hi\\""\n---\n'


def test_has_front_matter() -> None:
    assert has_front_matter(DOC)
    assert not has_front_matter("plain text\n")
