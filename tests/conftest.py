"""Shared fixtures building a miniature legacy website checkout."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

LEGACY_FILES: dict[str, str] = {
    "docs/home/index.md": """
        ---
        title: Home
        layout: docsportal
        ---
        Welcome
        """,
    "docs/setup/index.md": "---\ntitle: Setup\n---\n",
    "docs/concepts/index.md": "---\ntitle: Concepts\n---\n",
    "docs/tasks/index.md": "---\ntitle: Tasks\n---\n",
    "docs/tutorials/index.md": "---\ntitle: Tutorials\n---\n",
    "docs/reference/index.md": "---\ntitle: Reference\n---\n",
    "docs/reference/glossary.md": "---\ntitle: Glossary\n---\n",
    "docs/reference/generated/kubectl.html": "<html></html>\n",
    "docs/concepts/overview.md": """
        ---
        title: Overview
        ---
        A {% glossary_tooltip text="pod" term_id="pod" %} runs containers.

        Careful here.
        {: .caution}
        """,
    "docs/concepts/workloads/pods.md": "---\ntitle: Pods\n---\nPods.\n",
    "docs/tutorials/hello.md": """
        ---
        title: Hello
        ---
        {% include templates/tutorial.md %}
        Body
        """,
    "blog/index.html": "<h1>Blog</h1>\n",
    "blog/2015-07-02-post.md": """
        ---
        title: Post
        date: Friday, July 02, 2015
        ---
        Hello
        """,
    "cn/docs/index.md": "---\ntitle: 文档\n---\n",
    "data/glossary/_example.yml": "name: Example\nid: example\n",
    "data/glossary/pod.yml": """
        name: Pod
        id: pod
        full-link: /docs/concepts/workloads/pods/
        aka:
        - Pods
        short-description: >
          The smallest deployable unit.
        long-description: |
          A Pod represents a set of running containers.
        tags:
        - core-object
        - fundamental
        """,
    "data/concepts.yml": """
        bigheader: Concepts
        abstract: Detailed explanations
        toc:
        - docs/concepts/index.md
        - title: Overview
          section:
          - docs/concepts/overview.md
        - title: Workloads
          section:
          - docs/concepts/workloads/pods.md
        """,
    "work/content/en/blog/_index.md": "---\ntitle: Blog\n---\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``files`` (relative path to text) below ``root``."""
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        body = dedent(text).lstrip("\n") if text.startswith("\n") else text
        path.write_text(body, encoding="utf-8")
    return root


@pytest.fixture
def legacy_site(tmp_path: Path) -> Path:
    """Return a checkout holding every path the default layout expects."""
    return write_tree(tmp_path / "website", LEGACY_FILES)


@pytest.fixture
def make_tree(tmp_path: Path) -> typ.Callable[[dict[str, str]], Path]:
    """Return a helper writing files below a fresh project root."""

    def _make(files: dict[str, str]) -> Path:
        return write_tree(tmp_path / "project", files)

    return _make
