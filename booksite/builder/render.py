"""Convert Markdown chapters into HTML fragments."""

from __future__ import annotations

import re
from typing import Any

import markdown  # type: ignore[import-untyped]
from bs4 import BeautifulSoup

# Extensions used for every chapter: fenced code with Pygments
# highlighting, tables, heading anchors and typographic punctuation.
MD_EXTENSIONS = ["extra", "codehilite", "toc", "sane_lists", "smarty"]
MD_EXTENSION_CONFIGS: dict[str, dict[str, Any]] = {
    "codehilite": {"css_class": "highlight", "guess_lang": False},
}

# Relative link pointing at another chapter, with an optional fragment.
_MD_LINK_RE = re.compile(r"^(?P<target>[^:?#]+)\.md(?P<fragment>#.*)?$")


def render_markdown(text: str) -> str:
    """Render Markdown text into an HTML fragment.

    Args:
        text: Markdown source of a chapter.

    Returns:
        HTML fragment with chapter links pointing at ``.html`` pages.
    """

    md = markdown.Markdown(
        extensions=MD_EXTENSIONS,
        extension_configs=MD_EXTENSION_CONFIGS,
        output_format="html",
    )
    return rewrite_chapter_links(md.convert(text))


def rewrite_chapter_links(html: str) -> str:
    """Point relative ``.md`` links at the rendered ``.html`` pages.

    Args:
        html: Rendered HTML fragment.

    Returns:
        The fragment with chapter links rewritten. Fragments without such
        links are returned unchanged.
    """

    if ".md" not in html:
        return html

    soup = BeautifulSoup(html, "html.parser")
    changed = False
    for link in soup.find_all("a", href=True):
        match = _MD_LINK_RE.match(link["href"])
        if match is None:
            continue
        link["href"] = (
            f"{match.group('target')}.html{match.group('fragment') or ''}"
        )
        changed = True

    return str(soup) if changed else html
