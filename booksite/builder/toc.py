"""Derive a page's table of contents from its rendered HTML."""

from __future__ import annotations

import html as html_lib
import logging
import re

from attrs import define, field
from bs4 import BeautifulSoup, Tag

from booksite.json_utils import json_dumps

from .toc_entry import TocEntry
from .types import TocEntryList

logger = logging.getLogger(__name__)

TOC_LEVELS = ["h1", "h2", "h3"]

# Markup used when a page has no headings.
EMPTY_TOC_HTML = '<p class="toc-empty">No table of contents</p>'

_NON_WORD_RE = re.compile(r"\W+")


@define(slots=True, frozen=True)
class TocResult:
    """Outcome of a table of contents extraction.

    Attributes:
        toc_html: Flat list of links to the page headings.
        entries: Headings in document order.
        html: Page fragment with an ``id`` on every listed heading.
    """

    toc_html: str
    entries: TocEntryList = field(factory=list)
    html: str = ""


def slugify(text: str) -> str:
    """Return a URL-safe anchor for ``text``.

    Args:
        text: Heading text.

    Returns:
        Lower-cased text with runs of non-word characters replaced by ``-``.
    """

    return _NON_WORD_RE.sub("-", text.lower())


def heading_text(heading: Tag) -> str:
    """Return the visible text of ``heading`` with whitespace collapsed."""
    return " ".join(heading.get_text().split())


def extract_toc(html: str) -> TocResult:
    """Collect the H1-H3 headings of ``html`` into a table of contents.

    Headings without an ``id`` receive one derived from their text, so every
    TOC link resolves inside the returned fragment.

    Args:
        html: Rendered HTML fragment of a chapter.

    Returns:
        The TOC markup, its entries and the patched fragment. Pages without
        headings, or fragments that cannot be parsed, yield the empty TOC and
        the original HTML.
    """

    try:
        soup = BeautifulSoup(html, "html.parser")
        headings = soup.find_all(TOC_LEVELS)

        # Short pages without headings are not an error.
        if not headings:
            return TocResult(toc_html=EMPTY_TOC_HTML, html=html)

        entries: TocEntryList = []
        for position, heading in enumerate(headings, start=1):
            text = heading_text(heading)
            anchor = heading.get("id")
            if not anchor:
                anchor = slugify(text) or f"section-{position}"
                heading["id"] = anchor
            entries.append(
                TocEntry(level=int(heading.name[1]), text=text, anchor=anchor)
            )

        # ``html.parser`` keeps fragments as they are, so this is the inner
        # content only and never a wrapped document.
        patched = str(soup)
    except Exception as exc:
        logger.warning("Could not extract table of contents: %s", exc)
        return TocResult(toc_html="", html=html)

    return TocResult(toc_html=toc_markup(entries), entries=entries, html=patched)


def toc_markup(entries: TocEntryList) -> str:
    """Render TOC entries as a flat unordered list.

    Args:
        entries: Headings to link to.

    Returns:
        ``<ul>`` with one ``<li>`` per entry.
    """

    items = "".join(
        f'<li class="toc-level-{entry.level}">'
        f'<a href="#{html_lib.escape(entry.anchor)}">'
        f"{html_lib.escape(entry.text)}</a></li>"
        for entry in entries
    )
    return f'<ul class="toc-list">{items}</ul>'


def toc_json(entries: TocEntryList) -> str:
    """Serialize TOC entries for embedding inside a ``<script>`` element.

    Args:
        entries: Headings to serialize.

    Returns:
        JSON array of ``{level, text, anchor}`` objects with ``</`` escaped.
    """

    data = [
        {"level": entry.level, "text": entry.text, "anchor": entry.anchor}
        for entry in entries
    ]
    return json_dumps(data).replace("</", "<\\/")
