"""Previous, contents and next links between the chapters of a book."""

from __future__ import annotations

import html as html_lib
import os
import re
from pathlib import Path

from .book import Book
from .navigation_links import NavigationLinks
from .types import PathList

_DIGITS_RE = re.compile(r"\d+")

PREVIOUS_LABEL = "Previous"
CONTENTS_LABEL = "Contents"
TOC_LABEL = "Table of Contents"
NEXT_LABEL = "Next"
FIRST_CHAPTER_LABEL = "First chapter"
END_LABEL = "End"
NO_CHAPTERS_LABEL = "No chapters"


def chapter_number(path: Path) -> int:
    """Return the first run of digits in the file name, or ``-1``."""

    match = _DIGITS_RE.search(path.name)
    return int(match.group()) if match else -1


def navigation_order(book: Book) -> PathList:
    """Return the chapter order used for previous and next links.

    Books ordered by file name are re-sorted by the first number in each
    file name so ``chapter-2`` precedes ``chapter-10``; names without a
    number come first and ties keep their existing order. An explicit
    ``index.md`` order is used as written.

    Args:
        book: Resolved book.

    Returns:
        Chapter paths in reading order.
    """

    if book.has_manifest:
        return list(book.ordered_chapters)
    return sorted(book.ordered_chapters, key=chapter_number)


def chapter_href(book_dir: Path, path: Path) -> str:
    """Return the link from a page of ``book_dir`` to the page of ``path``."""

    target = path.with_suffix(".html")
    if target.parent == book_dir:
        return target.name
    return Path(os.path.relpath(target, book_dir)).as_posix()


def nav_link(href: str, label: str) -> str:
    """Return a clickable navigation link."""
    return f'<a href="{html_lib.escape(href)}" class="nav-link">{label}</a>'


def disabled_link(label: str) -> str:
    """Return a navigation placeholder that cannot be clicked."""
    return (
        '<span class="nav-link nav-link-disabled" aria-disabled="true">'
        f"{label}</span>"
    )


def _toc_link(book: Book) -> str:
    """Return the link to the book's contents page, if it has one."""

    if book.has_index:
        return nav_link("index.html", TOC_LABEL)
    return disabled_link(TOC_LABEL)


def build_navigation(book: Book, chapter: Path) -> NavigationLinks:
    """Compute the navigation links shown on the page of ``chapter``.

    Args:
        book: Book containing the chapter.
        chapter: Path of the chapter being rendered.

    Returns:
        Previous, contents and next links for the page.
    """

    order = navigation_order(book)
    index_path = book.index_path

    # The contents page only leads into the book.
    if chapter == index_path:
        first = next((p for p in order if p != index_path), None)
        if first is None:
            next_link = disabled_link(NO_CHAPTERS_LABEL)
        else:
            next_link = nav_link(
                chapter_href(book.dir, first), FIRST_CHAPTER_LABEL
            )
        return NavigationLinks(
            previous=disabled_link(PREVIOUS_LABEL),
            toc=disabled_link(TOC_LABEL),
            next=next_link,
        )

    # Chapters left out of the ``index.md`` list have no neighbours.
    if chapter not in order:
        return NavigationLinks(
            previous=disabled_link(PREVIOUS_LABEL),
            toc=_toc_link(book),
            next=disabled_link(END_LABEL),
        )

    position = order.index(chapter)

    if position > 0:
        prev_path = order[position - 1]
        label = CONTENTS_LABEL if prev_path == index_path else PREVIOUS_LABEL
        previous = nav_link(chapter_href(book.dir, prev_path), label)
    else:
        previous = disabled_link(PREVIOUS_LABEL)

    if position < len(order) - 1:
        following = nav_link(
            chapter_href(book.dir, order[position + 1]), NEXT_LABEL
        )
    else:
        following = disabled_link(END_LABEL)

    return NavigationLinks(previous=previous, toc=_toc_link(book), next=following)
