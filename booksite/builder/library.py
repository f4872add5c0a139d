"""Site-wide landing page listing every book."""

from __future__ import annotations

import html as html_lib
import logging
from pathlib import Path

from attrs import define
from bs4 import BeautifulSoup

from .chapter_file import output_name
from .discover import BookIndex, discover_chapters, is_hidden, is_markdown
from .navigation import navigation_order
from .toc import heading_text
from .template import (
    BOOK_LIST_TOKEN,
    BUILD_DATE_TOKEN,
    CSS_TOKEN,
    first_heading,
    substitute,
    write_page,
)

logger = logging.getLogger(__name__)


@define(slots=True, frozen=True)
class LibraryEntry:
    """Book listed on the landing page.

    Attributes:
        name: Display name of the book.
        href: Link to the book's entry page, relative to the site root.
    """

    name: str
    href: str


def humanize(name: str) -> str:
    """Turn a directory name such as ``go-basics`` into ``Go basics``."""

    text = name.replace("-", " ").strip()
    return text[:1].upper() + text[1:] if text else name


def _title_from_html(path: Path) -> str | None:
    """Return the first ``<h1>`` text of an already built page."""

    if not path.is_file():
        return None
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    heading = soup.find("h1")
    if heading is None:
        return None
    return heading_text(heading) or None


def book_name(book_dir: Path, output_dir: Path) -> str:
    """Return the display name of a book.

    Args:
        book_dir: Book directory below the content root.
        output_dir: Directory the book's pages are written to.

    Returns:
        The first heading of ``index.md``, else the first ``<h1>`` of the
        built ``index.html``, else the humanized directory name.
    """

    index_md = book_dir / "index.md"
    if index_md.is_file():
        title = first_heading(index_md.read_text(encoding="utf-8"))
        if title:
            return title

    title = _title_from_html(output_dir / "index.html")
    if title:
        return title

    return humanize(book_dir.name)


def _entry_href(book_dir: Path, books: BookIndex) -> str | None:
    """Return the link to a book's first page relative to the site root."""

    if (book_dir / "index.md").is_file():
        return f"{book_dir.name}/index.html"

    # Without a contents page the book opens at its first chapter.
    if any(is_markdown(p) for p in book_dir.iterdir()):
        order = navigation_order(books.get(book_dir))
        if order:
            return f"{book_dir.name}/{output_name(order[0])}"

    chapters = discover_chapters(book_dir)
    if not chapters:
        return None
    relative = chapters[0].relative_to(book_dir.parent).with_suffix(".html")
    return relative.as_posix()


def library_entries(
    content_root: Path, output_root: Path, books: BookIndex
) -> list[LibraryEntry]:
    """Collect the books shown on the landing page.

    Args:
        content_root: Root of the content tree.
        output_root: Root of the generated site.
        books: Book cache of the current build.

    Returns:
        One entry per top-level directory holding Markdown, in name order.
    """

    entries: list[LibraryEntry] = []
    for book_dir in sorted(content_root.iterdir()):
        if is_hidden(book_dir) or not book_dir.is_dir():
            continue

        href = _entry_href(book_dir, books)
        if href is None:
            logger.debug("%s has no chapters; not listed.", book_dir)
            continue

        name = book_name(book_dir, output_root / book_dir.name)
        entries.append(LibraryEntry(name=name, href=href))
    return entries


def render_library(
    template: str, entries: list[LibraryEntry], css: str, build_date: str
) -> str:
    """Fill the landing page template.

    Args:
        template: Template text with placeholder tokens.
        entries: Books to list.
        css: Stylesheet inlined into the page.
        build_date: Date shown in the page footer.

    Returns:
        Complete HTML page.
    """

    items = "\n".join(
        f'<li><a href="{html_lib.escape(entry.href)}">'
        f"{html_lib.escape(entry.name)}</a></li>"
        for entry in entries
    )
    return substitute(
        template,
        {CSS_TOKEN: css, BOOK_LIST_TOKEN: items, BUILD_DATE_TOKEN: build_date},
    )


def generate_library(
    content_root: Path,
    output_root: Path,
    template: str,
    css: str,
    build_date: str,
    books: BookIndex | None = None,
) -> Path:
    """Write the landing page listing every book to the site root.

    Args:
        content_root: Root of the content tree.
        output_root: Root of the generated site.
        template: Landing page template.
        css: Stylesheet inlined into the page.
        build_date: Date shown in the page footer.
        books: Book cache of the current build; a fresh one is used when
            omitted.

    Returns:
        Path of the written page.
    """

    if books is None:
        books = BookIndex()

    entries = library_entries(content_root, output_root, books)
    target = output_root / "index.html"
    write_page(target, render_library(template, entries, css, build_date))
    logger.info("Generated: %s", target)
    return target
