"""Build the whole site from a content directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from attrs import define, field

from .chapter_file import ChapterFile
from .discover import BookIndex, discover_chapters, group_by_directory
from .errors import BuildError
from .library import generate_library
from .navigation import build_navigation
from .render import render_markdown
from .sanitize import sanitize
from .template import (
    library_href,
    output_path,
    page_title,
    render_page,
    write_page,
)
from .toc import extract_toc, toc_json
from .types import PathList

if TYPE_CHECKING:
    from booksite.config import BuildConfig

logger = logging.getLogger(__name__)


@define(slots=True)
class BuildResult:
    """Summary of a finished build.

    Attributes:
        pages: Chapter pages written, in build order.
        library: Path of the landing page.
        books: Number of book directories processed.
    """

    pages: PathList = field(factory=list)
    library: Path | None = None
    books: int = 0


def render_chapter(
    chapter: ChapterFile,
    books: BookIndex,
    template: str,
    css: str,
    build_date: str,
    library_link: str = "../index.html",
) -> str:
    """Render one chapter into a complete HTML page.

    Args:
        chapter: Chapter to render.
        books: Book cache of the current build.
        template: Page template.
        css: Stylesheet inlined into the page.
        build_date: Date shown in the page footer.
        library_link: Link from the page to the library index.

    Returns:
        The HTML page.
    """

    body = sanitize(render_markdown(chapter.raw_text))
    toc = extract_toc(body)
    navigation = build_navigation(books.get(chapter.book_dir), chapter.path)

    return render_page(
        template,
        content=toc.html,
        title=page_title(chapter.raw_text, chapter.path),
        navigation=navigation,
        toc_html=toc.toc_html,
        toc_json=toc_json(toc.entries),
        css=css,
        build_date=build_date,
        library_href=library_link,
    )


def build_site(config: BuildConfig) -> BuildResult:
    """Render every chapter below the content directory and the landing page.

    Args:
        config: Build settings.

    Returns:
        Summary of the written files.

    Throws:
        BuildError: On the first chapter that cannot be read, rendered or
            written. Nothing after it is built.
    """

    content_root = config.content_dir
    output_root = config.output_dir
    if not content_root.is_dir():
        raise BuildError(content_root, "content directory does not exist")

    template = config.page_template()
    css = config.css()
    build_date = config.date()

    chapters = discover_chapters(content_root)
    groups = group_by_directory(chapters)
    logger.debug(
        "Found %d chapters in %d directories", len(chapters), len(groups)
    )

    # Resolve every book before any page is rendered.
    books = BookIndex()
    for directory in groups:
        try:
            books.get(directory)
        except (OSError, UnicodeDecodeError) as exc:
            raise BuildError(directory / "index.md", str(exc)) from exc

    if (content_root / "index.md").is_file():
        logger.warning(
            "%s is replaced by the library page in %s",
            content_root / "index.md",
            output_root / "index.html",
        )

    result = BuildResult(books=len(books))
    for path in chapters:
        target = output_path(path, content_root, output_root)
        try:
            chapter = ChapterFile.read(path)
            page = render_chapter(
                chapter,
                books,
                template,
                css,
                build_date,
                library_href(target, output_root),
            )
            write_page(target, page)
        except Exception as exc:
            raise BuildError(path, str(exc)) from exc
        logger.info("Generated: %s", target)
        result.pages.append(target)

    try:
        result.library = generate_library(
            content_root,
            output_root,
            config.index_template(),
            css,
            build_date,
            books,
        )
    except OSError as exc:
        raise BuildError(output_root / "index.html", str(exc)) from exc

    return result
