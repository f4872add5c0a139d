"""Find Markdown chapters and work out each book's reading order."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .book import Book
from .types import ChaptersByDir, PathList

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"

# Bullet followed by a link to a Markdown file, e.g. ``* [Intro](intro.md)``.
MANIFEST_LINE_RE = re.compile(r"^\s*\*\s+\[.*\]\(.*\.md\)")
MANIFEST_TARGET_RE = re.compile(r"\(([^)]+\.md)\)")


def is_hidden(path: Path) -> bool:
    """Return whether ``path`` names a tooling or metadata entry."""
    return path.name.startswith(".")


def is_markdown(path: Path) -> bool:
    """Return whether ``path`` is a visible Markdown file."""
    return (
        path.suffix == MARKDOWN_SUFFIX and path.is_file() and not is_hidden(path)
    )


def discover_chapters(root: Path) -> PathList:
    """Recursively collect the Markdown files below ``root``.

    Args:
        root: Content directory to scan.

    Returns:
        Paths of all chapters, depth first in name order. Dot-prefixed
        directories are skipped with everything inside them.
    """

    found: PathList = []
    for entry in sorted(root.iterdir()):
        if is_hidden(entry):
            continue
        if entry.is_dir():
            found.extend(discover_chapters(entry))
        elif is_markdown(entry):
            found.append(entry)
    return found


def group_by_directory(paths: PathList) -> ChaptersByDir:
    """Group chapter paths by their containing directory.

    Args:
        paths: Chapter paths as returned by ``discover_chapters``.

    Returns:
        Mapping from directory to the chapters directly inside it.
    """

    groups: ChaptersByDir = {}
    for path in paths:
        groups.setdefault(path.parent, []).append(path)
    return groups


def parse_manifest(text: str) -> list[str]:
    """Extract the chapter link targets listed in an ``index.md``.

    Args:
        text: Raw Markdown of the manifest.

    Returns:
        Link targets in document order.
    """

    targets: list[str] = []
    for line in text.splitlines():
        if not MANIFEST_LINE_RE.match(line):
            continue
        match = MANIFEST_TARGET_RE.search(line)
        if match:
            targets.append(match.group(1))
    return targets


def lexical_order(directory: Path) -> PathList:
    """Return the Markdown files of ``directory`` sorted by file name."""
    return sorted(
        (p for p in directory.iterdir() if is_markdown(p)),
        key=lambda p: p.name,
    )


def resolve_book(directory: Path) -> Book:
    """Determine the chapter order of the book stored in ``directory``.

    The ``index.md`` link list wins when it names at least one chapter;
    chapters it does not mention are left out of the order. Otherwise the
    files are ordered by name.

    Args:
        directory: Book directory.

    Returns:
        The book with its ordered chapters.
    """

    index_file = directory / "index.md"
    has_index = index_file.is_file()

    if has_index:
        targets = parse_manifest(index_file.read_text(encoding="utf-8"))

        ordered: PathList = []
        for target in targets:
            chapter = directory / target
            if not chapter.is_file():
                logger.warning(
                    "%s: chapter %s does not exist; skipping.",
                    index_file,
                    target,
                )
                continue
            if chapter not in ordered:
                ordered.append(chapter)

        if ordered:
            return Book(
                dir=directory,
                ordered_chapters=ordered,
                has_manifest=True,
                has_index=True,
            )

    return Book(
        dir=directory,
        ordered_chapters=lexical_order(directory),
        has_index=has_index,
    )


class BookIndex:
    """Per-directory cache of resolved books for one build."""

    def __init__(self) -> None:
        self._books: dict[Path, Book] = {}

    def __len__(self) -> int:
        return len(self._books)

    def get(self, directory: Path) -> Book:
        """Return the book stored in ``directory``, resolving it once.

        Args:
            directory: Book directory.

        Returns:
            The cached or freshly resolved book.
        """

        book = self._books.get(directory)
        if book is None:
            book = resolve_book(directory)
            self._books[directory] = book
        return book
