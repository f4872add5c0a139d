"""Single Markdown source file of a book."""

from __future__ import annotations

from pathlib import Path

from attrs import define, field

INDEX_STEM = "index"


@define(slots=True, frozen=True)
class ChapterFile:
    """Single Markdown source file of a book.

    Attributes:
        path: Location of the Markdown file.
        book_dir: Directory containing the file; groups chapters into a book.
        raw_text: Source content read from ``path``.
        is_index: Whether the file is the book's ``index.md`` manifest.
    """

    path: Path
    book_dir: Path
    raw_text: str = field(repr=False)
    is_index: bool = False

    @classmethod
    def read(cls, path: Path) -> ChapterFile:
        """Read the chapter stored at ``path``.

        Args:
            path: Location of the Markdown file.

        Returns:
            The loaded chapter.
        """

        return cls(
            path=path,
            book_dir=path.parent,
            raw_text=path.read_text(encoding="utf-8"),
            is_index=path.stem == INDEX_STEM,
        )


def output_name(path: Path) -> str:
    """Return the HTML file name produced for the Markdown file ``path``."""
    return f"{path.stem}.html"
