"""Directory of chapters sharing one navigation sequence."""

from __future__ import annotations

from pathlib import Path

from attrs import define, field

from .types import PathList


@define(slots=True)
class Book:
    """Directory of chapters sharing one navigation sequence.

    Attributes:
        dir: Directory holding the chapters.
        ordered_chapters: Chapter paths in reading order.
        has_manifest: Whether the order came from the ``index.md`` link list.
        has_index: Whether the directory contains an ``index.md`` file.
    """

    dir: Path
    ordered_chapters: PathList = field(factory=list, repr=False)
    has_manifest: bool = False
    has_index: bool = False

    @property
    def index_path(self) -> Path:
        """Location of the book's ``index.md``."""
        return self.dir / "index.md"
