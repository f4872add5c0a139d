"""Common type aliases for builder structures."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .toc_entry import TocEntry  # noqa: F401


PathList = list[Path]
TocEntryList = list["TocEntry"]
ChaptersByDir = dict[Path, PathList]
