"""Heading recorded in a page's table of contents."""

from __future__ import annotations

from attrs import define


@define(slots=True, frozen=True)
class TocEntry:
    """Heading recorded in a page's table of contents.

    Attributes:
        level: Heading level between 1 and 3.
        text: Visible text of the heading.
        anchor: ``id`` attribute of the heading in the emitted HTML.
    """

    level: int
    text: str
    anchor: str
