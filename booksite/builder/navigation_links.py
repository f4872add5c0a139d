"""Previous, contents and next links of a rendered chapter."""

from __future__ import annotations

from attrs import define


@define(slots=True, frozen=True)
class NavigationLinks:
    """Previous, contents and next links of a rendered chapter.

    Each value is an HTML fragment: either a link to a sibling page or a
    disabled placeholder.
    """

    previous: str
    toc: str
    next: str
