"""Fill the page template and write rendered chapters to disk."""

from __future__ import annotations

import html as html_lib
import re
from pathlib import Path

from .navigation_links import NavigationLinks

CSS_TOKEN = "{%TAILWIND_CSS%}"
CONTENT_TOKEN = "{%MARKDOWN_CONTENT%}"
TITLE_TOKEN = "{{page_title}}"
PREVIOUS_TOKEN = "{{nav_previous_link}}"
TOC_LINK_TOKEN = "{{nav_toc_link}}"
NEXT_TOKEN = "{{nav_next_link}}"
TOC_TOKEN = "{{toc}}"
TOC_JSON_TOKEN = "{{toc_json}}"
BUILD_DATE_TOKEN = "{{build_date}}"
BOOK_LIST_TOKEN = "{{book_list}}"
LIBRARY_LINK_TOKEN = "{{library_href}}"

_H1_RE = re.compile(r"^#\s+(.+)$", re.M)


def substitute(template: str, values: dict[str, str]) -> str:
    """Replace every occurrence of each token in ``template``.

    Replacement happens in a single pass, so token-like text inside the
    inserted values is left alone. Tokens absent from the template are
    ignored.

    Args:
        template: Template text.
        values: Mapping from token to replacement.

    Returns:
        The filled-in template.
    """

    present = [token for token in values if token in template]
    if not present:
        return template

    pattern = re.compile("|".join(re.escape(token) for token in present))
    return pattern.sub(lambda m: values[m.group()], template)


def first_heading(markdown_text: str) -> str | None:
    """Return the text of the first ``# `` heading in Markdown source."""

    match = _H1_RE.search(markdown_text)
    if match:
        title = match.group(1).strip()
        if title:
            return title
    return None


def page_title(markdown_text: str, path: Path) -> str:
    """Return the title of the page rendered from ``path``.

    Args:
        markdown_text: Markdown source of the chapter.
        path: Location of the chapter.

    Returns:
        The first level-one heading, or the file name without extension.
    """

    return first_heading(markdown_text) or path.stem


def render_page(
    template: str,
    *,
    content: str,
    title: str,
    navigation: NavigationLinks,
    toc_html: str,
    toc_json: str,
    css: str,
    build_date: str,
    library_href: str,
) -> str:
    """Fill the page template for one chapter.

    Args:
        template: Template text with placeholder tokens.
        content: Sanitized chapter body.
        title: Page title (plain text).
        navigation: Links to the neighbouring pages.
        toc_html: Table of contents markup.
        toc_json: Table of contents entries as JSON.
        css: Stylesheet inlined into the page.
        build_date: Date shown in the page footer.
        library_href: Link from the page to the library index.

    Returns:
        Complete HTML page.
    """

    return substitute(
        template,
        {
            CSS_TOKEN: css,
            CONTENT_TOKEN: content,
            TITLE_TOKEN: html_lib.escape(title),
            PREVIOUS_TOKEN: navigation.previous,
            TOC_LINK_TOKEN: navigation.toc,
            NEXT_TOKEN: navigation.next,
            TOC_TOKEN: toc_html,
            TOC_JSON_TOKEN: toc_json,
            BUILD_DATE_TOKEN: build_date,
            LIBRARY_LINK_TOKEN: library_href,
        },
    )


def output_path(source: Path, content_root: Path, output_root: Path) -> Path:
    """Return where the page rendered from ``source`` is written.

    Args:
        source: Markdown file below ``content_root``.
        content_root: Root of the content tree.
        output_root: Root of the generated site.

    Returns:
        Mirrored path below ``output_root`` with an ``.html`` suffix.
    """

    relative = source.relative_to(content_root)
    return output_root / relative.with_suffix(".html")


def library_href(page: Path, output_root: Path) -> str:
    """Return the link from ``page`` to the library index at the site root.

    Args:
        page: Output path of a page below ``output_root``.
        output_root: Root of the generated site.

    Returns:
        Relative link such as ``../../index.html``.
    """

    depth = len(page.relative_to(output_root).parts) - 1
    return "../" * depth + "index.html"


def write_page(path: Path, page: str) -> None:
    """Write ``page`` to ``path``, creating parent directories first."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(page, encoding="utf-8")
