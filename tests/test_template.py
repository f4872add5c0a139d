"""Tests for page templating."""

from __future__ import annotations

from pathlib import Path

from booksite.builder import template
from booksite.builder.navigation_links import NavigationLinks

NAV = NavigationLinks(previous="<p1>", toc="<t1>", next="<n1>")


def _render(tpl: str, content: str = "<p>Body</p>", title: str = "T") -> str:
    """Render ``tpl`` with fixed values."""
    return template.render_page(
        tpl,
        content=content,
        title=title,
        navigation=NAV,
        toc_html="<ul></ul>",
        toc_json="[]",
        css="body{}",
        build_date="2024-01-02",
        library_href="../index.html",
    )


def test_substitution_is_global() -> None:
    """Every occurrence of a repeated token is replaced."""

    page = _render(
        "{{page_title}}|{{page_title}}|{{nav_next_link}}{{nav_next_link}}"
    )

    assert page == "T|T|<n1><n1>"


def test_all_tokens_are_filled() -> None:
    """Each supported token receives its value."""

    page = _render(
        "{%TAILWIND_CSS%}{%MARKDOWN_CONTENT%}{{nav_previous_link}}"
        "{{nav_toc_link}}{{toc}}{{toc_json}}{{build_date}}"
    )

    assert page == "body{}<p>Body</p><p1><t1><ul></ul>[]2024-01-02"


def test_missing_tokens_are_tolerated() -> None:
    """Templates without some tokens render without errors."""

    assert _render("<main>{%MARKDOWN_CONTENT%}</main>") == (
        "<main><p>Body</p></main>"
    )
    assert _render("static") == "static"


def test_inserted_values_are_not_substituted_again() -> None:
    """Token-like text inside chapter content stays as written."""

    page = _render("{%MARKDOWN_CONTENT%}", content="<code>{{page_title}}</code>")

    assert page == "<code>{{page_title}}</code>"


def test_title_is_escaped() -> None:
    """Titles are inserted as text."""

    assert _render("{{page_title}}", title="C# & <Go>") == (
        "C# &amp; &lt;Go&gt;"
    )


def test_page_title_from_first_heading() -> None:
    """The first level-one heading of the source is the title."""

    text = "Intro text\n\n## Sub\n\n# Main Title  \n\n# Second\n"

    assert template.page_title(text, Path("a.md")) == "Main Title"


def test_page_title_falls_back_to_file_name() -> None:
    """Chapters without a heading are titled by their file name."""

    path = Path("data") / "go" / "chapter-3.md"

    assert template.page_title("## Only sub\n#NoSpace\n", path) == "chapter-3"


def test_output_path_mirrors_source(tmp_path: Path) -> None:
    """Pages are written to the mirrored path with an .html suffix."""

    source = tmp_path / "data" / "go" / "sub" / "a.md"

    assert template.output_path(
        source, tmp_path / "data", tmp_path / "docs"
    ) == (tmp_path / "docs" / "go" / "sub" / "a.html")


def test_write_page_creates_directories(tmp_path: Path) -> None:
    """Missing output directories are created."""

    target = tmp_path / "docs" / "go" / "a.html"
    template.write_page(target, "<p>x</p>")
    template.write_page(target, "<p>y</p>")

    assert target.read_text(encoding="utf-8") == "<p>y</p>"


def test_library_link_token_is_filled() -> None:
    """The header link to the library index receives its value."""

    page = _render('<a href="{{library_href}}">Library</a>')

    assert page == '<a href="../index.html">Library</a>'


def test_library_href_follows_page_depth(tmp_path: Path) -> None:
    """Links climb one level per directory between the page and the root."""

    docs = tmp_path / "docs"

    assert template.library_href(docs / "a.html", docs) == "index.html"
    assert template.library_href(docs / "go" / "a.html", docs) == (
        "../index.html"
    )
    assert template.library_href(docs / "go" / "sub" / "a.html", docs) == (
        "../../index.html"
    )
