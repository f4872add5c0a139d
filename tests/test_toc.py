"""Tests for table of contents extraction."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from booksite.builder import toc
from booksite.builder.render import render_markdown
from booksite.builder.toc_entry import TocEntry


def test_extract_toc_collects_headings_in_document_order() -> None:
    """H1-H3 headings are listed in order; deeper headings are ignored."""

    html = (
        "<h2 id='setup'>Setup</h2><p>x</p><h1>Intro</h1>"
        "<h4>Deep</h4><h3>Details</h3>"
    )
    result = toc.extract_toc(html)

    assert result.entries == [
        TocEntry(level=2, text="Setup", anchor="setup"),
        TocEntry(level=1, text="Intro", anchor="intro"),
        TocEntry(level=3, text="Details", anchor="details"),
    ]
    assert "Deep" not in result.toc_html


def test_extract_toc_keeps_spaces_around_inline_markup() -> None:
    """Heading text keeps the spaces between inline elements."""

    result = toc.extract_toc("<h2>Hello <em>big</em>\n  world</h2>")

    assert result.entries == [
        TocEntry(level=2, text="Hello big world", anchor="hello-big-world"),
    ]


def test_extract_toc_heading_with_inline_code() -> None:
    """Inline code inside a rendered heading is separated by spaces."""

    result = toc.extract_toc(render_markdown("## Using the `fmt` package\n"))

    assert result.entries[0].text == "Using the fmt package"
    assert ">Using the fmt package</a>" in result.toc_html


def test_extract_toc_writes_generated_ids_back() -> None:
    """Every anchor in the TOC exists as an id in the patched HTML."""

    result = toc.extract_toc("<h1>Hello, World!</h1><h2>Next part</h2>")
    soup = BeautifulSoup(result.html, "html.parser")

    for entry in result.entries:
        assert soup.find(id=entry.anchor) is not None
        assert f'href="#{entry.anchor}"' in result.toc_html
    assert result.entries[0].anchor == "hello-world-"


def test_extract_toc_returns_fragment_only() -> None:
    """The patched HTML is never wrapped into a full document."""

    result = toc.extract_toc("<h1>Title</h1><p>Body</p>")

    assert result.html == '<h1 id="title">Title</h1><p>Body</p>'
    assert "<html" not in result.html
    assert "<body" not in result.html


def test_extract_toc_flat_list() -> None:
    """Nested levels are rendered as one flat list."""

    result = toc.extract_toc("<h1>A</h1><h2>B</h2><h3>C</h3>")

    assert result.toc_html.count("<ul") == 1
    assert result.toc_html.count("<li") == 3
    assert 'class="toc-level-3"' in result.toc_html


def test_extract_toc_without_headings() -> None:
    """Pages without headings get the placeholder and unchanged HTML."""

    html = "<p>Short page</p>"
    result = toc.extract_toc(html)

    assert result.toc_html == toc.EMPTY_TOC_HTML
    assert result.entries == []
    assert result.html is html


def test_extract_toc_empty_heading_text() -> None:
    """Headings whose text yields no slug get a positional anchor."""

    result = toc.extract_toc("<h1>Title</h1><h2></h2>")

    assert result.entries[1].anchor == "section-2"
    assert 'id="section-2"' in result.html


def test_extract_toc_degrades_on_parse_failure(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Parser failures yield an empty TOC and the original HTML."""

    def broken(*args: object, **kwargs: object) -> None:
        raise ValueError("bad markup")

    monkeypatch.setattr(toc, "BeautifulSoup", broken)
    html = "<h1>Title</h1>"
    result = toc.extract_toc(html)

    assert result.toc_html == ""
    assert result.entries == []
    assert result.html == html


def test_slugify() -> None:
    """Runs of non-word characters collapse into one hyphen."""

    assert toc.slugify("Go & C# Basics") == "go-c-basics"
    assert toc.slugify("Step_1") == "step_1"


def test_toc_json_escapes_closing_tags() -> None:
    """Serialized entries cannot terminate the surrounding script."""

    entries = [TocEntry(level=1, text="</script>", anchor="x")]
    data = toc.toc_json(entries)

    assert "</" not in data
    assert '"level":1' in data
