"""Tests for the preview web application."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("fastapi.testclient")

from fastapi.testclient import TestClient  # type: ignore[import-not-found]

from booksite.web import create_app


def _client(site_dir: Path) -> TestClient:
    """Return a test client serving ``site_dir``."""

    # Create and return a test client for the FastAPI application.
    return TestClient(create_app(site_dir))


def test_serves_library_page(tmp_path: Path) -> None:
    """The site root resolves to the library index."""

    (tmp_path / "index.html").write_text("<h1>All Books</h1>", encoding="utf-8")

    response = _client(tmp_path).get("/")

    assert response.status_code == 200
    assert "All Books" in response.text


def test_serves_chapter_pages(tmp_path: Path) -> None:
    """Chapter pages are served from their book directory."""

    page = tmp_path / "go" / "chapter1.html"
    page.parent.mkdir()
    page.write_text("<p>One</p>", encoding="utf-8")

    client = _client(tmp_path)

    assert client.get("/go/chapter1.html").text == "<p>One</p>"
    assert client.get("/go/missing.html").status_code == 404
