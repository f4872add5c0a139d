"""Shared fixtures for building content trees on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

WriteTree = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Return a helper writing ``{relative path: text}`` below ``tmp_path``.

    The helper returns the ``data`` directory that holds the files.
    """

    root = tmp_path / "data"

    def _write(files: dict[str, str]) -> Path:
        root.mkdir(exist_ok=True)
        for name, text in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return root

    return _write
