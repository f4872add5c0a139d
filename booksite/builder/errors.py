"""Exceptions raised while building the site."""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """A source file could not be turned into its output page.

    Attributes:
        path: File that was being processed when the failure happened.
    """

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"Error processing {path}: {message}")
        self.path = path


class ConfigError(Exception):
    """The build configuration is invalid."""
