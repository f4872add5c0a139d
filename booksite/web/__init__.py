"""FastAPI application serving a built site for preview."""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI  # type: ignore[import-not-found]
from fastapi.staticfiles import StaticFiles  # type: ignore[import-not-found]

# Directory containing the generated site.
SITE_DIR = Path(os.environ.get("BOOKSITE_OUTPUT_DIR", "docs"))


def create_app(site_dir: Path = SITE_DIR) -> FastAPI:
    """Return an application serving the files below ``site_dir``.

    Args:
        site_dir: Root of the generated site. Directory requests resolve to
            their ``index.html``.

    Returns:
        The configured application.
    """

    app = FastAPI(title="booksite preview")
    app.mount(
        "/",
        StaticFiles(directory=site_dir, html=True, check_dir=False),
        name="site",
    )
    return app


app = create_app()
