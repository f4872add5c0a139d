"""Content build pipeline turning Markdown books into HTML pages."""

from .discover import BookIndex, discover_chapters
from .errors import BuildError, ConfigError
from .library import generate_library
from .navigation import build_navigation
from .site import BuildResult, build_site
from .toc import extract_toc

__all__ = [
    "BookIndex",
    "BuildError",
    "BuildResult",
    "ConfigError",
    "build_navigation",
    "build_site",
    "discover_chapters",
    "extract_toc",
    "generate_library",
]
