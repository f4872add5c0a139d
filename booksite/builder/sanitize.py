"""Remove unsafe constructs from rendered HTML."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Comment

# Elements dropped together with their content.
FORBIDDEN_TAGS = [
    "script",
    "style",
    "iframe",
    "frame",
    "frameset",
    "object",
    "embed",
    "applet",
    "base",
    "link",
    "meta",
    "noscript",
    "template",
]

# Attributes that carry URLs.
URL_ATTRIBUTES = ("href", "src", "action", "formaction", "xlink:href", "srcset")

_UNSAFE_SCHEME_RE = re.compile(r"^\s*(javascript|vbscript|data)\s*:", re.I)
_DATA_IMAGE_RE = re.compile(r"^\s*data:image/", re.I)
_URL_WHITESPACE_RE = re.compile(r"[\t\n\r]")
_LEADING_CONTROL_RE = re.compile(r"^[\x00-\x20]+")


def normalize_url(value: str) -> str:
    """Return ``value`` as browsers read it: tabs and newlines removed,
    leading control characters and spaces stripped.
    """
    return _LEADING_CONTROL_RE.sub("", _URL_WHITESPACE_RE.sub("", value))


def _is_unsafe_url(tag_name: str, attr: str, value: str) -> bool:
    """Return whether ``value`` is a script or disallowed data URL."""

    value = normalize_url(value)
    match = _UNSAFE_SCHEME_RE.match(value)
    if match is None:
        return False

    # Inline images are the only place where data URLs stay.
    if match.group(1).lower() == "data":
        return not (
            tag_name == "img" and attr == "src" and _DATA_IMAGE_RE.match(value)
        )
    return True


def sanitize(html: str) -> str:
    """Strip scripts, event handlers and script URLs from ``html``.

    Args:
        html: Rendered HTML fragment.

    Returns:
        Sanitized HTML fragment.
    """

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(FORBIDDEN_TAGS):
        # Nested forbidden tags go away with their parent.
        if not tag.decomposed:
            tag.decompose()

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            value = tag.attrs[attr]
            if attr.lower().startswith("on"):
                del tag.attrs[attr]
            elif attr.lower() in URL_ATTRIBUTES and isinstance(value, str):
                if _is_unsafe_url(tag.name, attr.lower(), value):
                    del tag.attrs[attr]

    return str(soup)
