"""Utility functions for Inkwell.

Key functions:
    heading_slug: Convert heading text to a URL-safe anchor id.
    HeadingSlugger: Hand out unique heading ids within one document.
    rewrite_image_path: Map an entry-relative image reference to its public URL.
    is_single_segment: Check that a slug cannot escape its content directory.
    format_date: Render a date the way the site displays it.
"""

from __future__ import annotations

import posixpath
import re
from datetime import date, datetime

_HEADING_PUNCT_RE = re.compile(r"[^\w\s-]")
_HEADING_SPACE_RE = re.compile(r"[-\s]+")
# Markdown parsers percent-encode backslashes in link destinations.
_PATH_SEPARATOR_RE = re.compile(r"\\|%5[cC]")


def heading_slug(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links, or ``section`` when
        nothing usable is left.

    Examples:
        >>> heading_slug("Hello, World!")
        'hello-world'
    """
    slug = text.lower().strip()
    slug = _HEADING_PUNCT_RE.sub("", slug)
    slug = _HEADING_SPACE_RE.sub("-", slug)
    return slug.strip("-") or "section"


class HeadingSlugger:
    """Generates unique heading ids for a single document.

    Repeated headings get ``-1``, ``-2``, ... suffixes; a suffixed id never
    collides with an id that was already handed out verbatim.
    """

    def __init__(self):
        self._counts: dict[str, int] = {}
        self._used: set[str] = set()

    def slug(self, text: str) -> str:
        base = heading_slug(text)
        count = self._counts.get(base, 0)
        candidate = base
        while candidate in self._used:
            count += 1
            candidate = f"{base}-{count}"
        self._counts[base] = count
        self._used.add(candidate)
        return candidate


def rewrite_image_path(src: str, slug: str, prefix: str = "/content/journal") -> str:
    """Rewrite a relative (``./``) image reference to an absolute URL path.

    Args:
        src: Original image source from the markdown body.
        slug: Slug of the content item the image belongs to.
        prefix: Public URL prefix of the journal directory.

    Returns:
        ``<prefix>/<slug>/<rest>`` for ``./`` references, ``src`` unchanged
        otherwise.

    Examples:
        >>> rewrite_image_path("./media/cat.png", "my-post")
        '/content/journal/my-post/media/cat.png'

        >>> rewrite_image_path("https://example.com/cat.png", "my-post")
        'https://example.com/cat.png'
    """
    if not src.startswith("./"):
        return src
    rest = _PATH_SEPARATOR_RE.sub("/", src[2:])
    return posixpath.normpath(posixpath.join(prefix, slug, rest))


def is_single_segment(slug: str) -> bool:
    """Check that a slug names a single path component.

    Args:
        slug: Slug taken from a URL or the command line.

    Returns:
        True if the slug can be used as a file or directory name.
    """
    return bool(slug) and "/" not in slug and "\\" not in slug and not slug.startswith(".")


def format_date(value: date | datetime | str) -> str:
    """Format a date in long British form.

    Args:
        value: A date, datetime or ISO-8601 date string.

    Returns:
        The date as ``<day> <Month> <year>``.

    Examples:
        >>> format_date(date(2023, 1, 1))
        '1 January 2023'
    """
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return f"{value.day} {value.strftime('%B')} {value.year}"
