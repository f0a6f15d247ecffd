"""Small HTML string helpers shared by the renderers and templates.

Functions:
    escape_html: Escape text for HTML bodies and double-quoted attributes.
    join_root_url: Prefix a root-relative path with the public site URL.
"""

from __future__ import annotations

_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` in a string.

    Used for generated markup such as code block attributes, where Jinja2
    autoescaping does not apply.

    Examples:
        >>> escape_html('<b class="x">')
        '&lt;b class=&quot;x&quot;&gt;'
    """
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def join_root_url(root_url: str, path: str) -> str:
    """Join the public site URL and a path.

    An empty ``root_url`` leaves the path root-relative.

    Examples:
        >>> join_root_url('https://example.com/', 'about')
        'https://example.com/about'
    """
    if not root_url:
        return path
    return f"{root_url.rstrip('/')}/{path.lstrip('/')}"
