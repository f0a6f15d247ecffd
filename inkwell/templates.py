"""Template rendering engine for Inkwell.

This module uses Jinja2 to render the views served by the development
server: the journal listing, the archive, a single entry, a static page and
the error page. Templates live in memory so the package ships no data files.

Key class:
- TemplateEngine: Renders named views with the site-wide globals and filters.
"""

from __future__ import annotations

from typing import Any

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

from .html_utils import join_root_url
from .renderers import COPY_BUTTON_CSS
from .utils import format_date

__all__ = ["TEMPLATES", "TemplateEngine"]

TEMPLATES = {
    "layout.html": """\
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{% block title %}Journal{% endblock %}</title>
{% if site_url %}<link rel="canonical" href="{{ path | absolute_url }}">{% endif %}
<style>{{ copy_button_css }}</style>
</head>
<body>
<nav><a href="{{ '/' | absolute_url }}">Journal</a> <a href="{{ '/archive' | absolute_url }}">Archive</a></nav>
<main>{% block content %}{% endblock %}</main>
</body>
</html>
""",
    "_entry_list.html": """\
<ul class="journal">
{% for entry in journal_entries %}
<li>
<a href="/journal/{{ entry.slug }}">{{ entry.metadata.title }}</a>
<time datetime="{{ entry.metadata.date.isoformat() }}">{{ entry.metadata.date | format_date }}</time>
{% if entry.metadata.pinned %}<span class="tag">Pinned</span>{% endif %}
{% if entry.is_recently_updated %}<span class="tag">Updated</span>{% endif %}
<p>{{ entry.metadata.description }}</p>
</li>
{% else %}
<li>Nothing here yet.</li>
{% endfor %}
</ul>
""",
    "home.html": """\
{% extends "layout.html" %}
{% block content %}{% include "_entry_list.html" %}{% endblock %}
""",
    "archive.html": """\
{% extends "layout.html" %}
{% block title %}Archive{% endblock %}
{% block content %}<h1>Archive</h1>{% include "_entry_list.html" %}{% endblock %}
""",
    "entry.html": """\
{% extends "layout.html" %}
{% block title %}{{ post.metadata.title }}{% endblock %}
{% block content %}
<article>
<header>
<h1>{{ post.metadata.title }}</h1>
<time datetime="{{ post.metadata.date.isoformat() }}">{{ post.metadata.date | format_date }}</time>
{% if post.metadata.updated %}<p>Updated {{ post.metadata.updated | format_date }}</p>{% endif %}
</header>
{% if post.metadata.deprecated %}
<aside class="deprecated">
<strong>This entry is deprecated.</strong>
{% if post.deprecation_note_html %}{{ post.deprecation_note_html | safe }}{% endif %}
</aside>
{% endif %}
{{ post.content_html | safe }}
{% if post.metadata.changelog %}
<section class="changelog">
<h2>Changelog</h2>
<ul>
{% for change in post.metadata.changelog %}
<li><time datetime="{{ change.date.isoformat() }}">{{ change.date | format_date }}</time> {{ change.description }}</li>
{% endfor %}
</ul>
</section>
{% endif %}
</article>
{% endblock %}
""",
    "page.html": """\
{% extends "layout.html" %}
{% block title %}{{ page.metadata.title }}{% endblock %}
{% block content %}<article>{{ page.content_html | safe }}</article>{% endblock %}
""",
    "error.html": """\
{% extends "layout.html" %}
{% block title %}{{ status }}{% endblock %}
{% block content %}<h1>{{ status }}</h1><p>{{ message }}</p>{% endblock %}
""",
}


class TemplateEngine:
    """Renders views with Jinja2.

    Attributes:
        site_url: Public base URL of the site, used for absolute links.
        env: Jinja2 environment.
    """

    def __init__(self, site_url: str = "", templates: dict[str, str] | None = None):
        """Initialize the template engine.

        Args:
            site_url: Public base URL; empty keeps links root-relative.
            templates: Optional template sources overriding the defaults.
        """
        self.site_url = site_url
        sources = dict(TEMPLATES)
        if templates:
            sources.update(templates)
        self.env = Environment(loader=DictLoader(sources), autoescape=select_autoescape())
        self.env.filters["format_date"] = format_date
        self.env.filters["absolute_url"] = self.absolute_url
        self.env.globals.update(site_url=site_url, copy_button_css=Markup(COPY_BUTTON_CSS))

    def absolute_url(self, path: str) -> str:
        return join_root_url(self.site_url, path)

    def render(self, view: str, context: dict[str, Any]) -> str:
        """Render a named view.

        Args:
            view: Template name without the ``.html`` suffix.
            context: Variables to make available in the template.

        Returns:
            Rendered HTML string.
        """
        context = {"path": "/", **context}
        return self.env.get_template(f"{view}.html").render(**context)
