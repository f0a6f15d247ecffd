"""Route loaders for Inkwell.

Each loader fetches the data for one view and raises NotFoundError when the
requested content does not exist. Router.dispatch maps a URL path to a loader
and turns the outcome into a status code and rendered HTML:

- ``/``                 published journal entries
- ``/archive``          archived journal entries
- ``/journal/<slug>``   a single journal entry
- ``/<page>``           a static page
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from functools import partial
from typing import Any
from urllib.parse import unquote, urlsplit

from .errors import NotFoundError
from .protocols import TemplateRenderer
from .queries import ContentQueries, with_update_status

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[dict[str, Any]]]


class Router:
    """Maps URL paths to route loaders and renders their views.

    Attributes:
        queries: Content queries the loaders read from.
        templates: Renderer for views.
        config: Site configuration.
    """

    def __init__(
        self,
        queries: ContentQueries,
        templates: TemplateRenderer,
        config: dict[str, Any] | None = None,
    ):
        self.queries = queries
        self.templates = templates
        self.config = config or {}

    def load_layout(self) -> dict[str, Any]:
        return {"site_url": self.config.get("site_url", "")}

    async def load_home(self, now: datetime | None = None) -> dict[str, Any]:
        entries = await self.queries.get_published_journal_entries()
        return {"journal_entries": with_update_status(entries, now)}

    async def load_archive(self) -> dict[str, Any]:
        return {"journal_entries": await self.queries.get_archived_journal_entries()}

    async def load_journal_entry(self, slug: str) -> dict[str, Any]:
        post = await self.queries.get_journal_entry_by_slug(slug)
        if post is None:
            raise NotFoundError("Journal entry not found")
        return {"post": post}

    async def load_page(self, slug: str) -> dict[str, Any]:
        page = await self.queries.get_page(slug)
        if page is None:
            raise NotFoundError("Not found")
        return {"page": page}

    def match(self, path: str) -> tuple[str, Loader] | None:
        """Find the view and loader for a URL path.

        Args:
            path: Request path, optionally with a query string.

        Returns:
            Tuple of (view name, loader), or None for paths the router does
            not own (static files).
        """
        parts = [unquote(part) for part in urlsplit(path).path.split("/") if part]
        if not parts:
            return "home", self.load_home
        if parts == ["archive"]:
            return "archive", self.load_archive
        if len(parts) == 2 and parts[0] == "journal":
            return "entry", partial(self.load_journal_entry, parts[1])
        if len(parts) == 1 and "." not in parts[0]:
            return "page", partial(self.load_page, parts[0])
        return None

    def render(self, view: str, context: dict[str, Any], path: str = "/") -> str:
        return self.templates.render(view, {**self.load_layout(), "path": path, **context})

    def render_error(self, status: int, message: str, path: str = "/") -> str:
        return self.render("error", {"status": status, "message": message}, path)

    async def dispatch(self, path: str) -> tuple[int, str] | None:
        """Run the loader for a path and render its view.

        Args:
            path: Request path.

        Returns:
            Tuple of (status code, HTML), or None if no route matches.
        """
        route = self.match(path)
        if route is None:
            return None
        view, loader = route
        path = urlsplit(path).path
        try:
            return 200, self.render(view, await loader(), path)
        except NotFoundError as exc:
            return exc.status, self.render_error(exc.status, exc.message, path)
        except Exception:
            logger.exception("Failed to render %s", path)
            return 500, self.render_error(500, "Internal Error", path)
