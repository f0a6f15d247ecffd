"""Development server for Inkwell.

Serves the route loaders over HTTP for local authoring:
- Journal, archive, entry and page routes are rendered by the Router.
- Everything else is served from the static directory, so entry media
  under ``/content/journal/<slug>/media/`` resolves.
- Directory listings and missing files get the rendered 404 page.

Journal entries are compiled on the first request and cached for the life
of the process; restart the server to pick up edits to journal entries.
Pages are re-read on every request.

Key classes:
- DevServer: Builds the content stack from configuration and serves it.
- _RouteHandler: HTTP request handler dispatching to the Router.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import urlsplit

from .config import create_repository, load_config, static_root
from .queries import ContentQueries
from .routes import Router
from .templates import TemplateEngine

logger = logging.getLogger(__name__)


class _RouteHandler(SimpleHTTPRequestHandler):
    """HTTP request handler that renders routes before falling back to files.

    Attributes:
        router: Router shared by every request of the server.
    """

    router: Router

    def do_GET(self):
        result = asyncio.run(self.router.dispatch(self.path))
        if result is None:
            return super().do_GET()
        status, html = result
        self._send_html(status, html)
        return None

    def list_directory(self, path):  # pragma: no cover - exercised via send_head
        # Never expose directory listings; treat as missing content.
        return self._serve_404()

    def send_head(self):
        path_obj = Path(self.translate_path(self.path))
        if path_obj.is_dir() or not path_obj.exists():
            return self._serve_404()
        return super().send_head()

    def _serve_404(self):
        path = urlsplit(self.path).path
        self._send_html(404, self.router.render_error(404, "Not found", path))
        return None

    def _send_html(self, status: int, html: str) -> None:
        encoded = html.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        self.wfile.write(encoded)

    def log_message(self, format, *args):  # noqa: A002 - signature fixed by base class
        logger.info("%s - %s", self.address_string(), format % args)


class DevServer:
    """Development server for a project's content.

    Attributes:
        project_root: Root directory of the project.
        config: Site configuration.
        static_dir: Directory served for non-route paths.
        http_port: Port for the HTTP server.
        router: Router rendering the content routes.
    """

    def __init__(self, project_root: Path, http_port: int | None = None):
        """Initialize the development server.

        Args:
            project_root: Root directory of the project.
            http_port: Optional override for the configured port.
        """
        self.project_root = project_root
        self.config = load_config(project_root)
        self.static_dir = static_root(project_root, self.config)
        self.http_port = int(http_port or self.config.get("port", 4000))
        self.queries = ContentQueries(create_repository(project_root, self.config))
        self.router = Router(
            self.queries, TemplateEngine(self.config.get("site_url", "")), self.config
        )

    def make_handler(self):
        handler_cls = type("_RouteHandlerWithRouter", (_RouteHandler,), {"router": self.router})
        return functools.partial(handler_cls, directory=str(self.static_dir))

    def start(self) -> None:  # pragma: no cover - integration path
        httpd = ThreadingHTTPServer(("", self.http_port), self.make_handler())
        logger.info("Serving %s at http://localhost:%d", self.project_root, self.http_port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down")
        finally:
            httpd.server_close()
