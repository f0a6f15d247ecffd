import asyncio
from datetime import datetime, timezone

import pytest

from inkwell.content import ContentRepository
from inkwell.errors import NotFoundError
from inkwell.queries import ContentQueries
from inkwell.routes import Router
from inkwell.templates import TemplateEngine


@pytest.fixture
def router(content_root):
    repository = ContentRepository(content_root / "journal", content_root / "pages")
    return Router(ContentQueries(repository), TemplateEngine(), {"site_url": ""})


class BrokenQueries:
    async def get_published_journal_entries(self):
        raise RuntimeError("disk on fire")


def test_load_layout_exposes_site_url():
    router = Router(ContentQueries(None), TemplateEngine(), {"site_url": "https://example.com"})
    assert router.load_layout() == {"site_url": "https://example.com"}
    assert Router(ContentQueries(None), TemplateEngine()).load_layout() == {"site_url": ""}


def test_load_home_marks_recent_updates(router):
    data = asyncio.run(router.load_home(now=datetime(2024, 6, 1, tzinfo=timezone.utc)))
    entries = data["journal_entries"]
    assert [e.slug for e in entries] == ["pinned-post", "first-post", "deprecated-post"]
    assert [e.is_recently_updated for e in entries] == [False, False, True]


def test_load_archive(router):
    data = asyncio.run(router.load_archive())
    assert [e.slug for e in data["journal_entries"]] == ["old-post", "older-post"]


def test_load_journal_entry(router):
    assert asyncio.run(router.load_journal_entry("first-post"))["post"].slug == "first-post"
    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(router.load_journal_entry("nope"))
    assert excinfo.value.status == 404
    assert excinfo.value.message == "Journal entry not found"


def test_load_page(router):
    assert asyncio.run(router.load_page("about"))["page"].metadata.title == "About"
    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(router.load_page("nope"))
    assert excinfo.value.message == "Not found"


def test_match_routes(router):
    assert router.match("/")[0] == "home"
    assert router.match("/?page=2")[0] == "home"
    assert router.match("/archive")[0] == "archive"
    assert router.match("/archive/")[0] == "archive"
    assert router.match("/journal/first-post")[0] == "entry"
    assert router.match("/about")[0] == "page"
    assert router.match("/favicon.ico") is None
    assert router.match("/content/journal/first-post/media/cat.png") is None
    assert router.match("/journal/a/b") is None


def test_dispatch_home(router):
    status, html = asyncio.run(router.dispatch("/"))
    assert status == 200
    assert html.index("Pinned Post") < html.index("First Post") < html.index("Deprecated Post")
    assert "Old Post" not in html


def test_dispatch_entry_and_page(router):
    status, html = asyncio.run(router.dispatch("/journal/deprecated-post"))
    assert status == 200
    assert "This entry is deprecated." in html
    assert "<strong>new</strong>" in html
    assert "Added section" in html

    status, html = asyncio.run(router.dispatch("/about"))
    assert status == 200
    assert '<h1 id="about-me">' in html


def test_dispatch_not_found(router):
    status, html = asyncio.run(router.dispatch("/journal/missing"))
    assert status == 404
    assert "Journal entry not found" in html

    status, html = asyncio.run(router.dispatch("/missing"))
    assert status == 404
    assert "Not found" in html


def test_dispatch_unmatched_returns_none(router):
    assert asyncio.run(router.dispatch("/styles.css")) is None


def test_dispatch_unexpected_error_is_500(caplog):
    router = Router(BrokenQueries(), TemplateEngine())
    status, html = asyncio.run(router.dispatch("/"))
    assert status == 500
    assert "Internal Error" in html
    assert "disk on fire" not in html
    assert any(record.name == "inkwell.routes" for record in caplog.records)
