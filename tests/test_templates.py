from datetime import date

from inkwell.models import ChangelogEntry, JournalEntry, JournalEntryMetadata, Page, PageMetadata
from inkwell.protocols import TemplateRenderer
from inkwell.templates import TemplateEngine


def make_post(**overrides):
    fields = {"title": "Hello <World>", "description": "Hi", "date": date(2023, 1, 1)}
    fields.update(overrides)
    return JournalEntry(
        slug="hello",
        metadata=JournalEntryMetadata(**fields),
        content_html="<p>Body</p>",
        deprecation_note_html=None,
    )


def test_engine_satisfies_protocol():
    assert isinstance(TemplateEngine(), TemplateRenderer)


def test_home_lists_entries_with_tags():
    engine = TemplateEngine()
    post = make_post(pinned=True)
    updated = JournalEntry(
        slug="other",
        metadata=JournalEntryMetadata(title="Other", description="x", date=date(2022, 5, 6)),
        content_html="",
        is_recently_updated=True,
    )
    html = engine.render("home", {"journal_entries": [post, updated]})
    assert '<a href="/journal/hello">Hello &lt;World&gt;</a>' in html
    assert "1 January 2023" in html
    assert '<time datetime="2022-05-06">6 May 2022</time>' in html
    assert "Pinned" in html
    assert "Updated" in html


def test_empty_listing():
    html = TemplateEngine().render("archive", {"journal_entries": []})
    assert "<h1>Archive</h1>" in html
    assert "Nothing here yet." in html


def test_entry_view_renders_html_unescaped():
    post = make_post(
        deprecated=True,
        changelog=[ChangelogEntry(date=date(2023, 2, 3), description="Fixed <typos>")],
    )
    post = JournalEntry(
        slug=post.slug,
        metadata=post.metadata,
        content_html=post.content_html,
        deprecation_note_html="<p>See <strong>v2</strong></p>",
    )
    html = TemplateEngine().render("entry", {"post": post})
    assert "<p>Body</p>" in html
    assert "<p>See <strong>v2</strong></p>" in html
    assert "This entry is deprecated." in html
    assert "Updated 3 February 2023" in html
    assert "Fixed &lt;typos&gt;" in html


def test_entry_view_without_deprecation():
    html = TemplateEngine().render("entry", {"post": make_post()})
    assert "deprecated" not in html
    assert "Changelog" not in html


def test_page_view():
    page = Page(slug="about", metadata=PageMetadata(title="About"), content_html="<h1>Me</h1>")
    html = TemplateEngine().render("page", {"page": page})
    assert "<title>About</title>" in html
    assert "<article><h1>Me</h1></article>" in html


def test_site_url_makes_links_absolute():
    engine = TemplateEngine(site_url="https://example.com/")
    html = engine.render("error", {"status": 404, "message": "Not found", "path": "/nope"})
    assert '<link rel="canonical" href="https://example.com/nope">' in html
    assert 'href="https://example.com/archive"' in html
    assert "<h1>404</h1><p>Not found</p>" in html


def test_relative_links_without_site_url():
    engine = TemplateEngine()
    assert engine.absolute_url("/about") == "/about"
    html = engine.render("error", {"status": 500, "message": "Internal Error"})
    assert "canonical" not in html
    assert 'href="/archive"' in html


def test_copy_button_css_is_inlined():
    html = TemplateEngine().render("error", {"status": 404, "message": "x"})
    assert ".copy-button" in html


def test_template_overrides():
    engine = TemplateEngine(templates={"page.html": "custom {{ page }}"})
    assert engine.render("page", {"page": "x"}) == "custom x"
