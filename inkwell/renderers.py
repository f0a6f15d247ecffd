"""Markdown transform pipeline for Inkwell.

Markdown is parsed by mistune into a token tree (the Document), passed
through an ordered list of stages, and serialized to HTML. Every stage is a
pure ``Document -> Document`` callable, so each one can be tested alone.

Key classes:
- Document: Parsed token tree plus the slug it is rendered for.
- MarkdownPipeline: Parse, run stages, serialize.
- RewriteImagePaths: Point ``./`` image references at the entry's media URL.
- SlugHeadings: Give every heading a unique anchor id.
- AutolinkHeadings: Wrap heading contents in a link to their own anchor.
- HighlightCode: Pygments highlighting plus a copy-to-clipboard button.
- DropRawHtml: Remove embedded HTML, for the note pipeline.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import mistune
from mistune.core import BlockState
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from .html_utils import escape_html
from .protocols import TransformStage
from .utils import HeadingSlugger, rewrite_image_path

Token = dict[str, Any]

PLUGINS = ("strikethrough", "table", "url")
DEFAULT_THEME = "solarized-light"
DEFAULT_MEDIA_PREFIX = "/content/journal"

COPY_BUTTON_CSS = """\
figure[data-code-block] { position: relative; margin: 0; }
.copy-button { position: absolute; top: 0.5rem; right: 0.5rem; cursor: pointer; }
.copy-button[data-visibility="hover"] { visibility: hidden; }
figure[data-code-block]:hover .copy-button { visibility: visible; }
.copy-button .ready::before { content: "Copy"; }
.copy-button .success::before { content: "Copied"; }
.copy-button .success, .copy-button.copied .ready { display: none; }
.copy-button.copied .success { display: inline; }
"""


@dataclass(frozen=True)
class Document:
    """A parsed markdown document.

    Attributes:
        tokens: mistune token tree.
        state: mistune block state produced by the parse.
        slug: Slug of the content item being rendered.
    """

    tokens: list[Token]
    state: BlockState
    slug: str = ""

    def replace(self, tokens: list[Token]) -> Document:
        return dataclasses.replace(self, tokens=tokens)


def map_tokens(tokens: list[Token], fn: Callable[[Token], Token]) -> list[Token]:
    """Return a copy of a token tree with ``fn`` applied to every token.

    Children are transformed before their parent, and ``fn`` always receives
    a fresh copy it may modify.

    Args:
        tokens: Token list to transform.
        fn: Function mapping a token to its replacement.

    Returns:
        The transformed token list.
    """
    result = []
    for token in tokens:
        copy = dict(token)
        if "attrs" in copy:
            copy["attrs"] = dict(copy["attrs"])
        if "children" in copy:
            copy["children"] = map_tokens(copy["children"], fn)
        result.append(fn(copy))
    return result


def plain_text(tokens: list[Token]) -> str:
    """Concatenate the visible text of an inline token list."""
    parts = []
    for token in tokens:
        kind = token["type"]
        if kind in ("text", "codespan"):
            parts.append(token.get("raw", ""))
        elif kind in ("softbreak", "linebreak"):
            parts.append(" ")
        elif kind == "image":
            continue
        elif "children" in token:
            parts.append(plain_text(token["children"]))
    return "".join(parts)


class RewriteImagePaths:
    """Rewrite ``./`` image references to ``<prefix>/<slug>/...``."""

    def __init__(self, prefix: str = DEFAULT_MEDIA_PREFIX):
        self.prefix = prefix

    def __call__(self, document: Document) -> Document:
        if not document.slug:
            return document

        def rewrite(token: Token) -> Token:
            if token["type"] == "image":
                url = token["attrs"].get("url", "")
                token["attrs"]["url"] = rewrite_image_path(url, document.slug, self.prefix)
            return token

        return document.replace(map_tokens(document.tokens, rewrite))


class SlugHeadings:
    """Assign a unique, URL-safe ``id`` to every heading."""

    def __call__(self, document: Document) -> Document:
        slugger = HeadingSlugger()

        def assign(token: Token) -> Token:
            if token["type"] == "heading":
                token["attrs"]["id"] = slugger.slug(plain_text(token.get("children", [])))
            return token

        return document.replace(map_tokens(document.tokens, assign))


class AutolinkHeadings:
    """Wrap the contents of each heading with an id in a self link."""

    def __call__(self, document: Document) -> Document:
        def wrap(token: Token) -> Token:
            heading_id = token.get("attrs", {}).get("id") if token["type"] == "heading" else None
            if heading_id:
                token["children"] = [
                    {
                        "type": "link",
                        "children": token.get("children", []),
                        "attrs": {"url": f"#{heading_id}"},
                    }
                ]
            return token

        return document.replace(map_tokens(document.tokens, wrap))


class DropRawHtml:
    """Remove embedded HTML (block and inline) from the document."""

    RAW_TYPES = frozenset({"block_html", "inline_html"})

    def __call__(self, document: Document) -> Document:
        return document.replace(self._strip(document.tokens))

    def _strip(self, tokens: list[Token]) -> list[Token]:
        result = []
        for token in tokens:
            if token["type"] in self.RAW_TYPES:
                continue
            if "children" in token:
                token = {**token, "children": self._strip(token["children"])}
            result.append(token)
        return result


@dataclass(frozen=True)
class CopyButton:
    """Copy-to-clipboard button attached to highlighted code blocks.

    Attributes:
        visibility: 'hover' shows the button only while the block is hovered.
        feedback_duration: Milliseconds the 'copied' state stays visible.
    """

    visibility: str = "hover"
    feedback_duration: int = 3000

    def render(self, code: str) -> str:
        onclick = (
            "navigator.clipboard.writeText(this.dataset.code);"
            "this.classList.add('copied');"
            f"window.setTimeout(() => this.classList.remove('copied'), {self.feedback_duration});"
        )
        return (
            '<button type="button" class="copy-button" title="Copy code" aria-label="Copy code"'
            f' data-visibility="{escape_html(self.visibility)}"'
            f' data-feedback-duration="{self.feedback_duration}"'
            f' data-code="{escape_html(code)}" onclick="{escape_html(onclick)}">'
            '<span class="ready"></span><span class="success"></span></button>'
        )


def _lexer_for(language: str):
    if language:
        try:
            return get_lexer_by_name(language, stripall=False)
        except ClassNotFound:
            pass
    return TextLexer()


class HighlightCode:
    """Highlight code blocks with Pygments using inline styles.

    The theme's background colour is left out so the site's stylesheet
    controls it.
    """

    def __init__(self, theme: str = DEFAULT_THEME, copy_button: CopyButton | None = None):
        self.theme = theme
        self.copy_button = copy_button
        self.formatter = HtmlFormatter(
            style=theme, noclasses=True, nobackground=True, cssclass="highlight", wrapcode=True
        )

    def __call__(self, document: Document) -> Document:
        def replace_block(token: Token) -> Token:
            if token["type"] != "block_code":
                return token
            info = token.get("attrs", {}).get("info") or ""
            return {"type": "block_html", "raw": self.render_block(token.get("raw", ""), info)}

        return document.replace(map_tokens(document.tokens, replace_block))

    def render_block(self, code: str, info: str = "") -> str:
        """Render one code block as a highlighted figure.

        Args:
            code: Raw code from the fenced block.
            info: Fence info string; its first word selects the language.

        Returns:
            HTML for the figure, including the copy button when enabled.
        """
        language = info.split()[0] if info.strip() else ""
        highlighted = highlight(code, _lexer_for(language), self.formatter)
        button = self.copy_button.render(code.rstrip("\n")) if self.copy_button else ""
        return (
            f'<figure data-code-block="" data-language="{escape_html(language or "plaintext")}"'
            f' data-theme="{escape_html(self.theme)}">\n{highlighted}{button}</figure>'
        )


class MarkdownPipeline:
    """Parse markdown, run transform stages in order, serialize to HTML.

    Attributes:
        stages: Ordered transform stages.
        allow_raw_html: Whether embedded HTML passes through unescaped.
    """

    def __init__(
        self,
        stages: Iterable[TransformStage] = (),
        allow_raw_html: bool = True,
        plugins: Iterable[str] = PLUGINS,
    ):
        self.stages = list(stages)
        self.allow_raw_html = allow_raw_html
        plugins = list(plugins)
        self._parser = mistune.create_markdown(renderer="ast", plugins=plugins)
        # Building a Markdown around the renderer registers the plugins' render methods on it.
        self._html = mistune.create_markdown(
            renderer=mistune.HTMLRenderer(escape=not allow_raw_html), plugins=plugins
        )

    def parse(self, text: str, slug: str = "") -> Document:
        tokens, state = self._parser.parse(text)
        return Document(tokens=tokens, state=state, slug=slug)

    def serialize(self, document: Document) -> str:
        return self._html.renderer(document.tokens, document.state)

    def render(self, text: str, slug: str = "") -> str:
        """Render markdown text to HTML.

        Args:
            text: Markdown source.
            slug: Slug of the content item, used by path-rewriting stages.

        Returns:
            HTML string.
        """
        document = self.parse(text, slug)
        for stage in self.stages:
            document = stage(document)
        return self.serialize(document)


def create_content_pipeline(
    media_prefix: str = DEFAULT_MEDIA_PREFIX,
    theme: str = DEFAULT_THEME,
    copy_button: CopyButton | None = CopyButton(),
) -> MarkdownPipeline:
    """Build the full pipeline used for journal entry and page bodies.

    Args:
        media_prefix: Public URL prefix for entry-relative images.
        theme: Pygments style name used for code blocks.
        copy_button: Copy button settings, or None to omit the button.

    Returns:
        A MarkdownPipeline with every content stage in order.
    """
    return MarkdownPipeline(
        stages=[
            RewriteImagePaths(media_prefix),
            SlugHeadings(),
            AutolinkHeadings(),
            HighlightCode(theme, copy_button),
        ],
        allow_raw_html=True,
    )


def note_pipeline() -> MarkdownPipeline:
    """Build the minimal pipeline for short free-text fields.

    Embedded HTML is dropped rather than rendered.
    """
    return MarkdownPipeline(stages=[DropRawHtml()], allow_raw_html=False)
