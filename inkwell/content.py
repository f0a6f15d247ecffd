"""Content repository for Inkwell.

This module reads journal entries and static pages from disk, validates
their frontmatter and compiles their markdown bodies.

Key classes:
- JournalCache: Populate-once store for the compiled journal.
- ContentRepository: Scans, compiles and caches content.
- ContentIssue: A file whose frontmatter failed validation (see check()).

Layout on disk::

    <journal_root>/<slug>/index.md        one directory per journal entry
    <journal_root>/<slug>/media/...       entry-local images
    <pages_root>/<slug>.md                one file per static page
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from .collections import EntryCollection
from .errors import ContentError, FieldError, MetadataValidationError
from .extractors import read_content_file
from .models import JournalEntry, Page
from .renderers import (
    DEFAULT_MEDIA_PREFIX,
    DEFAULT_THEME,
    MarkdownPipeline,
    create_content_pipeline,
    note_pipeline,
)
from .utils import is_single_segment
from .validation import validate_journal_metadata, validate_page_metadata

logger = logging.getLogger(__name__)

ENTRY_FILENAME = "index.md"


class JournalCache:
    """Process-wide store for compiled journal entries.

    The entry list is populated the first time it is requested and served
    from memory afterwards. Two callers racing on the first request may both
    populate it; population is pure, so the last result simply wins. The
    slug map is built lazily from the entry list on first lookup.
    """

    def __init__(self):
        self._entries: list[JournalEntry] | None = None
        self._by_slug: dict[str, JournalEntry] | None = None

    @property
    def populated(self) -> bool:
        return self._entries is not None

    async def entries(
        self, populate: Callable[[], Awaitable[list[JournalEntry]]]
    ) -> list[JournalEntry]:
        """Return the cached entries, populating them on first use.

        Args:
            populate: Coroutine function producing the full entry list.

        Returns:
            The cached entry list.
        """
        if self._entries is None:
            self._entries = await populate()
            logger.debug("Journal cache populated with %d entries", len(self._entries))
        return self._entries

    async def get(
        self, slug: str, populate: Callable[[], Awaitable[list[JournalEntry]]]
    ) -> JournalEntry | None:
        """Look up an entry by slug, building the slug map on first use."""
        if self._by_slug is None:
            entries = await self.entries(populate)
            self._by_slug = EntryCollection(entries).by_slug()
        return self._by_slug.get(slug)

    def reset(self) -> None:
        """Forget everything; the next request reads from disk again."""
        self._entries = None
        self._by_slug = None


@dataclass(frozen=True)
class ContentIssue:
    """A content file that cannot be compiled.

    Attributes:
        path: Offending file.
        message: Summary of the problem.
        errors: Individual field violations, when the schema failed.
    """

    path: Path
    message: str
    errors: tuple[FieldError, ...] = ()


class ContentRepository:
    """Reads, compiles and caches site content.

    Attributes:
        journal_root: Directory holding one sub-directory per journal entry.
        pages_root: Directory holding one markdown file per page.
        strict: When True, one invalid journal entry fails the whole listing;
            otherwise the entry is skipped with a warning.
        cache: Journal cache; pass a shared instance to share compiled entries.
    """

    def __init__(
        self,
        journal_root: Path,
        pages_root: Path,
        media_url_prefix: str = DEFAULT_MEDIA_PREFIX,
        highlight_theme: str = DEFAULT_THEME,
        strict: bool = False,
        cache: JournalCache | None = None,
        pipeline: MarkdownPipeline | None = None,
    ):
        self.journal_root = Path(journal_root)
        self.pages_root = Path(pages_root)
        self.strict = strict
        self.cache = cache or JournalCache()
        self._pipeline = pipeline or create_content_pipeline(media_url_prefix, highlight_theme)
        self._note_pipeline = note_pipeline()

    # --- Journal -----------------------------------------------------------

    def journal_dirs(self) -> list[Path]:
        """List entry directories: immediate sub-directories holding ``index.md``.

        Returns:
            Entry directories sorted by name; empty if the root is missing.
        """
        if not self.journal_root.is_dir():
            return []
        return [
            path
            for path in sorted(self.journal_root.iterdir())
            if path.is_dir() and (path / ENTRY_FILENAME).is_file()
        ]

    def compile_journal_entry(self, path: Path, slug: str) -> JournalEntry:
        """Read and compile one journal entry.

        Args:
            path: Path to the entry's ``index.md``.
            slug: Entry slug (its directory name).

        Returns:
            The compiled JournalEntry.

        Raises:
            ContentError: If the frontmatter is unreadable or invalid.
        """
        data, body = read_content_file(path)
        metadata = validate_journal_metadata(data).unwrap(path)
        content_html = self._pipeline.render(body, slug=slug)
        deprecation_note_html = (
            self._note_pipeline.render(metadata.deprecation_note)
            if metadata.deprecation_note
            else None
        )
        return JournalEntry(
            slug=slug,
            metadata=metadata,
            content_html=content_html,
            deprecation_note_html=deprecation_note_html,
        )

    async def _compile_all(self) -> list[JournalEntry]:
        dirs = self.journal_dirs()
        results = await asyncio.gather(
            *(
                asyncio.to_thread(self.compile_journal_entry, path / ENTRY_FILENAME, path.name)
                for path in dirs
            ),
            return_exceptions=True,
        )
        entries: list[JournalEntry] = []
        for result in results:
            if isinstance(result, ContentError) and not self.strict:
                logger.warning("Skipping journal entry %s", result)
                continue
            if isinstance(result, BaseException):
                raise result
            entries.append(result)
        return entries

    async def journal_entries(self) -> list[JournalEntry]:
        """Return every compiled journal entry (cached for the process lifetime)."""
        return await self.cache.entries(self._compile_all)

    async def journal_entry(self, slug: str) -> JournalEntry | None:
        """Return the journal entry with the given slug, or None."""
        return await self.cache.get(slug, self._compile_all)

    def reset(self) -> None:
        self.cache.reset()

    # --- Pages -------------------------------------------------------------

    def page_path(self, slug: str) -> Path | None:
        if not is_single_segment(slug):
            return None
        return self.pages_root / f"{slug}.md"

    def compile_page(self, path: Path, slug: str) -> Page:
        data, body = read_content_file(path)
        metadata = validate_page_metadata(data).unwrap(path)
        logger.debug("Compiled page %s", path)
        return Page(slug=slug, metadata=metadata, content_html=self._pipeline.render(body, slug=slug))

    async def page(self, slug: str) -> Page | None:
        """Read and compile a page; pages are never cached.

        Args:
            slug: Page file name without the ``.md`` extension.

        Returns:
            The compiled Page, or None if no such file exists.
        """
        path = self.page_path(slug)
        if path is None or not path.is_file():
            return None
        return await asyncio.to_thread(self.compile_page, path, slug)

    def page_slugs(self) -> list[str]:
        if not self.pages_root.is_dir():
            return []
        return sorted(path.stem for path in self.pages_root.glob("*.md") if path.is_file())

    # --- Validation --------------------------------------------------------

    def check(self) -> list[ContentIssue]:
        """Validate the frontmatter of every journal entry and page.

        Bodies are not compiled. Nothing is cached.

        Returns:
            One ContentIssue per invalid file, journal entries first.
        """
        targets = [(path / ENTRY_FILENAME, validate_journal_metadata) for path in self.journal_dirs()]
        targets += [(self.pages_root / f"{slug}.md", validate_page_metadata) for slug in self.page_slugs()]
        issues = []
        for path, validate in targets:
            try:
                data, _ = read_content_file(path)
                validate(data).unwrap(path)
            except MetadataValidationError as exc:
                issues.append(ContentIssue(path=path, message=exc.message, errors=exc.errors))
            except ContentError as exc:
                issues.append(ContentIssue(path=path, message=exc.message))
        return issues
