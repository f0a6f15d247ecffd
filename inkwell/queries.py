"""Read-only content queries for route handlers.

ContentQueries wraps a content source and applies the listing rules. The
module-level functions delegate to a default instance configured from the
current working directory, for hosts that want plain function calls.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from datetime import datetime, time, timedelta, timezone
from pathlib import Path

from .collections import EntryCollection
from .config import create_repository
from .models import JournalEntry, JournalEntryMetadata, Page
from .protocols import ContentSource

RECENTLY_UPDATED_WINDOW = timedelta(days=365)


def is_recently_updated(metadata: JournalEntryMetadata, now: datetime | None = None) -> bool:
    """Check whether an entry was updated within the last 365 days.

    The window is a fixed 365 days, not a calendar year; ``updated`` counts
    from UTC midnight.

    Args:
        metadata: Entry metadata.
        now: Reference time; defaults to the current UTC time.

    Returns:
        True if ``updated`` is set and lies inside the window.
    """
    if metadata.updated is None:
        return False
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    updated = datetime.combine(metadata.updated, time.min, tzinfo=timezone.utc)
    return now - updated < RECENTLY_UPDATED_WINDOW


def with_update_status(
    entries: Iterable[JournalEntry], now: datetime | None = None
) -> list[JournalEntry]:
    """Return copies of the entries with ``is_recently_updated`` filled in."""
    return [
        dataclasses.replace(entry, is_recently_updated=is_recently_updated(entry.metadata, now))
        for entry in entries
    ]


class ContentQueries:
    """Consumer-facing accessors over a content source.

    Attributes:
        source: Repository the queries read from.
    """

    def __init__(self, source: ContentSource):
        self.source = source

    async def get_published_journal_entries(self) -> list[JournalEntry]:
        """Non-archived entries: pinned first, then newest first."""
        entries = await self.source.journal_entries()
        return list(EntryCollection(entries).published())

    async def get_archived_journal_entries(self) -> list[JournalEntry]:
        """Archived entries, newest first."""
        entries = await self.source.journal_entries()
        return list(EntryCollection(entries).archived())

    async def get_journal_entry_by_slug(self, slug: str) -> JournalEntry | None:
        return await self.source.journal_entry(slug)

    async def get_page(self, slug: str) -> Page | None:
        return await self.source.page(slug)


_default_queries: ContentQueries | None = None


def default_queries() -> ContentQueries:
    """Return the shared ContentQueries for the current working directory."""
    global _default_queries
    if _default_queries is None:
        _default_queries = ContentQueries(create_repository(Path.cwd()))
    return _default_queries


def reset_default_queries() -> None:
    """Drop the shared instance and, with it, its journal cache."""
    global _default_queries
    _default_queries = None


async def get_published_journal_entries() -> list[JournalEntry]:
    return await default_queries().get_published_journal_entries()


async def get_archived_journal_entries() -> list[JournalEntry]:
    return await default_queries().get_archived_journal_entries()


async def get_journal_entry_by_slug(slug: str) -> JournalEntry | None:
    return await default_queries().get_journal_entry_by_slug(slug)


async def get_page(slug: str) -> Page | None:
    return await default_queries().get_page(slug)
