from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .models import JournalEntry


def _newest_first(entry: JournalEntry) -> int:
    return -entry.metadata.date.toordinal()


class EntryCollection(Sequence[JournalEntry]):
    """Lightweight helper for filtering and ordering journal entries."""

    def __init__(self, entries: Iterable[JournalEntry]):
        self._entries = list(entries)

    def __iter__(self) -> Iterator[JournalEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, item):
        return self._entries[item]

    def published(self) -> EntryCollection:
        """Entries that are not archived, pinned first, then newest first.

        Both groups are ordered by date, newest first; entries with the same
        date keep their relative order.
        """
        return EntryCollection(
            sorted(
                (e for e in self._entries if not e.metadata.archived),
                key=lambda e: (not e.metadata.pinned, _newest_first(e)),
            )
        )

    def archived(self) -> EntryCollection:
        """Archived entries, newest first."""
        return EntryCollection(
            sorted((e for e in self._entries if e.metadata.archived), key=_newest_first)
        )

    def by_slug(self) -> dict[str, JournalEntry]:
        return {e.slug: e for e in self._entries}

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"EntryCollection({len(self._entries)} entries)"
