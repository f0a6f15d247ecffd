"""Content domain models for Inkwell.

Frontmatter schemas are Pydantic v2 models; compiled content items are
frozen dataclasses built once per process and shared by every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    StrictBool,
    StringConstraints,
    model_validator,
)

# Textual forms accepted in addition to ISO-8601.
DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%d %b %Y", "%Y/%m/%d")


def coerce_date(value: Any) -> Any:
    """Coerce a frontmatter value into a calendar date.

    YAML already turns unquoted ``2024-01-02`` into a date; quoted values
    arrive as strings and are parsed here.

    Args:
        value: Raw frontmatter value.

    Returns:
        A ``date`` for recognizable input, otherwise the value unchanged so
        the schema reports the type error.

    Raises:
        ValueError: If a string is not a recognizable date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return value
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"{value!r} is not a recognizable date")


CalendarDate = Annotated[date, BeforeValidator(coerce_date)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ChangelogEntry(BaseModel):
    """A dated revision note attached to a journal entry."""

    date: CalendarDate
    description: TrimmedStr


class JournalEntryMetadata(BaseModel):
    """Frontmatter of a journal entry.

    ``updated`` is derived: whenever the changelog has entries it is
    replaced by the latest changelog date, whatever the author wrote.
    """

    model_config = ConfigDict(extra="ignore")

    title: RequiredStr
    description: RequiredStr
    date: CalendarDate
    updated: CalendarDate | None = None
    pinned: StrictBool = False
    archived: StrictBool = False
    changelog: list[ChangelogEntry] | None = None
    deprecated: StrictBool = False
    deprecation_note: TrimmedStr | None = None

    @model_validator(mode="after")
    def _derive_updated(self) -> JournalEntryMetadata:
        if self.changelog:
            self.updated = max(entry.date for entry in self.changelog)
        return self


class PageMetadata(BaseModel):
    """Frontmatter of a static page."""

    model_config = ConfigDict(extra="ignore")

    title: RequiredStr


@dataclass(frozen=True)
class JournalEntry:
    """A compiled journal entry.

    Attributes:
        slug: Name of the entry directory; unique identifier.
        metadata: Validated frontmatter.
        content_html: Compiled markdown body.
        deprecation_note_html: Compiled deprecation note, if the entry has one.
        is_recently_updated: Filled in by listing views, never by the repository.
    """

    slug: str
    metadata: JournalEntryMetadata
    content_html: str
    deprecation_note_html: str | None = None
    is_recently_updated: bool | None = None


@dataclass(frozen=True)
class Page:
    """A compiled static page.

    Attributes:
        slug: File name of the page without the ``.md`` extension.
        metadata: Validated frontmatter.
        content_html: Compiled markdown body.
    """

    slug: str
    metadata: PageMetadata
    content_html: str
