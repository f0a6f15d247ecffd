"""Protocol definitions for Inkwell.

These protocols describe the seams between the content layer and the code
around it, so tests and alternative front ends can substitute their own
implementations.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import JournalEntry, Page
    from .renderers import Document


@runtime_checkable
class TransformStage(Protocol):
    """One step of the markdown transform pipeline.

    Stages receive a Document and return a new Document; they must not
    mutate their input.
    """

    @abstractmethod
    def __call__(self, document: Document) -> Document:
        """Transform a document.

        Args:
            document: Parsed markdown document.

        Returns:
            The transformed document.
        """
        ...


@runtime_checkable
class ContentSource(Protocol):
    """Protocol for the component that compiles content from storage."""

    @abstractmethod
    async def journal_entries(self) -> list[JournalEntry]:
        """Return every compiled journal entry, in no particular order."""
        ...

    @abstractmethod
    async def journal_entry(self, slug: str) -> JournalEntry | None:
        """Return the journal entry with the given slug, or None."""
        ...

    @abstractmethod
    async def page(self, slug: str) -> Page | None:
        """Return the compiled page with the given slug, or None."""
        ...


@runtime_checkable
class TemplateRenderer(Protocol):
    """Protocol for rendering route data into HTML."""

    @abstractmethod
    def render(self, view: str, context: dict[str, Any]) -> str:
        """Render a named view.

        Args:
            view: View name (e.g. 'home', 'entry', 'error').
            context: Variables to make available in the template.

        Returns:
            Rendered HTML string.
        """
        ...
