"""Error types for Inkwell.

Content errors are raised for a single file (a journal entry or a page) and
carry the path of the offending file. Absence of content is never an error
in the content layer; route loaders translate it into NotFoundError.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FieldError:
    """A single schema violation.

    Attributes:
        field: Dotted path of the offending field (e.g. ``changelog.0.date``).
        message: Human-readable description of the violation.
    """

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ContentError(Exception):
    """Error while compiling a content file.

    Attributes:
        source_path: Path to the file that caused the error, when known.
        message: Human-readable error message.
    """

    def __init__(self, message: str, source_path: Path | None = None):
        self.source_path = source_path
        self.message = message
        prefix = f"{source_path}: " if source_path else ""
        super().__init__(f"{prefix}{message}")


class FrontmatterError(ContentError):
    """The frontmatter block could not be parsed as a YAML mapping."""


class MetadataValidationError(ContentError):
    """Frontmatter metadata does not satisfy its schema.

    Attributes:
        errors: Every violated field, in schema order.
    """

    def __init__(self, errors: Iterable[FieldError], source_path: Path | None = None):
        self.errors = tuple(errors)
        summary = "; ".join(str(error) for error in self.errors) or "invalid metadata"
        super().__init__(f"invalid metadata ({summary})", source_path)


class NotFoundError(Exception):
    """Raised by route loaders when the requested content does not exist.

    Attributes:
        status: HTTP status code to respond with.
        message: Short message shown to the visitor.
    """

    def __init__(self, message: str = "Not found", status: int = 404):
        self.status = status
        self.message = message
        super().__init__(message)
