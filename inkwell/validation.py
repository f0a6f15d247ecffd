"""Metadata validation for Inkwell.

Validation never raises on bad input: it returns a ValidationResult holding
either the typed metadata or every violated field, so callers decide whether
one bad file should fail a whole listing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import FieldError, MetadataValidationError
from .models import JournalEntryMetadata, PageMetadata

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ValidationResult(Generic[M]):
    """Outcome of validating one metadata block.

    Attributes:
        value: The typed metadata, or None when validation failed.
        errors: Every violated field; empty on success.
    """

    value: M | None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def unwrap(self, source_path: Path | None = None) -> M:
        """Return the metadata or raise the collected errors.

        Args:
            source_path: File the metadata came from, for the error message.

        Raises:
            MetadataValidationError: If validation failed.
        """
        if not self.ok:
            raise MetadataValidationError(self.errors, source_path)
        return self.value


def _field_errors(exc: PydanticValidationError) -> tuple[FieldError, ...]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "<root>"
        errors.append(FieldError(field=field, message=error["msg"]))
    return tuple(errors)


def validate_metadata(schema: type[M], raw: Mapping[str, Any]) -> ValidationResult[M]:
    """Validate a raw frontmatter mapping against a schema.

    Args:
        schema: Pydantic model class describing the metadata.
        raw: Mapping recovered from the frontmatter block.

    Returns:
        ValidationResult with the typed metadata or the field errors.
    """
    try:
        return ValidationResult(value=schema.model_validate(dict(raw)))
    except PydanticValidationError as exc:
        return ValidationResult(value=None, errors=_field_errors(exc))


def validate_journal_metadata(raw: Mapping[str, Any]) -> ValidationResult[JournalEntryMetadata]:
    return validate_metadata(JournalEntryMetadata, raw)


def validate_page_metadata(raw: Mapping[str, Any]) -> ValidationResult[PageMetadata]:
    return validate_metadata(PageMetadata, raw)
