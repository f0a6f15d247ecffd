"""Tests for frontmatter extraction, schemas and validation results."""

from datetime import date, datetime
from pathlib import Path

import pytest

from inkwell.errors import ContentError, FrontmatterError, MetadataValidationError
from inkwell.extractors import extract_frontmatter, read_content_file
from inkwell.models import JournalEntryMetadata, coerce_date
from inkwell.validation import validate_journal_metadata, validate_page_metadata

VALID = {"title": " Hello ", "description": " A post ", "date": "2024-01-02"}


# --- Frontmatter ---


def test_extract_frontmatter_splits_block_and_body():
    data, body = extract_frontmatter("---\ntitle: Hi\ntags: [a, b]\n---\n# Body\n")
    assert data == {"title": "Hi", "tags": ["a", "b"]}
    assert body == "# Body\n"


def test_extract_frontmatter_without_block():
    text = "# Just markdown\n\n---\n"
    assert extract_frontmatter(text) == ({}, text)


def test_extract_frontmatter_empty_block_and_no_body():
    assert extract_frontmatter("---\n---\n") == ({}, "")
    assert extract_frontmatter("---\ntitle: x\n---") == ({"title": "x"}, "")


def test_extract_frontmatter_invalid_yaml(tmp_path):
    with pytest.raises(FrontmatterError) as excinfo:
        extract_frontmatter("---\ntitle: [unclosed\n---\nbody", tmp_path / "x.md")
    assert excinfo.value.source_path == tmp_path / "x.md"


def test_extract_frontmatter_rejects_non_mapping():
    with pytest.raises(FrontmatterError):
        extract_frontmatter("---\n- a\n- b\n---\nbody")


def test_read_content_file(tmp_path):
    path = tmp_path / "page.md"
    path.write_text("---\ntitle: Page\n---\nHello", encoding="utf-8")
    assert read_content_file(path) == ({"title": "Page"}, "Hello")


def test_read_content_file_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "page.md"
    path.write_bytes(b"---\ntitle: Caf\xe9\n---\n")
    with pytest.raises(ContentError) as excinfo:
        read_content_file(path)
    assert excinfo.value.source_path == path
    assert "not valid UTF-8" in excinfo.value.message


# --- Date coercion ---


@pytest.mark.parametrize(
    "raw",
    [
        "2024-01-02",
        " 2024-01-02 ",
        "2024-01-02T10:30:00",
        "2024-01-02T10:30:00Z",
        "January 2, 2024",
        "2 January 2024",
        "2024/01/02",
        date(2024, 1, 2),
        datetime(2024, 1, 2, 23, 59),
    ],
)
def test_coerce_date_accepts_common_forms(raw):
    assert coerce_date(raw) == date(2024, 1, 2)


def test_coerce_date_rejects_garbage():
    with pytest.raises(ValueError):
        coerce_date("someday")


# --- Journal metadata ---


def test_valid_metadata_is_trimmed_and_defaulted():
    result = validate_journal_metadata(VALID)
    assert result.ok
    metadata = result.value
    assert metadata.title == "Hello"
    assert metadata.description == "A post"
    assert metadata.date == date(2024, 1, 2)
    assert metadata.updated is None
    assert metadata.pinned is False
    assert metadata.archived is False
    assert metadata.deprecated is False
    assert metadata.changelog is None
    assert metadata.deprecation_note is None


def test_unknown_fields_are_ignored():
    result = validate_journal_metadata({**VALID, "tags": ["x"], "layout": "wide"})
    assert result.ok
    assert not hasattr(result.value, "tags")


def test_every_violated_field_is_reported():
    result = validate_journal_metadata({"date": "not a date", "pinned": "yes", "title": "   "})
    assert not result.ok
    assert result.value is None
    fields = {error.field for error in result.errors}
    assert fields == {"title", "description", "date", "pinned"}


def test_wrong_types_fail():
    result = validate_journal_metadata({**VALID, "title": 42, "archived": 1})
    fields = {error.field for error in result.errors}
    assert fields == {"title", "archived"}


def test_changelog_overrides_updated():
    result = validate_journal_metadata(
        {
            **VALID,
            "updated": "2030-01-01",
            "changelog": [
                {"date": "2024-03-10", "description": " Added section "},
                {"date": date(2024, 2, 1), "description": "Fixed typos"},
            ],
        }
    )
    metadata = result.unwrap()
    assert metadata.updated == date(2024, 3, 10)
    assert metadata.changelog[0].description == "Added section"


def test_empty_changelog_keeps_authored_updated():
    metadata = validate_journal_metadata({**VALID, "updated": "2024-05-05", "changelog": []}).unwrap()
    assert metadata.updated == date(2024, 5, 5)


def test_changelog_errors_have_dotted_paths():
    result = validate_journal_metadata(
        {**VALID, "changelog": [{"date": "2024-01-01", "description": "ok"}, {"date": "nope"}]}
    )
    fields = {error.field for error in result.errors}
    assert fields == {"changelog.1.date", "changelog.1.description"}


def test_deprecation_note_is_trimmed():
    metadata = validate_journal_metadata(
        {**VALID, "deprecated": True, "deprecation_note": "  see *v2*  "}
    ).unwrap()
    assert metadata.deprecated is True
    assert metadata.deprecation_note == "see *v2*"


def test_model_can_be_built_directly():
    metadata = JournalEntryMetadata(title="T", description="D", date="2024-01-01")
    assert metadata.date == date(2024, 1, 1)


def test_unwrap_raises_with_all_errors():
    result = validate_journal_metadata({})
    path = Path("journal/x/index.md")
    with pytest.raises(MetadataValidationError) as excinfo:
        result.unwrap(path)
    error = excinfo.value
    assert error.source_path == path
    assert {e.field for e in error.errors} == {"title", "description", "date"}
    assert "journal/x/index.md" in str(error)


# --- Page metadata ---


def test_page_metadata():
    assert validate_page_metadata({"title": " About ", "extra": 1}).unwrap().title == "About"
    result = validate_page_metadata({})
    assert [e.field for e in result.errors] == ["title"]
