"""Frontmatter extraction for Inkwell.

Content files start with an optional YAML block delimited by ``---`` lines.
This module splits that block from the markdown body and parses it into a
plain mapping; schema checks happen later in the validation module.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from .errors import ContentError, FrontmatterError

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def extract_frontmatter(
    text: str, source_path: Path | None = None
) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.
        source_path: Path of the file, used for error reporting.

    Returns:
        Tuple of (frontmatter dict, remaining content). Content without a
        frontmatter block yields an empty dict and the text unchanged.

    Raises:
        FrontmatterError: If the block is not valid YAML or not a mapping.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"invalid YAML frontmatter: {exc}", source_path) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError("frontmatter must be a mapping", source_path)
    return data, text[match.end() :]


def read_content_file(path: Path) -> tuple[dict[str, Any], str]:
    """Read a content file and split it into frontmatter and body.

    Args:
        path: Path to the markdown file.

    Returns:
        Tuple of (frontmatter dict, markdown body).

    Raises:
        ContentError: If the file is not valid UTF-8.
        FrontmatterError: If the frontmatter block cannot be parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ContentError(f"not valid UTF-8: {exc}", path) from exc
    return extract_frontmatter(text, path)
