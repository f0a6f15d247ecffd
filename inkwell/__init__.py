"""Inkwell content pipeline.

This package turns a directory of markdown files with YAML frontmatter into
validated, compiled journal entries and static pages for a personal website.

The content layer is split into small modules:
- renderers: the markdown transform pipeline (parse, rewrite, slug, highlight).
- validation / models: frontmatter schemas and typed records.
- content: filesystem scanning, per-item compilation and the journal cache.
- queries: the read-only accessors consumed by route handlers.

The CLI module provides commands for listing, checking and serving content.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
