"""Configuration loading for Inkwell.

Key functions:
- load_config: Loads site configuration from inkwell.yaml.
- create_repository: Builds a ContentRepository from a loaded configuration.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from .content import ContentRepository

CONFIG_FILENAME = "inkwell.yaml"
SITE_URL_ENV = "PUBLIC_SITE_URL"

DEFAULT_CONFIG = {
    "static_dir": "static",
    "journal_dir": "content/journal",
    "pages_dir": "content/pages",
    "media_url_prefix": "/content/journal",
    "highlight_theme": "solarized-light",
    "strict": False,
    "site_url": "",
    "port": 4000,
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from inkwell.yaml.

    The ``PUBLIC_SITE_URL`` environment variable, when set, overrides
    ``site_url``.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    site_url = os.environ.get(SITE_URL_ENV)
    if site_url:
        config["site_url"] = site_url
    return config


def static_root(project_root: Path, config: dict[str, Any]) -> Path:
    return project_root / config["static_dir"]


def create_repository(project_root: Path, config: dict[str, Any] | None = None) -> ContentRepository:
    """Build a content repository for a project.

    Args:
        project_root: Root directory of the project.
        config: Loaded configuration; read from disk when omitted.

    Returns:
        A ContentRepository rooted at the configured directories.
    """
    if config is None:
        config = load_config(project_root)
    static = static_root(project_root, config)
    return ContentRepository(
        journal_root=static / config["journal_dir"],
        pages_root=static / config["pages_dir"],
        media_url_prefix=config["media_url_prefix"],
        highlight_theme=config["highlight_theme"],
        strict=bool(config["strict"]),
    )
