"""Command-line interface for Inkwell.

This module defines the CLI commands using Click framework.

Commands:
- list: List published (or archived) journal entries.
- show: Print the compiled HTML of a journal entry.
- page: Print the compiled HTML of a static page.
- check: Validate the frontmatter of all content.
- new: Scaffold a new journal entry.
- serve: Run the development server.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from pathlib import Path

import click
import yaml

from . import __version__
from .config import create_repository
from .content import ENTRY_FILENAME
from .errors import ContentError
from .queries import ContentQueries
from .utils import is_single_segment


def _queries() -> ContentQueries:
    return ContentQueries(create_repository(Path.cwd()))


def _run(coro):
    """Run a query coroutine, turning content errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except ContentError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(version=__version__, prog_name="inkwell")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Inkwell content pipeline."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("list")
@click.option("--archived", is_flag=True, help="List archived entries instead")
def list_entries(archived: bool):
    """List journal entries in display order."""
    queries = _queries()
    if archived:
        entries = _run(queries.get_archived_journal_entries())
    else:
        entries = _run(queries.get_published_journal_entries())
    for entry in entries:
        marker = " [pinned]" if entry.metadata.pinned else ""
        click.echo(f"{entry.metadata.date.isoformat()}  {entry.slug}  {entry.metadata.title}{marker}")


@cli.command()
@click.argument("slug")
def show(slug: str):
    """Print the compiled HTML of a journal entry."""
    entry = _run(_queries().get_journal_entry_by_slug(slug))
    if entry is None:
        raise click.ClickException(f"Journal entry not found: {slug}")
    click.echo(entry.content_html)


@cli.command()
@click.argument("slug")
def page(slug: str):
    """Print the compiled HTML of a static page."""
    found = _run(_queries().get_page(slug))
    if found is None:
        raise click.ClickException(f"Page not found: {slug}")
    click.echo(found.content_html)


@cli.command()
def check():
    """Validate the frontmatter of every journal entry and page."""
    project_root = Path.cwd()
    repository = create_repository(project_root)
    issues = repository.check()
    for issue in issues:
        click.echo(click.style(f"{_display_path(issue.path, project_root)}:", fg="red", bold=True), err=True)
        if issue.errors:
            for error in issue.errors:
                click.echo(f"  {error.field}: {error.message}", err=True)
        else:
            click.echo(f"  {issue.message}", err=True)
    if issues:
        raise SystemExit(1)
    entries = len(repository.journal_dirs())
    pages = len(repository.page_slugs())
    click.echo(f"Checked {entries} journal entries and {pages} pages: all valid")


@cli.command()
@click.argument("slug")
@click.option("--title", required=True, help="Entry title")
@click.option("--description", default=None, help="Entry description (defaults to the title)")
def new(slug: str, title: str, description: str | None):
    """Scaffold a new journal entry."""
    if not is_single_segment(slug):
        raise click.ClickException(f"Invalid slug: {slug}")
    project_root = Path.cwd()
    repository = create_repository(project_root)
    target = repository.journal_root / slug / ENTRY_FILENAME
    if target.exists():
        raise click.ClickException(
            f"Journal entry already exists: {_display_path(target, project_root)}"
        )
    frontmatter = yaml.safe_dump(
        {
            "title": title,
            "description": description or title,
            "date": date.today().isoformat(),
        },
        sort_keys=False,
        allow_unicode=True,
    )
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"---\n{frontmatter}---\n\n# {title}\n\n", encoding="utf-8")
    click.echo(f"Created {_display_path(target, project_root)}")


@cli.command()
@click.option(
    "--port",
    type=int,
    required=False,
    help="Port to run the dev server (overrides inkwell.yaml)",
)
def serve(port: int | None):
    """Run the development server."""
    project_root = Path.cwd()
    from .server import DevServer

    server = DevServer(project_root, http_port=port)
    server.start()


def _display_path(path: Path, project_root: Path) -> str:
    try:
        return str(path.relative_to(project_root))
    except ValueError:
        return str(path)


def main():
    """Entry point for the CLI application."""
    cli()
