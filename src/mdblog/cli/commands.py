"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional
from urllib.parse import unquote

import typer

from mdblog.config import Settings, load_config
from mdblog.core.catalog import DocumentCatalog
from mdblog.core.errors import CatalogError, NotFoundError
from mdblog.core.export import run_export
from mdblog.core.views import format_date, tag_url


ContentDir = Annotated[Optional[str], typer.Option("--content-dir", help="Content root directory")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _catalog(settings: Settings) -> DocumentCatalog:
    """Build the catalog, mapping load failures to a CLI error."""
    try:
        return DocumentCatalog.from_dir(
            Path(settings.content_dir), settings.file_pattern,
            keep_suffix=settings.keep_slug_suffix, parser_config=settings.parser_config,
        )
    except CatalogError as e:
        _fail("Catalog build failed", e)


def check_cmd(content_dir: ContentDir = None):
    """Load and validate every document; fail on the first defect."""
    settings = _settings(overrides={"content_dir": content_dir})
    catalog = _catalog(settings)
    published = len(catalog.list_published())
    typer.echo(
        f"Catalog OK - "
        f"{len(catalog)} document(s), "
        f"{published} published, "
        f"{len(catalog) - published} unpublished, "
        f"{len(catalog.tag_counts())} tag(s)"
    )


def list_cmd(
    content_dir: ContentDir = None,
    limit: Annotated[Optional[int], typer.Option("--limit", min=0, help="Show at most N posts; 0 = all")] = None,
    ):
    """List published posts, newest first."""
    settings = _settings(overrides={"content_dir": content_dir})
    docs = _catalog(settings).list_published()
    if not docs:
        typer.echo("No published documents.")
        return
    for doc in docs[:limit or None]:
        typer.echo(f"{format_date(doc.date)}  {doc.slug}  {doc.title}")


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Document slug (URL-encoded slugs are decoded)")],
    content_dir: ContentDir = None,
    ):
    """Print one document's metadata, table of contents, and body."""
    settings = _settings(overrides={"content_dir": content_dir})
    catalog = _catalog(settings)
    try:
        doc = catalog.find_by_slug(unquote(slug))
    except NotFoundError as e:
        _fail(str(e))

    typer.echo(f"title:     {doc.title}")
    typer.echo(f"date:      {format_date(doc.date)}")
    typer.echo(f"url:       {doc.url}")
    typer.echo(f"tags:      {', '.join(doc.tags)}")
    typer.echo(f"summary:   {doc.summary}")
    typer.echo(f"published: {str(doc.published).lower()}")
    if doc.body.toc:
        typer.echo("toc:")
        for h in doc.body.toc:
            typer.echo(f"{'  ' * (h.level - 1)}- {h.text} (#{h.anchor})")
    typer.echo("")
    typer.echo(doc.body.raw)


def tags_cmd(content_dir: ContentDir = None):
    """List tags used by published posts with their counts."""
    settings = _settings(overrides={"content_dir": content_dir})
    counts = _catalog(settings).tag_counts()
    if not counts:
        typer.echo("No tags found.")
        return
    for tag, count in counts.items():
        typer.echo(f"{count:>4}  {tag}  {tag_url(tag)}")


def build_cmd(
    content_dir: ContentDir = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    max_display: Annotated[Optional[int], typer.Option("--max-display", help="Posts in index.json; 0 = unlimited")] = None,
    ):
    """Load the catalog and export index, posts, and tag pages."""
    settings = _settings(overrides={"content_dir": content_dir, "output_dir": out, "max_display": max_display})
    catalog = _catalog(settings)
    output_dir = Path(settings.output_dir)
    site = {
        "title": settings.site_title,
        "description": settings.site_description,
        "url": settings.site_url,
    }

    try:
        results = run_export(catalog, output_dir, settings.max_display, site)
    except (CatalogError, OSError) as e:
        _fail("Export failed", e)

    for slug, mdx_path in results:
        typer.echo(f"  {slug} -> {mdx_path}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")
