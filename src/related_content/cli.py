"""CLI commands using Typer."""

import asyncio
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from related_content import __version__
from related_content.catalog.loader import CatalogLoader
from related_content.catalog.models import ContentItem, ContentType
from related_content.config import Settings, load_config
from related_content.exceptions import CatalogError, ConfigError, DatabaseError
from related_content.related.service import build_service
from related_content.scoring.scorer import RelevanceScorer
from related_content.storage.repository import SqlitePostRepository

app = typer.Typer(
    name="related-content",
    help="Related-article recommendations for blog and information content.",
    no_args_is_help=True,
)
console = Console()

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_NOT_FOUND = 4


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_config(config_path: Path | None = None) -> Settings:
    """Load configuration with error handling."""
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR) from None


def load_pool(settings: Settings) -> list[ContentItem]:
    """Load the static pool directly (bypassing the process cache)."""
    loader = CatalogLoader(settings.catalog.sources, settings.catalog.http_timeout)
    try:
        return loader.load()
    except CatalogError as e:
        console.print(f"[red]Catalog error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None


def find_item(pool: list[ContentItem], slug: str, content_type: ContentType) -> ContentItem:
    for item in pool:
        if item.slug == slug and item.type == content_type:
            return item
    console.print(f"[red]Not found:[/red] {content_type.value}/{slug}")
    raise typer.Exit(EXIT_NOT_FOUND)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"related-content version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    ),
) -> None:
    """Related content - scored related-article suggestions."""
    setup_logging(verbose)


@app.command()
def related(
    slug: Annotated[str, typer.Argument(help="Slug of the article being viewed")],
    content_type: Annotated[
        ContentType, typer.Option("--type", "-t", help="Content type of the article")
    ] = ContentType.BLOG,
    count: Annotated[int | None, typer.Option("--count", "-n", help="Number of results")] = None,
    db_only: Annotated[
        bool, typer.Option("--db-only", help="Only use database posts, skip the catalog")
    ] = False,
    category: Annotated[
        str | None, typer.Option("--category", help="Category hint for database results")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print results as JSON")] = False,
    config_path: Annotated[Path | None, typer.Option("--config", "-c", help="Config file")] = None,
) -> None:
    """Show related articles for a blog post or information article."""
    settings = get_config(config_path)
    service = build_service(settings)

    results = asyncio.run(
        service.get_related_articles(
            slug, content_type, count, db_only=db_only, category_hint=category
        )
    )

    if as_json:
        console.print_json(json.dumps([article.to_dict() for article in results]))
        return

    if not results:
        console.print("[yellow]No related articles found.[/yellow]")
        return

    table = Table(title=f"Related to {content_type.value}/{slug}")
    table.add_column("#", style="dim")
    table.add_column("Type")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Category")

    for i, article in enumerate(results, 1):
        table.add_row(
            str(i),
            article.type.value,
            article.slug,
            article.title_en,
            article.category_name_en or "",
        )

    console.print(table)


@app.command()
def score(
    source: Annotated[str, typer.Argument(help="Slug of the source article")],
    candidate: Annotated[str, typer.Argument(help="Slug of the candidate article")],
    source_type: Annotated[
        ContentType, typer.Option("--source-type", help="Content type of the source")
    ] = ContentType.BLOG,
    candidate_type: Annotated[
        ContentType, typer.Option("--candidate-type", help="Content type of the candidate")
    ] = ContentType.BLOG,
    config_path: Annotated[Path | None, typer.Option("--config", "-c", help="Config file")] = None,
) -> None:
    """Explain the relevance score between two catalog articles."""
    settings = get_config(config_path)
    pool = load_pool(settings)

    source_item = find_item(pool, source, source_type)
    candidate_item = find_item(pool, candidate, candidate_type)

    breakdown = RelevanceScorer().breakdown(source_item, candidate_item)

    table = Table(title=f"{source_type.value}/{source} -> {candidate_type.value}/{candidate}")
    table.add_column("Signal")
    table.add_column("Points", justify="right")
    for signal, points in breakdown.items():
        table.add_row(signal, str(points))
    table.add_row("[bold]total[/bold]", f"[bold]{sum(breakdown.values())}[/bold]")

    console.print(table)


@app.command()
def catalog(
    config_path: Annotated[Path | None, typer.Option("--config", "-c", help="Config file")] = None,
) -> None:
    """Show static catalog statistics."""
    settings = get_config(config_path)

    if not settings.catalog.sources:
        console.print("[yellow]No catalog sources configured.[/yellow]")
        return

    pool = load_pool(settings)
    totals = Counter(item.type for item in pool)
    published = Counter(item.type for item in pool if item.published)

    table = Table(title="Static catalog")
    table.add_column("Type")
    table.add_column("Items", justify="right")
    table.add_column("Published", justify="right")
    for content_type in ContentType:
        table.add_row(
            content_type.value,
            str(totals[content_type]),
            str(published[content_type]),
        )

    console.print(table)
    console.print(f"[dim]Sources: {', '.join(settings.catalog.sources)}[/dim]")


@app.command("init-db")
def init_db(
    config_path: Annotated[Path | None, typer.Option("--config", "-c", help="Config file")] = None,
) -> None:
    """Create the database schema at the configured path."""
    settings = get_config(config_path)

    if settings.database_file is None:
        console.print("[red]Error:[/red] database.path is not configured")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    settings.database_file.parent.mkdir(parents=True, exist_ok=True)
    repository = SqlitePostRepository(str(settings.database_file))
    try:
        asyncio.run(repository.init_tables())
    except DatabaseError as e:
        console.print(f"[red]Database error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None

    console.print(f"[green]Database ready:[/green] {settings.database_file}")


if __name__ == "__main__":
    app()
