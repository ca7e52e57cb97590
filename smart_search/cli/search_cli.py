"""
Smart Search CLI - command-line front end for the search engine.

Commands:
- search: Search content and show ranked results
- suggest: Show query suggestions
- understand: Show the query understanding for a query
"""

# Load environment variables before the config module reads them
from pathlib import Path
from dotenv import load_dotenv

env_path = Path.cwd() / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Standard library imports
import asyncio

# Third-party imports
import click
from rich.console import Console
from rich.table import Table

from ..ai.provider import AIProviderFactory
from ..config.search_config import configure_logging, CONTENT_PATH, SMART_SEARCH_CONFIG
from ..exceptions import SearchValidationError
from ..search.content_source import DemoContentSource, InMemoryContentSource, load_content_file
from ..search.models import SearchRequest, SearchType
from ..search.search_engine import SmartSearchEngine

console = Console()


def build_engine(content_file=None) -> SmartSearchEngine:
    """Create an engine over a content file, or demo content when none exists."""
    if not content_file and Path(CONTENT_PATH).exists():
        content_file = CONTENT_PATH

    if content_file:
        source = InMemoryContentSource(load_content_file(content_file))
    else:
        source = DemoContentSource()

    return SmartSearchEngine(
        content_source=source,
        provider_factory=AIProviderFactory.from_config()
    )


@click.group()
@click.option('--log/--no-log', default=False, help='Write log files and console logs')
def cli(log):
    """Smart Search CLI - ranked content search with query understanding."""
    if log:
        configure_logging()


# ============================================================================
# Search Commands
# ============================================================================

@cli.command()
@click.argument('query')
@click.option('--type', 'search_type', type=click.Choice([t.value for t in SearchType]),
              default=SearchType.ALL.value, help='Content type to search')
@click.option('--category', '-c', help='Exact category filter')
@click.option('--tag', '-t', 'tags', multiple=True, help='Tag filter (repeatable)')
@click.option('--start-date', type=click.DateTime(formats=['%Y-%m-%d']), help='Earliest creation date')
@click.option('--end-date', type=click.DateTime(formats=['%Y-%m-%d']), help='Latest creation date')
@click.option('--min-score', default=0.0, type=click.FloatRange(0.0, 1.0), help='Relevance cutoff')
@click.option('--page', '-p', default=1, type=click.IntRange(min=1), help='Page number')
@click.option('--page-size', '-n', default=10, type=click.IntRange(min=1), help='Results per page')
@click.option('--no-suggestions', is_flag=True, help='Skip query suggestions')
@click.option('--content-file', '-f', type=click.Path(exists=True, dir_okay=False),
              help='JSON file with content items (default: CONTENT_PATH, else demo content)')
def search(query, search_type, category, tags, start_date, end_date, min_score,
           page, page_size, no_suggestions, content_file):
    """Search content and display ranked results."""
    engine = build_engine(content_file)

    request = SearchRequest(
        query=query,
        search_type=SearchType(search_type),
        category=category,
        tags=list(tags) or None,
        start_date=start_date,
        end_date=end_date,
        min_relevance_score=min_score,
        page=page,
        page_size=page_size,
        include_suggestions=not no_suggestions
    )

    try:
        response = asyncio.run(engine.search(request))
    except SearchValidationError as e:
        console.print(f"[red]Error ({e.error_code}): {e.message}[/red]")
        raise SystemExit(1)

    console.print(f"\n[bold cyan]Results for:[/bold cyan] {response.query}\n")

    if not response.results:
        console.print("[yellow]No results found[/yellow]")
    else:
        table = Table()
        table.add_column("Score", justify="right", style="green")
        table.add_column("Type", style="cyan")
        table.add_column("Title")
        table.add_column("Category", style="yellow")
        table.add_column("Tags", style="magenta")
        table.add_column("Created", style="blue")

        for result in response.results:
            table.add_row(
                f"{result.relevance_score:.3f}",
                result.content_type,
                result.title,
                result.category or "",
                ", ".join(result.tags),
                result.created_at.strftime('%Y-%m-%d')
            )

        console.print(table)

    console.print(
        f"\nPage {response.page}/{max(response.total_pages, 1)} - "
        f"{response.total_count} results - {response.processing_time_ms}ms"
    )

    if response.query_understanding:
        understanding = response.query_understanding
        console.print(
            f"Intent: [cyan]{understanding.intent}[/cyan]  "
            f"Language: [cyan]{understanding.language}[/cyan]  "
            f"Expanded: {understanding.expanded_query}"
        )

    if response.suggestions:
        console.print("\n[bold]Suggestions:[/bold] " + " | ".join(response.suggestions))

    console.print()


@cli.command()
@click.argument('query')
@click.option('--limit', '-l', default=SMART_SEARCH_CONFIG['default_suggestion_count'],
              type=click.IntRange(min=1), help='Maximum suggestions')
def suggest(query, limit):
    """Show query suggestions."""
    engine = build_engine()
    suggestions = asyncio.run(engine.get_suggestions(query, limit))

    if not suggestions:
        console.print("[yellow]No suggestions[/yellow]")
        return

    for suggestion in suggestions:
        console.print(f"  {suggestion}")


@cli.command()
@click.argument('query')
def understand(query):
    """Show how a query is understood."""
    engine = build_engine()
    understanding = asyncio.run(engine.understand_query(query))

    table = Table(title="Query Understanding")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Original", understanding.original_query)
    table.add_row("Expanded", understanding.expanded_query)
    table.add_row("Intent", understanding.intent)
    table.add_row("Entities", ", ".join(understanding.entities) or "-")
    table.add_row("Language", understanding.language)
    table.add_row("Correction", understanding.suggested_correction or "-")

    console.print(table)


if __name__ == '__main__':
    cli()
