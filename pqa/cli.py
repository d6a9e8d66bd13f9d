"""CLI entry-point: ask questions about product datasheets and inspect the attribute index."""

import asyncio
from datetime import timedelta

import typer
from rich.console import Console
from rich.table import Table

from pqa.cache.tiers import get_cache_tier
from pqa.config import get_settings
from pqa.extract.query_extractor import QueryExtractor
from pqa.ingest.datasheet_loader import JsonDirectorySource
from pqa.llm import provider_from_settings
from pqa.pipeline import QueryPipeline
from pqa.store.attribute_store import AttributeStore

app = typer.Typer(help="Product datasheet question answering")


def _store(data_dir: str | None) -> AttributeStore:
    settings = get_settings()
    return AttributeStore(JsonDirectorySource(data_dir or settings.data_dir))


@app.command()
def ask(
    query: str = typer.Argument(..., help='Question, e.g. "What is the width of 6205?"'),
    data_dir: str = typer.Option(None, help="Datasheet directory (default from PQA_DATA_DIR or ./data)"),
    no_llm: bool = typer.Option(False, "--no-llm", help="Skip the LLM and repair from the query text only"),
    as_json: bool = typer.Option(False, "--json", help="Print the full answer as JSON"),
):
    """Answer a free-text question about one product attribute."""
    console = Console()
    settings = get_settings()
    if not query.strip() or len(query) > settings.max_query_length:
        console.print("[red]Error: invalid input[/red]")
        raise typer.Exit(1)

    llm = None
    if not no_llm and settings.llm_api_key:
        llm = provider_from_settings(settings)
    pipeline = QueryPipeline(
        _store(data_dir),
        QueryExtractor(llm),
        get_cache_tier(),
        cache_ttl=timedelta(seconds=settings.cache_ttl_seconds),
        extraction_timeout=settings.extraction_timeout_s,
        cache_timeout=settings.cache_timeout_s,
    )
    answer = asyncio.run(pipeline.answer(query))

    if as_json:
        console.print_json(answer.model_dump_json())
    elif answer.found:
        console.print(answer.message)
    else:
        console.print(f"[yellow]{answer.message}[/yellow]")
    if not answer.found:
        raise typer.Exit(1)


@app.command()
def lookup(
    product: str = typer.Argument(..., help="Product designation, e.g. 6205"),
    attribute: str = typer.Argument(..., help="Attribute key or synonym, e.g. width, OD, c0"),
    data_dir: str = typer.Option(None, help="Datasheet directory"),
):
    """Resolve one attribute directly against the index (no LLM, no cache)."""
    console = Console()
    result = _store(data_dir).resolve(product, attribute)
    if not result.found:
        console.print(f"[red]{result.reason}[/red]")
        raise typer.Exit(1)
    console.print(f"{result.value}  [dim]({result.tier.value} match)[/dim]")


@app.command()
def products(
    data_dir: str = typer.Option(None, help="Datasheet directory"),
):
    """List indexed products with their attribute counts."""
    console = Console()
    store = _store(data_dir)
    table = Table(title="Products")
    table.add_column("Product")
    table.add_column("Attributes", justify="right")
    for product_id in store.products():
        table.add_row(product_id, str(len(store.attributes(product_id) or {})))
    console.print(table)


@app.command()
def show(
    product: str = typer.Argument(..., help="Product designation"),
    data_dir: str = typer.Option(None, help="Datasheet directory"),
):
    """Print every indexed attribute of one product."""
    console = Console()
    attributes = _store(data_dir).attributes(product)
    if attributes is None:
        console.print(f"[red]Unknown product: {product}[/red]")
        raise typer.Exit(1)
    table = Table(title=product)
    table.add_column("Attribute")
    table.add_column("Value")
    for key, value in attributes.items():
        table.add_row(key, value)
    console.print(table)


if __name__ == "__main__":
    app()
