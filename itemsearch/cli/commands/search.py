"""Search and field inspection CLI commands."""

from collections.abc import Callable, Collection, Mapping
from pathlib import Path
from typing import Any

import click
import msgspec
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from itemsearch.cli.loaders import load_items
from itemsearch.fields import default_fields, is_number, resolve_fields, stringify
from itemsearch.models import MatchRecord, SearchField, SearchMode, SearchOptions


def get_engine(ctx):
    """Get the search engine from context."""
    return ctx.obj.engine


def build_fields_provider(
    names: tuple[str, ...],
    exact: tuple[str, ...],
    excluded_keys: Collection[str],
) -> Callable[[Any], list[SearchField]] | None:
    """Build a provider selecting mapping keys, some of them matched entirely.

    Returns None when neither option is given, so fields are derived
    automatically.
    """
    if not names and not exact:
        return None

    def provider(item: Any) -> list[SearchField]:
        if not isinstance(item, Mapping):
            return default_fields(item, excluded_keys)
        keys = names or [
            k
            for k, v in item.items()
            if k not in excluded_keys and (isinstance(v, str) or is_number(v))
        ]
        return [
            SearchField(text=stringify(item[k]), entirely=k in exact)
            for k in keys
            if item.get(k) is not None
        ]

    return provider


def describe_item(item: Any) -> str:
    """Render an item for display."""
    if isinstance(item, str):
        return item
    return msgspec.json.encode(item).decode()


def describe_matches(record: MatchRecord) -> str:
    parts = []
    for match in record.matches:
        kind = "exact" if match.is_exact else "partial"
        parts.append(
            f"{match.keyword} -> [{match.field_index}] {match.field.text} ({kind})"
        )
    return "\n".join(parts)


@click.command()
@click.argument("query")
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in SearchMode]),
    default=None,
    help="Search mode (default from config, else greedy)",
)
@click.option(
    "--field", "-F", "field_names", multiple=True, help="Search only these keys"
)
@click.option(
    "--exact", "-e", "exact_names", multiple=True, help="Match these keys entirely"
)
@click.option("--limit", "-n", type=int, default=None, help="Maximum results to show")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "list", "json"]),
    default="table",
    help="Output format",
)
@click.option(
    "--explain",
    is_flag=True,
    help="Show which keyword matched which field (table output only)",
)
@click.pass_context
def search(
    ctx: click.Context,
    query: str,
    file: Path,
    mode: str | None,
    field_names: tuple[str, ...],
    exact_names: tuple[str, ...],
    limit: int | None,
    output_format: str,
    explain: bool,
) -> None:
    """Search the items in FILE for QUERY.

    Keywords are separated by spaces or hyphens. Modes:
    - greedy: every keyword matches, each on its own field
    - eagle: every keyword matches somewhere
    - fuzzy: any keyword matches
    """
    if explain and output_format != "table":
        raise click.UsageError(
            "--explain always renders a table and cannot be used with "
            f"--format {output_format}"
        )

    console = ctx.obj.console
    engine = get_engine(ctx)

    items = load_items(file)
    options = SearchOptions(
        text=query,
        mode=mode,
        fields=build_fields_provider(
            field_names, exact_names, ctx.obj.settings.excluded_keys
        ),
    )

    if explain:
        records = engine.match(items, options)
        if limit is not None:
            records = records[:limit]
        _display_records(console, records, query)
        return

    results = engine.search(items, options)
    if limit is not None:
        results = results[:limit]

    if output_format == "json":
        click.echo(msgspec.json.encode(results).decode())
    elif output_format == "list":
        for item in results:
            click.echo(describe_item(item))
    else:
        _display_results(console, results, query)


@click.command()
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def fields(ctx: click.Context, file: Path) -> None:
    """Show the search fields derived for each item in FILE."""
    console = ctx.obj.console
    excluded_keys = ctx.obj.settings.excluded_keys

    table = Table(title=f"Search fields ({escape(file.name)})", show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Item")
    table.add_column("Fields")

    for index, item in enumerate(load_items(file)):
        derived = resolve_fields(item, excluded_keys=excluded_keys)
        listing = "\n".join(f"[{i}] {f.text}" for i, f in enumerate(derived))
        table.add_row(
            str(index), escape(describe_item(item)), escape(listing) or "[dim]none[/dim]"
        )

    console.print(table)


def _display_results(console: Console, results: list[Any], query: str) -> None:
    if not results:
        console.print(f"[yellow]No results found for {escape(repr(query))}[/yellow]")
        return

    table = Table(title=f"Results for {escape(repr(query))}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Item")
    for rank, item in enumerate(results, 1):
        table.add_row(str(rank), escape(describe_item(item)))

    console.print(table)
    noun = "result" if len(results) == 1 else "results"
    console.print(f"{len(results)} {noun}")


def _display_records(console: Console, records: list[MatchRecord], query: str) -> None:
    if not records:
        console.print(f"[yellow]No results found for {escape(repr(query))}[/yellow]")
        return

    table = Table(title=f"Matches for {escape(repr(query))}", show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Item")
    table.add_column("Matches")
    for rank, record in enumerate(records, 1):
        table.add_row(
            str(rank),
            escape(describe_item(record.item)),
            escape(describe_matches(record)),
        )

    console.print(table)
    noun = "result" if len(records) == 1 else "results"
    console.print(f"{len(records)} {noun}")
