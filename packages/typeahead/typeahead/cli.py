import asyncio
import json
import logging
import sys
from typing import Any

import click

from .clients import HttpLookupClient, StaticLookup
from .config import get_typeahead_config
from .data_models.config import TypeaheadConfig
from .data_models.enums import DisplayState
from .data_models.search import SessionView
from .orchestrator import LookupFn
from .session import SearchSession
from .version import __version__


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, item)


async def _run_search(
    lookup: LookupFn,
    config: TypeaheadConfig,
    term: str,
    *,
    page: int,
    key_field: str,
    text_field: str,
    select_index: int | None,
) -> tuple[SearchSession, SessionView, list[tuple[Any, Any]]]:
    """Types ``term`` one keystroke at a time and waits for the results."""
    selected: list[tuple[Any, Any]] = []
    session = SearchSession(
        lookup,
        key_of=lambda item: _field(item, key_field),
        config=config,
        on_select_value=lambda key, item: selected.append((key, item)),
        display_string=lambda item: str(_field(item, text_field)),
    )
    session.on_focus()
    for end in range(1, len(term) + 1):
        session.on_input_change(term[:end])
    view = await session.settle()

    if page != 1 and session.go_to_page(page):
        view = await session.settle()

    if select_index is not None:
        session.on_pointer_select(select_index - 1)
    return session, view, selected


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log dispatches and discards.")
def cli(*, verbose: bool) -> None:
    """Typeahead CLI - drive a search-and-select session from the terminal."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


@cli.command()
@click.argument("term")
@click.option(
    "--source",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file holding the list of items to search.",
)
@click.option("--url", help="JSON search endpoint to query instead of --source.")
@click.option("--key", "key_field", default="id", help="Item field used as its key.")
@click.option("--text-field", default="name", help="Item field that is searched.")
@click.option("--page", default=1, type=int, help="Page of results to show.")
@click.option("--per-page", type=int, default=None, help="Results per page.")
@click.option("--debounce-ms", type=int, default=None, help="Debounce window.")
@click.option(
    "--select", "select_index", type=int, default=None, help="Select the N-th item."
)
def search(
    term: str,
    source: str | None,
    url: str | None,
    key_field: str,
    text_field: str,
    page: int,
    per_page: int | None,
    debounce_ms: int | None,
    select_index: int | None,
) -> None:
    """Search for TERM and print the resulting display state."""
    if bool(source) == bool(url):
        raise click.UsageError("Specify exactly one of --source or --url.")

    try:
        config = get_typeahead_config(
            debounce_ms=debounce_ms, results_per_page=per_page
        )
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    if source:
        with open(source, encoding="utf-8") as f:
            items = json.load(f)
        lookup = StaticLookup(
            items,
            text_of=lambda item: str(_field(item, text_field)),
            results_per_page=config.results_per_page,
        )
    else:
        lookup = HttpLookupClient(url)

    session, view, selected = asyncio.run(
        _run_search(
            lookup,
            config,
            term,
            page=page,
            key_field=key_field,
            text_field=text_field,
            select_index=select_index,
        )
    )

    failure = session.orchestrator.last_failure
    if failure is not None:
        click.echo(str(failure), err=True)
        sys.exit(1)

    click.echo(f"State: {view.state.value}")
    if view.state == DisplayState.LOADED:
        click.echo(
            f"Page {view.page_number} of {view.total_pages} "
            f"({view.total_results} results)"
        )
        for position, item in enumerate(view.items, start=1):
            click.echo(
                f"  {position}. {_field(item, text_field)} "
                f"[{key_field}={_field(item, key_field)}]"
            )

    if select_index is not None:
        if not selected:
            click.echo(f"No item at position {select_index}.", err=True)
            sys.exit(1)
        key, item = selected[0]
        click.echo(f"Selected: {key} -> {json.dumps(item, default=str)}")
        click.echo(f"Input text: {session.input_text}")


def main() -> None:
    """Main entry point for the CLI."""
    cli()
