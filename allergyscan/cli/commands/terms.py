"""Term management commands."""

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from allergyscan.cli.utils.data import open_term_store
from allergyscan.cli.utils.options import DATA_DIR_OPTION
from allergyscan.core.patterns import sorted_terms
from allergyscan.exceptions import InvalidTermError, TermStoreError

console = Console()

terms_app = typer.Typer(help="Manage the saved allergen terms", no_args_is_help=True)

TERM_ARGUMENT = Annotated[str, typer.Argument(help="Term, e.g. 'barley flour'")]


def _print_terms(terms: frozenset[str]) -> None:
    table = Table(title="Allergen terms", show_header=False)
    table.add_column("Term", style="magenta")
    for term in sorted_terms(terms):
        table.add_row(term)
    console.print(table)
    console.print(f"\n[bold]Total terms:[/bold] {len(terms)}")


@terms_app.command("list", help="Show the saved terms")
def list_terms(data_dir: DATA_DIR_OPTION = None) -> None:
    with open_term_store(data_dir) as store:
        terms = store.load()
    if not terms:
        console.print("[yellow]No terms saved. Add one with 'allergyscan terms add <term>'.[/yellow]")
        return
    _print_terms(terms)


@terms_app.command("add", help="Add a term to the saved set")
def add_term(term: TERM_ARGUMENT, data_dir: DATA_DIR_OPTION = None) -> None:
    with open_term_store(data_dir) as store:
        try:
            store.add(term)
        except (InvalidTermError, TermStoreError) as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1) from e
    console.print(f"[green]✓ Added:[/green] {term.strip()}")


@terms_app.command("remove", help="Remove a term from the saved set (case-insensitive)")
def remove_term(term: TERM_ARGUMENT, data_dir: DATA_DIR_OPTION = None) -> None:
    with open_term_store(data_dir) as store:
        try:
            before = store.load()
            after = store.remove(term)
        except (InvalidTermError, TermStoreError) as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1) from e
    if len(after) == len(before):
        console.print(f"[yellow]Term not found:[/yellow] {term.strip()}")
        raise typer.Exit(1)
    console.print(f"[green]✓ Removed:[/green] {term.strip()}")


@terms_app.command("reset", help="Restore the default terms")
def reset_terms(
    data_dir: DATA_DIR_OPTION = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
) -> None:
    if not yes and not typer.confirm("Replace the saved terms with the defaults?", default=False):
        raise typer.Abort()
    with open_term_store(data_dir) as store:
        terms = store.reset()
    _print_terms(terms)
