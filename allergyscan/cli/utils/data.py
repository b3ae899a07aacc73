"""Shared data access utilities for CLI commands."""

from pathlib import Path

import typer
from rich.console import Console

from allergyscan.config import load_config
from allergyscan.exceptions import TermStoreError
from allergyscan.store import TermStore

console = Console()


def open_term_store(data_dir: Path | None = None) -> TermStore:
    """Open the term store, exiting with an error message if it is unusable.

    Args:
        data_dir: Optional override of the configured data directory
    """
    config = load_config()
    try:
        return TermStore(data_dir or config.data_dir)
    except TermStoreError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


def resolve_terms(store: TermStore, overrides: list[str] | None) -> frozenset[str]:
    """Get the terms to scan for: ``--term`` values if given, else the saved set."""
    if overrides:
        return frozenset(overrides)
    return store.load()
