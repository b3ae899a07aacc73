"""Scan commands: recognize an image or read a text file, then report matches."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from allergyscan.cli.commands.viewer_tui import launch_scan_viewer
from allergyscan.cli.utils.data import open_term_store, resolve_terms
from allergyscan.cli.utils.options import (
    BACKEND_OPTION,
    DATA_DIR_OPTION,
    OUTPUT_FORMAT_OPTION,
    OUTPUT_PATH_OPTION,
    TERM_OPTION,
    OutputFormat,
)
from allergyscan.cli.utils.output import handle_csv_output, handle_json_output
from allergyscan.config import load_config
from allergyscan.core.analysis import ScanResult
from allergyscan.core.constants import FormattingConstants, HighlightStyles
from allergyscan.core.highlighting import runs_to_text
from allergyscan.exceptions import ConfigurationError, RecognitionError
from allergyscan.models.recognition import ImageHandle
from allergyscan.ocr import get_backend
from allergyscan.services.scan_session import ScanSession
from allergyscan.store import TermStore

console = Console()
logger = logging.getLogger(__name__)

SPAN_FIELDNAMES = ["term", "text", "start", "end", "line"]


def handle_table_output(result: ScanResult, source: str, style: str = HighlightStyles.MATCH) -> None:
    """Print the highlighted document followed by a per-term summary."""
    table = Table(title=f"Ingredients: {source}", show_header=False, expand=True, box=None)
    table.add_column("#", style=HighlightStyles.LINE_NUMBER, justify="right", width=FormattingConstants.LINE_NUMBER_WIDTH)
    table.add_column("Line", overflow="fold")

    matched_lines = set(result.match_lines)
    for line_no, runs in enumerate(result.render()):
        marker = f"{line_no + 1}*" if line_no in matched_lines else f"{line_no + 1} "
        table.add_row(marker, runs_to_text(runs, style=style))
    console.print(table)

    if not result.terms:
        console.print("\n[yellow]No terms configured, nothing to look for.[/yellow]")
        return

    if not result.has_matches:
        console.print(f"\n[green]✓ None of the {len(result.terms)} terms were found.[/green]")
        return

    summary = Table(title="Matches", show_lines=False)
    summary.add_column("Term", style="magenta")
    summary.add_column("Count", justify="right")
    summary.add_column("Lines", style="dim")
    lines_by_term: dict[str, set[int]] = {}
    for span, line in zip(result.spans, result.match_lines, strict=True):
        lines_by_term.setdefault(span.term, set()).add(line + 1)
    for term, count in result.matched_terms.items():
        summary.add_row(term, str(count), ", ".join(str(n) for n in sorted(lines_by_term[term])))
    console.print(summary)
    console.print(f"\n[bold red]⚠ {result.match_count} matches[/bold red] for {len(result.matched_terms)} terms")


def span_rows(result: ScanResult) -> list[dict[str, Any]]:
    """Flatten spans into rows with their line index."""
    return [
        {"term": span.term, "text": span.text, "start": span.start, "end": span.end, "line": line}
        for span, line in zip(result.spans, result.match_lines, strict=True)
    ]


def transform_result_for_json(result: ScanResult) -> dict[str, Any]:
    """Transform a scan result for JSON output."""
    return {
        "terms": list(result.terms),
        "match_count": result.match_count,
        "matched_terms": result.matched_terms,
        "missing_terms": result.missing_terms,
        "line_count": result.line_index.line_count,
        "matches": span_rows(result),
        "document": result.document,
    }


def report(
    result: ScanResult,
    source: str,
    output_format: OutputFormat,
    output: Path | None,
    store: TermStore | None = None,
) -> None:
    """Display a scan result in the requested format.

    The TUI saves term edits to ``store`` when one is given.
    """
    logger.debug(f"Reporting {result.match_count} matches from {source} as {output_format}")
    if output_format == OutputFormat.TUI:
        launch_scan_viewer(result.document, result.terms, source, store=store)
    elif output_format == OutputFormat.JSON:
        handle_json_output(result, output, transformer=transform_result_for_json)
    elif output_format == OutputFormat.CSV:
        handle_csv_output(span_rows(result), output, SPAN_FIELDNAMES)
    else:
        handle_table_output(result, source, style=load_config().highlight_style)


def scan_image(
    image: Annotated[Path, typer.Argument(help="Photo of an ingredients list", exists=True, dir_okay=False)],
    terms: TERM_OPTION = None,
    backend: BACKEND_OPTION = None,
    output_format: OUTPUT_FORMAT_OPTION = OutputFormat.TABLE,
    output: OUTPUT_PATH_OPTION = None,
    data_dir: DATA_DIR_OPTION = None,
) -> None:
    """Recognize the text in an image and highlight the allergen terms it contains."""
    try:
        ocr_backend = get_backend(backend)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    with open_term_store(data_dir) as store:
        session = ScanSession(backend=ocr_backend, terms=resolve_terms(store, terms))
        with console.status(f"[bold blue]Recognizing text with {ocr_backend.name}...[/bold blue]", spinner="dots"):
            try:
                outcome = session.recognize(ImageHandle(path=image))
            except RecognitionError as e:
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(1) from e

        if not outcome.succeeded or session.result is None:
            console.print(f"[red]Error: {outcome.error}[/red]")
            raise typer.Exit(1)

        console.print(f"[dim]Recognized in {outcome.elapsed_seconds:.1f}s[/dim]")
        report(session.result, image.name, output_format, output, store=None if terms else store)


def check_text(
    text_file: Annotated[Path, typer.Argument(help="Text file with an ingredients list", exists=True, dir_okay=False)],
    terms: TERM_OPTION = None,
    output_format: OUTPUT_FORMAT_OPTION = OutputFormat.TABLE,
    output: OUTPUT_PATH_OPTION = None,
    data_dir: DATA_DIR_OPTION = None,
) -> None:
    """Highlight the allergen terms in an already transcribed ingredients list."""
    document = text_file.read_text(encoding="utf-8")
    with open_term_store(data_dir) as store:
        session = ScanSession(terms=resolve_terms(store, terms))
        result = session.load_document(document)
        report(result, text_file.name, output_format, output, store=None if terms else store)
