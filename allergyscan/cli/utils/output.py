"""Shared output handlers for CLI commands."""

import csv
import io
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from rich.console import Console

from allergyscan.core.constants import FormattingConstants

console = Console()


def _write_or_print(content: str, output_path: Path | None) -> None:
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        console.print(f"[bold green]✓ Saved to:[/bold green] {output_path}")
    else:
        print(content)


def handle_json_output(
    data: Any,
    output_path: Path | None,
    transformer: Callable[[Any], dict[str, Any]] | None = None,
) -> None:
    """Handle JSON format output.

    Args:
        data: Data to output (can be any type)
        output_path: Optional file path to save output
        transformer: Optional function to transform data before serialization
    """
    output_data = transformer(data) if transformer else data
    json_content = json.dumps(output_data, indent=FormattingConstants.JSON_INDENT, default=str)
    _write_or_print(json_content, output_path)


def handle_csv_output(
    rows: list[dict[str, Any]],
    output_path: Path | None,
    fieldnames: list[str],
) -> None:
    """Handle CSV format output.

    Args:
        rows: One dict per CSV row
        output_path: Optional file path to save output
        fieldnames: Column names, in order
    """
    string_buffer = io.StringIO()
    writer = csv.DictWriter(string_buffer, fieldnames=fieldnames)
    writer.writeheader()
    for row in rows:
        writer.writerow({key: "" if value is None else str(value) for key, value in row.items()})

    _write_or_print(string_buffer.getvalue(), output_path)
