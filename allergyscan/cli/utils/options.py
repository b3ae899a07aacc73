"""Shared CLI options and enums for commands."""

from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer


class OutputFormat(StrEnum):
    """Supported output formats across commands."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"
    TUI = "tui"


OUTPUT_PATH_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output file path for json/csv formats (prints to stdout when omitted)",
    ),
]

OUTPUT_FORMAT_OPTION = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format (table, json, csv, tui)",
        case_sensitive=False,
    ),
]

TERM_OPTION = Annotated[
    list[str] | None,
    typer.Option(
        "--term",
        "-t",
        help="Term to look for; repeat to give several. Overrides the saved term set.",
    ),
]

BACKEND_OPTION = Annotated[
    str | None,
    typer.Option(
        "--backend",
        "-b",
        help="OCR backend (auto-detected from ALLERGYSCAN_OCR_BACKEND env var)",
    ),
]

DATA_DIR_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--data-dir",
        help="Directory holding the term store (auto-detected from ALLERGYSCAN_DATA_DIR env var)",
    ),
]

VERBOSE_OPTION = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
]
