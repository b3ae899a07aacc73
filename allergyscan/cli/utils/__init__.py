"""CLI utilities module."""

from allergyscan.cli.utils.data import open_term_store, resolve_terms
from allergyscan.cli.utils.options import (
    BACKEND_OPTION,
    DATA_DIR_OPTION,
    OUTPUT_FORMAT_OPTION,
    OUTPUT_PATH_OPTION,
    TERM_OPTION,
    VERBOSE_OPTION,
    OutputFormat,
)
from allergyscan.cli.utils.output import handle_csv_output, handle_json_output

__all__ = [
    "BACKEND_OPTION",
    "DATA_DIR_OPTION",
    "OUTPUT_FORMAT_OPTION",
    "OUTPUT_PATH_OPTION",
    "TERM_OPTION",
    "VERBOSE_OPTION",
    "OutputFormat",
    "handle_csv_output",
    "handle_json_output",
    "open_term_store",
    "resolve_terms",
]
