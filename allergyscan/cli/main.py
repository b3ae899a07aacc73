"""Main CLI entry point for allergyscan."""

import logging

import typer
from rich.logging import RichHandler

from allergyscan.cli.commands.scan import check_text, scan_image
from allergyscan.cli.commands.terms import terms_app
from allergyscan.cli.utils.options import VERBOSE_OPTION

app = typer.Typer(
    name="allergyscan",
    help="allergyscan - Highlight allergen terms in photos of ingredient lists",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def callback(verbose: VERBOSE_OPTION = False) -> None:
    """
    allergyscan CLI
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=verbose, show_path=verbose)],
        force=True,
    )


app.add_typer(terms_app, name="terms")
app.command("scan", help="Recognize an image and highlight the allergen terms it contains")(scan_image)
app.command("check", help="Highlight allergen terms in a text file (no OCR)")(check_text)


if __name__ == "__main__":
    app()
