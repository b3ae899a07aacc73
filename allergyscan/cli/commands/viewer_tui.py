"""TUI mode for reading a scanned document and jumping between matches."""

import logging
from collections.abc import Iterable
from typing import ClassVar

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Input, Static

from allergyscan.config import load_config
from allergyscan.core.constants import FormattingConstants, HighlightStyles
from allergyscan.core.highlighting import render_line, runs_to_text
from allergyscan.core.lines import spans_on_line
from allergyscan.core.patterns import sorted_terms
from allergyscan.exceptions import InvalidTermError, TermStoreError
from allergyscan.services.scan_session import ScanSession
from allergyscan.store import TermStore

# UI constants
STATUS_BAR_HEIGHT = 1  # Height of the status bar
LINE_NUMBER_START = 1  # Line numbers shown to the user start at 1
ADD_TERM_PLACEHOLDER = "Add term (e.g., “barley flour”), Enter to save"
REMOVE_TERM_PLACEHOLDER = "Remove term (case-insensitive), Enter to confirm"

logger = logging.getLogger(__name__)


class ScanViewerTUI(App[None]):
    """TUI app showing a highlighted document with match navigation."""

    CSS = f"""
    #document {{
        height: 1fr;
        border: solid $primary;
        padding: 0 1;
    }}

    #term-input {{
        margin: 0 0;
    }}

    .doc-line {{
        height: auto;
    }}

    .status-bar {{
        dock: bottom;
        height: {STATUS_BAR_HEIGHT};
        background: $surface;
        color: $text;
        padding: 0 1;
    }}
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("n", "next_match", "Next", show=True),
        Binding("N", "previous_match", "Prev", show=True),
        Binding("g", "first_match", "First", show=True),
        Binding("a", "add_term", "Add term", show=True),
        Binding("d", "remove_term", "Remove term", show=True),
        Binding("escape", "focus_document", "Back", show=False),
    ]

    def __init__(
        self,
        document: str,
        terms: Iterable[str],
        source: str,
        store: TermStore | None = None,
    ):
        super().__init__()
        self.session = ScanSession(terms=terms if store is None else (), store=store)
        self.session.load_document(document)
        self.source = source
        self.title = f"Ingredients: {source}"
        self.match_style = load_config().highlight_style
        self._highlighted_line: int | None = None
        self._removing_term = False

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        yield Header()
        yield Input(placeholder=ADD_TERM_PLACEHOLDER, id="term-input")
        yield VerticalScroll(id="document")
        yield Static("", classes="status-bar")
        yield Footer()

    async def on_mount(self) -> None:
        await self._render_document()
        self.query_one("#document", VerticalScroll).focus()

    def on_unmount(self) -> None:
        self.session.close()

    async def _render_document(self) -> None:
        """Rebuild every line widget from the current session result."""
        container = self.query_one("#document", VerticalScroll)
        await container.remove_children()
        result = self.session.result
        if result is None:
            return
        await container.mount_all(
            Static(self._line_text(line_no), id=f"line-{line_no}", classes="doc-line")
            for line_no in range(result.line_index.line_count)
        )
        self._highlighted_line = None
        self._show_current(self.session.first())

    def _line_text(self, line_no: int, current: bool = False) -> Text:
        """Render one line with a line number and highlighted matches."""
        result = self.session.result
        if result is None:
            return Text()
        line = result.line_index.lines[line_no]
        spans = spans_on_line(list(result.spans), result.line_index, line_no)

        number = f"{line_no + LINE_NUMBER_START:>{FormattingConstants.LINE_NUMBER_WIDTH}} "
        text = Text(number, style=HighlightStyles.LINE_NUMBER)
        body = runs_to_text(render_line(line, spans), style=self.match_style)

        cursor = self.session.navigator.cursor
        if current and cursor is not None:
            line_start, line_end = result.line_index.line_bounds(line_no)
            span = result.spans[cursor].rebased(line_start, line_end - line_start)
            if span.length:
                body.stylize(HighlightStyles.CURRENT_MATCH, span.start, span.end)

        text.append_text(body)
        return text

    def _show_current(self, line_no: int | None) -> None:
        """Scroll to the match under the cursor and refresh the status bar."""
        if self._highlighted_line is not None:
            self._refresh_line(self._highlighted_line, current=False)
        if line_no is not None:
            self._refresh_line(line_no, current=True)
            container = self.query_one("#document", VerticalScroll)
            target = self.query_one(f"#line-{line_no}", Static)
            self.call_after_refresh(container.scroll_to_widget, target, animate=False, top=True)
        self._highlighted_line = line_no
        self._update_status()

    def _refresh_line(self, line_no: int, current: bool) -> None:
        widgets = self.query(f"#line-{line_no}")
        if widgets:
            widgets.first(Static).update(self._line_text(line_no, current=current))

    def _update_status(self, message: str = "") -> None:
        result = self.session.result
        terms = ", ".join(sorted_terms(self.session.terms)) or "none"
        status = f"Match {self.session.navigator.position_label}"
        if result is not None:
            status += f" | Lines: {result.line_index.line_count}"
        status += f" | Terms: {terms}"
        if message:
            status += f" | {message}"
        self.query_one(".status-bar", Static).update(status)

    def action_next_match(self) -> None:
        self._show_current(self.session.next())

    def action_previous_match(self) -> None:
        self._show_current(self.session.previous())

    def action_first_match(self) -> None:
        self._show_current(self.session.first())

    def action_add_term(self) -> None:
        self._focus_term_input(removing=False)

    def action_remove_term(self) -> None:
        self._focus_term_input(removing=True)

    def _focus_term_input(self, removing: bool) -> None:
        self._removing_term = removing
        term_input = self.query_one("#term-input", Input)
        term_input.placeholder = REMOVE_TERM_PLACEHOLDER if removing else ADD_TERM_PLACEHOLDER
        term_input.focus()

    def action_focus_document(self) -> None:
        self._removing_term = False
        self.query_one("#term-input", Input).placeholder = ADD_TERM_PLACEHOLDER
        self.query_one("#document", VerticalScroll).focus()

    @on(Input.Submitted, "#term-input")
    async def on_term_submitted(self, event: Input.Submitted) -> None:
        """Add or remove the entered term, depending on the key that opened the input."""
        value = event.value
        event.input.clear()
        try:
            if self._removing_term:
                self.session.remove_term(value)
            else:
                self.session.add_term(value)
        except (InvalidTermError, TermStoreError) as e:
            logger.warning(f"Term edit rejected: {e}")
            self._update_status(f"[red]{e}[/red]")
            return

        await self._render_document()
        self.action_focus_document()


def launch_scan_viewer(
    document: str,
    terms: Iterable[str],
    source: str,
    store: TermStore | None = None,
) -> None:
    """Launch the TUI app for a scanned document."""
    app = ScanViewerTUI(document, terms, source, store=store)
    app.run()
