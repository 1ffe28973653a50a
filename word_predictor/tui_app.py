# tui_app.py: Word Predictor TUI
# -------------------------------------------------------
# A small editor wired to the predictor the way an editor plugin would be:
#  - every text change rebuilds the document model (change marker = edit count)
#  - every cursor move re-queries with the prefix under the cursor
#  - ctrl+n / ctrl+p cycle the candidates, ctrl+j inserts the highlighted one
#  - escape hides the predictions, ctrl+l shows model stats
# -------------------------------------------------------

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Optional

from rich.table import Table
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Static, TextArea

from word_predictor.autocompleter import WordPredictor
from word_predictor.core.candidate_cycler import PredictionSession
from word_predictor.core.prediction_engine import Source

DOC_ID = "tui"


def render_session(session: Optional[PredictionSession]) -> Table | Text:
    """
    Candidate list for the side panel.
    The cycler's cursor row is reversed, bigram hits are green, unigram cyan.
    """
    if session is None:
        return Text("No predictions", style="dim")
    table = Table(box=None, show_header=False, pad_edge=False)
    table.add_column(justify="right")
    table.add_column()
    table.add_column(justify="right")
    for i, c in enumerate(session.candidates):
        colour = "green" if c.source is Source.BIGRAM else "cyan"
        style = "reverse " + colour if i == session.cursor else colour
        table.add_row(str(i + 1), Text(c.word, style=style), Text(f"{c.frequency}", style="dim"))
    return table


class SuggestionPanel(Static):
    """Right-side panel with the ranked candidates."""

    def show_session(self, session: Optional[PredictionSession], ghost: str = "") -> None:
        body = render_session(session)
        if ghost:
            table = Table.grid()
            table.add_row(body)
            table.add_row(Text(f"→ …{ghost}", style="dim italic"))
            body = table
        self.update(body)


class TypingLatency(Static):
    """Bottom-left readout showing how long the last query took."""

    def set_latency(self, seconds: float) -> None:
        self.update(f"[dim]Latency:[/dim] {seconds * 1000:.2f}ms")


class PredictorApp(App):
    """
    Architecture:
     - TextArea events -> WordPredictor.update / suggest_at
     - cycler session -> SuggestionPanel
    """

    DEFAULT_CSS = """
    #editor { width: 3fr; }
    #predictions { width: 1fr; border: round $accent; padding: 0 1; }
    #bottom { height: 1; }
    #latency { width: 24; }
    """

    BINDINGS = [
        Binding("ctrl+n", "cycle_next", "Next", priority=True),
        Binding("ctrl+p", "cycle_previous", "Previous", priority=True),
        Binding("ctrl+j", "accept", "Accept", priority=True),
        Binding("escape", "hide", "Hide", priority=True),
        Binding("ctrl+l", "show_stats", "Stats", priority=True),
    ]

    def __init__(self, text: str = "", predictor: Optional[WordPredictor] = None):
        super().__init__()
        self.initial_text = text
        self.predictor = predictor or WordPredictor()
        self.change_marker = 0

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            yield TextArea(self.initial_text, id="editor")
            yield SuggestionPanel(id="predictions")
        with Horizontal(id="bottom"):
            yield TypingLatency(id="latency")
            yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self._rebuild(self.initial_text)
        self.query_one(SuggestionPanel).show_session(None)

    # model + queries ---------------------------------------------------------
    def _rebuild(self, text: str) -> None:
        self.change_marker += 1
        self.predictor.update(DOC_ID, text, self.change_marker)

    def _refresh_predictions(self) -> None:
        editor = self.query_one(TextArea)
        row, col = editor.cursor_location
        line = editor.document.get_line(row)
        start = time.perf_counter()
        self.predictor.suggest_at(DOC_ID, line, col)
        self.query_one(TypingLatency).set_latency(time.perf_counter() - start)
        self._render_panel()

    def _render_panel(self) -> None:
        cycler = self.predictor.cycler
        self.query_one(SuggestionPanel).show_session(cycler.session, cycler.current_completion())

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._rebuild(event.text_area.text)
        self._refresh_predictions()

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        self._refresh_predictions()

    # actions ----------------------------------------------------------------------
    def action_cycle_next(self) -> None:
        self.predictor.cycle_next()
        self._render_panel()

    def action_cycle_previous(self) -> None:
        self.predictor.cycle_previous()
        self._render_panel()

    def action_accept(self) -> None:
        ghost = self.predictor.cycler.current_completion()
        if not ghost:
            return
        self.predictor.cycle_reset()
        self.query_one(TextArea).insert(ghost)

    def action_hide(self) -> None:
        self.predictor.cycle_reset()
        self._render_panel()

    def action_show_stats(self) -> None:
        s = self.predictor.stats(DOC_ID)
        self.query_one("#status", Static).update(
            f"words {s['unique_words']}  bigrams {s['unique_bigrams']}  version {s['version']}"
        )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="word-predictor-tui")
    parser.add_argument("file", nargs="?", help="text file to open")
    args = parser.parse_args(argv)
    text = Path(args.file).read_text(encoding="utf8") if args.file else ""
    PredictorApp(text).run()


if __name__ == "__main__":
    main()
