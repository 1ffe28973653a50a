"""
cli.py - command line front end for the word predictor
Features:
- One-shot commands over a text file: stats, predict, candidates, explain
- Interactive REPL: type a fragment, see ranked predictions, cycle with /next and /prev,
  accept the highlighted one, or feed more text with /learn
- Runtime config changes with /config key value
- Uses Rich for tables and formatting
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from word_predictor.autocompleter import WordPredictor
from word_predictor.context.cursor import cursor_context
from word_predictor.core.candidate_cycler import PredictionSession
from word_predictor.core.prediction_engine import Source
from word_predictor.utils.config_manager import Config, ConfigError
from word_predictor.utils.logger_utils import configure_logging

logger = logging.getLogger(__name__)

SOURCE_STYLE = {Source.BIGRAM: "green", Source.UNIGRAM: "cyan"}

HELP = (
    "type a fragment to see predictions\n"
    "/next /prev      move through the candidates\n"
    "/accept          complete the fragment with the highlighted word\n"
    "/learn <text>    add text to the document\n"
    "/explain         show which model produced the top prediction\n"
    "/stats /timings  model size and timing counters\n"
    "/config [k v]    show or change settings\n"
    "/quit"
)


# RENDERING ---------------------------------------------------------------
def session_table(session: Optional[PredictionSession]) -> Table:
    """Ranked candidates, the cycler's cursor row highlighted."""
    table = Table(title="Predictions", box=box.SIMPLE, show_edge=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Word", style="bold")
    table.add_column("Freq", justify="right")
    table.add_column("Score", justify="right", style="magenta")
    table.add_column("Source", style="dim")
    if session is None:
        return table
    for i, c in enumerate(session.candidates):
        marker = ">" if i == session.cursor else str(i + 1)
        word = Text(c.word, style="reverse" if i == session.cursor else SOURCE_STYLE[c.source])
        table.add_row(marker, word, str(c.frequency), f"{c.score:g}", c.source.value)
    return table


def stats_table(predictor: WordPredictor, doc_id) -> Table:
    s = predictor.stats(doc_id)
    t = Table(title="Model", box=box.MINIMAL)
    t.add_column("Metric", style="cyan")
    t.add_column("Value")
    t.add_row("Unique words", str(s["unique_words"]))
    t.add_row("Unique bigrams", str(s["unique_bigrams"]))
    t.add_row("Version", str(s["version"]))
    top = predictor.model.most_common(doc_id, 5)
    t.add_row("Top words", ", ".join(f"{w}({c})" for w, c in top) or "(none)")
    return t


def timings_table(predictor: WordPredictor) -> Table:
    t = Table(title="Timings (ms)", box=box.MINIMAL)
    for col in ("Key", "Count", "Avg", "Last"):
        t.add_column(col)
    for key, row in predictor.timings().items():
        t.add_row(key, str(row["count"]), f"{row['avg']:.3f}", f"{row['last']:.3f}")
    return t


# REPL --------------------------------------------------------------------
class CLI:
    """Interactive loop over one document (the file given on the command line)."""

    def __init__(self, predictor: WordPredictor, doc_id: str, text: str,
                 console: Optional[Console] = None,
                 read_line: Optional[Callable[[], str]] = None):
        self.predictor = predictor
        self.doc_id = doc_id
        self.console = console or Console()
        self.read_line = read_line or (lambda: Prompt.ask("[green]>[/green]", console=self.console, default=""))
        self.lines: List[str] = text.splitlines()
        self.change_marker = 0
        self.fragment = ""
        self.running = True
        self._rebuild()

    def _rebuild(self) -> None:
        self.change_marker += 1
        self.predictor.update(self.doc_id, self.lines, self.change_marker)

    def run(self) -> None:
        self.console.rule("[bold magenta]Word Predictor[/bold magenta]")
        self.console.print("[dim]/help for commands[/dim]")
        while self.running:
            try:
                line = self.read_line()
            except (EOFError, KeyboardInterrupt):
                break
            if line is None:
                break
            line = line.rstrip("\n")
            if not line.strip():
                continue
            if line.startswith("/"):
                self.handle_command(line.strip())
            else:
                self.process_fragment(line)

    # fragments ---------------------------------------------------------
    def process_fragment(self, fragment: str) -> None:
        self.fragment = fragment
        session = self.predictor.suggest_at(self.doc_id, fragment, len(fragment))
        if session is None:
            self.console.print("[dim](no predictions)[/dim]")
            return
        self._show_session()

    def _show_session(self) -> None:
        session = self.predictor.cycler.session
        self.console.print(session_table(session))
        ghost = self.predictor.cycler.current_completion()
        if ghost:
            self.console.print(Text.assemble(self.fragment, (ghost, "dim italic")))

    # commands ---------------------------------------------------------
    def handle_command(self, cmd: str) -> None:
        name, _, arg = cmd.partition(" ")
        arg = arg.strip()

        if name in ("/q", "/quit", "/exit"):
            self.running = False
            return

        if name == "/help":
            self.console.print(Panel(HELP, title="commands", border_style="cyan"))
            return

        if name in ("/next", "/prev"):
            moved = self.predictor.cycle_next() if name == "/next" else self.predictor.cycle_previous()
            if moved is None:
                self.console.print("[dim](nothing to cycle)[/dim]")
                return
            self._show_session()
            return

        if name == "/accept":
            self._accept()
            return

        if name == "/learn":
            if not arg:
                self.console.print("[red]usage:[/red] /learn <text>")
                return
            self.lines.append(arg)
            self._rebuild()
            self.predictor.cycle_reset()
            self.console.print(f"[cyan]Learnt:[/cyan] {arg}")
            return

        if name == "/explain":
            self._explain()
            return

        if name == "/stats":
            self.console.print(stats_table(self.predictor, self.doc_id))
            return

        if name == "/timings":
            self.console.print(timings_table(self.predictor))
            return

        if name == "/config":
            self._config(arg)
            return

        self.console.print(f"[red]Unknown command:[/red] {name}")

    def _accept(self) -> None:
        ghost = self.predictor.cycler.current_completion()
        cand = self.predictor.cycle_current()
        if cand is None:
            self.console.print("[dim](nothing to accept)[/dim]")
            return
        completed = self.fragment + ghost
        self.lines.append(completed)
        self._rebuild()
        self.predictor.cycle_reset()
        self.console.print(f"[green]Accepted:[/green] {completed}  [dim]({cand.source.value})[/dim]")
        self.fragment = ""

    def _explain(self) -> None:
        prefix, prev = cursor_context(self.fragment, len(self.fragment))
        info = self.predictor.explain(self.doc_id, prefix, prev)
        t = Table(title="Explain", box=box.MINIMAL)
        t.add_column("Field", style="cyan")
        t.add_column("Value")
        for field in ("prefix", "previous_word", "unigram_prediction", "bigram_prediction",
                      "prediction", "completion", "source"):
            t.add_row(field, getattr(info, field) or "-")
        self.console.print(t)

    def _config(self, arg: str) -> None:
        cfg = self.predictor.cfg
        if not arg:
            self.console.print(cfg.show())
            return
        parts = arg.split()
        if len(parts) != 2:
            self.console.print("[red]usage:[/red] /config <option> <value>")
            return
        try:
            cfg.set(parts[0], parts[1])
        except ConfigError as e:
            self.console.print(f"[red]{e}[/red]")
            return
        self.console.print(f"[cyan]{parts[0]}[/cyan] = {cfg.get(parts[0])}")


# ENTRY POINT ------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="word-predictor", description="Next-word prediction over a text file.")
    parser.add_argument("--config", help="JSON config file (read, and written by /config)")
    parser.add_argument("--min-prefix", type=int, help="minimum prefix length")
    parser.add_argument("--bigram-weight", type=float, help="bigram score multiplier")
    parser.add_argument("--max-candidates", type=int, help="candidates returned per query")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("stats", help="vocabulary size and top words")
    p.add_argument("file")

    for name, helptext in (("predict", "best completion"),
                           ("candidates", "ranked completions"),
                           ("explain", "per-model breakdown")):
        p = sub.add_parser(name, help=helptext)
        p.add_argument("file")
        p.add_argument("prefix")
        p.add_argument("--prev", default="", help="word before the prefix")
        if name == "candidates":
            p.add_argument("--limit", type=int, default=None)

    p = sub.add_parser("repl", help="interactive session")
    p.add_argument("file")
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    cfg = Config(args.config)
    for key, val in (("min_prefix_length", args.min_prefix),
                     ("bigram_weight", args.bigram_weight),
                     ("max_candidates", args.max_candidates)):
        if val is not None:
            cfg.set(key, val, persist=False)
    return cfg


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        cfg = _config_from_args(args)
    except ConfigError as e:
        console.print(f"[red]config error:[/red] {e}")
        return 2

    try:
        with open(args.file, "r", encoding="utf8") as f:
            text = f.read()
    except OSError as e:
        console.print(f"[red]cannot read {args.file}:[/red] {e.strerror or e}")
        return 1

    predictor = WordPredictor(cfg)
    doc_id = args.file

    if args.command == "repl":
        CLI(predictor, doc_id, text, console=console).run()
        return 0

    predictor.update(doc_id, text, 1)

    if args.command == "stats":
        console.print(stats_table(predictor, doc_id))
    elif args.command == "predict":
        word = predictor.predict(doc_id, args.prefix, args.prev)
        console.print(word if word else "[dim](no prediction)[/dim]")
    elif args.command == "candidates":
        session = PredictionSession(doc_id, tuple(
            predictor.engine.candidates(args.prefix, doc_id, args.prev, args.limit)))
        if not session.candidates:
            console.print("[dim](no predictions)[/dim]")
        else:
            console.print(session_table(session))
    elif args.command == "explain":
        info = predictor.explain(doc_id, args.prefix, args.prev)
        for field in ("prediction", "completion", "source", "unigram_prediction", "bigram_prediction"):
            console.print(f"{field:>20}: {getattr(info, field) or '-'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
