"""
cli.py - command line front end for phrase_markov
Features:
- Train a chain from text files (one phrase per line), optionally in parallel
- Generate sentences, optionally starting from a seed word
- Save/load JSON snapshots
- Interactive loop: plain lines are learnt, /commands drive the chain
- Uses Rich for tables and formatting
"""

import argparse
import os
import shlex
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from phrase_markov.core.builder import build_chain
from phrase_markov.core.chain import NO_CHAIN, MarkovChain
from phrase_markov.core.errors import (
    SnapshotFormatError,
    UninitializedResourceError,
    UnsupportedOperationError,
)
from phrase_markov.core.random_strategy import default_strategy
from phrase_markov.context.normalizer import identity, lowercase
from phrase_markov.utils.config_manager import Config
from phrase_markov.utils.logger_utils import Log
from phrase_markov.utils.model_store import load_chain, save_chain

HELP = (
    "Commands: /gen [n]  /seed <word> [n]  /train <file>  /save [path]  /load [path]\n"
    "          /stats  /dump  /config [key val]  /help  /quit\n"
    "Any other line is learnt as a phrase."
)


def read_phrases(path: str) -> List[str]:
    with open(path, "r", encoding="utf8") as f:
        return [ln.strip() for ln in f if ln.strip()]


class CLI:
    """Holds one chain plus its settings and drives it from commands."""

    def __init__(self, cfg: Config, chain: Optional[MarkovChain] = None, console: Optional[Console] = None):
        self.cfg = cfg
        self.console = console or Console()
        self.chain = chain or build_chain(cfg.to_chain_config())
        self.running = True

    # TRAIN/GENERATE ------------------------------------------------------------
    def train_file(self, path: str) -> int:
        lines = read_phrases(path)
        with Log.time_block(f"train {os.path.basename(path)}") as t:
            self.chain.add_phrases(lines, workers=self.cfg.data["workers"])
        self.console.print(f"[green]Learnt[/green] {len(lines)} phrases from {escape(path)} in {t.elapsed:.2f}s")
        return len(lines)

    def generate(self, n: int = 1, seed: Optional[str] = None) -> List[str]:
        out = []
        for _ in range(max(1, n)):
            out.append(self.chain.generate_sentence(seed))
        for s in out:
            if s == NO_CHAIN:
                self.console.print("[dim](chain is empty, train it first)[/dim]")
            else:
                self.console.print(s, markup=False, highlight=False)
        return out

    # STATE -------------------------------------------------------------------
    def save(self, path: Optional[str] = None) -> str:
        path = path or self.cfg.data["model_path"]
        save_chain(self.chain, path)
        Log.write(f"saved chain -> {path}")
        self.console.print(f"[green]Saved[/green] -> {escape(path)}")
        return path

    def load(self, path: Optional[str] = None) -> MarkovChain:
        path = path or self.cfg.data["model_path"]
        d = self.cfg.data
        self.chain = load_chain(
            path,
            default_strategy(d["random_seed"], d["thread_local_random"]),
            d["pattern"],
            lowercase if d["lowercase"] else identity,
            concurrent=d["concurrent"],
            traversable=d["traversable"],
        )
        Log.write(f"loaded chain <- {path}")
        self.console.print(f"[dim]Loaded {escape(path)}[/dim]")
        return self.chain

    # DISPLAY -------------------------------------------------------------------
    def show_stats(self):
        t = Table(title="Chain", box=box.MINIMAL)
        t.add_column("Metric", style="cyan")
        t.add_column("Value")
        for k, v in self.chain.stats().items():
            t.add_row(k, str(v))
        self.console.print(t)

    def dump(self):
        self.console.print(Panel(Text(self.chain.to_loggable_string() or "(empty)"), title="Transitions", border_style="yellow"))

    # INTERACTIVE -------------------------------------------------------------------
    def run(self):
        self.console.rule("[bold magenta]phrase-markov[/bold magenta]")
        self.console.print(HELP)
        while self.running:
            try:
                line = Prompt.ask("[green]>>[/green]", default="", console=self.console)
            except (EOFError, KeyboardInterrupt):
                self.running = False
                break
            if not line:
                continue
            if line.startswith("/"):
                self.handle_command(line)
            else:
                self.chain.add_phrase(line)
                self.console.print("[dim]learnt.[/dim]")

    def handle_command(self, line: str):
        p = shlex.split(line)
        if not p:
            return
        c = p[0].lower()
        try:
            if c in ("/q", "/quit", "/exit"):
                self.running = False
            elif c == "/help":
                self.console.print(HELP)
            elif c == "/gen":
                self.generate(int(p[1]) if len(p) > 1 else 1)
            elif c == "/seed" and len(p) > 1:
                self.generate(int(p[2]) if len(p) > 2 else 1, seed=p[1])
            elif c == "/train" and len(p) > 1:
                self.train_file(p[1])
            elif c == "/save":
                self.save(p[1] if len(p) > 1 else None)
            elif c == "/load":
                self.load(p[1] if len(p) > 1 else None)
            elif c == "/stats":
                self.show_stats()
            elif c == "/dump":
                self.dump()
            elif c == "/config":
                self._config(p[1:])
            else:
                self.console.print(f"[red]Unknown command:[/red] {escape(line)}")
        except (OSError, ValueError, SnapshotFormatError, UnsupportedOperationError, UninitializedResourceError) as e:
            Log.write(f"[ERROR] {line}: {e}")
            self.console.print(f"[red]{escape(c)} failed:[/red] {escape(str(e))}")

    def _config(self, args: List[str]):
        if not args:
            for row in self.cfg.show():
                self.console.print(row)
        elif len(args) == 2:
            if not self.cfg.set(args[0], args[1]):
                self.console.print("[red]No such option[/red]")
        else:
            self.console.print("usage: /config [key val]")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="phrase-markov", description="Learn phrases and generate Markov sentences.")
    ap.add_argument("--config", default="phrase_markov.json", help="settings file (created if missing)")
    ap.add_argument("--load", metavar="PATH", help="start from a saved snapshot")
    ap.add_argument("--train", metavar="FILE", action="append", default=[], help="text file, one phrase per line")
    ap.add_argument("--generate", metavar="N", type=int, default=0, help="print N sentences")
    ap.add_argument("--seed", help="start generated sentences at this word")
    ap.add_argument("--save", metavar="PATH", help="write the snapshot here when done")
    ap.add_argument("--workers", type=int, help="threads used for training")
    ap.add_argument("--interactive", "-i", action="store_true", help="enter the interactive loop")
    return ap


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    if args.workers is not None:
        cfg.data["workers"] = args.workers

    cli = CLI(cfg, console=console)
    try:
        if args.load:
            cli.load(args.load)
        for path in args.train:
            cli.train_file(path)
        if args.generate:
            cli.generate(args.generate, seed=args.seed)
        if args.save:
            cli.save(args.save)
    except (OSError, SnapshotFormatError, UnsupportedOperationError) as e:
        Log.write(f"[ERROR] {e}")
        cli.console.print(f"[red]error:[/red] {escape(str(e))}")
        return 1

    if args.interactive:
        cli.run()
    return 0
