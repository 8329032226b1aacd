"""Komenda: sx shell — interaktywna edycja bazy wiedzy i rozstrzyganie celów."""

from __future__ import annotations

import argparse
import logging
from typing import Callable

from rich.console import Console
from rich.prompt import Confirm, Prompt

from data_model import KnowledgeBase, example_knowledge_base, normalize_name, split_names
from solver import InferenceMethod, parse_fact, parse_method, parse_rule
from solver.session import AskFn
from sx._config import get_settings
from sx._kb import load_kb
from sx.commands.rules import show_kb
from sx.commands.solve import ask_user, solve_goal, show_result

logger = logging.getLogger(__name__)

console = Console()

HELP = """\
[bold]Komendy:[/bold]
  nodes K, L, M          deklaruje propozycje
  rule [id:] A, B -> C   dodaje regułę (A ∧ B → C)
  connect A C [and|or]   krawędź A → C; 'and' dołącza A do istniejącej reguły dla C
  reverse ID             odwraca regułę jednoprzesłankową
  remove ID              usuwa regułę
  fact A | A=false | !A  ustawia fakt
  unfact A               usuwa fakt
  method [M]             pokazuje / ustawia metodę (ponens | tollens | automatic)
  solve CEL              rozstrzyga cel (pyta o brakujące fakty)
  show                   reguły i fakty
  example                wczytuje przykład z zajęć (czyści bazę)
  clear [facts]          czyści całą bazę albo tylko fakty
  help                   ta pomoc
  quit                   koniec
"""


class Shell:
    """
    Interpreter komend powłoki nad jedną bazą wiedzy w pamięci.

    execute(line) zwraca False po komendzie 'quit'. Błędy komend
    (ValueError) są wypisywane i nie przerywają sesji.
    """

    def __init__(
        self,
        kb:           KnowledgeBase,
        method:       InferenceMethod = InferenceMethod.AUTOMATIC,
        reveal_delay: float = 0.0,
        ask:          AskFn = ask_user,
        confirm:      Callable[[str], bool] | None = None,
    ) -> None:
        self.kb           = kb
        self.method       = method
        self.reveal_delay = reveal_delay
        self.ask          = ask
        self.confirm      = confirm or (lambda q: Confirm.ask(q, console=console))

        self._commands: dict[str, Callable[[str], None]] = {
            "nodes":   self._nodes,
            "rule":    self._rule,
            "connect": self._connect,
            "reverse": self._reverse,
            "remove":  self._remove,
            "fact":    self._fact,
            "unfact":  self._unfact,
            "method":  self._method,
            "solve":   self._solve,
            "show":    lambda rest: show_kb(self.kb),
            "example": self._example,
            "clear":   self._clear,
            "help":    lambda rest: console.print(HELP),
        }

    def execute(self, line: str) -> bool:
        cmd, _, rest = line.strip().partition(" ")
        cmd = cmd.lower()
        if not cmd:
            return True
        if cmd in ("quit", "exit"):
            return False

        handler = self._commands.get(cmd)
        if handler is None:
            console.print(f"[red]Nieznana komenda:[/red] {cmd}  (help — lista komend)")
            return True

        try:
            handler(rest.strip())
        except ValueError as e:
            console.print(f"[red]Błąd:[/red] {e}")
        return True

    # ------------------------------------------------------------------
    # Komendy
    # ------------------------------------------------------------------

    def _nodes(self, rest: str) -> None:
        added = self.kb.add_propositions(rest)
        console.print(f"Dodano propozycje: {', '.join(added) or '(brak nowych)'}")

    def _rule(self, rest: str) -> None:
        parsed = parse_rule(rest)
        rule = self.kb.add_rule(parsed.premises, parsed.conclusion, parsed.id or None)
        console.print(f"Dodano regułę {rule}")

    def _connect(self, rest: str) -> None:
        parts = rest.split()
        if len(parts) not in (2, 3):
            raise ValueError("Użycie: connect ŹRÓDŁO CEL [and|or]")
        source, target = parts[0], parts[1]
        mode = parts[2].lower() if len(parts) == 3 else None
        if mode not in (None, "and", "or"):
            raise ValueError(f"Nieznany tryb '{parts[2]}' (and | or)")

        if mode is None and self.kb.rules_concluding(target):
            target_n, source_n = normalize_name(target), normalize_name(source)
            join = self.confirm(
                f"Propozycja {target_n} ma już regułę. Dołączyć {source_n} jako warunek "
                f"AND (tak) czy utworzyć osobną regułę OR (nie)?"
            )
        else:
            join = mode == "and"

        rule = self.kb.connect(source, target, join=join)
        console.print(f"Reguła {rule}")

    def _reverse(self, rest: str) -> None:
        console.print(f"Odwrócono: {self.kb.reverse_rule(rest)}")

    def _remove(self, rest: str) -> None:
        console.print(f"Usunięto: {self.kb.remove_rule(rest)}")

    def _fact(self, rest: str) -> None:
        name, value = parse_fact(rest)
        self.kb.set_fact(name, value)
        console.print(f"{normalize_name(name)} = {'V' if value else 'F'}")

    def _unfact(self, rest: str) -> None:
        for name in split_names(rest):
            if not self.kb.remove_fact(name):
                console.print(f"[yellow]Brak faktu {name}[/yellow]")

    def _method(self, rest: str) -> None:
        if rest:
            self.method = parse_method(rest)
        console.print(f"Metoda: [cyan]{self.method}[/cyan]")

    def _solve(self, rest: str) -> None:
        goal = normalize_name(rest)
        result, _ = solve_goal(self.kb, goal, self.method, ask=self.ask, reveal_delay=self.reveal_delay)
        show_result(goal, result)

    def _example(self, rest: str) -> None:
        example = example_knowledge_base()
        self.kb.clear()
        self.kb.declared.extend(example.declared)
        self.kb.rules.extend(example.rules)
        console.print(f"Wczytano przykład: {len(self.kb.rules)} reguł")

    def _clear(self, rest: str) -> None:
        if rest == "facts":
            self.kb.clear_facts()
        elif not rest:
            self.kb.clear()
        else:
            raise ValueError("Użycie: clear [facts]")


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    try:
        settings = get_settings()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    kb = load_kb(args.kb) if args.kb else KnowledgeBase()
    shell = Shell(kb, method=settings.method, reveal_delay=settings.reveal_delay)

    console.print("[bold]sx shell[/bold] — 'help' wyświetla listę komend.")
    while True:
        try:
            line = Prompt.ask(f"[cyan]sx ({shell.method})[/cyan]", console=console)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not shell.execute(line):
            break
    logger.debug("Koniec sesji: %d reguł, %d faktów", len(kb.rules), len(kb.facts))


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "shell",
        help="Interaktywna edycja bazy wiedzy i rozstrzyganie celów.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Uruchamia interaktywną powłokę z bazą wiedzy w pamięci (zmiany nie są
zapisywane). Bazę można wczytać z pliku (--kb) albo z przykładu ('example').

Przykłady:
  sx shell
  sx shell --kb baza.json
        """,
    )
    p.add_argument(
        "--kb", "-k",
        metavar="PLIK",
        help="Plik JSON z bazą wiedzy wczytywaną na start.",
    )
    p.set_defaults(func=run)
