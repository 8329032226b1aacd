"""Komenda: sx solve — rozstrzyga cel z dopytywaniem o brakujące fakty."""

from __future__ import annotations

import argparse
import time

from rich import box
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from data_model import KnowledgeBase, normalize_name
from solver import InferenceMethod, InferenceResult, InferenceSession, parse_fact, parse_method
from solver.session import AskFn
from sx._config import get_settings
from sx._kb import load_kb

console = Console()


# ---------------------------------------------------------------------------
# Wyświetlanie wyników
# ---------------------------------------------------------------------------

def _fmt_value(value: bool) -> str:
    return "[green]PRAWDA[/green]" if value else "[red]FAŁSZ[/red]"


def show_result(goal: str, result: InferenceResult) -> None:
    if result.resolved:
        console.print(f"\nCel [bold cyan]{goal}[/bold cyan] jest: {_fmt_value(bool(result.value))}")
    else:
        console.print(
            f"\nCel [bold cyan]{goal}[/bold cyan] nierozstrzygnięty — "
            f"brak wartości dla [bold yellow]{result.missing}[/bold yellow]"
        )


def _show_facts(kb: KnowledgeBase, derived: dict[str, bool]) -> None:
    """Tabela wszystkich faktów; pochodne oznaczone."""
    if not kb.facts:
        console.print("\n[yellow]Brak faktów.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("PROPOZYCJA", style="bold cyan", no_wrap=True)
    table.add_column("WARTOŚĆ", no_wrap=True)
    table.add_column("ŹRÓDŁO", style="dim", no_wrap=True)
    for name in sorted(kb.facts):
        source = "wyprowadzony" if name in derived else "podany"
        table.add_row(name, _fmt_value(kb.facts[name]), source)
    console.print(table)


def ask_user(name: str) -> bool | None:
    try:
        return Confirm.ask(f"Czy [bold yellow]{name}[/bold yellow] jest prawdziwe?", console=console)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return None


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def solve_goal(
    kb:           KnowledgeBase,
    goal:         str,
    method:       InferenceMethod,
    ask:          AskFn | None,
    reveal_delay: float,
) -> tuple[InferenceResult, dict[str, bool]]:
    """
    Rozstrzyga cel na bazie kb (fakty w kb są uzupełniane na miejscu).

    ask=None wykonuje jeden przebieg bez dopytywania.

    Returns:
        (wynik, wszystkie fakty pochodne zatwierdzone w tej sesji)
    """
    derived: dict[str, bool] = {}

    def reveal(name: str, value: bool) -> None:
        derived[name] = value
        if reveal_delay:
            time.sleep(reveal_delay)
        console.print(f"  [dim]wyprowadzono[/dim] [bold]{name}[/bold] = {_fmt_value(value)}")

    session = InferenceSession(goal, kb.rules, kb.facts, method)

    if ask is not None:
        result = session.run(ask=ask, on_derived=reveal)
    else:
        result = session.step()
        for name, value in result.derived.items():
            reveal(name, value)

    return result, derived


def run(args: argparse.Namespace) -> None:
    try:
        settings = get_settings()
        method = parse_method(args.method) if args.method else settings.method
        goal = normalize_name(args.goal)
        extra = [parse_fact(f) for f in args.fact or []]
    except ValueError as e:
        console.print(f"[red]Błąd argumentów:[/red] {e}")
        raise SystemExit(1)

    kb = load_kb(args.kb)
    for name, value in extra:
        kb.set_fact(name, value)

    console.print(
        f"Baza wiedzy: [bold]{len(kb.rules)}[/bold] reguł, "
        f"[bold]{len(kb.facts)}[/bold] faktów   "
        f"metoda=[cyan]{method}[/cyan]   cel=[bold cyan]{goal}[/bold cyan]"
    )

    delay = 0.0 if args.no_reveal else settings.reveal_delay
    ask = None if args.no_ask else ask_user
    result, derived = solve_goal(kb, goal, method, ask=ask, reveal_delay=delay)

    show_result(goal, result)
    if args.show_derived:
        _show_facts(kb, derived)

    if not result.resolved:
        raise SystemExit(2)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "solve",
        help="Rozstrzyga cel na regułach i faktach z pliku JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje bazę wiedzy z pliku JSON i rozstrzyga cel wybraną metodą
(ponens / tollens / automatic). Gdy brakuje faktu, pyta o niego
i uruchamia wnioskowanie ponownie, aż cel zostanie rozstrzygnięty.

Kod wyjścia: 0 — cel rozstrzygnięty, 2 — nierozstrzygnięty, 1 — błąd.

Przykłady:
  sx solve --kb baza.json --goal M
  sx solve --kb baza.json --goal K --fact A --fact B=true
  sx solve --kb baza.json --goal B --method tollens --fact C=false --fact A
  sx solve --kb baza.json --goal M --no-ask --show-derived
        """,
    )
    p.add_argument(
        "--kb", "-k",
        metavar="PLIK",
        required=True,
        help="Plik JSON z bazą wiedzy (reguły + fakty).",
    )
    p.add_argument(
        "--goal", "-g",
        metavar="CEL",
        required=True,
        help="Propozycja do rozstrzygnięcia, np. 'M'.",
    )
    p.add_argument(
        "--method", "-m",
        metavar="METODA",
        choices=[m.value for m in InferenceMethod],
        default=None,
        help="ponens | tollens | automatic (domyślnie: SX_METHOD albo automatic).",
    )
    p.add_argument(
        "--fact", "-f",
        metavar="FAKT",
        action="append",
        help="Dodatkowy fakt, np. 'A', 'A=true', '!B'. Można podać wielokrotnie.",
    )
    p.add_argument(
        "--no-ask",
        action="store_true",
        dest="no_ask",
        help="Nie pytaj o brakujące fakty — wypisz brakującą propozycję i zakończ.",
    )
    p.add_argument(
        "--no-reveal",
        action="store_true",
        dest="no_reveal",
        help="Pokaż fakty pochodne od razu (ignoruj SX_REVEAL_DELAY).",
    )
    p.add_argument(
        "--show-derived",
        action="store_true",
        help="Na końcu wyświetl tabelę wszystkich faktów.",
    )
    p.set_defaults(func=run)
