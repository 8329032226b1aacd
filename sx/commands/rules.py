"""Komenda: sx rules — listowanie reguł i faktów bazy wiedzy."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from data_model import KnowledgeBase, normalize_name
from solver import Rule
from sx._kb import load_kb

console = Console(width=200)


def _fmt_premises(rule: Rule) -> str:
    return " ∧ ".join(rule.premises)


def rules_table(rules: list[Rule], facts: dict[str, bool]) -> Table:
    """Tabela reguł; propozycje o znanej wartości pokolorowane."""
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",          no_wrap=True, style="bold")
    table.add_column("PRZESŁANKI",  no_wrap=False, max_width=80)
    table.add_column("→",           no_wrap=True)
    table.add_column("KONKLUZJA",   no_wrap=True)

    for rule in rules:
        conclusion = Text(rule.conclusion)
        if rule.conclusion in facts:
            conclusion.stylize("green" if facts[rule.conclusion] else "red")
        table.add_row(rule.id, _fmt_premises(rule), "→", conclusion)
    return table


def facts_line(facts: dict[str, bool]) -> str:
    if not facts:
        return "[dim](brak faktów)[/dim]"
    return "  ".join(
        f"[green]{n}: V[/green]" if v else f"[red]{n}: F[/red]"
        for n, v in sorted(facts.items())
    )


def show_kb(kb: KnowledgeBase, rules: list[Rule] | None = None) -> None:
    rules = kb.rules if rules is None else rules
    if not rules:
        console.print("[yellow]Brak reguł spełniających kryteria.[/yellow]")
    else:
        console.print()
        console.print(rules_table(rules, kb.facts))
        total = len(rules)
        _pl = "reguła" if total == 1 else ("reguły" if 2 <= total % 10 <= 4 and total % 100 not in range(11, 15) else "reguł")
        console.print(f"  [dim]{total} {_pl}[/dim]")
    console.print(f"\nFakty: {facts_line(kb.facts)}\n")


def run(args: argparse.Namespace) -> None:
    kb = load_kb(args.kb)

    rules = kb.rules
    try:
        if args.conclusion:
            name = normalize_name(args.conclusion)
            rules = [r for r in rules if r.conclusion == name]
        if args.premise:
            name = normalize_name(args.premise)
            rules = [r for r in rules if name in r.premises]
    except ValueError as e:
        console.print(f"[red]Błąd argumentów:[/red] {e}")
        raise SystemExit(1)

    show_kb(kb, rules)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "rules",
        help="Listuje reguły i fakty bazy wiedzy.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje reguły bazy wiedzy (w kolejności, w jakiej używa ich resolver)
oraz znane fakty.

Przykłady:
  sx rules --kb baza.json
  sx rules --kb baza.json --conclusion K
  sx rules --kb baza.json --premise G
        """,
    )
    p.add_argument(
        "--kb", "-k",
        metavar="PLIK",
        required=True,
        help="Plik JSON z bazą wiedzy.",
    )
    p.add_argument(
        "--conclusion", "-c",
        metavar="NAZWA",
        help="Tylko reguły z podaną konkluzją.",
    )
    p.add_argument(
        "--premise", "-p",
        metavar="NAZWA",
        help="Tylko reguły z podaną przesłanką.",
    )
    p.set_defaults(func=run)
