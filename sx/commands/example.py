"""Komenda: sx example — eksportuje przykładową bazę wiedzy do JSON."""

from __future__ import annotations

import argparse
import json
import pathlib

from rich.console import Console

from data_model import example_knowledge_base
from solver import parse_fact

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    kb = example_knowledge_base()
    try:
        for fact in args.fact or []:
            kb.set_fact(*parse_fact(fact))
    except ValueError as e:
        console.print(f"[red]Błąd argumentów:[/red] {e}")
        raise SystemExit(1)

    text = json.dumps(kb.to_dict(), ensure_ascii=False, indent=2)

    if args.output:
        out_path = pathlib.Path(args.output)
        out_path.write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]JSON:[/green] {out_path}  ({len(kb.rules)} reguł)")
    else:
        print(text)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "example",
        help="Wypisuje przykładową bazę wiedzy (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przykładowa baza wiedzy z zajęć:

  regla-1:  A, B    → C        regla-4b: G    → K
  regla-2:  D, E, F → G        regla-5:  G, J → L
  regla-3:  H, I    → J        regla-6:  K, L → M
  regla-4a: C       → K

Przykłady:
  sx example
  sx example --output baza.json
  sx example --output baza.json --fact A --fact B
        """,
    )
    p.add_argument(
        "--output", "-o",
        metavar="PLIK",
        help="Zapisz do pliku zamiast na stdout.",
    )
    p.add_argument(
        "--fact", "-f",
        metavar="FAKT",
        action="append",
        help="Fakt dołączony do przykładu, np. 'A' albo 'B=false'.",
    )
    p.set_defaults(func=run)
