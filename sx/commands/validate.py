"""Komenda: sx validate — sprawdza plik bazy wiedzy przed użyciem."""

from __future__ import annotations

import argparse
import json
import pathlib

from rich import box
from rich.console import Console
from rich.table import Table

from solver import load_knowledge_base_json
from validator import RuleSetValidator, ValidationReport

console = Console()


def report_table(report: ValidationReport) -> Table:
    table = Table(box=box.MINIMAL, header_style="bold white", show_lines=False)
    table.add_column("ETAP", justify="center", no_wrap=True)
    table.add_column("KOD",  style="yellow",   no_wrap=True)
    table.add_column("GDZIE", style="cyan",    no_wrap=True)
    table.add_column("PROBLEM / JAK POPRAWIĆ")

    for err in report.errors:
        table.add_row(
            err.code.stage,
            err.code,
            err.path,
            f"{err.message}\n[dim]{err.expected_fix}[/dim]",
        )
    return table


def _summary(report: ValidationReport) -> str:
    kb = report.normalized or {}
    return (
        f"{len(kb.get('rules', []))} reguł, "
        f"{len(kb.get('facts', {}))} faktów, "
        f"{len(report.warnings)} ostrzeżeń"
    )


def run(args: argparse.Namespace) -> None:
    path = pathlib.Path(args.kb)
    try:
        if not path.is_file():
            raise ValueError(f"brak pliku {path}")
        raw = load_knowledge_base_json(path)
    except ValueError as e:
        console.print(f"[red]Nie można wczytać bazy wiedzy:[/red] {e}")
        raise SystemExit(1)

    report = RuleSetValidator().validate(raw)

    if report.is_valid:
        console.print(f"[green]OK[/green]  {path.name}: {_summary(report)}")
    else:
        console.print(f"[red]BŁĘDY[/red]  {path.name}: {len(report.errors)} do poprawienia")
        console.print(report_table(report))

    for w in report.warnings:
        console.print(f"  [yellow]![/yellow] {w}")

    if args.json_output:
        print(json.dumps(
            report.to_dict(include_normalized=args.include_normalized),
            ensure_ascii=False,
            indent=2,
        ))

    if not report.is_valid:
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Sprawdza plik JSON z bazą wiedzy.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Sprawdza bazę wiedzy w czterech etapach:

  A  struktura JSON (typy pól, wymagana konkluzja, fakty logiczne)
  B  reguły (przesłanki, unikalne id)
  C  nazwy propozycji (litery, cyfry, '_')
  D  fakty (jedna wartość na propozycję)

Cykle w grafie reguł i propozycje, o które zapyta resolver, są
zgłaszane jako ostrzeżenia. Kod wyjścia 1 oznacza błędy.

Przykłady:
  sx validate baza.json
  sx validate baza.json --json-output --include-normalized
        """,
    )
    p.add_argument("kb", metavar="PLIK", help="Plik JSON z bazą wiedzy.")
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Dodatkowo wypisz raport jako JSON.",
    )
    p.add_argument(
        "--include-normalized",
        action="store_true",
        help="Z --json-output: dołącz bazę po normalizacji nazw.",
    )
    p.set_defaults(func=run)
