"""Wczytywanie bazy wiedzy z pliku JSON dla komend CLI."""

from __future__ import annotations

import logging
import pathlib

from rich.console import Console

from data_model import KnowledgeBase
from solver import load_knowledge_base_json
from validator import RuleSetValidator

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def load_kb(path_str: str) -> KnowledgeBase:
    """
    Wczytuje i waliduje bazę wiedzy.

    Przy braku pliku, błędnym JSON albo błędach walidacji wypisuje komunikat
    i kończy z kodem 1. Ostrzeżenia walidatora trafiają do logu.
    """
    path = pathlib.Path(path_str)
    if not path.exists():
        console.print(f"[red]Brak pliku bazy wiedzy:[/red] {path}")
        raise SystemExit(1)

    try:
        raw = load_knowledge_base_json(path)
    except ValueError as e:
        console.print(f"[red]Błąd wczytywania bazy wiedzy:[/red] {e}")
        raise SystemExit(1)

    report = RuleSetValidator().validate(raw)
    for w in report.warnings:
        logger.warning("%s: %s", path.name, w)
    if not report.is_valid:
        console.print(
            f"[red]Baza wiedzy {path.name} jest niepoprawna[/red] "
            f"({len(report.errors)} błąd(ów)) — szczegóły: sx validate {path}"
        )
        for e in report.errors:
            console.print(f"  [yellow]{e.code}[/yellow] [cyan]{e.path}[/cyan] {e.message}")
        raise SystemExit(1)

    try:
        return KnowledgeBase.from_dict(raw)
    except ValueError as e:
        console.print(f"[red]Błąd bazy wiedzy {path.name}:[/red] {e}")
        raise SystemExit(1)
