"""
solver/loader.py — parsowanie reguł i faktów z tekstu oraz bazy wiedzy z JSON.

Publiczne API:
  load_knowledge_base_json(path) -> dict (surowy słownik bazy wiedzy)
  parse_rule(rule_str, rule_id)  -> Rule
  parse_fact(fact_str)           -> (nazwa, wartość)
  parse_method(method_str)       -> InferenceMethod
"""

from __future__ import annotations

import json
import pathlib
import re
from typing import Any, Optional

from .types import InferenceMethod, Rule


# ---------------------------------------------------------------------------
# Baza wiedzy z JSON
# ---------------------------------------------------------------------------

def load_knowledge_base_json(path: pathlib.Path) -> dict[str, Any]:
    """
    Wczytuje bazę wiedzy z pliku JSON.

    Oczekiwany format::

        {
            "propositions": ["A", "B", "C"],
            "rules": [
                {"id": "regla-1", "premises": ["A", "B"], "conclusion": "C"}
            ],
            "facts": {"A": true, "B": false}
        }

    Returns:
        Surowy słownik — walidację i budowę obiektów robi wywołujący.

    Raises:
        ValueError gdy plik nie zawiera obiektu JSON.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Nieprawidłowy JSON w {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Oczekiwano obiektu JSON w {path}, otrzymano {type(raw).__name__}")
    return raw


# ---------------------------------------------------------------------------
# Reguły z tekstu
# ---------------------------------------------------------------------------

_RULE_RE = re.compile(
    r"^\s*(?:(?P<id>[A-Za-z0-9_\-]+)\s*:\s*)?(?P<premises>[^=\->→]+?)\s*(?:->|=>|→)\s*(?P<conclusion>[^,\s\-=>→][^,\-=>→]*?)\s*$"
)


def parse_rule(rule_str: str, rule_id: Optional[str] = None) -> Rule:
    """
    Parsuje regułę zapisaną tekstowo.

    Przykłady::

        "A, B -> C"          → Rule(id=rule_id, premises=("A", "B"), conclusion="C")
        "r1: D, E, F => G"   → Rule(id="r1", ...)
        "C → K"

    Nazwy nie są normalizowane (wielkość liter zostaje bez zmian).

    Raises:
        ValueError jeśli format jest nieprawidłowy.
    """
    m = _RULE_RE.match(rule_str)
    if not m:
        raise ValueError(f"Nieprawidłowy format reguły: '{rule_str}'")

    premises = tuple(p.strip() for p in m.group("premises").split(",") if p.strip())
    if not premises:
        raise ValueError(f"Reguła bez przesłanek: '{rule_str}'")

    return Rule(
        id=m.group("id") or rule_id or "",
        premises=premises,
        conclusion=m.group("conclusion"),
    )


# ---------------------------------------------------------------------------
# Fakty i metoda z tekstu
# ---------------------------------------------------------------------------

_TRUE  = frozenset({"true", "t", "1", "yes", "y", "tak", "v", "prawda"})
_FALSE = frozenset({"false", "f", "0", "no", "n", "nie", "fałsz", "falsz"})


def parse_bool(value_str: str) -> bool:
    """Parsuje wartość logiczną ('true', 'tak', '0', ...)."""
    v = value_str.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"Nieprawidłowa wartość logiczna: '{value_str}'")


def parse_fact(fact_str: str) -> tuple[str, bool]:
    """
    Parsuje fakt.

    Przykłady::

        "A=true"  → ("A", True)
        "B=false" → ("B", False)
        "C"       → ("C", True)
        "!D"      → ("D", False)
        "~D"      → ("D", False)

    Raises:
        ValueError jeśli format jest nieprawidłowy.
    """
    s = fact_str.strip()
    if "=" in s:
        name, _, value = s.partition("=")
        name = name.strip()
        parsed = parse_bool(value)
    elif s[:1] in ("!", "~"):
        name, parsed = s[1:].strip(), False
    else:
        name, parsed = s, True

    if not name:
        raise ValueError(f"Nieprawidłowy format faktu: '{fact_str}'")
    return name, parsed


def parse_method(method_str: str) -> InferenceMethod:
    """Parsuje nazwę metody wnioskowania (ponens | tollens | automatic)."""
    try:
        return InferenceMethod(method_str.strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in InferenceMethod)
        raise ValueError(
            f"Nieznana metoda wnioskowania: '{method_str}' (dostępne: {choices})"
        ) from None
