"""
validator/normalizer.py — normalizacja bazy wiedzy przed walidacją.

normalize_knowledge_base():
  - Zwraca głęboką kopię z wypełnionymi polami domyślnymi.
  - Nazwy propozycji: strip + wielkie litery + spacje → '_'.
  - Pusta nazwa zostaje pusta (walidator zgłosi E_NAME_INVALID).
  - Identyfikatory reguł są tylko trimowane.
"""

from __future__ import annotations

import copy
from typing import Any

from data_model import normalize_name


def normalize_knowledge_base(kb: dict[str, Any]) -> dict[str, Any]:
    """
    Zwraca głęboką kopię bazy z wypełnionymi wartościami domyślnymi.

    Zmiany:
      - propositions        → domyślnie [], nazwy znormalizowane
      - rules               → domyślnie []
      - rules[i].id         → strip() (brak id zostaje None)
      - rules[i].premises   → nazwy znormalizowane, kolejność zachowana
      - rules[i].conclusion → nazwa znormalizowana
      - facts               → domyślnie {}, klucze znormalizowane
                              (kolizje po normalizacji zgłasza walidator)
    """
    kb = copy.deepcopy(kb)

    kb["propositions"] = [name_or_empty(n) for n in kb.get("propositions", [])]

    rules = kb.setdefault("rules", [])
    for rule in rules:
        rule_id = rule.get("id")
        rule["id"] = rule_id.strip() if isinstance(rule_id, str) else None
        rule["premises"] = [name_or_empty(p) for p in rule.get("premises", [])]
        rule["conclusion"] = name_or_empty(rule.get("conclusion", ""))

    kb["facts"] = {name_or_empty(k): v for k, v in kb.get("facts", {}).items()}
    return kb


def name_or_empty(name: str) -> str:
    """normalize_name() dla walidatora: pusta nazwa daje "" zamiast wyjątku."""
    return normalize_name(name) if name.strip() else ""
