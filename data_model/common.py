"""
Wspólne typy pierwotne i normalizacja nazw propozycji.

Resolver porównuje nazwy dokładnie; ujednolicenie wielkości liter robi
wyłącznie normalize_name() po stronie bazy wiedzy.
"""

from __future__ import annotations

import re
from typing import Iterable, TypeAlias

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Wzorzec: ^[A-Z0-9_]+$  np. "A", "FIEBRE", "K2"
PropositionName: TypeAlias = str

# Wzorzec: ^[A-Za-z][A-Za-z0-9_\-]*$  np. "regla-4a"
RuleId: TypeAlias = str

NAME_RE = re.compile(r"^[A-Z0-9_]+$")


# ---------------------------------------------------------------------------
# Normalizacja
# ---------------------------------------------------------------------------

def normalize_name(name: str) -> PropositionName:
    """
    Zwraca znormalizowaną nazwę propozycji: bez białych znaków na brzegach,
    wielkimi literami, spacje wewnątrz zamienione na '_'.

    Raises:
        ValueError gdy nazwa jest pusta.
    """
    norm = "_".join(name.split()).upper()
    if not norm:
        raise ValueError("Pusta nazwa propozycji.")
    return norm


def split_names(names: str | Iterable[str]) -> list[PropositionName]:
    """
    Rozbija listę nazw rozdzielonych przecinkami ("K, L, M") i normalizuje je.
    Puste elementy są pomijane, kolejność zachowana, duplikaty usunięte.
    """
    if isinstance(names, str):
        names = names.split(",")
    out: dict[str, None] = {}
    for n in names:
        if n.strip():
            out[normalize_name(n)] = None
    return list(out)
