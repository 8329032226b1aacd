"""
solver/types.py — podstawowe typy danych silnika wnioskowania.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# Tabela faktów: nazwa propozycji -> wartość logiczna.
# Brak klucza oznacza wartość nieznaną.
Facts = dict[str, bool]


class InferenceMethod(StrEnum):
    """Strategia wnioskowania."""
    PONENS    = "ponens"
    TOLLENS   = "tollens"
    AUTOMATIC = "automatic"

    def strategies(self) -> list[InferenceMethod]:
        """Kolejność strategii próbowanych dla każdego celu."""
        if self is InferenceMethod.AUTOMATIC:
            return [InferenceMethod.PONENS, InferenceMethod.TOLLENS]
        return [self]


@dataclass(frozen=True)
class Rule:
    """
    Implikacja: premises[0] ∧ premises[1] ∧ ... ∧ premises[n] → conclusion.

    Kilka reguł z tą samą konkluzją to niezależne warunki wystarczające (OR).
    """
    id:         str
    premises:   tuple[str, ...]
    conclusion: str

    def __post_init__(self) -> None:
        if not isinstance(self.premises, tuple):
            object.__setattr__(self, "premises", tuple(self.premises))
        if not self.premises:
            raise ValueError(f"Reguła '{self.id}' nie ma przesłanek.")

    def __str__(self) -> str:
        label = f"[{self.id}] " if self.id else ""
        return f"{label}{', '.join(self.premises)} → {self.conclusion}"


@dataclass
class InferenceResult:
    """
    Wynik jednego wywołania resolve().

    - resolved: True gdy cel ma ustaloną wartość
    - value:    wartość celu (None gdy nierozstrzygnięty)
    - missing:  propozycja, o którą trzeba zapytać, by kontynuować
                (None gdy rozstrzygnięty albo gałąź przerwana przez cykl)
    - derived:  fakty wyprowadzone w tym wywołaniu, w kolejności wyprowadzenia
    """
    resolved: bool
    value:    bool | None = None
    missing:  str | None = None
    derived:  Facts = field(default_factory=dict)

    def __str__(self) -> str:
        if self.resolved:
            return "PRAWDA" if self.value else "FAŁSZ"
        if self.missing:
            return f"BRAK DANYCH ({self.missing})"
        return "BRAK DANYCH"
