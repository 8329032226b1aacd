"""
solver/engine.py — silnik wnioskowania: rekurencyjne rozstrzyganie celu (top-down).

Obsługuje:
  - modus ponens   (reguły, których konkluzją jest cel; wszystkie przesłanki prawdziwe)
  - modus tollens  (reguły, w których cel jest przesłanką; konkluzja fałszywa,
                    pozostałe przesłanki prawdziwe → cel fałszywy)
  - tryb automatic (ponens, potem tollens — dla każdego celu, także rekurencyjnie)
  - ochronę przed cyklami (zbiór odwiedzonych propozycji per ścieżka)

Nierozstrzygnięty cel zwraca pierwszą brakującą propozycję, o którą wywołujący
powinien zapytać (użytkownika, czujnik, wartość domyślną) i wywołać resolve()
ponownie z uzupełnioną tabelą faktów.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .types import Facts, InferenceMethod, InferenceResult, Rule

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class Resolver:
    """
    Rozstrzyga wartość celu na podstawie reguł i znanych faktów.

    Użycie::

        resolver = Resolver(rules, {"A": True, "B": True})
        result   = resolver.resolve("C")
        if result.resolved:
            print(result.value, result.derived)
        else:
            print("zapytaj o", result.missing)

    Reguły i fakty przekazane przez wywołującego nie są modyfikowane —
    fakty wyprowadzone trafiają do nakładki zwracanej w result.derived.
    """

    def __init__(
        self,
        rules:  Iterable[Rule],
        facts:  Mapping[str, bool],
        method: InferenceMethod | str = InferenceMethod.AUTOMATIC,
    ) -> None:
        self._rules:  tuple[Rule, ...]   = tuple(rules)
        self._facts:  Mapping[str, bool] = facts
        self._method: InferenceMethod    = InferenceMethod(method)

        # Indeksy zachowują kolejność reguł z wejścia
        self._by_conclusion: dict[str, list[Rule]] = {}
        self._by_premise:    dict[str, list[Rule]] = {}
        for rule in self._rules:
            self._by_conclusion.setdefault(rule.conclusion, []).append(rule)
            for premise in dict.fromkeys(rule.premises):
                self._by_premise.setdefault(premise, []).append(rule)

    @property
    def method(self) -> InferenceMethod:
        return self._method

    # ------------------------------------------------------------------

    def resolve(self, goal: str) -> InferenceResult:
        """
        Rozstrzyga jeden cel od zera (nowa nakładka, pusty zbiór odwiedzonych).

        Returns:
            InferenceResult z wartością celu albo z brakującą propozycją.
        """
        return self._resolve(goal, {}, set())

    def _resolve(self, goal: str, derived: Facts, visited: set[str]) -> InferenceResult:
        known = derived.get(goal, self._facts.get(goal))
        if known is not None:
            return InferenceResult(resolved=True, value=known, derived=derived)

        if goal in visited:
            logger.debug("Cykl: %s jest już na bieżącej ścieżce", goal)
            return InferenceResult(resolved=False, derived=derived)
        visited.add(goal)

        first_missing: str | None = None

        for strategy in self._method.strategies():
            if strategy is InferenceMethod.PONENS:
                value, missing = self._ponens(goal, derived, visited)
            else:
                value, missing = self._tollens(goal, derived, visited)

            if first_missing is None:
                first_missing = missing

            if value is not None:
                derived[goal] = value
                logger.debug("Wyprowadzono %s = %s (%s)", goal, value, strategy)
                return InferenceResult(resolved=True, value=value, derived=derived)

        # Żadna reguła nie rozstrzygnęła celu — pytamy o pierwszą brakującą
        # propozycję albo o sam cel, gdy nic o nim nie wiadomo.
        return InferenceResult(
            resolved=False,
            missing=first_missing if first_missing is not None else goal,
            derived=derived,
        )

    # ------------------------------------------------------------------
    # Strategie
    # ------------------------------------------------------------------

    def _all_true(
        self,
        names:   Iterable[str],
        derived: Facts,
        visited: set[str],
    ) -> tuple[bool, str | None]:
        """
        Sprawdza koniunkcję propozycji (od lewej, przerywa na pierwszej nie-prawdzie).

        Returns:
            (True, None)       — wszystkie prawdziwe
            (False, None)      — któraś fałszywa
            (False, brakująca) — któraś nierozstrzygnięta
        """
        for name in names:
            sub = self._resolve(name, derived, set(visited))
            if not sub.resolved:
                return False, sub.missing or name
            if not sub.value:
                return False, None
        return True, None

    def _ponens(
        self,
        goal:    str,
        derived: Facts,
        visited: set[str],
    ) -> tuple[bool | None, str | None]:
        """Modus ponens: pierwsza reguła z prawdziwymi przesłankami daje goal = True."""
        first_missing: str | None = None

        for rule in self._by_conclusion.get(goal, []):
            holds, missing = self._all_true(rule.premises, derived, visited)
            if holds:
                return True, first_missing
            if first_missing is None:
                first_missing = missing

        return None, first_missing

    def _tollens(
        self,
        goal:    str,
        derived: Facts,
        visited: set[str],
    ) -> tuple[bool | None, str | None]:
        """
        Modus tollens: fałszywa konkluzja reguły i prawdziwe pozostałe przesłanki
        dają goal = False.

        Prawdziwa konkluzja nie mówi nic o pojedynczej przesłance. Fałszywa
        inna przesłanka sama obala regułę — reguła jest wtedy pomijana bez
        pytania o cokolwiek.
        """
        first_missing: str | None = None

        for rule in self._by_premise.get(goal, []):
            conclusion = self._resolve(rule.conclusion, derived, set(visited))
            if not conclusion.resolved:
                if first_missing is None:
                    first_missing = conclusion.missing or rule.conclusion
                continue
            if conclusion.value:
                continue

            others = [p for p in rule.premises if p != goal]
            holds, missing = self._all_true(others, derived, visited)
            if holds:
                return False, first_missing
            if first_missing is None:
                first_missing = missing

        return None, first_missing


# ---------------------------------------------------------------------------
# API funkcyjne
# ---------------------------------------------------------------------------

def resolve(
    goal:   str,
    rules:  Iterable[Rule],
    facts:  Mapping[str, bool],
    method: InferenceMethod | str = InferenceMethod.AUTOMATIC,
) -> InferenceResult:
    """
    Rozstrzyga cel goal metodą method.

    Args:
        goal:   nazwa propozycji do rozstrzygnięcia
        rules:  zbiór reguł (tylko do odczytu)
        facts:  znane fakty (tylko do odczytu)
        method: ponens | tollens | automatic

    Returns:
        InferenceResult; result.derived zawiera fakty wyprowadzone w tym
        wywołaniu — wywołujący decyduje, czy i kiedy je zatwierdzić.
    """
    return Resolver(rules, facts, method).resolve(goal)
