"""
solver/session.py — protokół "zapytaj i wznów" wokół resolve().

Resolver nigdy nie czeka na dane. Gdy cel jest nierozstrzygnięty, sesja:
  1. pyta zewnętrzne źródło o brakującą propozycję,
  2. wpisuje odpowiedź do trwałej tabeli faktów,
  3. uruchamia resolve() dla tego samego celu od zera.

Tabela faktów tylko rośnie między przebiegami, więc każdy przebieg albo
rozstrzyga cel, albo pyta o propozycję jeszcze nieznaną.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, MutableMapping

from .engine import Resolver
from .types import InferenceMethod, InferenceResult, Rule

logger = logging.getLogger(__name__)

# ask(nazwa) -> True / False, albo None gdy źródło odmawia odpowiedzi
AskFn = Callable[[str], "bool | None"]
# on_derived(nazwa, wartość) — wywoływane dla każdego nowego faktu pochodnego
DerivedFn = Callable[[str, bool], None]


class InferenceSession:
    """
    Sesja rozstrzygania jednego celu z dopytywaniem o brakujące fakty.

    Użycie::

        session = InferenceSession("M", rules, facts)
        result  = session.run(ask=lambda name: input(f"{name}? ") == "t")

    albo krok po kroku::

        result = session.step()
        while not result.resolved:
            session.answer(odpowiedz(session.pending))
            result = session.step()
    """

    def __init__(
        self,
        goal:   str,
        rules:  Iterable[Rule],
        facts:  MutableMapping[str, bool],
        method: InferenceMethod | str = InferenceMethod.AUTOMATIC,
    ) -> None:
        self.goal    = goal
        self.rules   = tuple(rules)
        self.facts   = facts
        self.method  = InferenceMethod(method)
        self.pending: str | None = None
        self.rounds  = 0
        self._answered: set[str] = set()

    def step(self) -> InferenceResult:
        """
        Jeden przebieg resolve() od zera; zatwierdza fakty pochodne w self.facts.
        """
        resolver = Resolver(self.rules, self.facts, self.method)
        result   = resolver.resolve(self.goal)
        self.rounds += 1

        for name, value in result.derived.items():
            self.facts[name] = value

        self.pending = None if result.resolved else result.missing
        if self.pending is not None and self.pending in self._answered:
            raise RuntimeError(
                f"Propozycja '{self.pending}' została już podana, "
                f"a resolver ponownie o nią pyta."
            )

        logger.debug(
            "Przebieg %d dla %s: %s (pochodne: %d)",
            self.rounds, self.goal, result, len(result.derived),
        )
        return result

    def answer(self, value: bool) -> None:
        """Wpisuje odpowiedź na bieżące pytanie do tabeli faktów."""
        if self.pending is None:
            raise ValueError("Brak oczekującego pytania.")
        self.facts[self.pending] = bool(value)
        self._answered.add(self.pending)
        logger.info("Odpowiedź: %s = %s", self.pending, bool(value))
        self.pending = None

    def run(self, ask: AskFn, on_derived: DerivedFn | None = None) -> InferenceResult:
        """
        Powtarza step()/ask() aż cel zostanie rozstrzygnięty
        albo ask zwróci None.

        Args:
            ask:        źródło brakujących faktów
            on_derived: opcjonalny callback dla nowo wyprowadzonych faktów,
                        w kolejności wyprowadzenia (np. do stopniowego pokazywania)
        """
        while True:
            result = self.step()
            if on_derived is not None:
                for name, value in result.derived.items():
                    on_derived(name, value)

            if result.resolved or self.pending is None:
                return result

            value = ask(self.pending)
            if value is None:
                logger.info("Brak odpowiedzi dla %s — przerwano sesję", self.pending)
                return result
            self.answer(value)
