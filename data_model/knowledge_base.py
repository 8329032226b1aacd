"""
Baza wiedzy: reguły + tabela faktów + zadeklarowane propozycje.

Trwały stan po stronie wywołującego — resolver tylko go czyta, a sesja
dopisuje odpowiedzi i zatwierdzone fakty pochodne. Wszystkie nazwy są
normalizowane (normalize_name) przy wejściu.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from solver.types import Facts, Rule

from .common import PropositionName, RuleId, normalize_name, split_names


@dataclass
class KnowledgeBase:
    """
    Edytowalna baza wiedzy.

    - rules:    reguły w kolejności dodania (ta kolejność steruje resolverem)
    - facts:    znane wartości propozycji
    - declared: propozycje zadeklarowane bez wartości (węzły bez reguł)
    """
    rules:    list[Rule] = field(default_factory=list)
    facts:    Facts = field(default_factory=dict)
    declared: list[PropositionName] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Propozycje
    # ------------------------------------------------------------------

    @property
    def propositions(self) -> list[PropositionName]:
        """Posortowana suma nazw: zadeklarowane, z reguł i z faktów."""
        names: set[str] = set(self.declared) | set(self.facts)
        for rule in self.rules:
            names.update(rule.premises)
            names.add(rule.conclusion)
        return sorted(names)

    def add_propositions(self, names: str | Iterable[str]) -> list[PropositionName]:
        """Deklaruje propozycje ("K, L, M"); zwraca nowo dodane nazwy."""
        added: list[str] = []
        for name in split_names(names):
            if name not in self.declared:
                self.declared.append(name)
                added.append(name)
        return added

    # ------------------------------------------------------------------
    # Reguły
    # ------------------------------------------------------------------

    def get_rule(self, rule_id: RuleId) -> Rule:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        raise ValueError(f"Brak reguły o id '{rule_id}'.")

    def _index_of(self, rule_id: RuleId) -> int:
        for i, rule in enumerate(self.rules):
            if rule.id == rule_id:
                return i
        raise ValueError(f"Brak reguły o id '{rule_id}'.")

    def _next_id(self, reserved: Iterable[RuleId] = ()) -> RuleId:
        existing = {r.id for r in self.rules} | set(reserved)
        n = len(self.rules) + 1
        while f"rule-{n}" in existing:
            n += 1
        return f"rule-{n}"

    def add_rule(
        self,
        premises:   str | Iterable[str],
        conclusion: str,
        rule_id:    RuleId | None = None,
    ) -> Rule:
        """
        Dodaje regułę premises → conclusion na koniec listy.

        Raises:
            ValueError gdy brak przesłanek albo id jest zajęte.
        """
        rule_id = rule_id or self._next_id()
        if any(r.id == rule_id for r in self.rules):
            raise ValueError(f"Reguła o id '{rule_id}' już istnieje.")

        rule = Rule(
            id=rule_id,
            premises=tuple(split_names(premises)),
            conclusion=normalize_name(conclusion),
        )
        self.rules.append(rule)
        return rule

    def connect(self, source: str, target: str, join: bool = False) -> Rule:
        """
        Dodaje krawędź source → target.

        join=True i istniejąca reguła z konkluzją target: source staje się
        kolejną przesłanką tej reguły (AND). W przeciwnym razie powstaje
        osobna reguła source → target (OR między regułami).
        """
        source, target = normalize_name(source), normalize_name(target)

        if join:
            for i, rule in enumerate(self.rules):
                if rule.conclusion != target:
                    continue
                if source not in rule.premises:
                    rule = replace(rule, premises=rule.premises + (source,))
                    self.rules[i] = rule
                return rule

        return self.add_rule([source], target)

    def remove_rule(self, rule_id: RuleId) -> Rule:
        return self.rules.pop(self._index_of(rule_id))

    def replace_rule(self, rule: Rule) -> None:
        """Podmienia regułę o tym samym id, zachowując jej pozycję."""
        self.rules[self._index_of(rule.id)] = Rule(
            id=rule.id,
            premises=tuple(split_names(rule.premises)),
            conclusion=normalize_name(rule.conclusion),
        )

    def reverse_rule(self, rule_id: RuleId) -> Rule:
        """
        Odwraca kierunek reguły jednoprzesłankowej: A → B staje się B → A.

        Raises:
            ValueError dla reguł z więcej niż jedną przesłanką
            (odwrócenie koniunkcji nie jest implikacją tej postaci).
        """
        i = self._index_of(rule_id)
        rule = self.rules[i]
        if len(rule.premises) != 1:
            raise ValueError(
                f"Reguła '{rule_id}' ma {len(rule.premises)} przesłanki — "
                f"odwrócić można tylko regułę jednoprzesłankową."
            )
        reversed_rule = Rule(id=rule.id, premises=(rule.conclusion,), conclusion=rule.premises[0])
        self.rules[i] = reversed_rule
        return reversed_rule

    def rules_concluding(self, name: str) -> list[Rule]:
        name = normalize_name(name)
        return [r for r in self.rules if r.conclusion == name]

    def rules_with_premise(self, name: str) -> list[Rule]:
        name = normalize_name(name)
        return [r for r in self.rules if name in r.premises]

    # ------------------------------------------------------------------
    # Fakty
    # ------------------------------------------------------------------

    def set_fact(self, name: str, value: bool) -> None:
        self.facts[normalize_name(name)] = bool(value)

    def remove_fact(self, name: str) -> bool:
        """Usuwa fakt; zwraca False gdy go nie było."""
        return self.facts.pop(normalize_name(name), None) is not None

    def commit(self, derived: Mapping[str, bool]) -> None:
        """Zatwierdza fakty pochodne zwrócone przez resolver."""
        for name, value in derived.items():
            self.set_fact(name, value)

    def clear_facts(self) -> None:
        self.facts.clear()

    def clear(self) -> None:
        self.rules.clear()
        self.facts.clear()
        self.declared.clear()

    # ------------------------------------------------------------------
    # Serializacja
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "propositions": self.propositions,
            "rules": [
                {"id": r.id, "premises": list(r.premises), "conclusion": r.conclusion}
                for r in self.rules
            ],
            "facts": dict(self.facts),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> KnowledgeBase:
        """
        Buduje bazę z surowego słownika (format load_knowledge_base_json).

        Raises:
            ValueError przy błędnej regule lub nielogicznej wartości faktu.
        """
        kb = cls()
        kb.add_propositions(raw.get("propositions", []))

        items = list(raw.get("rules", []))
        # Id nadawane automatycznie nie mogą zająć id podanych dalej w pliku
        explicit = {item["id"] for item in items if item.get("id")}
        for i, item in enumerate(items):
            if "conclusion" not in item:
                raise ValueError(f"Reguła #{i + 1} nie ma pola 'conclusion'")
            rule_id = item.get("id") or kb._next_id(explicit)
            kb.add_rule(item.get("premises", []), item["conclusion"], rule_id)
        for name, value in raw.get("facts", {}).items():
            if not isinstance(value, bool):
                raise ValueError(f"Fakt '{name}' ma wartość nielogiczną: {value!r}")
            kb.set_fact(name, value)
        return kb
