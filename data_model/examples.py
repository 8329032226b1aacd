"""
Przykładowa baza wiedzy (przykład z zajęć).

  regla-1:  A ∧ B     → C
  regla-2:  D ∧ E ∧ F → G
  regla-3:  H ∧ I     → J
  regla-4a: C         → K
  regla-4b: G         → K      (K gdy C lub G)
  regla-5:  G ∧ J     → L
  regla-6:  K ∧ L     → M
"""

from __future__ import annotations

from .knowledge_base import KnowledgeBase

EXAMPLE_RULES: list[tuple[str, list[str], str]] = [
    ("regla-1",  ["A", "B"],      "C"),
    ("regla-2",  ["D", "E", "F"], "G"),
    ("regla-3",  ["H", "I"],      "J"),
    ("regla-4a", ["C"],           "K"),
    ("regla-4b", ["G"],           "K"),
    ("regla-5",  ["G", "J"],      "L"),
    ("regla-6",  ["K", "L"],      "M"),
]


def example_knowledge_base() -> KnowledgeBase:
    """Zwraca nową bazę z regułami przykładu (bez faktów)."""
    kb = KnowledgeBase()
    kb.add_propositions("A, B, D, E, F, H, I, C, G, J, K, L, M")
    for rule_id, premises, conclusion in EXAMPLE_RULES:
        kb.add_rule(premises, conclusion, rule_id)
    return kb
