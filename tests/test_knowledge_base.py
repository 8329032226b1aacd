"""Tests for the editable knowledge base and name normalization."""

import pytest

from data_model import (
    EXAMPLE_RULES,
    KnowledgeBase,
    example_knowledge_base,
    normalize_name,
    split_names,
)
from solver import Rule, resolve


class TestNames:
    def test_normalize(self):
        assert normalize_name("  fiebre alta ") == "FIEBRE_ALTA"
        assert normalize_name("k2") == "K2"

    def test_normalize_empty(self):
        with pytest.raises(ValueError):
            normalize_name("   ")

    def test_split_names(self):
        assert split_names("k, l, , m, K") == ["K", "L", "M"]
        assert split_names(["a", "b"]) == ["A", "B"]


class TestRules:
    def test_add_rule_normalizes_and_assigns_ids(self):
        kb = KnowledgeBase()
        first = kb.add_rule("a, b", "c")
        second = kb.add_rule(["c"], "k")

        assert first == Rule(id="rule-1", premises=("A", "B"), conclusion="C")
        assert second.id == "rule-2"

    def test_generated_id_skips_taken_ids(self):
        kb = KnowledgeBase()
        kb.add_rule("A", "B", "rule-2")
        assert kb.add_rule("B", "C").id == "rule-3"

    def test_duplicate_id(self):
        kb = KnowledgeBase()
        kb.add_rule("A", "B", "r1")
        with pytest.raises(ValueError):
            kb.add_rule("C", "D", "r1")

    def test_rule_without_premises(self):
        with pytest.raises(ValueError):
            KnowledgeBase().add_rule("", "C")

    def test_remove_rule(self):
        kb = example_knowledge_base()
        removed = kb.remove_rule("regla-4b")
        assert removed.conclusion == "K"
        assert [r.id for r in kb.rules_concluding("K")] == ["regla-4a"]

    def test_remove_unknown_rule(self):
        with pytest.raises(ValueError):
            KnowledgeBase().remove_rule("nope")

    def test_replace_rule_keeps_position(self):
        kb = example_knowledge_base()
        kb.replace_rule(Rule(id="regla-3", premises=("h",), conclusion="j"))

        assert kb.rules[2] == Rule(id="regla-3", premises=("H",), conclusion="J")
        assert len(kb.rules) == len(EXAMPLE_RULES)

    def test_lookups(self):
        kb = example_knowledge_base()
        assert [r.id for r in kb.rules_concluding("k")] == ["regla-4a", "regla-4b"]
        assert [r.id for r in kb.rules_with_premise("G")] == ["regla-4b", "regla-5"]


class TestConnect:
    def test_join_adds_premise_to_existing_rule(self):
        kb = KnowledgeBase()
        kb.add_rule("A", "C", "r1")

        rule = kb.connect("b", "c", join=True)

        assert rule == Rule(id="r1", premises=("A", "B"), conclusion="C")
        assert kb.rules == [rule]

    def test_join_is_idempotent(self):
        kb = KnowledgeBase()
        kb.add_rule("A, B", "C", "r1")
        kb.connect("B", "C", join=True)
        assert kb.rules[0].premises == ("A", "B")

    def test_without_join_creates_alternative_rule(self):
        kb = KnowledgeBase()
        kb.add_rule("A", "C", "r1")

        kb.connect("B", "C")

        assert [r.premises for r in kb.rules_concluding("C")] == [("A",), ("B",)]
        assert resolve("C", kb.rules, {"A": False, "B": True}).value is True

    def test_join_without_existing_rule(self):
        kb = KnowledgeBase()
        rule = kb.connect("A", "C", join=True)
        assert rule.premises == ("A",)
        assert len(kb.rules) == 1


class TestReverse:
    def test_single_premise(self):
        kb = KnowledgeBase()
        kb.add_rule("A", "B", "r1")

        reversed_rule = kb.reverse_rule("r1")

        assert reversed_rule == Rule(id="r1", premises=("B",), conclusion="A")
        assert kb.rules == [reversed_rule]

    def test_multiple_premises_rejected(self):
        kb = example_knowledge_base()
        with pytest.raises(ValueError):
            kb.reverse_rule("regla-1")
        assert kb.get_rule("regla-1").premises == ("A", "B")


class TestFacts:
    def test_set_and_remove(self):
        kb = KnowledgeBase()
        kb.set_fact("a", 1)
        assert kb.facts == {"A": True}
        assert kb.remove_fact("A") is True
        assert kb.remove_fact("A") is False

    def test_remove_false_fact(self):
        kb = KnowledgeBase()
        kb.set_fact("A", False)
        assert kb.remove_fact("a") is True
        assert kb.facts == {}

    def test_commit(self):
        kb = KnowledgeBase(facts={"A": True})
        kb.commit({"c": True, "k": False})
        assert kb.facts == {"A": True, "C": True, "K": False}

    def test_clear_facts_keeps_rules(self):
        kb = example_knowledge_base()
        kb.set_fact("A", True)
        kb.clear_facts()
        assert kb.facts == {}
        assert len(kb.rules) == len(EXAMPLE_RULES)

    def test_clear(self):
        kb = example_knowledge_base()
        kb.clear()
        assert kb.propositions == []


class TestPropositions:
    def test_union_of_declared_rules_and_facts(self):
        kb = KnowledgeBase()
        kb.add_propositions("z")
        kb.add_rule("A", "B")
        kb.set_fact("Q", True)
        assert kb.propositions == ["A", "B", "Q", "Z"]

    def test_add_propositions_reports_new_names(self):
        kb = KnowledgeBase()
        assert kb.add_propositions("K, L") == ["K", "L"]
        assert kb.add_propositions("l, m") == ["M"]


class TestSerialization:
    def test_round_trip(self):
        kb = example_knowledge_base()
        kb.set_fact("A", True)
        kb.set_fact("B", False)

        restored = KnowledgeBase.from_dict(kb.to_dict())

        assert restored.rules == kb.rules
        assert restored.facts == kb.facts
        assert restored.propositions == kb.propositions

    def test_from_dict_normalizes(self):
        kb = KnowledgeBase.from_dict({
            "rules": [{"id": "r1", "premises": ["a", "b"], "conclusion": "c"}],
            "facts": {"a": True},
        })
        assert kb.rules[0].premises == ("A", "B")
        assert kb.facts == {"A": True}

    def test_from_dict_missing_conclusion(self):
        with pytest.raises(ValueError):
            KnowledgeBase.from_dict({"rules": [{"premises": ["A"]}]})

    def test_from_dict_non_bool_fact(self):
        with pytest.raises(ValueError):
            KnowledgeBase.from_dict({"facts": {"A": "yes"}})

    def test_from_dict_generated_id_skips_later_explicit_id(self):
        kb = KnowledgeBase.from_dict({"rules": [
            {"id": None, "premises": ["A"], "conclusion": "B"},
            {"id": "rule-1", "premises": ["B"], "conclusion": "C"},
        ]})
        assert [r.id for r in kb.rules] == ["rule-2", "rule-1"]


class TestExample:
    def test_example_rules(self):
        kb = example_knowledge_base()
        assert [r.id for r in kb.rules] == [rule_id for rule_id, _, _ in EXAMPLE_RULES]
        assert kb.get_rule("regla-6") == Rule(id="regla-6", premises=("K", "L"), conclusion="M")

    def test_example_goal_with_all_leaves_true(self):
        kb = example_knowledge_base()
        for name in "ABDEFHI":
            kb.set_fact(name, True)

        result = resolve("M", kb.rules, kb.facts)

        assert result.value is True
        assert list(result.derived)[-1] == "M"

    def test_example_returns_fresh_instances(self):
        first = example_knowledge_base()
        first.clear()
        assert len(example_knowledge_base().rules) == len(EXAMPLE_RULES)
