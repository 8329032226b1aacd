"""Tests for the inference resolver (modus ponens / modus tollens)."""

import pytest

from solver import InferenceMethod, InferenceResult, Resolver, Rule, resolve


def R(rule_id, premises, conclusion):
    return Rule(id=rule_id, premises=tuple(premises), conclusion=conclusion)


CLASS_RULES = [
    R("r1", ["A", "B"], "C"),
    R("r2", ["D", "E", "F"], "G"),
    R("r3", ["C"], "K"),
    R("r4", ["G"], "K"),
]


class TestRule:
    """Tests for the Rule dataclass."""

    def test_empty_premises_rejected(self):
        with pytest.raises(ValueError):
            Rule(id="bad", premises=(), conclusion="C")

    def test_list_premises_coerced_to_tuple(self):
        rule = Rule(id="r", premises=["A", "B"], conclusion="C")
        assert rule.premises == ("A", "B")
        assert rule in {rule}

    def test_str(self):
        assert str(R("r1", ["A", "B"], "C")) == "[r1] A, B → C"


class TestInferenceMethod:
    def test_automatic_tries_ponens_then_tollens(self):
        assert InferenceMethod.AUTOMATIC.strategies() == [
            InferenceMethod.PONENS,
            InferenceMethod.TOLLENS,
        ]

    def test_single_strategy(self):
        assert InferenceMethod.TOLLENS.strategies() == [InferenceMethod.TOLLENS]


class TestFactShortCircuit:
    """A goal present in the fact table is returned as-is."""

    @pytest.mark.parametrize("method", list(InferenceMethod))
    def test_known_goal_returned_with_empty_overlay(self, method):
        rules = [R("r1", ["A"], "C")]
        result = resolve("C", rules, {"C": False, "A": True}, method)
        assert result.resolved
        assert result.value is False
        assert result.derived == {}


class TestPonens:
    """Forward inference: all premises true => conclusion true."""

    def test_all_premises_true(self):
        result = resolve("C", [R("r1", ["A", "B"], "C")], {"A": True, "B": True}, "ponens")
        assert result.resolved and result.value is True
        assert result.derived == {"C": True}

    def test_false_premise_leaves_goal_unresolved(self):
        result = resolve("C", [R("r1", ["A", "B"], "C")], {"A": True, "B": False}, "ponens")
        assert not result.resolved
        assert result.value is None
        assert result.missing == "C"

    def test_false_premise_automatic(self):
        result = resolve("C", [R("r1", ["A", "B"], "C")], {"A": True, "B": False})
        assert not result.resolved
        assert result.missing == "C"

    def test_or_between_rules(self):
        rules = [R("r1", ["A"], "C"), R("r2", ["B"], "C")]
        result = resolve("C", rules, {"A": False, "B": True}, "ponens")
        assert result.resolved and result.value is True

    def test_chained_derivation(self):
        rules = [R("r1", ["A"], "B"), R("r2", ["B"], "C")]
        result = resolve("C", rules, {"A": True}, "ponens")
        assert result.value is True
        assert list(result.derived) == ["B", "C"]

    def test_siblings_share_overlay_but_not_visited_set(self):
        rules = [
            R("r1", ["A", "B"], "C"),
            R("r2", ["D"], "A"),
            R("r3", ["D"], "B"),
            R("r4", ["E"], "D"),
        ]
        result = resolve("C", rules, {"E": True}, "ponens")
        assert result.value is True
        # D is derived once, then reused from the overlay by the second branch
        assert list(result.derived) == ["D", "A", "B", "C"]

    def test_unresolved_result_keeps_partial_derivations(self):
        rules = [R("r1", ["A"], "B"), R("r2", ["B", "C"], "D")]
        result = resolve("D", rules, {"A": True}, "ponens")
        assert not result.resolved
        assert result.missing == "C"
        assert result.derived == {"B": True}


class TestTollens:
    """Backward inference: conclusion false and other premises true => premise false."""

    def test_contrapositive(self):
        result = resolve("B", [R("r1", ["A", "B"], "C")], {"C": False, "A": True}, "tollens")
        assert result.resolved and result.value is False
        assert result.derived == {"B": False}

    def test_contrapositive_automatic(self):
        result = resolve("B", [R("r1", ["A", "B"], "C")], {"C": False, "A": True})
        assert result.resolved and result.value is False

    def test_single_premise(self):
        result = resolve("A", [R("r1", ["A"], "C")], {"C": False}, "tollens")
        assert result.value is False

    def test_true_conclusion_gives_no_information(self):
        result = resolve("B", [R("r1", ["A", "B"], "C")], {"C": True, "A": True}, "tollens")
        assert not result.resolved
        assert result.missing == "B"

    def test_false_other_premise_makes_rule_inapplicable(self):
        result = resolve("B", [R("r1", ["A", "B"], "C")], {"C": False, "A": False}, "tollens")
        assert not result.resolved
        assert result.missing == "B"
        assert result.derived == {}

    def test_unknown_conclusion_reported_missing(self):
        result = resolve("B", [R("r1", ["A", "B"], "C")], {}, "tollens")
        assert not result.resolved
        assert result.missing == "C"

    def test_chain_of_contrapositives(self):
        rules = [R("r1", ["A"], "B"), R("r2", ["B"], "C")]
        result = resolve("A", rules, {"C": False})
        assert result.value is False
        assert result.derived == {"B": False, "A": False}

    def test_ponens_only_ignores_tollens_rules(self):
        result = resolve("B", [R("r1", ["A", "B"], "C")], {"C": False, "A": True}, "ponens")
        assert not result.resolved
        assert result.missing == "B"


class TestCycles:
    """Cyclic rule graphs terminate with an unresolved result."""

    @pytest.mark.parametrize("method", list(InferenceMethod))
    def test_two_node_cycle(self, method):
        rules = [R("r1", ["X"], "Y"), R("r2", ["Y"], "X")]
        result = resolve("X", rules, {}, method)
        assert not result.resolved
        assert result.missing == "X"

    def test_self_referential_rule(self):
        result = resolve("X", [R("r1", ["X"], "X")], {})
        assert not result.resolved
        assert result.missing == "X"

    def test_cycle_does_not_block_other_path(self):
        rules = [
            R("r1", ["Y"], "X"),
            R("r2", ["X"], "Y"),
            R("r3", ["Z"], "X"),
        ]
        result = resolve("X", rules, {"Z": True})
        assert result.value is True

    def test_long_cycle_terminates(self):
        names = [f"P{i}" for i in range(50)]
        rules = [R(f"r{i}", [names[i]], names[(i + 1) % 50]) for i in range(50)]
        result = resolve("P0", rules, {})
        assert not result.resolved


class TestMissingNodePrecedence:
    """The first missing proposition is stable and follows rule order."""

    def test_left_to_right_premises(self):
        rules = [R("r1", ["A", "B"], "C"), R("r2", ["D"], "C")]
        assert resolve("C", rules, {}, "ponens").missing == "A"
        assert resolve("C", rules, {"A": True}, "ponens").missing == "B"
        assert resolve("C", rules, {"A": True, "B": False}, "ponens").missing == "D"

    def test_rule_order_decides(self):
        rules = [R("r0", ["P"], "W"), R("r1", ["P"], "X")]
        assert resolve("X", rules, {}).missing == "W"

        swapped = [rules[1], rules[0]]
        assert resolve("X", swapped, {}).missing == "X"

    def test_ponens_before_tollens(self):
        rules = [R("r0", ["P"], "W"), R("r1", ["P"], "X"), R("r2", ["X"], "Y")]
        assert resolve("X", rules, {}, "automatic").missing == "W"
        assert resolve("X", rules, {}, "tollens").missing == "Y"

    def test_unmentioned_goal_is_its_own_missing_node(self):
        result = resolve("Q", CLASS_RULES, {})
        assert not result.resolved
        assert result.missing == "Q"

    def test_deterministic(self):
        first = resolve("K", CLASS_RULES, {})
        for _ in range(5):
            assert resolve("K", CLASS_RULES, {}) == first


class TestEndToEnd:
    """
    Rules for one conclusion are tried in order and the first sufficient one
    wins: K comes from C, so D, E, F and G are never looked at (DESIGN.md,
    open-question decision 1).
    """

    FACTS = {"A": True, "B": True, "D": True, "E": True, "F": True}

    def test_first_sufficient_rule_wins(self):
        result = resolve("K", CLASS_RULES, self.FACTS, InferenceMethod.AUTOMATIC)
        assert result.resolved and result.value is True
        assert result.derived == {"C": True, "K": True}
        assert list(result.derived)[-1] == "K"

    def test_second_rule_used_when_first_fails(self):
        facts = dict(self.FACTS, B=False)
        result = resolve("K", CLASS_RULES, facts)
        assert result.value is True
        assert result.derived == {"G": True, "K": True}


class TestResolverContract:
    """The resolver never mutates its inputs."""

    def test_inputs_not_mutated(self):
        facts = {"A": True, "B": True}
        rules = list(CLASS_RULES)
        snapshot = (dict(facts), list(rules))

        resolve("K", rules, facts)

        assert (facts, rules) == snapshot

    def test_each_call_starts_fresh(self):
        resolver = Resolver(CLASS_RULES, {"A": True, "B": True})
        first = resolver.resolve("K")
        second = resolver.resolve("K")
        assert first == second
        assert first.derived is not second.derived

    def test_method_accepts_string(self):
        assert Resolver([], {}, "tollens").method is InferenceMethod.TOLLENS

    def test_result_str(self):
        assert str(InferenceResult(resolved=True, value=False)) == "FAŁSZ"
        assert str(InferenceResult(resolved=False, missing="C")) == "BRAK DANYCH (C)"
