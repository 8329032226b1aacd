"""Tests for InferenceSession (ask-and-resume loop)."""

import pytest

from data_model import example_knowledge_base
from solver import InferenceSession

RULES = example_knowledge_base().rules


class ScriptedAsk:
    """Answers questions from a dict and records what was asked."""

    def __init__(self, answers):
        self.answers = answers
        self.asked = []

    def __call__(self, name):
        self.asked.append(name)
        return self.answers.get(name)


class TestRun:
    def test_known_goal_needs_no_questions(self):
        facts = {"K": True}
        ask = ScriptedAsk({})
        result = InferenceSession("K", RULES, facts).run(ask)

        assert result.resolved and result.value is True
        assert ask.asked == []

    def test_single_answer_resolves_goal(self):
        facts = {}
        ask = ScriptedAsk({"C": True})
        session = InferenceSession("K", RULES, facts)

        result = session.run(ask)

        assert result.value is True
        assert ask.asked == ["C"]
        assert session.rounds == 2
        assert facts == {"C": True, "K": True}

    def test_falls_through_to_second_rule(self):
        facts = {}
        ask = ScriptedAsk({"C": False, "G": True})
        session = InferenceSession("K", RULES, facts)

        result = session.run(ask)

        assert result.value is True
        assert ask.asked == ["C", "G"]
        assert session.rounds == 3

    def test_declined_question_stops_session(self):
        facts = {}
        session = InferenceSession("K", RULES, facts)

        result = session.run(lambda name: None)

        assert not result.resolved
        assert session.pending == "C"
        assert facts == {}

    def test_on_derived_called_in_derivation_order(self):
        facts = {"A": True, "B": True, "H": True, "I": True}
        seen = []
        session = InferenceSession("M", RULES, facts)

        result = session.run(ScriptedAsk({"G": True}), on_derived=lambda n, v: seen.append((n, v)))

        assert result.value is True
        names = [name for name, _ in seen]
        assert names[-1] == "M"
        assert names.index("C") < names.index("K")
        assert names.index("J") < names.index("L")
        assert all(value is True for _, value in seen)

    def test_answers_are_written_to_facts(self):
        facts = {}
        InferenceSession("K", RULES, facts).run(ScriptedAsk({"C": False, "G": False}))
        assert facts["C"] is False
        assert facts["G"] is False


class TestStepByStep:
    def test_manual_loop(self):
        facts = {}
        session = InferenceSession("K", RULES, facts, "automatic")

        result = session.step()
        assert not result.resolved
        assert session.pending == "C"

        session.answer(True)
        assert session.pending is None

        result = session.step()
        assert result.resolved and result.value is True

    def test_answer_without_pending_question(self):
        session = InferenceSession("K", RULES, {"K": True})
        session.step()
        with pytest.raises(ValueError):
            session.answer(True)

    def test_repeated_question_is_an_error(self):
        facts = {}
        session = InferenceSession("K", RULES, facts)
        session.step()
        session.answer(True)

        del facts["C"]
        with pytest.raises(RuntimeError):
            session.step()

    def test_derived_facts_committed_after_each_step(self):
        facts = {"A": True, "B": True}
        session = InferenceSession("M", RULES, facts, "ponens")

        result = session.step()

        assert not result.resolved
        assert facts["C"] is True
        assert facts["K"] is True
