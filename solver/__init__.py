"""
solver — silnik wnioskowania (modus ponens / modus tollens) dla sx.

Publiczne API:
  resolve(goal, rules, facts, method)    → InferenceResult
  Resolver(rules, facts, method)         klasa silnika
  InferenceSession(goal, rules, facts)   protokół "zapytaj i wznów"
  load_knowledge_base_json(path)         → dict
  parse_rule / parse_fact / parse_method / parse_bool
  Rule, InferenceMethod, InferenceResult, Facts   typy danych
"""

from .engine  import Resolver, resolve
from .session import InferenceSession
from .loader  import (
    load_knowledge_base_json,
    parse_rule,
    parse_fact,
    parse_method,
    parse_bool,
)
from .types   import Facts, InferenceMethod, InferenceResult, Rule

__all__ = [
    "Resolver",
    "resolve",
    "InferenceSession",
    "load_knowledge_base_json",
    "parse_rule",
    "parse_fact",
    "parse_method",
    "parse_bool",
    "Facts",
    "InferenceMethod",
    "InferenceResult",
    "Rule",
]
