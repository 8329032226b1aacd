"""
data_model — baza wiedzy sx (reguły, fakty, propozycje).

Użycie:
  from data_model import KnowledgeBase, example_knowledge_base

Moduły:
  common         — PropositionName, RuleId, normalize_name, split_names
  knowledge_base — KnowledgeBase (edycja reguł i faktów, serializacja JSON)
  examples       — example_knowledge_base(), EXAMPLE_RULES
"""

from .common import (
    PropositionName,
    RuleId,
    NAME_RE,
    normalize_name,
    split_names,
)
from .knowledge_base import KnowledgeBase
from .examples import EXAMPLE_RULES, example_knowledge_base

__all__ = [
    "PropositionName",
    "RuleId",
    "NAME_RE",
    "normalize_name",
    "split_names",
    "KnowledgeBase",
    "EXAMPLE_RULES",
    "example_knowledge_base",
]
