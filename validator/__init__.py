"""
validator — walidator bazy wiedzy (reguły + fakty) w formacie JSON.

Interfejs publiczny:
    RuleSetValidator — główny walidator (etapy A–D + ostrzeżenia o grafie)
    ValidationReport, ValidationError, ErrorCode — typy raportu
    normalize_knowledge_base — normalizacja nazw i pól domyślnych
    find_cycles — cykle w grafie przesłanka → konkluzja

Typowe użycie:
    from validator import RuleSetValidator

    report = RuleSetValidator().validate(json.loads(Path("baza.json").read_text()))
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.path, e.message)
"""

from .types import ErrorCode, ValidationError, ValidationReport
from .normalizer import normalize_knowledge_base, name_or_empty
from .rule_validator import KB_SCHEMA, MAX_ERRORS, RuleSetValidator, find_cycles

__all__ = [
    "ErrorCode",
    "ValidationError",
    "ValidationReport",
    "normalize_knowledge_base",
    "name_or_empty",
    "KB_SCHEMA",
    "MAX_ERRORS",
    "RuleSetValidator",
    "find_cycles",
]
