"""
validator/types.py — kody błędów i raport walidacji bazy wiedzy.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stałe kody błędów; etap walidatora wynika z kodu (ErrorCode.stage)."""

    SCHEMA_VIOLATION        = "E_SCHEMA_VIOLATION"

    RULE_ID_DUPLICATE       = "E_RULE_ID_DUPLICATE"
    PREMISES_EMPTY          = "E_PREMISES_EMPTY"

    NAME_INVALID            = "E_NAME_INVALID"

    FACT_CONFLICT           = "E_FACT_CONFLICT"

    @property
    def stage(self) -> str:
        return _STAGES[self]


_STAGES: dict[ErrorCode, str] = {
    ErrorCode.SCHEMA_VIOLATION:       "A",
    ErrorCode.RULE_ID_DUPLICATE:      "B",
    ErrorCode.PREMISES_EMPTY:         "B",
    ErrorCode.NAME_INVALID:           "C",
    ErrorCode.FACT_CONFLICT:          "D",
}


@dataclass(slots=True)
class ValidationError:
    """
    Błąd bazy wiedzy wskazany ścieżką JSON Pointer (np. "/rules/0/premises")
    razem z instrukcją, jak go usunąć.
    """

    code:         ErrorCode
    path:         str
    message:      str
    expected_fix: str
    details:      dict[str, Any] | None = None


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik walidacji. Ostrzeżenia nie wpływają na is_valid; normalized jest
    None, gdy baza nie przeszła etapu A.
    """

    is_valid:   bool
    errors:     list[ValidationError] = field(default_factory=list)
    warnings:   list[str] = field(default_factory=list)
    normalized: dict[str, Any] | None = None

    def codes(self) -> list[ErrorCode]:
        return [e.code for e in self.errors]

    def to_dict(self, include_normalized: bool = False) -> dict[str, Any]:
        """Postać JSON raportu (kody jako napisy)."""
        out: dict[str, Any] = {
            "is_valid": self.is_valid,
            "errors":   [asdict(e) | {"code": str(e.code), "stage": e.code.stage} for e in self.errors],
            "warnings": list(self.warnings),
        }
        if include_normalized and self.normalized is not None:
            out["normalized"] = self.normalized
        return out
