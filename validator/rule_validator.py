"""
validator/rule_validator.py — walidator bazy wiedzy (reguły + fakty).

RuleSetValidator.validate(kb_json) -> ValidationReport

Etapy:
  A — JSON Schema           (jsonschema, Draft 2020-12; fail-fast)
  B — reguły                (przesłanki niepuste, unikalne id)
  C — nazwy propozycji      (wzorzec ^[A-Z0-9_]+$ po normalizacji)
  D — fakty                 (jedna wartość na propozycję po normalizacji)

Ostrzeżenia (nie wpływają na is_valid):
  - nazwy nieznormalizowane (np. małe litery)
  - brak id reguły (zostanie nadane automatycznie)
  - powtórzone przesłanki w regule
  - konkluzja występująca wśród własnych przesłanek
  - cykle w grafie reguł (resolver je obsługuje, ale mogą blokować wnioskowanie)
  - przesłanki, których nic nie wyprowadza i które nie są faktami (będą pytane)
"""

from __future__ import annotations

from typing import Any

import jsonschema

from data_model import NAME_RE

from .normalizer import normalize_knowledge_base, name_or_empty
from .types import ErrorCode, ValidationError, ValidationReport

# Limit błędów — po przekroczeniu przerywamy dalsze etapy
MAX_ERRORS = 20

KB_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "propositions": {"type": "array", "items": {"type": "string"}},
        "rules": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["premises", "conclusion"],
                "properties": {
                    "id":         {"type": ["string", "null"]},
                    "premises":   {"type": "array", "items": {"type": "string"}},
                    "conclusion": {"type": "string"},
                },
            },
        },
        "facts": {
            "type": "object",
            "additionalProperties": {"type": "boolean"},
        },
    },
}


# ---------------------------------------------------------------------------
# Funkcje pomocnicze
# ---------------------------------------------------------------------------

def find_cycles(rules: list[dict[str, Any]]) -> list[list[str]]:
    """
    Znajduje cykle w grafie przesłanka → konkluzja (DFS, krawędzie wsteczne).

    Returns:
        Lista cykli; każdy jako ścieżka [X, ..., X]. Kolejność deterministyczna.
    """
    graph: dict[str, list[str]] = {}
    for rule in rules:
        for p in rule.get("premises", []):
            graph.setdefault(p, []).append(rule.get("conclusion", ""))

    cycles: list[list[str]] = []
    state: dict[str, int] = {}  # 1 = na stosie, 2 = zamknięty
    path: list[str] = []

    def visit(node: str) -> None:
        state[node] = 1
        path.append(node)
        for nxt in graph.get(node, []):
            if state.get(nxt) == 1:
                cycles.append(path[path.index(nxt):] + [nxt])
            elif nxt not in state:
                visit(nxt)
        path.pop()
        state[node] = 2

    for node in graph:
        if node not in state:
            visit(node)
    return cycles


# ---------------------------------------------------------------------------
# RuleSetValidator
# ---------------------------------------------------------------------------

class RuleSetValidator:
    """
    Walidator bazy wiedzy w formacie JSON.

    Użycie:
        validator = RuleSetValidator()
        report    = validator.validate(json.loads(path.read_text()))
        if not report.is_valid:
            for e in report.errors:
                print(e.code, e.path, e.message)
    """

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        self._schema = schema if schema is not None else KB_SCHEMA

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, kb_json: dict[str, Any]) -> ValidationReport:
        """
        Waliduje bazę wiedzy i zwraca ValidationReport.

        Args:
            kb_json: słownik (po json.loads) z bazą wiedzy
        """
        errors: list[ValidationError] = []
        warnings: list[str] = []

        # A — JSON Schema (fail-fast: brak sensu iść dalej przy błędach schematu)
        self._stage_schema(kb_json, errors)
        if errors:
            return ValidationReport(is_valid=False, errors=errors, warnings=warnings)

        kb = normalize_knowledge_base(kb_json)

        # B — reguły
        self._stage_rules(kb, errors, warnings)

        # C — nazwy
        if len(errors) < MAX_ERRORS:
            self._stage_names(kb_json, kb, errors, warnings)

        # D — fakty
        if len(errors) < MAX_ERRORS:
            self._stage_facts(kb_json, errors)

        if len(errors) < MAX_ERRORS:
            self._check_graph(kb, warnings)

        return ValidationReport(
            is_valid=len(errors) == 0,
            errors=errors[:MAX_ERRORS],
            warnings=warnings,
            normalized=kb,
        )

    # ------------------------------------------------------------------
    # Stage A — JSON Schema
    # ------------------------------------------------------------------

    def _stage_schema(self, kb_json: Any, errors: list[ValidationError]) -> None:
        validator = jsonschema.Draft202012Validator(self._schema)
        for e in validator.iter_errors(kb_json):
            path = (
                "/" + "/".join(str(p) for p in e.absolute_path)
                if e.absolute_path
                else "/"
            )
            errors.append(ValidationError(
                code=ErrorCode.SCHEMA_VIOLATION,
                path=path,
                message=e.message,
                expected_fix=f"Popraw naruszenie schematu JSON na ścieżce {path}.",
            ))

    # ------------------------------------------------------------------
    # Stage B — reguły
    # ------------------------------------------------------------------

    def _stage_rules(
        self,
        kb: dict[str, Any],
        errors: list[ValidationError],
        warnings: list[str],
    ) -> None:
        seen_ids: dict[str, int] = {}

        for i, rule in enumerate(kb["rules"]):
            path = f"/rules/{i}"
            rule_id = rule["id"]
            premises: list[str] = rule["premises"]

            if not rule_id:
                warnings.append(f"{path}: reguła bez id — zostanie nadane automatycznie.")
            elif rule_id in seen_ids:
                errors.append(ValidationError(
                    code=ErrorCode.RULE_ID_DUPLICATE,
                    path=f"{path}/id",
                    message=(
                        f"Id '{rule_id}' jest już użyte przez regułę "
                        f"/rules/{seen_ids[rule_id]}."
                    ),
                    expected_fix="Nadaj regule unikalny identyfikator.",
                    details={"id": rule_id, "first": seen_ids[rule_id]},
                ))
            else:
                seen_ids[rule_id] = i

            if not premises:
                errors.append(ValidationError(
                    code=ErrorCode.PREMISES_EMPTY,
                    path=f"{path}/premises",
                    message="Reguła nie ma przesłanek.",
                    expected_fix=(
                        "Dodaj co najmniej jedną przesłankę albo zapisz konkluzję "
                        "jako fakt w sekcji 'facts'."
                    ),
                ))
                continue

            if rule["conclusion"] in premises:
                warnings.append(
                    f"{path}: konkluzja '{rule['conclusion']}' występuje wśród własnych "
                    f"przesłanek (reguła nigdy jej nie wyprowadzi)."
                )

            if len(set(premises)) != len(premises):
                warnings.append(f"{path}/premises: powtórzone przesłanki {premises}.")

    # ------------------------------------------------------------------
    # Stage C — nazwy propozycji
    # ------------------------------------------------------------------

    def _stage_names(
        self,
        raw: dict[str, Any],
        kb: dict[str, Any],
        errors: list[ValidationError],
        warnings: list[str],
    ) -> None:
        named: list[tuple[str, str, str]] = []  # (ścieżka, surowa, znormalizowana)

        for i, name in enumerate(raw.get("propositions", [])):
            named.append((f"/propositions/{i}", name, kb["propositions"][i]))
        for i, rule in enumerate(raw.get("rules", [])):
            norm_rule = kb["rules"][i]
            for j, p in enumerate(rule.get("premises", [])):
                named.append((f"/rules/{i}/premises/{j}", p, norm_rule["premises"][j]))
            named.append((f"/rules/{i}/conclusion", rule["conclusion"], norm_rule["conclusion"]))
        for name in raw.get("facts", {}):
            named.append((f"/facts/{name}", name, name_or_empty(name)))

        for path, raw_name, norm in named:
            if not NAME_RE.match(norm):
                errors.append(ValidationError(
                    code=ErrorCode.NAME_INVALID,
                    path=path,
                    message=f"Nieprawidłowa nazwa propozycji: '{raw_name}'.",
                    expected_fix="Używaj liter, cyfr i '_' (np. 'FIEBRE', 'K2').",
                    details={"name": raw_name},
                ))
                if len(errors) >= MAX_ERRORS:
                    return
            elif raw_name != norm:
                warnings.append(f"{path}: nazwa '{raw_name}' zostanie zapisana jako '{norm}'.")

    # ------------------------------------------------------------------
    # Stage D — fakty
    # ------------------------------------------------------------------

    def _stage_facts(self, raw: dict[str, Any], errors: list[ValidationError]) -> None:
        seen: dict[str, tuple[str, bool]] = {}
        for name, value in raw.get("facts", {}).items():
            norm = name_or_empty(name)
            if norm in seen and seen[norm][1] != value:
                first_name, first_value = seen[norm]
                errors.append(ValidationError(
                    code=ErrorCode.FACT_CONFLICT,
                    path=f"/facts/{name}",
                    message=(
                        f"Propozycja '{norm}' ma dwie wartości: "
                        f"'{first_name}'={first_value} i '{name}'={value}."
                    ),
                    expected_fix="Zostaw jedną wartość dla propozycji.",
                    details={"name": norm},
                ))
            else:
                seen.setdefault(norm, (name, value))

    # ------------------------------------------------------------------
    # Graf reguł (tylko ostrzeżenia)
    # ------------------------------------------------------------------

    def _check_graph(self, kb: dict[str, Any], warnings: list[str]) -> None:
        for cycle in find_cycles(kb["rules"]):
            warnings.append(f"Cykl w grafie reguł: {' → '.join(cycle)}.")

        concluded = {r["conclusion"] for r in kb["rules"]}
        asked: dict[str, None] = {}
        for rule in kb["rules"]:
            for p in rule["premises"]:
                if p not in concluded and p not in kb["facts"]:
                    asked[p] = None
        if asked:
            warnings.append(
                "Propozycje bez reguł i bez faktów (będą pytane): "
                + ", ".join(asked) + "."
            )
