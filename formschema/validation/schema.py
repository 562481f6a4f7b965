# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Schema validation: run every declared constraint and collect messages."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..exceptions import InvalidSchemaError
from ..telemetry import get_tracer, record_validation, schema_error_total
from .base import Constraint, DataRecord, ErrorReport, is_empty, is_file_value
from .constraints import ConstraintEvaluator, get_constraint_evaluator
from .params import parse_field_rules

logger = logging.getLogger(__name__)


def is_vacuously_valid(constraints: Sequence[Constraint], value: Any) -> bool:
    """An optional field left empty is valid whatever else it declares.

    Applies only to scalars, and only when ``required`` is not declared.
    """
    if any(constraint.name == "required" for constraint in constraints):
        return False
    return not is_file_value(value) and is_empty(value)


def failure_message(constraint: Constraint, outcome: Any) -> Optional[str]:
    """Return the message *constraint* contributes for *outcome*, if any."""
    if constraint.name == "validator":
        if isinstance(outcome, str) and outcome:
            return outcome
        return None
    return None if outcome else constraint.message


def compile_schema(schema: Mapping[str, Any]) -> Dict[str, Tuple[Constraint, ...]]:
    """Parse every field's rules, preserving field and constraint order."""
    if not isinstance(schema, Mapping):
        raise InvalidSchemaError(f"Schema must be a mapping of field name to rules, got {schema!r}")

    compiled: Dict[str, Tuple[Constraint, ...]] = {}
    try:
        for field, rules in schema.items():
            if not isinstance(field, str) or not field:
                raise InvalidSchemaError(f"Field names must be non-empty strings, got {field!r}")
            compiled[field] = parse_field_rules(field, rules)
    except InvalidSchemaError:
        schema_error_total.add(1)
        raise

    logger.debug(
        "Compiled schema with %d fields and %d constraints",
        len(compiled),
        sum(len(constraints) for constraints in compiled.values()),
    )
    return compiled


class SchemaValidator:
    """Validate data records against a schema.

    The schema is compiled once, on construction; afterwards the validator
    holds no mutable state and every call is a pure function of its data.

    .. code-block:: python

        validator = SchemaValidator({
            "login": {"required": "Required", "min": [4, "Too short"]},
            "password": {"equalField": ["confirm", "Passwords differ"]},
        })
        validator.validate_form({"login": "ab", "password": "x", "confirm": "y"})
        # {"login": ["Too short"], "password": ["Passwords differ"]}
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        *,
        evaluator: Optional[ConstraintEvaluator] = None,
    ):
        self._rules = compile_schema(schema)
        self._evaluator = evaluator or get_constraint_evaluator()

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(self._rules)

    def rules_for(self, field: str) -> Tuple[Constraint, ...]:
        return self._rules.get(field, ())

    def validate_field(self, field: str, data: DataRecord) -> ErrorReport:
        """Validate a single *field*; fields absent from the schema yield ``{}``."""
        constraints = self._rules.get(field)
        if constraints is None:
            logger.debug("Field '%s' is not declared in the schema; nothing to validate", field)
            return {}

        started_at = time.perf_counter()
        report = self._check_field(field, constraints, data)
        record_validation("field", report, started_at)
        return report

    def validate_form(self, data: DataRecord) -> ErrorReport:
        """Validate every declared field; data keys outside the schema are ignored."""
        started_at = time.perf_counter()
        report: ErrorReport = {}

        with get_tracer().start_as_current_span(
            "formschema.validate_form",
            attributes={"formschema.fields": len(self._rules)},
        ) as span:
            for field, constraints in self._rules.items():
                report.update(self._check_field(field, constraints, data))
            span.set_attribute("formschema.invalid_fields", len(report))

        record_validation("form", report, started_at)
        logger.debug(
            "Validated %d fields, %d invalid: %s",
            len(self._rules),
            len(report),
            ", ".join(report) or "-",
        )
        return report

    def _check_field(
        self,
        field: str,
        constraints: Sequence[Constraint],
        data: DataRecord,
    ) -> ErrorReport:
        value = data.get(field)
        if is_vacuously_valid(constraints, value):
            return {}

        messages = []
        for constraint in constraints:
            outcome = self._evaluator.check(constraint, value, data, field=field)
            message = failure_message(constraint, outcome)
            if message is not None:
                messages.append(message)

        return {field: messages} if messages else {}


__all__ = [
    "SchemaValidator",
    "compile_schema",
    "failure_message",
    "is_vacuously_valid",
]
