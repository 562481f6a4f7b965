# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint evaluation.

Two registries map a constraint name to the function implementing it: one
for scalar values and one for file descriptors. The value under test picks
the registry, the constraint name picks the function. A name missing from
the selected registry is a schema error, never a pass.
"""

from __future__ import annotations

import logging
import operator
from numbers import Number
from typing import Any, Callable, Dict, Final, Optional

from .base import Constraint, DataRecord, FileDescriptor, is_empty, is_file_value
from .params import parse_constraint, unknown_constraint_error
from .patterns import matches_pattern

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Constraint, DataRecord], Any]

SCALAR_CONSTRAINTS: Dict[str, Handler] = {}
FILE_CONSTRAINTS: Dict[str, Handler] = {}


def scalar_constraint(*names: str) -> Callable[[Handler], Handler]:
    def register(handler: Handler) -> Handler:
        for name in names:
            SCALAR_CONSTRAINTS[name] = handler
        return handler

    return register


def file_constraint(*names: str) -> Callable[[Handler], Handler]:
    def register(handler: Handler) -> Handler:
        for name in names:
            FILE_CONSTRAINTS[name] = handler
        return handler

    return register


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_number(value: Any) -> Optional[float]:
    """Coerce form input to a number; ``None`` when it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Number):
        return value  # type: ignore[return-value]
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _compare(op: Callable[[Any, Any], bool], left: Any, right: Any) -> bool:
    lhs, rhs = _to_number(left), _to_number(right)
    if lhs is None or rhs is None:
        return False
    return op(lhs, rhs)


def _length(value: Any) -> int:
    if value is None:
        return 0
    try:
        return len(value)
    except TypeError:
        return len(str(value))


def _text(value: Any) -> str:
    return "" if value is None else str(value)


_COMPARISONS = {
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}

_SIZE_COMPARISONS = {
    "sizeEqual": operator.eq,
    "sizeNotEqual": operator.ne,
    "sizeGt": operator.gt,
    "sizeGte": operator.ge,
    "sizeLt": operator.lt,
    "sizeLte": operator.le,
}


# ---------------------------------------------------------------------------
# Scalar constraints
# ---------------------------------------------------------------------------


@scalar_constraint("required")
def _required(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return bool(value)


@scalar_constraint("min")
def _min_length(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return _length(value) >= constraint.arg


@scalar_constraint("max")
def _max_length(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return _length(value) <= constraint.arg


@scalar_constraint("equal")
def _equal(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return value == constraint.arg


@scalar_constraint("notEqual")
def _not_equal(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return value != constraint.arg


@scalar_constraint("gt", "gte", "lt", "lte")
def _numeric(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return _compare(_COMPARISONS[constraint.name], value, constraint.arg)


@scalar_constraint("equalField")
def _equal_field(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return value == data.get(constraint.arg)


@scalar_constraint("notEqualField")
def _not_equal_field(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return value != data.get(constraint.arg)


@scalar_constraint("gtField", "gteField", "ltField", "lteField")
def _numeric_field(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    op = _COMPARISONS[constraint.name[: -len("Field")]]
    return _compare(op, value, data.get(constraint.arg))


@scalar_constraint("in")
def _in(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return value in constraint.arg


@scalar_constraint("notIn")
def _not_in(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return value not in constraint.arg


@scalar_constraint("regexp")
def _regexp(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    return constraint.arg.search(_text(value)) is not None


@scalar_constraint("pattern")
def _pattern(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    text = _text(value)
    if not text:
        # Emptiness is the business of ``required``.
        return True
    return matches_pattern(constraint.arg, text)


# ---------------------------------------------------------------------------
# File constraints
# ---------------------------------------------------------------------------


@file_constraint("required")
def _file_required(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return bool(value.name)


@file_constraint("ext")
def _ext(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return value.extension == constraint.arg


@file_constraint("extAllowed")
def _ext_allowed(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return value.extension in constraint.arg


@file_constraint("extNotAllowed")
def _ext_not_allowed(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return value.extension not in constraint.arg


@file_constraint(*_SIZE_COMPARISONS)
def _size(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return _compare(_SIZE_COMPARISONS[constraint.name], value.size, constraint.arg)


@file_constraint("type")
def _type(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return value.type == constraint.arg


@file_constraint("typeIn")
def _type_in(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return value.type in constraint.arg


@file_constraint("typeNotIn")
def _type_not_in(value: FileDescriptor, constraint: Constraint, data: DataRecord) -> bool:
    return value.type not in constraint.arg


# ---------------------------------------------------------------------------
# Custom functions (both registries)
# ---------------------------------------------------------------------------


@scalar_constraint("validator")
@file_constraint("validator")
def _validator(value: Any, constraint: Constraint, data: DataRecord) -> Any:
    # The raw result is returned: a non-empty string is the failure message.
    return constraint.arg(value, data)


@scalar_constraint("validate")
@file_constraint("validate")
def _validate(value: Any, constraint: Constraint, data: DataRecord) -> bool:
    if len(constraint.args) == 2:
        function, options = constraint.args
        return bool(function(value, options, data))
    return bool(constraint.arg(value, data))


class ConstraintEvaluator:
    """Evaluate one constraint against one value.

    Stateless: the registries are read-only once the module is imported, so a
    single instance may be shared between threads.
    """

    def __init__(
        self,
        scalar_constraints: Optional[Dict[str, Handler]] = None,
        file_constraints: Optional[Dict[str, Handler]] = None,
    ):
        self._scalar = dict(SCALAR_CONSTRAINTS if scalar_constraints is None else scalar_constraints)
        self._file = dict(FILE_CONSTRAINTS if file_constraints is None else file_constraints)

    def check(
        self,
        constraint: Constraint,
        value: Any,
        data: DataRecord,
        *,
        field: Optional[str] = None,
    ) -> Any:
        """Evaluate an already parsed *constraint*.

        Returns a boolean for every constraint except ``validator``, whose
        function result is passed through untouched.

        Raises:
            InvalidSchemaError: the constraint does not apply to this kind of value.
                A blank scalar passes file-only constraints instead, so an
                empty upload is reported by ``required`` alone.
        """
        if is_file_value(value):
            registry = self._file
            value = FileDescriptor.from_value(value)
        else:
            registry = self._scalar

        handler = registry.get(constraint.name)
        if handler is None:
            if registry is self._scalar and is_empty(value) and constraint.name in self._file:
                # An upload left empty arrives as a blank scalar; only ``required`` speaks for it.
                return True
            raise unknown_constraint_error(field, [constraint.name], registry)
        return handler(value, constraint, data)

    def evaluate(self, name: str, value: Any, params: Any, data: DataRecord) -> Any:
        """Parse *params* for constraint *name* and evaluate it against *value*."""
        return self.check(parse_constraint(name, params), value, data)


_EVALUATOR: Final[ConstraintEvaluator] = ConstraintEvaluator()


def get_constraint_evaluator() -> ConstraintEvaluator:
    """Return the process-wide constraint evaluator instance."""

    return _EVALUATOR


def evaluate(name: str, value: Any, params: Any, data: DataRecord) -> Any:
    return _EVALUATOR.evaluate(name, value, params, data)


__all__ = [
    "ConstraintEvaluator",
    "FILE_CONSTRAINTS",
    "SCALAR_CONSTRAINTS",
    "evaluate",
    "file_constraint",
    "get_constraint_evaluator",
    "scalar_constraint",
]
