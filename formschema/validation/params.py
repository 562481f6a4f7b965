# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Parsing of declared constraint parameters into :class:`Constraint` objects.

Params are checked once, when a schema is compiled, so that a malformed
declaration fails with :class:`InvalidSchemaError` before any data is seen.
"""

from __future__ import annotations

import logging
import re
from numbers import Number
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ..exceptions import InvalidSchemaError
from .base import Constraint
from .patterns import PATTERNS

logger = logging.getLogger(__name__)

# Shape of the arguments each constraint expects before its message.
MESSAGE_ONLY = "message"
VALUE = "value"
LENGTH = "length"
NUMBER = "number"
TEXT = "text"
FIELD = "field"
COLLECTION = "collection"
REGEXP = "regexp"
PATTERN = "pattern"
VALIDATOR = "validator"
VALIDATE = "validate"

PARAM_SHAPES: Dict[str, str] = {
    "required": MESSAGE_ONLY,
    # scalar
    "min": LENGTH,
    "max": LENGTH,
    "equal": VALUE,
    "notEqual": VALUE,
    "gt": VALUE,
    "gte": VALUE,
    "lt": VALUE,
    "lte": VALUE,
    "equalField": FIELD,
    "notEqualField": FIELD,
    "gtField": FIELD,
    "gteField": FIELD,
    "ltField": FIELD,
    "lteField": FIELD,
    "in": COLLECTION,
    "notIn": COLLECTION,
    "regexp": REGEXP,
    "pattern": PATTERN,
    # file
    "ext": TEXT,
    "extAllowed": COLLECTION,
    "extNotAllowed": COLLECTION,
    "sizeEqual": NUMBER,
    "sizeNotEqual": NUMBER,
    "sizeGt": NUMBER,
    "sizeGte": NUMBER,
    "sizeLt": NUMBER,
    "sizeLte": NUMBER,
    "type": TEXT,
    "typeIn": COLLECTION,
    "typeNotIn": COLLECTION,
    # custom
    "validator": VALIDATOR,
    "validate": VALIDATE,
}


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _fail(field: Optional[str], name: str, problem: str) -> InvalidSchemaError:
    where = f"'{name}' on field '{field}'" if field is not None else f"'{name}'"
    return InvalidSchemaError(f"Constraint {where} {problem}", field=field, constraint=name)


def unknown_constraint_error(
    field: Optional[str], names: Sequence[str], valid: Iterable[str]
) -> InvalidSchemaError:
    where = f" on field '{field}'" if field is not None else ""
    label = "constraint" if len(names) == 1 else "constraints"
    quoted = ", ".join(f"'{name}'" for name in names)
    error = InvalidSchemaError(
        f"Unknown {label} {quoted}{where}. Valid constraints: {', '.join(sorted(valid))}",
        field=field,
        constraint=names[0],
    )
    logger.error("%s", error.message)
    return error


def _split(field: Optional[str], name: str, params: Any) -> Tuple[Tuple[Any, ...], str]:
    if not _is_sequence(params) or len(params) < 2:
        raise _fail(field, name, "expects a sequence of [argument..., message]")
    *args, message = params
    if not isinstance(message, str):
        raise _fail(field, name, f"must end with a message string, got {message!r}")
    return tuple(args), message


def _compile_regexp(field: Optional[str], name: str, expression: Any) -> re.Pattern[str]:
    if isinstance(expression, re.Pattern):
        return expression
    if not isinstance(expression, str):
        raise _fail(field, name, f"expects a regular expression, got {expression!r}")
    try:
        return re.compile(expression)
    except re.error as exc:
        raise InvalidSchemaError(
            f"Invalid regex pattern {expression!r} in constraint '{name}'"
            + (f" on field '{field}'" if field is not None else "")
            + f": {exc}",
            field=field,
            constraint=name,
        ) from exc


def parse_constraint(name: str, params: Any, field: Optional[str] = None) -> Constraint:
    """Turn a ``(name, params)`` declaration into a :class:`Constraint`.

    Raises:
        InvalidSchemaError: unknown *name* or a params shape that does not fit it.
    """
    shape = PARAM_SHAPES.get(name)
    if shape is None:
        raise unknown_constraint_error(field, [name], PARAM_SHAPES)

    if shape == MESSAGE_ONLY:
        if _is_sequence(params) and len(params) == 1:
            params = params[0]
        if not isinstance(params, str):
            raise _fail(field, name, f"expects a message string, got {params!r}")
        return Constraint(name, (), params, raw=params)

    if shape == VALIDATOR:
        if not callable(params):
            raise _fail(field, name, f"expects a callable, got {params!r}")
        return Constraint(name, (params,), None, raw=params)

    args, message = _split(field, name, params)

    if shape == VALIDATE:
        if len(args) not in (1, 2):
            raise _fail(field, name, "expects [function, message] or [function, options, message]")
        if not callable(args[0]):
            raise _fail(field, name, f"expects a callable first element, got {args[0]!r}")
        return Constraint(name, args, message, raw=params)

    if len(args) != 1:
        raise _fail(field, name, f"expects exactly one argument before the message, got {len(args)}")
    (arg,) = args

    if shape == LENGTH:
        if isinstance(arg, bool) or not isinstance(arg, int):
            raise _fail(field, name, f"expects an integer length, got {arg!r}")
    elif shape == NUMBER:
        if isinstance(arg, bool) or not isinstance(arg, Number):
            raise _fail(field, name, f"expects a number, got {arg!r}")
    elif shape in (TEXT, FIELD):
        if not isinstance(arg, str):
            raise _fail(field, name, f"expects a string, got {arg!r}")
    elif shape == COLLECTION:
        if isinstance(arg, (str, bytes)) or not isinstance(arg, (list, tuple, set, frozenset)):
            raise _fail(field, name, f"expects a list of values, got {arg!r}")
    elif shape == REGEXP:
        arg = _compile_regexp(field, name, arg)
    elif shape == PATTERN:
        if not isinstance(arg, str) or arg not in PATTERNS:
            raise _fail(
                field,
                name,
                f"references unknown pattern {arg!r}. Available patterns: {', '.join(sorted(PATTERNS))}",
            )

    return Constraint(name, (arg,), message, raw=params)


def parse_field_rules(field: str, rules: Any) -> Tuple[Constraint, ...]:
    """Parse every constraint declared for *field*, keeping declaration order."""
    if not isinstance(rules, Mapping):
        raise InvalidSchemaError(
            f"Rules for field '{field}' must be a mapping of constraint name to params, got {rules!r}",
            field=field,
        )

    unknown = [str(name) for name in rules if name not in PARAM_SHAPES]
    if unknown:
        raise unknown_constraint_error(field, unknown, PARAM_SHAPES)

    return tuple(parse_constraint(name, params, field) for name, params in rules.items())


__all__ = [
    "PARAM_SHAPES",
    "parse_constraint",
    "parse_field_rules",
    "unknown_constraint_error",
]
