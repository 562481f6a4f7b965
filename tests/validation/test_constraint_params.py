# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Tests for parameter parsing at schema-load time.

A malformed declaration must be rejected before any data is validated,
never turned into a silent pass or a runtime index error.
"""

from __future__ import annotations

import re

import pytest

from formschema.exceptions import InvalidSchemaError
from formschema.validation import Constraint, parse_constraint
from formschema.validation.params import parse_field_rules


def test_message_is_last_element():
    constraint = parse_constraint("min", [4, "Too short"])
    assert constraint == Constraint("min", (4,), "Too short")


def test_required_accepts_bare_or_wrapped_message():
    assert parse_constraint("required", "Required").message == "Required"
    assert parse_constraint("required", ["Required"]).message == "Required"


def test_required_without_message_rejected():
    with pytest.raises(InvalidSchemaError, match="message string"):
        parse_constraint("required", True)


def test_validator_has_no_message():
    constraint = parse_constraint("validator", lambda v, d: None)
    assert constraint.message is None


def test_validator_must_be_callable():
    with pytest.raises(InvalidSchemaError, match="callable"):
        parse_constraint("validator", "not a function")


@pytest.mark.parametrize(
    "params",
    [
        ["not callable", "message"],
        ["not callable", {"by": 3}, "message"],
    ],
)
def test_validate_requires_callable_first_element(params):
    with pytest.raises(InvalidSchemaError, match="callable"):
        parse_constraint("validate", params)


def test_validate_rejects_extra_arguments():
    with pytest.raises(InvalidSchemaError):
        parse_constraint("validate", [lambda v, d: True, 1, 2, "message"])


def test_missing_message_rejected():
    with pytest.raises(InvalidSchemaError, match=r"\[argument..., message\]"):
        parse_constraint("min", [4])


def test_non_string_message_rejected():
    with pytest.raises(InvalidSchemaError, match="message string"):
        parse_constraint("max", [4, 5])


@pytest.mark.parametrize(
    "name,params",
    [
        ("min", ["4", "m"]),
        ("max", [True, "m"]),
        ("sizeGt", ["big", "m"]),
        ("equalField", [3, "m"]),
        ("in", ["users", "m"]),
        ("typeIn", [{"a": 1}, "m"]),
    ],
)
def test_argument_types_checked(name, params):
    with pytest.raises(InvalidSchemaError) as exc_info:
        parse_constraint(name, params, field="f")
    assert exc_info.value.field == "f"
    assert exc_info.value.constraint == name


def test_unknown_pattern_rejected():
    with pytest.raises(InvalidSchemaError, match="unknown pattern 'phone'"):
        parse_constraint("pattern", ["phone", "m"])


def test_invalid_regexp_rejected():
    with pytest.raises(InvalidSchemaError, match="Invalid regex pattern"):
        parse_constraint("regexp", ["[unclosed(", "m"], field="code")


def test_regexp_string_compiled_once():
    constraint = parse_constraint("regexp", [r"^\d+$", "m"])
    assert isinstance(constraint.arg, re.Pattern)


def test_field_rules_keep_declaration_order():
    constraints = parse_field_rules(
        "login",
        {"required": "Required", "max": [8, "Too long"], "min": [2, "Too short"]},
    )
    assert [c.name for c in constraints] == ["required", "max", "min"]


def test_all_unknown_constraints_reported():
    with pytest.raises(InvalidSchemaError) as exc_info:
        parse_field_rules("limit", {"maximum": [1, "m"], "minimum": [0, "m"], "min": [0, "m"]})

    message = str(exc_info.value)
    assert "maximum" in message
    assert "minimum" in message
    assert "limit" in message
    assert "Valid constraints" in message


def test_field_rules_must_be_mapping():
    with pytest.raises(InvalidSchemaError, match="must be a mapping"):
        parse_field_rules("login", ["required"])
