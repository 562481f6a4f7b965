# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Unit tests for single-constraint evaluation."""

from __future__ import annotations

import re

import pytest

from formschema.exceptions import InvalidSchemaError
from formschema.validation import ConstraintEvaluator, FileDescriptor, evaluate, get_constraint_evaluator


# ------------------------------------------------------------------
# Scalar constraints
# ------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,expected",
    [("alice", True), ("", False), (None, False), (0, False), (5, True), ([], False)],
)
def test_required_checks_truthiness(value, expected):
    assert evaluate("required", value, "Required", {}) is expected


@pytest.mark.parametrize(
    "name,value,limit,expected",
    [
        ("min", "abcd", 4, True),
        ("min", "abc", 4, False),
        ("max", "abcd", 4, True),
        ("max", "abcde", 4, False),
        ("min", ["a", "b"], 2, True),
        ("max", 12345, 4, False),
    ],
)
def test_length_constraints(name, value, limit, expected):
    assert evaluate(name, value, [limit, "message"], {}) is expected


def test_equal_and_not_equal():
    assert evaluate("equal", "yes", ["yes", "m"], {}) is True
    assert evaluate("equal", "no", ["yes", "m"], {}) is False
    assert evaluate("notEqual", "no", ["yes", "m"], {}) is True
    assert evaluate("notEqual", "yes", ["yes", "m"], {}) is False


@pytest.mark.parametrize(
    "name,value,threshold,expected",
    [
        ("gt", "10", 5, True),
        ("gt", "5", 5, False),
        ("gte", "5", 5, True),
        ("lt", 4.5, 5, True),
        ("lt", "5", 5, False),
        ("lte", "5.0", 5, True),
        ("gt", "100", "20", True),
    ],
)
def test_numeric_comparisons_coerce_form_input(name, value, threshold, expected):
    assert evaluate(name, value, [threshold, "message"], {}) is expected


@pytest.mark.parametrize("name", ["gt", "gte", "lt", "lte"])
def test_numeric_comparison_with_non_numeric_value_fails(name):
    assert evaluate(name, "abc", [5, "message"], {}) is False


def test_field_comparisons_read_other_field():
    data = {"login": "x", "low": "9", "high": "10"}

    assert evaluate("equalField", "x", ["login", "m"], data) is True
    assert evaluate("equalField", "y", ["login", "m"], data) is False
    assert evaluate("notEqualField", "y", ["login", "m"], data) is True
    # Numeric, not lexicographic: "10" > "9"
    assert evaluate("gtField", "10", ["low", "m"], data) is True
    assert evaluate("gteField", "9", ["low", "m"], data) is True
    assert evaluate("ltField", "9", ["high", "m"], data) is True
    assert evaluate("lteField", "11", ["high", "m"], data) is False


def test_field_comparison_against_missing_field():
    assert evaluate("equalField", "x", ["absent", "m"], {}) is False
    assert evaluate("gtField", "3", ["absent", "m"], {}) is False


def test_membership():
    assert evaluate("in", "users", [["users", "orders"], "m"], {}) is True
    assert evaluate("in", "admin", [["users", "orders"], "m"], {}) is False
    assert evaluate("notIn", "admin", [["users", "orders"], "m"], {}) is True
    assert evaluate("notIn", "users", [["users", "orders"], "m"], {}) is False


def test_regexp_searches_value():
    assert evaluate("regexp", "order-123", [re.compile(r"\d+"), "m"], {}) is True
    assert evaluate("regexp", "order", [re.compile(r"\d+"), "m"], {}) is False


def test_regexp_accepts_string_expression():
    assert evaluate("regexp", "ABC", [r"^[A-Z]+$", "m"], {}) is True
    assert evaluate("regexp", "abc", [r"^[A-Z]+$", "m"], {}) is False


@pytest.mark.parametrize(
    "pattern,value,expected",
    [
        ("email", "user@example.com", True),
        ("email", "user@example", False),
        ("email", "us er@example.com", False),
        ("integer", "42", True),
        ("integer", "-7", True),
        ("integer", "4.2", False),
        ("double", "3.14", True),
        ("double", "3", False),
        ("number", "-2", True),
        ("number", "2.5", True),
        ("number", "two", False),
        ("alpha", "Hello world", True),
        ("alpha", "hello!", False),
        ("alpha", "a-b", False),
    ],
)
def test_named_patterns(pattern, value, expected):
    assert evaluate("pattern", value, [pattern, "m"], {}) is expected


@pytest.mark.parametrize("pattern", ["email", "number", "double", "integer", "alpha"])
def test_pattern_passes_on_empty_value(pattern):
    assert evaluate("pattern", "", [pattern, "m"], {}) is True


def test_validator_returns_raw_result():
    def check(value, data):
        return "Password is too short!" if len(value) < 8 else None

    assert evaluate("validator", "short", check, {}) == "Password is too short!"
    assert evaluate("validator", "long-enough", check, {}) is None


def test_validator_receives_full_record():
    seen = {}

    def check(value, data):
        seen.update(data)
        return None

    evaluate("validator", "v", check, {"other": 1})
    assert seen == {"other": 1}


def test_validate_with_two_elements():
    assert evaluate("validate", "abc", [lambda v, d: v == d["expected"], "m"], {"expected": "abc"}) is True
    assert evaluate("validate", "abd", [lambda v, d: v == d["expected"], "m"], {"expected": "abc"}) is False


def test_validate_with_options():
    def divisible(value, options, data):
        return int(value) % options["by"] == 0

    assert evaluate("validate", "9", [divisible, {"by": 3}, "m"], {}) is True
    assert evaluate("validate", "10", [divisible, {"by": 3}, "m"], {}) is False


def test_custom_function_errors_propagate():
    def broken(value, data):
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        evaluate("validator", "x", broken, {})


# ------------------------------------------------------------------
# File constraints
# ------------------------------------------------------------------


def test_file_required(jpeg_upload):
    assert evaluate("required", jpeg_upload, "Pick a file", {}) is True
    assert evaluate("required", {"name": "", "size": 0, "type": ""}, "Pick a file", {}) is False


def test_file_extension(jpeg_upload):
    assert evaluate("ext", jpeg_upload, ["png", "m"], {}) is False
    assert evaluate("ext", jpeg_upload, ["jpg", "m"], {}) is True
    assert evaluate("extAllowed", jpeg_upload, [["png", "jpg"], "m"], {}) is True
    assert evaluate("extNotAllowed", jpeg_upload, [["exe", "jpg"], "m"], {}) is False


def test_file_extension_uses_final_dot():
    upload = {"name": "archive.tar.gz", "size": 1, "type": "application/gzip"}
    assert evaluate("ext", upload, ["gz", "m"], {}) is True


@pytest.mark.parametrize(
    "name,limit,expected",
    [
        ("sizeEqual", 10, True),
        ("sizeNotEqual", 10, False),
        ("sizeGt", 5, True),
        ("sizeGte", 10, True),
        ("sizeLt", 10, False),
        ("sizeLte", 5, False),
    ],
)
def test_file_size(jpeg_upload, name, limit, expected):
    assert evaluate(name, jpeg_upload, [limit, "m"], {}) is expected


def test_file_type(jpeg_upload):
    assert evaluate("type", jpeg_upload, ["image/jpeg", "m"], {}) is True
    assert evaluate("typeIn", jpeg_upload, [["image/png", "image/gif"], "m"], {}) is False
    assert evaluate("typeNotIn", jpeg_upload, [["image/png", "image/gif"], "m"], {}) is True


def test_file_descriptor_instances_and_objects(png_upload):
    class Upload:
        name = "report.pdf"
        size = 300
        type = "application/pdf"

    assert evaluate("ext", png_upload, ["png", "m"], {}) is True
    assert evaluate("type", Upload(), ["application/pdf", "m"], {}) is True


def test_file_custom_functions_receive_descriptor(jpeg_upload):
    received = []

    def check(value, data):
        received.append(value)
        return None

    evaluate("validator", jpeg_upload, check, {})
    assert received == [FileDescriptor(name="a.jpg", size=10, type="image/jpeg")]


# ------------------------------------------------------------------
# Schema errors
# ------------------------------------------------------------------


def test_unknown_constraint_raises_invalid_schema():
    with pytest.raises(InvalidSchemaError) as exc_info:
        evaluate("maximum", "x", [1, "m"], {})

    assert exc_info.value.constraint == "maximum"
    assert "unknown constraint" in str(exc_info.value).lower()


def test_scalar_constraint_on_file_value_is_schema_error(jpeg_upload):
    with pytest.raises(InvalidSchemaError, match="'min'"):
        evaluate("min", jpeg_upload, [1, "m"], {})


def test_file_constraint_on_scalar_value_is_schema_error():
    with pytest.raises(InvalidSchemaError, match="'ext'"):
        evaluate("ext", "a.png", ["png", "m"], {})


@pytest.mark.parametrize("value", ["", None])
def test_file_constraint_on_empty_scalar_passes(value):
    assert evaluate("ext", value, ["png", "m"], {}) is True
    assert evaluate("sizeLte", value, [10, "m"], {}) is True


def test_evaluator_is_shared_and_stateless():
    assert get_constraint_evaluator() is get_constraint_evaluator()
    assert isinstance(get_constraint_evaluator(), ConstraintEvaluator)
