"""Validation package - constraint evaluation and schema validation.

This package is pure: it reads a schema and a data record and returns an
error report. Nothing here touches a UI, performs I/O or keeps state.
"""

from .base import Constraint, DataRecord, ErrorReport, FileDescriptor, is_empty, is_file_value
from .constraints import ConstraintEvaluator, evaluate, get_constraint_evaluator
from .params import PARAM_SHAPES, parse_constraint
from .patterns import PATTERNS
from .report import merge_field_report, normalize_report
from .schema import SchemaValidator, compile_schema, is_vacuously_valid

__all__ = [
    "Constraint",
    "ConstraintEvaluator",
    "DataRecord",
    "ErrorReport",
    "FileDescriptor",
    "PARAM_SHAPES",
    "PATTERNS",
    "SchemaValidator",
    "compile_schema",
    "evaluate",
    "get_constraint_evaluator",
    "is_empty",
    "is_file_value",
    "is_vacuously_valid",
    "merge_field_report",
    "normalize_report",
    "parse_constraint",
]
