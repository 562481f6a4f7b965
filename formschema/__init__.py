# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""formschema - declarative validation of form data.

.. code-block:: python

    from formschema import SchemaValidator

    validator = SchemaValidator({"login": {"required": "Required"}})
    validator.validate_form({"login": ""})  # {"login": ["Required"]}
"""

from .exceptions import FormSchemaError, InvalidErrorReportError, InvalidSchemaError, SchemaFileError
from .schema_files import load_schema, load_schema_file, locate_schema_file
from .session import FormSession, FormStatus
from .validation import (
    ConstraintEvaluator,
    ErrorReport,
    FileDescriptor,
    SchemaValidator,
    evaluate,
)

__version__ = "0.3.0"

__all__ = [
    "ConstraintEvaluator",
    "ErrorReport",
    "FileDescriptor",
    "FormSchemaError",
    "FormSession",
    "FormStatus",
    "InvalidErrorReportError",
    "InvalidSchemaError",
    "SchemaFileError",
    "SchemaValidator",
    "evaluate",
    "load_schema",
    "load_schema_file",
    "locate_schema_file",
]
