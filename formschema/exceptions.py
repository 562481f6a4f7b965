# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for formschema.

Validation failures are *not* exceptions: they are messages collected into an
error report. The classes below signal programmer errors (a broken schema, a
schema file that cannot be read, a malformed injected report).
"""

from __future__ import annotations

from typing import Optional


class FormSchemaError(Exception):
    """Base class for every error raised by formschema."""


class InvalidSchemaError(FormSchemaError):
    """Raised when a schema cannot be interpreted.

    Covers unknown constraint names, malformed parameter shapes, non-callable
    function slots, unknown pattern names and invalid regular expressions.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        constraint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.constraint = constraint


class SchemaFileError(FormSchemaError):
    """Raised when a schema file cannot be located or parsed."""


class InvalidErrorReportError(FormSchemaError):
    """Raised when an error report does not have the ``{field: [str, ...]}`` shape."""


__all__ = [
    "FormSchemaError",
    "InvalidSchemaError",
    "SchemaFileError",
    "InvalidErrorReportError",
]
