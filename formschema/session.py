# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Host-side form state around a :class:`SchemaValidator`.

A UI integration forwards its events here: a field change, a key press, a
submit, a reset. The session keeps the displayed error report and a small
status machine, and never talks to the UI itself.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Mapping, Optional, Union

from .validation import DataRecord, ErrorReport, SchemaValidator
from .validation.report import merge_field_report, normalize_report

logger = logging.getLogger(__name__)


class FormStatus(str, enum.Enum):
    PRISTINE = "pristine"
    DIRTY = "dirty"
    VALIDATED = "validated"


class FormSession:
    """Error state and submission status for one form instance."""

    def __init__(self, schema: Union[SchemaValidator, Mapping[str, Any]]):
        self.validator = schema if isinstance(schema, SchemaValidator) else SchemaValidator(schema)
        self._errors: ErrorReport = {}
        self._status = FormStatus.PRISTINE

    @property
    def errors(self) -> ErrorReport:
        return {field: list(messages) for field, messages in self._errors.items()}

    @property
    def status(self) -> FormStatus:
        return self._status

    @property
    def is_validated(self) -> bool:
        return self._status is FormStatus.VALIDATED

    def touch(self) -> None:
        """Record a field mutation that does not trigger validation."""
        self._status = FormStatus.DIRTY

    def change(self, field: str, data: DataRecord) -> ErrorReport:
        """Re-validate *field* after it changed and merge the result.

        Only *field*'s entry is replaced; other fields keep their messages
        until the next submit.
        """
        partial = self.validator.validate_field(field, data)
        self._errors = merge_field_report(self._errors, field, partial)
        self._status = FormStatus.DIRTY
        return partial

    def submit(
        self,
        data: DataRecord,
        on_valid: Optional[Callable[[DataRecord], Any]] = None,
    ) -> ErrorReport:
        """Validate the whole form and replace the error state.

        *on_valid* is called with *data* only when the report is empty.
        """
        report = self.validator.validate_form(data)
        self._errors = report
        if report:
            self._status = FormStatus.DIRTY
            logger.debug("Submit rejected; invalid fields: %s", ", ".join(report))
            return self.errors

        self._status = FormStatus.VALIDATED
        if on_valid is not None:
            on_valid(data)
        return {}

    def set_errors(self, report: Mapping[str, Any]) -> None:
        """Replace the displayed errors with a caller-supplied report.

        Used to surface messages that did not come from the schema, for example
        a server response. Empty message lists are dropped.
        """
        self._errors = normalize_report(report)

    def reset(self) -> None:
        self._errors = {}
        self._status = FormStatus.PRISTINE


__all__ = ["FormSession", "FormStatus"]
