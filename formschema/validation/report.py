# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Helpers for combining and checking error reports."""

from __future__ import annotations

from typing import Any, Mapping

from ..exceptions import InvalidErrorReportError
from .base import ErrorReport


def normalize_report(report: Mapping[str, Any]) -> ErrorReport:
    """Return a copy of *report* in canonical shape.

    Fields with an empty message list are dropped; anything that is not a
    string field name mapped to a list of strings is rejected.
    """
    if not isinstance(report, Mapping):
        raise InvalidErrorReportError(f"Error report must be a mapping, got {type(report).__name__}")

    normalized: ErrorReport = {}
    for field, messages in report.items():
        if not isinstance(field, str):
            raise InvalidErrorReportError(f"Error report keys must be field names, got {field!r}")
        if isinstance(messages, (str, bytes)) or not isinstance(messages, (list, tuple)):
            raise InvalidErrorReportError(
                f"Errors for field '{field}' must be a list of messages, got {messages!r}"
            )
        bad = [message for message in messages if not isinstance(message, str)]
        if bad:
            raise InvalidErrorReportError(f"Errors for field '{field}' must be strings, got {bad!r}")
        if messages:
            normalized[field] = list(messages)
    return normalized


def merge_field_report(current: Mapping[str, Any], field: str, partial: Mapping[str, Any]) -> ErrorReport:
    """Replace *field*'s entry in *current* with its entry in *partial*.

    Every other field keeps its existing messages.
    """
    merged: ErrorReport = {name: list(messages) for name, messages in current.items() if name != field}
    messages = partial.get(field)
    if messages:
        merged[field] = list(messages)
    return merged


__all__ = ["merge_field_report", "normalize_report"]
