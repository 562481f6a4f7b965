# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for formschema."""

from __future__ import annotations

import time
from typing import Mapping, Sequence

from .runtime import meter

validation_total = meter.create_counter(
    name="formschema.validation.total",
    description="Counts validation calls, partitioned by scope (field/form) and result.",
    unit="1",
)

validation_messages_total = meter.create_counter(
    name="formschema.validation.messages.total",
    description="Counts failure messages produced by validation calls.",
    unit="1",
)

validation_latency_ms = meter.create_histogram(
    name="formschema.validation.latency.ms",
    description="Time spent evaluating constraints for a single validation call.",
    unit="ms",
)

schema_error_total = meter.create_counter(
    name="formschema.schema.error.total",
    description="Counts schemas rejected because they could not be interpreted.",
    unit="1",
)


def record_validation(scope: str, report: Mapping[str, Sequence[str]], started_at: float) -> None:
    """Record latency, outcome and message count for one validation call.

    Args:
        scope: ``"field"`` or ``"form"``
        report: The error report that was produced
        started_at: Timestamp from time.perf_counter() when validation started
    """
    duration_ms = (time.perf_counter() - started_at) * 1000.0
    result = "invalid" if report else "valid"
    attributes = {"scope": scope, "result": result}

    validation_latency_ms.record(duration_ms, attributes)
    validation_total.add(1, attributes)
    messages = sum(len(entries) for entries in report.values())
    if messages:
        validation_messages_total.add(messages, {"scope": scope})


__all__ = [
    "record_validation",
    "schema_error_total",
    "validation_latency_ms",
    "validation_messages_total",
    "validation_total",
]
