# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Registry of named patterns usable through the ``pattern`` constraint."""

from __future__ import annotations

import re
from typing import Dict

# Each expression must match the whole value (``fullmatch``).
PATTERNS: Dict[str, re.Pattern[str]] = {
    "email": re.compile(r"\S+@\S+\.\S+"),
    "number": re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)"),
    "double": re.compile(r"[-+]?\d+\.\d+"),
    "integer": re.compile(r"[-+]?\d+"),
    "alpha": re.compile(r"[^`~\-!@#$%^&*()_+={}\[\]|\\:;“’<,>.?๐฿]*"),
}


def get_pattern(name: str) -> re.Pattern[str]:
    """Return the compiled pattern registered under *name* (``KeyError`` if absent)."""
    return PATTERNS[name]


def matches_pattern(name: str, value: str) -> bool:
    return get_pattern(name).fullmatch(value) is not None


__all__ = ["PATTERNS", "get_pattern", "matches_pattern"]
