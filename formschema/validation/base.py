# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Shared data structures for the validation package."""

from __future__ import annotations

import enum
import mimetypes
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

DataRecord = Mapping[str, Any]
ErrorReport = Dict[str, List[str]]

DEFAULT_MIME_TYPE = "application/octet-stream"

_SCALAR_TYPES = (str, bytes, bytearray, int, float, bool)
_SIZED_SCALARS = (str, bytes, bytearray, list, tuple, set, frozenset)


@dataclass(frozen=True)
class FileDescriptor:
    """Metadata standing in for an uploaded file: ``name``, ``size`` and MIME ``type``."""

    name: str
    size: int = 0
    type: str = ""

    @property
    def extension(self) -> str:
        """Text after the final ``.`` of the name (the whole name if it has none)."""
        return self.name.rsplit(".", 1)[-1]

    @classmethod
    def from_value(cls, value: Any) -> "FileDescriptor":
        if isinstance(value, FileDescriptor):
            return value
        if isinstance(value, Mapping):
            return cls(
                name=value.get("name") or "",
                size=value.get("size") or 0,
                type=value.get("type") or "",
            )
        return cls(
            name=getattr(value, "name", "") or "",
            size=getattr(value, "size", 0) or 0,
            type=getattr(value, "type", "") or "",
        )

    @classmethod
    def from_path(cls, path: Union[str, "os.PathLike[str]"]) -> "FileDescriptor":
        """Describe a file on disk the way a browser describes an upload."""
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            size=path.stat().st_size,
            type=mime_type or DEFAULT_MIME_TYPE,
        )


def is_file_value(value: Any) -> bool:
    """Return True when *value* should be checked with the file constraint set.

    The only signal is the presence of a ``name`` (mapping key or attribute).
    Enum members carry a ``name`` too but are always scalars.
    """
    if value is None or isinstance(value, _SCALAR_TYPES) or isinstance(value, enum.Enum):
        return False
    if isinstance(value, FileDescriptor):
        return True
    if isinstance(value, Mapping):
        return "name" in value
    return hasattr(value, "name")


def is_empty(value: Any) -> bool:
    """Return True for a missing or zero-length scalar."""
    if value is None:
        return True
    if isinstance(value, _SIZED_SCALARS):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class Constraint:
    """A parsed constraint declaration.

    ``args`` holds the positional arguments that precede the message in the
    declared params; ``message`` is ``None`` only for ``validator``.
    """

    name: str
    args: Tuple[Any, ...] = ()
    message: Optional[str] = None
    raw: Any = field(default=None, compare=False, repr=False)

    @property
    def arg(self) -> Any:
        return self.args[0]


__all__ = [
    "Constraint",
    "DataRecord",
    "DEFAULT_MIME_TYPE",
    "ErrorReport",
    "FileDescriptor",
    "is_empty",
    "is_file_value",
]
