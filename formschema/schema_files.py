# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Loading schemas from YAML or JSON files.

Lookup order when no explicit path is given:

1. ``FORMSCHEMA_SCHEMA_FILE``
2. ``$XDG_CONFIG_HOME/formschema/schema.{yaml,yml,json}`` (``~/.config`` by default)
3. ``./formschema.{yaml,yml,json}``

Custom functions are referenced as ``"package.module:attribute"`` strings in
``validator`` and ``validate`` slots and imported when the file is loaded.
"""

from __future__ import annotations

import importlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

import yaml

from .exceptions import InvalidSchemaError, SchemaFileError
from .validation import SchemaValidator

logger = logging.getLogger(__name__)

SCHEMA_FILE_ENV = "FORMSCHEMA_SCHEMA_FILE"
CONFIG_FILENAMES = ("schema.yaml", "schema.yml", "schema.json")
PROJECT_FILENAMES = ("formschema.yaml", "formschema.yml", "formschema.json")
_YAML_SUFFIXES = (".yaml", ".yml")

PathLike = Union[str, "os.PathLike[str]"]


def _config_home() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg).expanduser() if xdg else Path.home() / ".config"


def _candidate_groups(cwd: Path) -> List[List[Path]]:
    groups: List[List[Path]] = []
    override = os.environ.get(SCHEMA_FILE_ENV)
    if override:
        groups.append([Path(override).expanduser()])
    config_dir = _config_home() / "formschema"
    groups.append([config_dir / name for name in CONFIG_FILENAMES])
    groups.append([cwd / name for name in PROJECT_FILENAMES])
    return groups


def iter_schema_candidates(cwd: Optional[Path] = None) -> Iterator[Path]:
    """Yield every path that may hold a schema, in lookup order."""
    for group in _candidate_groups(cwd or Path.cwd()):
        yield from group


def locate_schema_file(schema_path: Optional[PathLike] = None, cwd: Optional[Path] = None) -> Path:
    """Return the schema file to load.

    Raises:
        SchemaFileError: the file does not exist, none was found, or one
            location holds more than one schema file.
    """
    if schema_path is not None:
        path = Path(schema_path).expanduser()
        if not path.is_file():
            raise SchemaFileError(f"Schema file not found: {path}")
        return path

    override = os.environ.get(SCHEMA_FILE_ENV)
    if override and not Path(override).expanduser().is_file():
        raise SchemaFileError(f"{SCHEMA_FILE_ENV} points to a missing file: {override}")

    searched: List[Path] = []
    for group in _candidate_groups(cwd or Path.cwd()):
        found = [path for path in group if path.is_file()]
        searched.extend(group)
        if len(found) > 1:
            raise SchemaFileError(
                "Multiple schema files found; keep exactly one of: "
                + ", ".join(str(path) for path in found)
            )
        if found:
            logger.debug("Using schema file %s", found[0])
            return found[0]

    raise SchemaFileError(
        "No schema file found. Looked in: " + ", ".join(str(path) for path in searched)
    )


def resolve_callable(reference: str, *, field: Optional[str] = None, constraint: Optional[str] = None) -> Callable[..., Any]:
    """Import ``"package.module:attribute"`` and return the callable it names."""
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise InvalidSchemaError(
            f"Function reference {reference!r} must look like 'package.module:function'",
            field=field,
            constraint=constraint,
        )
    try:
        target: Any = importlib.import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise InvalidSchemaError(
            f"Cannot import function {reference!r}: {exc}", field=field, constraint=constraint
        ) from exc
    if not callable(target):
        raise InvalidSchemaError(
            f"Function reference {reference!r} is not callable", field=field, constraint=constraint
        )
    return target


def _resolve_functions(schema: Mapping[str, Any]) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for field, rules in schema.items():
        if not isinstance(rules, Mapping):
            resolved[field] = rules
            continue
        field_rules = dict(rules)
        validator = field_rules.get("validator")
        if isinstance(validator, str):
            field_rules["validator"] = resolve_callable(validator, field=field, constraint="validator")
        validate = field_rules.get("validate")
        if isinstance(validate, list) and validate and isinstance(validate[0], str):
            field_rules["validate"] = [
                resolve_callable(validate[0], field=field, constraint="validate"),
                *validate[1:],
            ]
        resolved[field] = field_rules
    return resolved


def _parse(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix in _YAML_SUFFIXES:
            return yaml.safe_load(text)
        if path.suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SchemaFileError(f"Cannot parse schema file {path}: {exc}") from exc
    raise SchemaFileError(f"Unsupported schema file type '{path.suffix}' for {path}")


def load_schema_file(path: PathLike) -> Dict[str, Any]:
    """Read a schema file and return the schema mapping with functions imported.

    The document is either the schema itself or a mapping with a ``schema``
    key (optionally next to ``metadata``).
    """
    path = Path(path)
    document = _parse(path)
    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise SchemaFileError(f"Schema file {path} must contain a mapping at the top level")

    if "schema" in document and set(document) <= {"schema", "metadata"}:
        document = document["schema"] or {}
        if not isinstance(document, Mapping):
            raise SchemaFileError(f"'schema' in {path} must be a mapping of field name to rules")

    logger.debug("Loaded %d field(s) from %s", len(document), path)
    return _resolve_functions(document)


def load_schema(schema_path: Optional[PathLike] = None, cwd: Optional[Path] = None) -> SchemaValidator:
    """Locate, read and compile a schema file."""
    return SchemaValidator(load_schema_file(locate_schema_file(schema_path, cwd)))


__all__ = [
    "SCHEMA_FILE_ENV",
    "iter_schema_candidates",
    "load_schema",
    "load_schema_file",
    "locate_schema_file",
    "resolve_callable",
]
