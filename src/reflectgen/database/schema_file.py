# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading and saving of the schema document produced by the extractor.

The schema is stored as JSON for portability. The format is versioned so
that documents written by an incompatible extractor are rejected up front.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from reflectgen.model.entities import Schema

# ###############
# Public Interface
# ###############

SCHEMA_FORMAT_VERSION = "1"


class SchemaFileError(Exception):
    """Raised when a schema document cannot be read or is invalid."""


def parse_schema(data: str, source_label: str = "<string>") -> Schema:
    """Parse a schema from a JSON string.

    Args:
        data: JSON text produced by the extractor or by :func:`dump_schema`.
        source_label: Human-readable label used in error messages.

    Returns:
        The validated :class:`Schema`.

    Raises:
        SchemaFileError: If the JSON is malformed, the format version is not
            recognised, or the document does not match the schema model.
    """
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as exc:
        raise SchemaFileError(f"Invalid JSON in {source_label}: {exc}") from exc

    if not isinstance(obj, dict):
        raise SchemaFileError(f"{source_label}: schema must be a JSON object")

    version = obj.pop("v", None)
    if version != SCHEMA_FORMAT_VERSION:
        raise SchemaFileError(f"{source_label}: unsupported schema format version: {version!r}")

    try:
        return Schema.model_validate(obj)
    except ValidationError as exc:
        raise SchemaFileError(f"Invalid schema {source_label}: {exc}") from exc


def dump_schema(schema: Schema) -> str:
    """Serialize *schema* to an indented JSON string."""
    data = {"v": SCHEMA_FORMAT_VERSION}
    data.update(schema.model_dump(mode="json"))
    return json.dumps(data, indent=2)


def load_schema(path: Path) -> Schema:
    """Read and validate the schema document at *path*."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaFileError(f"Cannot read schema file '{path}': {exc}") from exc
    return parse_schema(text, source_label=f"'{path}'")


def save_schema(schema: Schema, path: Path) -> None:
    """Write *schema* to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_schema(schema), encoding="utf-8")
