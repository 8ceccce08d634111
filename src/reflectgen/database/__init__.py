# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema store: the read-only database the generator queries."""

from reflectgen.database.schema_file import (
    SCHEMA_FORMAT_VERSION,
    SchemaFileError,
    dump_schema,
    load_schema,
    parse_schema,
    save_schema,
)
from reflectgen.database.store import ReflectionDatabase

__all__ = [
    "ReflectionDatabase",
    "SCHEMA_FORMAT_VERSION",
    "SchemaFileError",
    "dump_schema",
    "load_schema",
    "parse_schema",
    "save_schema",
]
