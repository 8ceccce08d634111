# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only query surface over a loaded reflection schema.

The generator never mutates the schema; every accessor returns records in the
order the extractor recorded them so that generated output is deterministic.
"""

from __future__ import annotations

from reflectgen.model.entities import (
    DataFileType,
    Header,
    Project,
    ReflectedType,
    ResourceType,
    Schema,
)

# ###############
# Public Interface
# ###############


class ReflectionDatabase:
    """Indexed, read-only view of a :class:`~reflectgen.model.entities.Schema`."""

    def __init__(self, schema: Schema) -> None:
        self._schema = schema
        self._headers: dict[str, Header] = {}
        for project in schema.projects:
            for header in project.headers:
                self._headers[header.id] = header
        self._types_by_name: dict[str, ReflectedType] = {}
        self._types_by_header: dict[str, list[ReflectedType]] = {}
        for reflected_type in schema.types:
            self._types_by_name.setdefault(reflected_type.qualified_name, reflected_type)
            self._types_by_header.setdefault(reflected_type.header, []).append(reflected_type)

    @property
    def schema(self) -> Schema:
        return self._schema

    def get_projects(self) -> list[Project]:
        """Return all projects in recorded order."""
        return list(self._schema.projects)

    def get_header(self, header_id: str) -> Header | None:
        return self._headers.get(header_id)

    def get_types_for_header(self, header_id: str) -> list[ReflectedType]:
        """Return the types declared in *header_id*, in declaration order."""
        return list(self._types_by_header.get(header_id, []))

    def get_types_for_project(self, project_id: str) -> list[ReflectedType]:
        """Return every type declared in any header of *project_id*.

        Types are grouped by header in the project's header order.
        """
        result: list[ReflectedType] = []
        for project in self._schema.projects:
            if project.id != project_id:
                continue
            for header in project.headers:
                result.extend(self._types_by_header.get(header.id, []))
        return result

    def get_type(self, qualified_name: str) -> ReflectedType | None:
        """Resolve a type by its namespace-qualified name."""
        return self._types_by_name.get(qualified_name)

    def get_resource_types(self) -> list[ResourceType]:
        return list(self._schema.resource_types)

    def get_data_file_types(self) -> list[DataFileType]:
        return list(self._schema.data_file_types)
