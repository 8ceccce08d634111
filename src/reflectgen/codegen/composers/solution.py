# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Composition of the solution-wide type registration file for one build mode."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from reflectgen.codegen.composers.naming import (
    dev_tools_only,
    module_create_default_instances_function,
    module_register_types_function,
    module_unregister_types_function,
)
from reflectgen.codegen.constants import BANNER
from reflectgen.codegen.errors import GenerationErrorKind, SchemaInvariantError
from reflectgen.codegen.ordering import sort_projects_by_dependency_count
from reflectgen.codegen.sink import GeneratedFile
from reflectgen.codegen.writer import CodeWriter, cpp_string
from reflectgen.database.store import ReflectionDatabase
from reflectgen.model.entities import DataFileType, Project, ResourceType

# ###############
# Public Interface
# ###############


class BuildMode(Enum):
    """Which engine configuration a solution registration file targets.

    ``RUNTIME`` excludes tools projects and development-only resources;
    ``TOOLS`` includes everything plus data file registration.
    """

    RUNTIME = "runtime"
    TOOLS = "tools"


SOLUTION_INCLUDES = (
    "Base/TypeSystem/TypeRegistry.h",
    "Base/TypeSystem/ResourceInfo.h",
    "Base/TypeSystem/DataFileInfo.h",
)


def select_projects(projects: Sequence[Project], mode: BuildMode) -> list[Project]:
    """Return the projects registered in *mode*, in initialization order.

    Projects without a module header never take part; tools projects are
    dropped in runtime mode. The rest are stably sorted by dependency count.
    """
    selected = [
        project
        for project in projects
        if project.module_header is not None and not (mode is BuildMode.RUNTIME and project.is_tools_project)
    ]
    return sort_projects_by_dependency_count(selected)


def select_resource_types(db: ReflectionDatabase, mode: BuildMode) -> list[ResourceType]:
    """Return the resource types registered in *mode*.

    Runtime mode skips development-only resource types and resource types
    bound to a development-only reflected type.
    """
    resource_types = db.get_resource_types()
    if mode is BuildMode.TOOLS:
        return resource_types
    selected = []
    for resource_type in resource_types:
        if resource_type.is_dev_only:
            continue
        reflected = db.get_type(resource_type.type_id)
        if reflected is not None and reflected.is_dev_only:
            continue
        selected.append(resource_type)
    return selected


def compose_solution_registration(db: ReflectionDatabase, mode: BuildMode, path: str) -> GeneratedFile:
    """Build the aggregate registration file for *mode*.

    ``RegisterTypes`` registers the internal types, then every project's
    types, then every project's default instances, then resource (and, in
    tools mode, data file) types. ``UnregisterTypes`` mirrors it in reverse.

    Raises:
        SchemaInvariantError: If a resource type names a parent that is not
            a registered resource type.
    """
    projects = select_projects(db.get_projects(), mode)
    writer = CodeWriter()
    writer.separator().line(BANNER).separator().blank()
    for include in SOLUTION_INCLUDES:
        writer.line(f'#include "{include}"')
    writer.blank()
    writer.separator().blank()
    for project in projects:
        writer.line(f'#include "{project.type_info_header_path}"')
    writer.blank()
    writer.separator().blank()

    with writer.block("namespace EE::TypeSystem::Reflection"):
        _emit_resource_registration(writer, db, mode)
        if mode is BuildMode.TOOLS:
            writer.blank()
            _emit_data_file_registration(writer, db.get_data_file_types())
        writer.blank()
        writer.separator().blank()

        with writer.block("inline void RegisterTypes( TypeSystem::TypeRegistry& typeRegistry )"):
            writer.line("typeRegistry.RegisterInternalTypes();")
            writer.blank()
            writer.separator().blank()
            for project in projects:
                writer.line(f"{module_register_types_function(project)}( typeRegistry );")
            writer.blank()
            writer.separator().blank()
            for project in projects:
                writer.line(f"{module_create_default_instances_function(project)}();")
            writer.blank()
            writer.separator().blank()
            writer.line("RegisterResourceTypes( typeRegistry );")
            if mode is BuildMode.TOOLS:
                writer.line("RegisterDataFileTypes( typeRegistry );")
        writer.blank()

        with writer.block("inline void UnregisterTypes( TypeSystem::TypeRegistry& typeRegistry )"):
            if mode is BuildMode.TOOLS:
                writer.line("UnregisterDataFileTypes( typeRegistry );")
            writer.line("UnregisterResourceTypes( typeRegistry );")
            writer.blank()
            writer.separator().blank()
            for project in reversed(projects):
                writer.line(f"{module_unregister_types_function(project)}( typeRegistry );")
            writer.blank()
            writer.separator().blank()
            writer.line("typeRegistry.UnregisterInternalTypes();")

    return GeneratedFile(path=path, contents=writer.getvalue())


# ################
# Implementation
# ################


def _resource_code_lookup(resource_types: Sequence[ResourceType]) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for resource_type in resource_types:
        lookup.setdefault(resource_type.type_id, resource_type.resource_type_id)
    return lookup


def _emit_resource_registration(writer: CodeWriter, db: ReflectionDatabase, mode: BuildMode) -> None:
    # Parents resolve against the full table, including entries skipped in this mode.
    codes_by_type = _resource_code_lookup(db.get_resource_types())
    resource_types = select_resource_types(db, mode)

    with writer.block("inline void RegisterResourceTypes( TypeSystem::TypeRegistry& typeRegistry )"):
        if resource_types:
            writer.line("TypeSystem::ResourceInfo resourceInfo;")
        for resource_type in resource_types:
            writer.blank()
            writer.line(f"resourceInfo.m_typeID = TypeSystem::TypeID( {cpp_string(resource_type.type_id)} );")
            writer.line(f"resourceInfo.m_resourceTypeID = ResourceTypeID( {cpp_string(resource_type.resource_type_id)} );")
            writer.line("resourceInfo.m_parentTypes.clear();")
            for parent in resource_type.parents:
                code = codes_by_type.get(parent)
                if code is None:
                    raise SchemaInvariantError(
                        GenerationErrorKind.UNRESOLVED_RESOURCE_PARENT,
                        f"Resource type ({resource_type.type_id}) declares unknown parent resource type ({parent})",
                    )
                writer.line(f"resourceInfo.m_parentTypes.emplace_back( ResourceTypeID( {cpp_string(code)} ) );")
            writer.line(
                dev_tools_only(f"resourceInfo.m_friendlyName = {cpp_string(resource_type.friendly_name)};", True)
            )
            writer.line("typeRegistry.RegisterResourceTypeID( resourceInfo );")
    writer.blank()

    with writer.block("inline void UnregisterResourceTypes( TypeSystem::TypeRegistry& typeRegistry )"):
        for resource_type in reversed(resource_types):
            writer.line(
                "typeRegistry.UnregisterResourceTypeID( "
                f"ResourceTypeID( {cpp_string(resource_type.resource_type_id)} ) );"
            )


def _emit_data_file_registration(writer: CodeWriter, data_file_types: Sequence[DataFileType]) -> None:
    with writer.block("inline void RegisterDataFileTypes( TypeSystem::TypeRegistry& typeRegistry )"):
        if data_file_types:
            writer.line("TypeSystem::DataFileInfo dataFileInfo;")
        for data_file_type in data_file_types:
            writer.blank()
            writer.line(f"dataFileInfo.m_typeID = TypeSystem::TypeID( {cpp_string(data_file_type.type_id)} );")
            writer.line(f"dataFileInfo.m_extensionFourCC = {data_file_type.extension_fourcc};")
            writer.line(f"dataFileInfo.m_friendlyName = {cpp_string(data_file_type.friendly_name)};")
            writer.line("typeRegistry.RegisterDataFileInfo( dataFileInfo );")
    writer.blank()

    with writer.block("inline void UnregisterDataFileTypes( TypeSystem::TypeRegistry& typeRegistry )"):
        for data_file_type in reversed(data_file_types):
            writer.line(f"typeRegistry.UnregisterDataFileInfo( TypeSystem::TypeID( {cpp_string(data_file_type.type_id)} ) );")
