# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Composition of a project's ``_module.h`` / ``_module.cpp`` pair."""

from __future__ import annotations

from collections.abc import Sequence

from reflectgen.codegen.composers.naming import (
    create_default_instance_function,
    dev_tools_only,
    has_default_instance,
    module_create_default_instances_function,
    module_register_types_function,
    module_unregister_types_function,
    register_type_function,
    unregister_type_function,
)
from reflectgen.codegen.constants import BANNER
from reflectgen.codegen.sink import GeneratedFile
from reflectgen.codegen.writer import CodeWriter
from reflectgen.model.entities import Project, ReflectedType

# ###############
# Public Interface
# ###############

PROJECT_INCLUDES = ("../../API.h", "Base/Esoterica.h")


def compose_project_header(project: Project, types: Sequence[ReflectedType]) -> GeneratedFile:
    """Declare every type's free functions and the module's aggregate functions.

    Args:
        project: The project being generated.
        types: All of the project's types in dependency order.
    """
    writer = CodeWriter()
    writer.separator().line(BANNER).separator()
    module_header = project.get_module_header()
    if module_header is not None:
        writer.line(f"// Generated For: {module_header.path}")
    writer.blank()
    for include in PROJECT_INCLUDES:
        writer.line(f'#include "{include}"')
    writer.blank()
    writer.separator().blank()

    with writer.block("namespace EE"):
        writer.line("namespace TypeSystem { class TypeRegistry; }")
        writer.blank()
        writer.separator().blank()
        for reflected_type in types:
            dev_only = reflected_type.is_dev_only
            writer.line(
                dev_tools_only(
                    f"void {register_type_function(reflected_type)}( TypeSystem::TypeRegistry& typeRegistry );",
                    dev_only,
                )
            )
            if has_default_instance(reflected_type):
                writer.line(dev_tools_only(f"void {create_default_instance_function(reflected_type)}();", dev_only))
            writer.line(
                dev_tools_only(
                    f"void {unregister_type_function(reflected_type)}( TypeSystem::TypeRegistry& typeRegistry );",
                    dev_only,
                )
            )
            writer.blank()

        writer.separator().blank()
        export = f"{project.export_macro} " if project.export_macro else ""
        writer.line(f"{export}void {module_register_types_function(project)}( TypeSystem::TypeRegistry& typeRegistry );")
        writer.line(f"{export}void {module_create_default_instances_function(project)}();")
        writer.line(f"{export}void {module_unregister_types_function(project)}( TypeSystem::TypeRegistry& typeRegistry );")

    return GeneratedFile(path=project.type_info_header_path, contents=writer.getvalue())


def compose_project_source(project: Project, types: Sequence[ReflectedType]) -> GeneratedFile:
    """Define the module's aggregate functions.

    Registration and default-instance creation follow dependency order;
    unregistration runs in exact reverse.
    """
    writer = CodeWriter()
    writer.separator().line(BANNER).separator().blank()
    writer.line(f'#include "{project.type_info_header_path}"')
    writer.blank()
    writer.separator().blank()

    with writer.block("namespace EE"):
        with writer.block(f"void {module_register_types_function(project)}( TypeSystem::TypeRegistry& typeRegistry )"):
            for reflected_type in types:
                writer.line(
                    dev_tools_only(f"{register_type_function(reflected_type)}( typeRegistry );", reflected_type.is_dev_only)
                )
        writer.blank()

        with writer.block(f"void {module_create_default_instances_function(project)}()"):
            for reflected_type in types:
                if not has_default_instance(reflected_type):
                    continue
                writer.line(
                    dev_tools_only(f"{create_default_instance_function(reflected_type)}();", reflected_type.is_dev_only)
                )
        writer.blank()

        with writer.block(f"void {module_unregister_types_function(project)}( TypeSystem::TypeRegistry& typeRegistry )"):
            for reflected_type in reversed(types):
                writer.line(
                    dev_tools_only(
                        f"{unregister_type_function(reflected_type)}( typeRegistry );", reflected_type.is_dev_only
                    )
                )

    return GeneratedFile(path=project.type_info_source_path, contents=writer.getvalue())
