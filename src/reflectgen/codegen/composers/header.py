# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Composition of the type info file generated for one source header."""

from __future__ import annotations

from collections.abc import Sequence

from reflectgen.codegen.composers.naming import (
    create_default_instance_function,
    dev_tools_only,
    has_default_instance,
    register_type_function,
    unregister_type_function,
)
from reflectgen.codegen.constants import BANNER, INTERNAL_ROOT_TYPES
from reflectgen.codegen.emitters import emit_component_methods, emit_enum_type_info, emit_structure_type_info
from reflectgen.codegen.errors import GenerationError, GenerationErrorKind
from reflectgen.codegen.sink import GeneratedFile
from reflectgen.codegen.writer import CodeWriter
from reflectgen.database.store import ReflectionDatabase
from reflectgen.model.entities import EnumType, Header, ReflectedType, StructureType

# ###############
# Public Interface
# ###############

HEADER_INCLUDES = (
    "Base/TypeSystem/TypeRegistry.h",
    "Base/TypeSystem/EnumInfo.h",
    "Base/Resource/ResourceTypeID.h",
    "Base/Resource/ResourceSystem.h",
)


def resolve_parent(db: ReflectionDatabase, structure: StructureType) -> str:
    """Return the qualified parent name of *structure* after checking it exists.

    A parent is valid when it is a structure in *db* or one of the runtime's
    internal root types.

    Raises:
        GenerationError: With kind ``INVALID_PARENT_HIERARCHY`` naming the type.
    """
    parent = structure.parent
    if parent is not None:
        if parent in INTERNAL_ROOT_TYPES:
            return parent
        resolved = db.get_type(parent)
        if resolved is not None and not isinstance(resolved, EnumType):
            return parent
    raise GenerationError(
        GenerationErrorKind.INVALID_PARENT_HIERARCHY,
        f"Invalid parent hierarchy for type ({structure.qualified_name}), "
        "all registered types must derive from a registered type.",
    )


def compose_header_type_info(db: ReflectionDatabase, header: Header, types: Sequence[ReflectedType]) -> GeneratedFile:
    """Build the type info file for *header*.

    Args:
        db: Schema used to resolve parent types.
        header: The source header the types are declared in.
        types: The header's types, already in dependency order.

    Returns:
        The generated file, written to ``header.type_info_path``.

    Raises:
        GenerationError: If a structure has no resolvable parent.
    """
    writer = CodeWriter()
    writer.line("#pragma once")
    writer.blank()
    writer.line("//*************************************************************************")
    writer.line(BANNER)
    writer.line("//*************************************************************************")
    writer.blank()
    writer.line(f'#include "{header.path}"')
    for include in HEADER_INCLUDES:
        writer.line(f'#include "{include}"')
    writer.blank()

    for reflected_type in types:
        if isinstance(reflected_type, EnumType):
            emit_enum_type_info(writer, reflected_type)
        else:
            emit_structure_type_info(writer, reflected_type, resolve_parent(db, reflected_type))
            if reflected_type.is_entity_component:
                emit_component_methods(writer, reflected_type)
        _emit_registration_functions(writer, reflected_type)

    return GeneratedFile(path=header.type_info_path, contents=writer.getvalue())


# ################
# Implementation
# ################


def _emit_registration_functions(writer: CodeWriter, reflected_type: ReflectedType) -> None:
    type_info = f"TypeSystem::TTypeInfo<{reflected_type.qualified_name}>"
    dev_only = reflected_type.is_dev_only
    with writer.block("namespace EE"):
        writer.line(
            dev_tools_only(
                f"void {register_type_function(reflected_type)}( TypeSystem::TypeRegistry& typeRegistry ) "
                f"{{ {type_info}::RegisterType( typeRegistry ); }}",
                dev_only,
            )
        )
        if has_default_instance(reflected_type):
            writer.line(
                dev_tools_only(
                    f"void {create_default_instance_function(reflected_type)}() "
                    f"{{ {type_info}::CreateDefaultInstance(); }}",
                    dev_only,
                )
            )
        writer.line(
            dev_tools_only(
                f"void {unregister_type_function(reflected_type)}( TypeSystem::TypeRegistry& typeRegistry ) "
                f"{{ {type_info}::UnregisterType( typeRegistry ); }}",
                dev_only,
            )
        )
    writer.blank()
