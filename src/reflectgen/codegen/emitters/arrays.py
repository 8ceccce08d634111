# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Array accessor methods of structure type infos.

Every method is always emitted. Each array property gets one
``if ( arrayID == <id> )`` branch, and every body ends in the unreachable
fallback that traps lookups of unknown property ids at run time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import NamedTuple

from reflectgen.codegen.constants import UNREACHABLE
from reflectgen.codegen.writer import CodeWriter
from reflectgen.model.entities import StructureType
from reflectgen.model.types import Property

# ###############
# Public Interface
# ###############


def emit_array_methods(writer: CodeWriter, structure: StructureType) -> None:
    """Emit all nine array accessor methods in their fixed order."""
    _emit_element_data_ptr(writer, structure)
    _emit_array_size(writer, structure)
    _emit_element_size(writer, structure)
    for mutator in DYNAMIC_ARRAY_MUTATORS:
        _emit_dynamic_array_mutator(writer, structure, mutator)


class ArrayMutator(NamedTuple):
    """A method that changes the length or layout of a dynamic array.

    Attributes:
        signature: Full C++ method declaration.
        statements: Builds the branch body from the accessed member expression.
    """

    signature: str
    statements: Callable[[str], list[str]]


DYNAMIC_ARRAY_MUTATORS: tuple[ArrayMutator, ...] = (
    ArrayMutator(
        "virtual void SetArraySize( IReflectedType* pTypeInstance, uint64_t arrayID, size_t size ) const override final",
        lambda member: [f"{member}.resize( size );"],
    ),
    ArrayMutator(
        "virtual void ClearArray( IReflectedType* pTypeInstance, uint64_t arrayID ) const override final",
        lambda member: [f"{member}.clear();"],
    ),
    ArrayMutator(
        "virtual void AddArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID ) const override final",
        lambda member: [f"{member}.emplace_back();"],
    ),
    ArrayMutator(
        "virtual void InsertArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID, size_t insertionIdx ) "
        "const override final",
        lambda member: [f"{member}.emplace( {member}.begin() + insertionIdx );"],
    ),
    ArrayMutator(
        "virtual void MoveArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID, size_t originalElementIdx, "
        "size_t newElementIdx ) const override final",
        lambda member: [
            f"auto const originalElement = {member}[originalElementIdx];",
            f"{member}.erase( {member}.begin() + originalElementIdx );",
            f"{member}.insert( {member}.begin() + newElementIdx, originalElement );",
        ],
    ),
    ArrayMutator(
        "virtual void RemoveArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID, size_t elementIdx ) "
        "const override final",
        lambda member: [f"{member}.erase( {member}.begin() + elementIdx );"],
    ),
)


# ################
# Implementation
# ################

_UNREACHABLE_COMMENT = "// We should never get here since we are asking for a ptr to an invalid property"


@contextmanager
def _array_branch(writer: CodeWriter, prop: Property) -> Iterator[CodeWriter]:
    with writer.dev_only(prop.is_dev_only), writer.block(f"if ( arrayID == {prop.property_id} )"):
        yield writer
    writer.blank()


def _emit_fallback(writer: CodeWriter, return_value: str | None) -> None:
    writer.line(_UNREACHABLE_COMMENT)
    writer.line(UNREACHABLE)
    if return_value is not None:
        writer.line(f"return {return_value};")


def _emit_element_data_ptr(writer: CodeWriter, structure: StructureType) -> None:
    signature = (
        "virtual uint8_t* GetArrayElementDataPtr( IReflectedType* pType, uint64_t arrayID, size_t arrayIdx ) "
        "const override final"
    )
    with writer.block(signature):
        if structure.has_array_properties:
            writer.line(f"auto pActualType = reinterpret_cast<{structure.qualified_name}*>( pType );")
            writer.blank()
            for prop in structure.properties:
                caps = prop.capabilities
                if not caps.is_array:
                    continue
                member = f"pActualType->{prop.name}"
                with _array_branch(writer, prop):
                    if caps.is_dynamic_array:
                        with writer.block(f"if ( ( arrayIdx + 1 ) >= {member}.size() )"):
                            writer.line(f"{member}.resize( arrayIdx + 1 );")
                        writer.blank()
                    writer.line(f"return (uint8_t*) &{member}[arrayIdx];")
        _emit_fallback(writer, "nullptr")
    writer.blank()


def _emit_array_size(writer: CodeWriter, structure: StructureType) -> None:
    with writer.block("virtual size_t GetArraySize( IReflectedType const* pTypeInstance, uint64_t arrayID ) const override final"):
        if structure.has_array_properties:
            writer.line(f"auto pActualType = reinterpret_cast<{structure.qualified_name} const*>( pTypeInstance );")
            writer.line("EE_ASSERT( pActualType != nullptr );")
            writer.blank()
            for prop in structure.properties:
                caps = prop.capabilities
                if not caps.is_array:
                    continue
                with _array_branch(writer, prop):
                    if caps.is_dynamic_array:
                        writer.line(f"return pActualType->{prop.name}.size();")
                    else:
                        writer.line(f"return {prop.array_size};")
        _emit_fallback(writer, "0")
    writer.blank()


def _emit_element_size(writer: CodeWriter, structure: StructureType) -> None:
    with writer.block("virtual size_t GetArrayElementSize( uint64_t arrayID ) const override final"):
        for prop in structure.properties:
            if not prop.capabilities.is_array:
                continue
            with _array_branch(writer, prop):
                writer.line(f"return sizeof( {prop.capabilities.element_type_name} );")
        _emit_fallback(writer, "0")
    writer.blank()


def _emit_dynamic_array_mutator(writer: CodeWriter, structure: StructureType, mutator: ArrayMutator) -> None:
    with writer.block(mutator.signature):
        if structure.has_dynamic_array_properties:
            writer.line(f"auto pActualType = reinterpret_cast<{structure.qualified_name}*>( pTypeInstance );")
            writer.line("EE_ASSERT( pActualType != nullptr );")
            writer.blank()
            for prop in structure.properties:
                if not prop.capabilities.is_dynamic_array:
                    continue
                with _array_branch(writer, prop):
                    writer.lines(*mutator.statements(f"pActualType->{prop.name}"))
                    writer.line("return;")
        _emit_fallback(writer, None)
    writer.blank()
