# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Copy, equality and reset-to-default methods of structure type infos."""

from __future__ import annotations

from reflectgen.codegen.constants import UNREACHABLE
from reflectgen.codegen.writer import CodeWriter
from reflectgen.model.entities import StructureType
from reflectgen.model.types import Property

# ###############
# Public Interface
# ###############


def emit_comparison_methods(writer: CodeWriter, structure: StructureType) -> None:
    """Emit ``CopyProperties``, the equality methods and ``ResetToDefault``.

    Properties are visited in declaration order. Fixed arrays are unrolled
    element by element for copy and reset; nested structures and type
    instances compare through their own type info.
    """
    _emit_copy_properties(writer, structure)
    _emit_all_properties_equal(writer, structure)
    _emit_is_property_equal(writer, structure)
    _emit_reset_to_default(writer, structure)


# ################
# Implementation
# ################


def _emit_copy_properties(writer: CodeWriter, structure: StructureType) -> None:
    name = structure.qualified_name
    with writer.block("virtual void CopyProperties( IReflectedType* pTypeInstance, IReflectedType const* pRHS ) const override final"):
        if structure.has_properties:
            writer.line(f"auto pType = static_cast<{name}*>( pTypeInstance );")
            writer.line(f"auto pRHSType = static_cast<{name} const*>( pRHS );")
            writer.line("EE_ASSERT( pType != nullptr && pRHSType != nullptr );")
            writer.blank()
            for prop in structure.properties:
                with writer.dev_only(prop.is_dev_only):
                    writer.lines(*_assignments(prop, target="pType", source="pRHSType"))
    writer.blank()


def _emit_all_properties_equal(writer: CodeWriter, structure: StructureType) -> None:
    name = structure.qualified_name
    signature = (
        "virtual bool AreAllPropertyValuesEqual( IReflectedType const* pTypeInstance, "
        "IReflectedType const* pOtherTypeInstance ) const override final"
    )
    with writer.block(signature):
        if structure.has_properties:
            writer.line(f"auto pType = reinterpret_cast<{name} const*>( pTypeInstance );")
            writer.line(f"auto pOtherType = reinterpret_cast<{name} const*>( pOtherTypeInstance );")
            writer.blank()
            for prop in structure.properties:
                with writer.dev_only(prop.is_dev_only):
                    with writer.block(f"if ( !IsPropertyValueEqual( pType, pOtherType, {prop.property_id} ) )"):
                        writer.line("return false;")
                writer.blank()
        writer.line("return true;")
    writer.blank()


def _emit_is_property_equal(writer: CodeWriter, structure: StructureType) -> None:
    name = structure.qualified_name
    signature = (
        "virtual bool IsPropertyValueEqual( IReflectedType const* pTypeInstance, IReflectedType const* pOtherTypeInstance, "
        "uint64_t propertyID, int32_t arrayIdx = InvalidIndex ) const override final"
    )
    with writer.block(signature):
        if structure.has_properties:
            writer.line(f"auto pType = reinterpret_cast<{name} const*>( pTypeInstance );")
            writer.line(f"auto pOtherType = reinterpret_cast<{name} const*>( pOtherTypeInstance );")
            writer.blank()
            for prop in structure.properties:
                with writer.dev_only(prop.is_dev_only):
                    with writer.block(f"if ( propertyID == {prop.property_id} )"):
                        if prop.capabilities.is_array:
                            _emit_array_equality(writer, prop)
                        else:
                            writer.line(f"return {_value_equality(prop, '', negate=False)};")
                writer.blank()
        else:
            writer.line(UNREACHABLE)
        writer.line("return false;")
    writer.blank()


def _emit_array_equality(writer: CodeWriter, prop: Property) -> None:
    caps = prop.capabilities
    writer.line("// Compare array elements")
    with writer.block("if ( arrayIdx != InvalidIndex )"):
        if caps.is_dynamic_array:
            with writer.block(f"if ( arrayIdx >= pOtherType->{prop.name}.size() )"):
                writer.line("return false;")
            writer.blank()
        writer.line(f"return {_value_equality(prop, '[arrayIdx]', negate=False)};")

    writer.line("else // Compare entire array contents")
    with writer.block():
        if caps.is_dynamic_array:
            with writer.block(f"if ( pType->{prop.name}.size() != pOtherType->{prop.name}.size() )"):
                writer.line("return false;")
            writer.blank()
            loop = f"for ( size_t i = 0; i < pType->{prop.name}.size(); i++ )"
        else:
            loop = f"for ( size_t i = 0; i < {prop.array_size}; i++ )"
        with writer.block(loop):
            with writer.block(f"if ( {_value_equality(prop, '[i]', negate=True)} )"):
                writer.line("return false;")
        writer.blank()
        writer.line("return true;")


def _value_equality(prop: Property, subscript: str, *, negate: bool) -> str:
    """Return the C++ expression comparing *prop* between ``pType`` and ``pOtherType``."""
    caps = prop.capabilities
    lhs = f"pType->{prop.name}{subscript}"
    rhs = f"pOtherType->{prop.name}{subscript}"
    if caps.is_structure:
        expression = f"{prop.type_name}::s_pTypeInfo->AreAllPropertyValuesEqual( &{lhs}, &{rhs} )"
    elif caps.is_type_instance:
        expression = f"{lhs}.AreTypesAndPropertyValuesEqual( {rhs} )"
    else:
        return f"{lhs} != {rhs}" if negate else f"{lhs} == {rhs}"
    return f"!{expression}" if negate else expression


def _emit_reset_to_default(writer: CodeWriter, structure: StructureType) -> None:
    name = structure.qualified_name
    with writer.block("virtual void ResetToDefault( IReflectedType* pTypeInstance, uint64_t propertyID ) const override final"):
        if structure.has_properties:
            writer.line(f"auto pDefaultType = reinterpret_cast<{name} const*>( m_pDefaultInstance );")
            writer.line(f"auto pActualType = reinterpret_cast<{name}*>( pTypeInstance );")
            writer.line("EE_ASSERT( pActualType != nullptr && pDefaultType != nullptr );")
            writer.blank()
            for prop in structure.properties:
                with writer.dev_only(prop.is_dev_only):
                    with writer.block(f"if ( propertyID == {prop.property_id} )"):
                        writer.lines(*_assignments(prop, target="pActualType", source="pDefaultType"))
                        writer.line("return;")
                writer.blank()


def _assignments(prop: Property, *, target: str, source: str) -> list[str]:
    if prop.capabilities.is_fixed_array:
        return [
            f"{target}->{prop.name}[{index}] = {source}->{prop.name}[{index}];" for index in range(prop.array_size)
        ]
    return [f"{target}->{prop.name} = {source}->{prop.name};"]
