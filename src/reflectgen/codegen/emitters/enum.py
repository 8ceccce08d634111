# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type info blocks for reflected enumerations.

Enumerations have no per-property accessors. Their type info registers a
constant table in declaration order, and every instance operation halts.
"""

from __future__ import annotations

from collections.abc import Sequence

from reflectgen.codegen.constants import DEV_TOOLS_ONLY_MACRO
from reflectgen.codegen.writer import CodeWriter, cpp_string
from reflectgen.model.entities import EnumType
from reflectgen.model.types import EnumConstant

# ###############
# Public Interface
# ###############


def by_label(constant: EnumConstant) -> str:
    """Sort key ordering enumeration constants lexicographically by label."""
    return constant.label


def alphabetical_order(constants: Sequence[EnumConstant]) -> list[int]:
    """Return, for each constant in declaration order, its rank by label.

    Constants with equal labels keep their relative declaration order.

    Example:
        ``[Beta=1, Alpha=0]`` yields ``[1, 0]``.
    """
    ranked = sorted(range(len(constants)), key=lambda index: by_label(constants[index]))
    order = [0] * len(constants)
    for rank, index in enumerate(ranked):
        order[index] = rank
    return order


def emit_enum_type_info(writer: CodeWriter, enum_type: EnumType) -> None:
    """Emit the full ``TTypeInfo`` specialization for *enum_type*."""
    name = enum_type.qualified_name
    writer.banner(f"Enum Info: {name}")
    with writer.dev_only(enum_type.is_dev_only):
        with writer.block("namespace EE::TypeSystem"):
            writer.line("template<>")
            with writer.block(f"class TTypeInfo<{name}> final : public TypeInfo", suffix=";"):
                writer.line("static TypeInfo* s_pInstance;")
                writer.blank()
                writer.label("public:")
                writer.blank()
                _emit_register(writer, enum_type)
                _emit_unregister(writer)
                writer.label("public:")
                writer.blank()
                _emit_constructor(writer, enum_type)
                writer.lines(*_HALTING_STUBS)
            writer.blank()
            writer.line(f"TypeInfo* TTypeInfo<{name}>::s_pInstance = nullptr;")
    writer.blank()


# ################
# Implementation
# ################

_HALTING_STUBS = (
    "virtual void CopyProperties( IReflectedType* pTypeInstance, IReflectedType const* pRHS ) const override { EE_HALT(); }",
    "virtual IReflectedType* CreateType() const override { EE_HALT(); return nullptr; }",
    "virtual void CreateTypeInPlace( IReflectedType* pAllocatedMemory ) const override { EE_HALT(); }",
    "virtual void ResetType( IReflectedType* pTypeInstance ) const override { EE_HALT(); }",
    "virtual void LoadResources( Resource::ResourceSystem* pResourceSystem, Resource::ResourceRequesterID const& "
    "requesterID, IReflectedType* pType ) const override { EE_HALT(); }",
    "virtual void UnloadResources( Resource::ResourceSystem* pResourceSystem, Resource::ResourceRequesterID const& "
    "requesterID, IReflectedType* pType ) const override { EE_HALT(); }",
    "virtual LoadingStatus GetResourceLoadingStatus( IReflectedType* pType ) const override "
    "{ EE_HALT(); return LoadingStatus::Failed; }",
    "virtual LoadingStatus GetResourceUnloadingStatus( IReflectedType* pType ) const override "
    "{ EE_HALT(); return LoadingStatus::Failed; }",
    "virtual ResourceTypeID GetExpectedResourceTypeForProperty( IReflectedType* pType, uint64_t propertyID ) "
    "const override { EE_HALT(); return ResourceTypeID(); }",
    "virtual void GetReferencedResources( IReflectedType const* pType, TVector<ResourceID>& outReferencedResources ) "
    "const override {}",
    "virtual uint8_t* GetArrayElementDataPtr( IReflectedType* pTypeInstance, uint64_t arrayID, size_t arrayIdx ) "
    "const override { EE_HALT(); return 0; }",
    "virtual size_t GetArraySize( IReflectedType const* pTypeInstance, uint64_t arrayID ) const override "
    "{ EE_HALT(); return 0; }",
    "virtual size_t GetArrayElementSize( uint64_t arrayID ) const override { EE_HALT(); return 0; }",
    "virtual void SetArraySize( IReflectedType* pTypeInstance, uint64_t arrayID, size_t size ) const override "
    "{ EE_HALT(); }",
    "virtual void ClearArray( IReflectedType* pTypeInstance, uint64_t arrayID ) const override { EE_HALT(); }",
    "virtual void AddArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID ) const override { EE_HALT(); }",
    "virtual void InsertArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID, size_t insertIdx ) "
    "const override { EE_HALT(); }",
    "virtual void MoveArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID, size_t originalElementIdx, "
    "size_t newElementIdx ) const override { EE_HALT(); }",
    "virtual void RemoveArrayElement( IReflectedType* pTypeInstance, uint64_t arrayID, size_t arrayIdx ) "
    "const override { EE_HALT(); }",
    "virtual bool AreAllPropertyValuesEqual( IReflectedType const* pTypeInstance, IReflectedType const* "
    "pOtherTypeInstance ) const override { EE_HALT(); return false; }",
    "virtual bool IsPropertyValueEqual( IReflectedType const* pTypeInstance, IReflectedType const* pOtherTypeInstance, "
    "uint64_t propertyID, int32_t arrayIdx = InvalidIndex ) const override { EE_HALT(); return false; }",
    "virtual void ResetToDefault( IReflectedType* pTypeInstance, uint64_t propertyID ) const override { EE_HALT(); }",
)


def _emit_register(writer: CodeWriter, enum_type: EnumType) -> None:
    name = enum_type.qualified_name
    with writer.block("static void RegisterType( TypeSystem::TypeRegistry& typeRegistry )"):
        writer.line("EE_ASSERT( s_pInstance == nullptr );")
        writer.line(f"s_pInstance = EE::New< TTypeInfo<{name}>>();")
        writer.line(f"s_pInstance->m_ID = TypeSystem::TypeID( {cpp_string(name)} );")
        writer.line(f"s_pInstance->m_size = sizeof( {name} );")
        writer.line(f"s_pInstance->m_alignment = alignof( {name} );")
        writer.line("typeRegistry.RegisterType( s_pInstance );")
        writer.blank()
        writer.line("TypeSystem::EnumInfo enumInfo;")
        writer.line(f"enumInfo.m_ID = TypeSystem::TypeID( {cpp_string(name)} );")
        writer.line(f"enumInfo.m_underlyingType = TypeSystem::CoreTypeID::{enum_type.underlying_type.value};")
        writer.blank()
        writer.separator().blank()
        writer.line("TypeSystem::EnumInfo::ConstantInfo constantInfo;")
        order = alphabetical_order(enum_type.constants)
        for constant, rank in zip(enum_type.constants, order, strict=True):
            writer.blank()
            writer.line(f"constantInfo.m_ID = StringID( {cpp_string(constant.label)} );")
            writer.line(f"constantInfo.m_value = {constant.value};")
            writer.line(f"constantInfo.m_alphabeticalOrder = {rank};")
            writer.line(f"{DEV_TOOLS_ONLY_MACRO}( constantInfo.m_description = {cpp_string(constant.description)} );")
            writer.line("enumInfo.m_constants.emplace_back( constantInfo );")
        writer.blank()
        writer.separator().blank()
        writer.line("typeRegistry.RegisterEnum( enumInfo );")
    writer.blank()


def _emit_unregister(writer: CodeWriter) -> None:
    with writer.block("static void UnregisterType( TypeSystem::TypeRegistry& typeRegistry )"):
        writer.line("EE_ASSERT( s_pInstance != nullptr );")
        writer.line("typeRegistry.UnregisterEnum( s_pInstance->m_ID );")
        writer.line("typeRegistry.UnregisterType( s_pInstance );")
        writer.line("EE::Delete( s_pInstance );")
    writer.blank()


def _emit_constructor(writer: CodeWriter, enum_type: EnumType) -> None:
    name = enum_type.qualified_name
    with writer.block("TTypeInfo()"):
        writer.line(f"m_ID = TypeSystem::TypeID( {cpp_string(name)} );")
        writer.line(f"m_size = sizeof( {name} );")
        writer.line(f"m_alignment = alignof( {name} );")
        writer.blank()
        writer.line(f"{DEV_TOOLS_ONLY_MACRO}( m_friendlyName = {cpp_string(enum_type.display_name)} );")
        writer.line(f"{DEV_TOOLS_ONLY_MACRO}( m_namespace = {cpp_string(enum_type.internal_namespace)} );")
        writer.line(f"{DEV_TOOLS_ONLY_MACRO}( m_category = {cpp_string(enum_type.category)} );")
    writer.blank()
