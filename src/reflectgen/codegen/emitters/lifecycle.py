# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Static registration, construction and reset of structure type infos."""

from __future__ import annotations

from reflectgen.codegen.constants import HALT
from reflectgen.codegen.writer import CodeWriter, cpp_string
from reflectgen.model.entities import AbstractStructType, StructType, StructureType
from reflectgen.model.types import Property

# ###############
# Public Interface
# ###############


def emit_static_registration(writer: CodeWriter, structure: StructureType) -> None:
    """Emit the static ``RegisterType``, ``CreateDefaultInstance`` and ``UnregisterType``.

    ``CreateDefaultInstance`` exists only for concrete structures; their
    ``UnregisterType`` also destroys the default instance.
    """
    name = structure.qualified_name
    with writer.block("static void RegisterType( TypeSystem::TypeRegistry& typeRegistry )"):
        writer.line(f"{name}::s_pTypeInfo = EE::New<TTypeInfo<{name}>>();")
        writer.line(f"typeRegistry.RegisterType( {name}::s_pTypeInfo );")
    writer.blank()

    if isinstance(structure, StructType):
        _emit_create_default_instance(writer, structure)

    with writer.block("static void UnregisterType( TypeSystem::TypeRegistry& typeRegistry )"):
        writer.line(f"typeRegistry.UnregisterType( {name}::s_pTypeInfo );")
        if isinstance(structure, StructType):
            writer.line(f"EE::Delete( const_cast<IReflectedType*&>( {name}::s_pTypeInfo->m_pDefaultInstance ) );")
        writer.line(f"EE::Delete( {name}::s_pTypeInfo );")
    writer.blank()


def emit_constructor(writer: CodeWriter, structure: StructureType, parent_name: str) -> None:
    """Emit the type info constructor.

    Args:
        writer: Destination writer, positioned inside the class body.
        structure: The structure being described.
        parent_name: Qualified name of the already-resolved parent type.
    """
    name = structure.qualified_name
    is_abstract = isinstance(structure, AbstractStructType)
    with writer.block("TTypeInfo()"):
        writer.line(f"m_ID = TypeSystem::TypeID( {cpp_string(name)} );")
        writer.line(f"m_size = sizeof( {name} );")
        writer.line(f"m_alignment = alignof( {name} );")
        if is_abstract:
            writer.line("m_isAbstract = true;")
        writer.blank()

        with writer.dev_only():
            writer.line(f"m_friendlyName = {cpp_string(structure.display_name)};")
            writer.line(f"m_namespace = {cpp_string(structure.internal_namespace)};")
            writer.line(f"m_category = {cpp_string(structure.category)};")
            if structure.is_dev_only:
                writer.line("m_isForDevelopmentUseOnly = true;")
        writer.blank()

        writer.line("// Parent types").separator().blank()
        writer.line(f"m_pParentTypeInfo = {parent_name}::s_pTypeInfo;")

        if structure.has_properties:
            writer.blank()
            writer.line("// Register properties and type").separator().blank()
            if not is_abstract:
                writer.line(f"auto pActualDefaultInstance = reinterpret_cast<{name} const*>( m_pDefaultInstance );")
            writer.line("PropertyInfo propertyInfo;")
            for prop in structure.properties:
                _emit_property_registration(writer, structure, prop)
    writer.blank()


def emit_creation_methods(writer: CodeWriter, structure: StructureType) -> None:
    """Emit ``CreateType``, ``CreateTypeInPlace`` and ``ResetType``.

    Abstract structures get halting stubs.
    """
    name = structure.qualified_name
    is_abstract = isinstance(structure, AbstractStructType)

    with writer.block("virtual IReflectedType* CreateType() const override final"):
        if is_abstract:
            writer.line(f"{HALT} // Error! Trying to instantiate an abstract type!")
            writer.line("return nullptr;")
        else:
            writer.line(f"auto pMemory = EE::Alloc( sizeof( {name} ), alignof( {name} ) );")
            writer.line(f"return new ( pMemory ) {name}();")
    writer.blank()

    with writer.block("virtual void CreateTypeInPlace( IReflectedType* pAllocatedMemory ) const override final"):
        if is_abstract:
            writer.line(f"{HALT} // Error! Trying to instantiate an abstract type!")
        else:
            writer.line("EE_ASSERT( pAllocatedMemory != nullptr );")
            writer.line(f"new( pAllocatedMemory ) {name}();")
    writer.blank()

    with writer.block("virtual void ResetType( IReflectedType* pTypeInstance ) const override final"):
        if is_abstract:
            writer.line(f"{HALT} // Error! Trying to reset an abstract type!")
        else:
            writer.line("EE_ASSERT( pTypeInstance != nullptr );")
            writer.line("pTypeInstance->~IReflectedType();")
            writer.line("CreateTypeInPlace( pTypeInstance );")
    writer.blank()


# ################
# Implementation
# ################


def _emit_create_default_instance(writer: CodeWriter, structure: StructType) -> None:
    name = structure.qualified_name
    constructed = f"{name}( DefaultInstanceCtor )" if structure.has_custom_default_instance_ctor else f"{name}()"
    with writer.block("static void CreateDefaultInstance()"):
        writer.line(f"auto pMutableTypeInfo = const_cast<TypeSystem::TypeInfo*&>( {name}::s_pTypeInfo );")
        writer.line(f"auto pMemory = EE::Alloc( sizeof( {name} ), alignof( {name} ) );")
        writer.line(f"pMutableTypeInfo->m_pDefaultInstance = new ( pMemory ) {constructed};")
        writer.blank()
        writer.line("// Set default info").separator().blank()
        writer.line(f"auto pDefaultInstance = reinterpret_cast<{name} const*>( pMutableTypeInfo->m_pDefaultInstance );")
        for prop in structure.properties:
            with writer.dev_only(prop.is_dev_only), writer.block():
                _emit_default_value_info(writer, prop)
    writer.blank()


def _emit_default_value_info(writer: CodeWriter, prop: Property) -> None:
    caps = prop.capabilities
    element = caps.element_type_name
    writer.line(
        "TypeSystem::PropertyInfo* pPropertyInfo = "
        f"pMutableTypeInfo->GetPropertyInfo( StringID( {cpp_string(prop.name)} ) );"
    )
    writer.line(f"pPropertyInfo->m_pDefaultValue = &pDefaultInstance->{prop.name};")
    if caps.is_dynamic_array:
        writer.line(f"pPropertyInfo->m_pDefaultArrayData = pDefaultInstance->{prop.name}.data();")
        writer.line(f"pPropertyInfo->m_arraySize = (int32_t) pDefaultInstance->{prop.name}.size();")
        writer.line(f"pPropertyInfo->m_arrayElementSize = (int32_t) sizeof( {element} );")
        writer.line(f"pPropertyInfo->m_size = sizeof( TVector<{element}> );")
    elif caps.is_fixed_array:
        writer.line(f"pPropertyInfo->m_pDefaultArrayData = pDefaultInstance->{prop.name};")
        writer.line(f"pPropertyInfo->m_arraySize = {prop.array_size};")
        writer.line(f"pPropertyInfo->m_arrayElementSize = (int32_t) sizeof( {element} );")
        writer.line(f"pPropertyInfo->m_size = sizeof( {element} ) * {prop.array_size};")
    else:
        writer.line(f"pPropertyInfo->m_size = sizeof( {element} );")


def _emit_property_registration(writer: CodeWriter, structure: StructureType, prop: Property) -> None:
    writer.blank().separator().blank()
    with writer.dev_only(prop.is_dev_only):
        writer.line(f"propertyInfo.m_ID = StringID( {cpp_string(prop.name)} );")
        writer.line(f"propertyInfo.m_typeID = TypeSystem::TypeID( {cpp_string(prop.type_name)} );")
        writer.line(f"propertyInfo.m_parentTypeID = {structure.type_id};")
        writer.line(f"propertyInfo.m_templateArgumentTypeID = TypeSystem::TypeID( {cpp_string(prop.template_arg)} );")
        writer.line(f"propertyInfo.m_offset = offsetof( {structure.qualified_name}, {prop.name} );")
        writer.blank()

        with writer.dev_only():
            writer.line(f"propertyInfo.m_isForDevelopmentUseOnly = {'true' if prop.is_dev_only else 'false'};")
            writer.line("propertyInfo.m_metadata.Clear();")
            writer.line(
                "propertyInfo.m_metadata.m_flags = "
                f"TBitFlags<EE::TypeSystem::PropertyMetadata::Flag>( {prop.metadata.flags} );"
            )
            for entry in prop.metadata.entries:
                if entry.is_flag:
                    key = f"EE::TypeSystem::PropertyMetadata::Flag::{entry.key}"
                else:
                    key = cpp_string(entry.key)
                writer.line(f"propertyInfo.m_metadata.m_keyValues.emplace_back( {key}, {cpp_string(entry.value)} );")
        writer.blank()

        # Abstract types have no default instance to point into.
        if isinstance(structure, AbstractStructType):
            writer.line("propertyInfo.m_pDefaultValue = nullptr;")

        writer.line(f"propertyInfo.m_flags.Set( {prop.flags} );")
        writer.line("m_properties.emplace_back( propertyInfo );")
        writer.line(
            "m_propertyMap.insert( TPair<StringID, int32_t>( propertyInfo.m_ID, int32_t( m_properties.size() ) - 1 ) );"
        )
