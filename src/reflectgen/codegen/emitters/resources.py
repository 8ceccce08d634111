# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resource loading and traversal methods of structure type infos.

Bodies are populated only for structures that hold resource pointers or
nested structures/type instances, which may own resources transitively.
Resource pointer arrays are iterated when dynamic and unrolled when fixed.
"""

from __future__ import annotations

from reflectgen.codegen.constants import UNREACHABLE
from reflectgen.codegen.writer import CodeWriter
from reflectgen.model.entities import StructureType
from reflectgen.model.types import Property

# ###############
# Public Interface
# ###############


def emit_resource_methods(writer: CodeWriter, structure: StructureType) -> None:
    """Emit load, unload, status, referenced-resource and expected-type methods."""
    _emit_transfer(writer, structure, resource_call="LoadResource", nested_call="LoadResources")
    _emit_transfer(writer, structure, resource_call="UnloadResource", nested_call="UnloadResources")
    _emit_loading_status(writer, structure)
    _emit_unloading_status(writer, structure)
    _emit_referenced_resources(writer, structure)
    _emit_expected_resource_type(writer, structure)


# ################
# Implementation
# ################


def _resource_owning(structure: StructureType) -> list[Property]:
    return [prop for prop in structure.properties if prop.capabilities.owns_resources]


def _element_accessors(prop: Property) -> list[str]:
    """Member expressions for each element of a fixed array property."""
    return [f"pActualType->{prop.name}[{index}]" for index in range(prop.array_size)]


def _emit_transfer(writer: CodeWriter, structure: StructureType, *, resource_call: str, nested_call: str) -> None:
    signature = (
        f"virtual void {nested_call}( Resource::ResourceSystem* pResourceSystem, "
        "Resource::ResourceRequesterID const& requesterID, IReflectedType* pType ) const override final"
    )
    with writer.block(signature):
        properties = _resource_owning(structure)
        if properties:
            writer.line("EE_ASSERT( pResourceSystem != nullptr );")
            writer.line(f"auto pActualType = reinterpret_cast<{structure.qualified_name}*>( pType );")
            writer.blank()
        for prop in properties:
            caps = prop.capabilities
            with writer.dev_only(prop.is_dev_only):
                if caps.is_resource_ptr:
                    if caps.is_dynamic_array:
                        with writer.block(f"for ( auto& resourcePtr : pActualType->{prop.name} )"):
                            with writer.block("if ( resourcePtr.IsSet() )"):
                                writer.line(f"pResourceSystem->{resource_call}( resourcePtr, requesterID );")
                    else:
                        members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                        for member in members:
                            with writer.block(f"if ( {member}.IsSet() )"):
                                writer.line(f"pResourceSystem->{resource_call}( {member}, requesterID );")
                elif caps.is_dynamic_array:
                    with writer.block(f"for ( auto& propertyValue : pActualType->{prop.name} )"):
                        writer.line(
                            f"{prop.type_name}::s_pTypeInfo->{nested_call}( pResourceSystem, requesterID, &propertyValue );"
                        )
                else:
                    members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                    for member in members:
                        writer.line(f"{prop.type_name}::s_pTypeInfo->{nested_call}( pResourceSystem, requesterID, &{member} );")
            writer.blank()
    writer.blank()


def _emit_loading_status(writer: CodeWriter, structure: StructureType) -> None:
    # A failure is recorded and the scan continues; anything still loading returns at once.
    with writer.block("virtual LoadingStatus GetResourceLoadingStatus( IReflectedType* pType ) const override final"):
        writer.line("LoadingStatus status = LoadingStatus::Loaded;")
        properties = _resource_owning(structure)
        if properties:
            writer.blank()
            writer.line(f"auto pActualType = reinterpret_cast<{structure.qualified_name}*>( pType );")
            writer.blank()
        for prop in properties:
            caps = prop.capabilities
            with writer.dev_only(prop.is_dev_only):
                if caps.is_resource_ptr:
                    if caps.is_dynamic_array:
                        with writer.block(f"for ( auto const& resourcePtr : pActualType->{prop.name} )"):
                            _emit_resource_loading_check(writer, "resourcePtr")
                    else:
                        members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                        for member in members:
                            _emit_resource_loading_check(writer, member)
                elif caps.is_dynamic_array:
                    with writer.block(f"for ( auto& propertyValue : pActualType->{prop.name} )"):
                        _emit_nested_loading_check(writer, prop, "propertyValue")
                else:
                    members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                    for member in members:
                        with writer.block():
                            _emit_nested_loading_check(writer, prop, member)
            writer.blank()
        writer.line("return status;")
    writer.blank()


def _emit_resource_loading_check(writer: CodeWriter, member: str) -> None:
    with writer.block(f"if ( {member}.HasLoadingFailed() )"):
        writer.line("status = LoadingStatus::Failed;")
    with writer.block(f"else if ( {member}.IsSet() && !{member}.IsLoaded() )"):
        writer.line("return LoadingStatus::Loading;")


def _emit_nested_loading_check(writer: CodeWriter, prop: Property, member: str) -> None:
    # The nested result only ever raises the recorded status to Failed.
    writer.line(f"LoadingStatus const nestedStatus = {prop.type_name}::s_pTypeInfo->GetResourceLoadingStatus( &{member} );")
    with writer.block("if ( nestedStatus == LoadingStatus::Loading )"):
        writer.line("return LoadingStatus::Loading;")
    with writer.block("else if ( nestedStatus == LoadingStatus::Failed )"):
        writer.line("status = LoadingStatus::Failed;")


def _emit_unloading_status(writer: CodeWriter, structure: StructureType) -> None:
    with writer.block("virtual LoadingStatus GetResourceUnloadingStatus( IReflectedType* pType ) const override final"):
        properties = _resource_owning(structure)
        if properties:
            writer.line(f"auto pActualType = reinterpret_cast<{structure.qualified_name}*>( pType );")
            writer.blank()
        for prop in properties:
            caps = prop.capabilities
            with writer.dev_only(prop.is_dev_only):
                if caps.is_resource_ptr:
                    if caps.is_dynamic_array:
                        with writer.block(f"for ( auto const& resourcePtr : pActualType->{prop.name} )"):
                            _emit_resource_unloading_check(writer, "resourcePtr")
                    else:
                        members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                        for member in members:
                            _emit_resource_unloading_check(writer, member)
                elif caps.is_dynamic_array:
                    with writer.block(f"for ( auto& propertyValue : pActualType->{prop.name} )"):
                        writer.line(
                            "LoadingStatus const status = "
                            f"{prop.type_name}::s_pTypeInfo->GetResourceUnloadingStatus( &propertyValue );"
                        )
                        with writer.block("if ( status != LoadingStatus::Unloaded )"):
                            writer.line("return LoadingStatus::Unloading;")
                else:
                    members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                    for member in members:
                        condition = (
                            f"{prop.type_name}::s_pTypeInfo->GetResourceUnloadingStatus( &{member} ) "
                            "!= LoadingStatus::Unloaded"
                        )
                        with writer.block(f"if ( {condition} )"):
                            writer.line("return LoadingStatus::Unloading;")
            writer.blank()
        writer.line("return LoadingStatus::Unloaded;")
    writer.blank()


def _emit_resource_unloading_check(writer: CodeWriter, member: str) -> None:
    writer.line(f"EE_ASSERT( !{member}.IsLoading() );")
    with writer.block(f"if ( !{member}.IsUnloaded() )"):
        writer.line("return LoadingStatus::Unloading;")


def _emit_referenced_resources(writer: CodeWriter, structure: StructureType) -> None:
    signature = (
        "virtual void GetReferencedResources( IReflectedType const* pType, "
        "TVector<ResourceID>& outReferencedResources ) const override final"
    )
    with writer.block(signature):
        properties = _resource_owning(structure)
        if properties:
            writer.line(f"auto pActualType = reinterpret_cast<{structure.qualified_name} const*>( pType );")
            writer.blank()
        for prop in properties:
            caps = prop.capabilities
            with writer.dev_only(prop.is_dev_only):
                if caps.is_resource_ptr:
                    if caps.is_dynamic_array:
                        with writer.block(f"for ( auto const& resourcePtr : pActualType->{prop.name} )"):
                            with writer.block("if ( resourcePtr.IsSet() )"):
                                writer.line("outReferencedResources.emplace_back( resourcePtr.GetResourceID() );")
                    else:
                        members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                        for member in members:
                            with writer.block(f"if ( {member}.IsSet() )"):
                                writer.line(f"outReferencedResources.emplace_back( {member}.GetResourceID() );")
                elif caps.is_dynamic_array:
                    with writer.block(f"for ( auto const& propertyValue : pActualType->{prop.name} )"):
                        writer.line(
                            f"{prop.type_name}::s_pTypeInfo->GetReferencedResources( &propertyValue, outReferencedResources );"
                        )
                else:
                    members = _element_accessors(prop) if caps.is_fixed_array else [f"pActualType->{prop.name}"]
                    for member in members:
                        writer.line(
                            f"{prop.type_name}::s_pTypeInfo->GetReferencedResources( &{member}, outReferencedResources );"
                        )
            writer.blank()
    writer.blank()


def _emit_expected_resource_type(writer: CodeWriter, structure: StructureType) -> None:
    signature = (
        "virtual ResourceTypeID GetExpectedResourceTypeForProperty( IReflectedType* pType, uint64_t propertyID ) "
        "const override final"
    )
    with writer.block(signature):
        for prop in structure.properties:
            caps = prop.capabilities
            if not caps.is_resource_ptr:
                continue
            with writer.dev_only(prop.is_dev_only), writer.block(f"if ( propertyID == {prop.property_id} )"):
                if caps.is_typed_resource_ptr:
                    writer.line(f"return {prop.template_arg}::GetStaticResourceTypeID();")
                else:
                    writer.line("return ResourceTypeID();")
            writer.blank()
        writer.line("// We should never get here since we are asking for a resource type of an invalid property")
        writer.line(UNREACHABLE)
        writer.line("return ResourceTypeID();")
    writer.blank()
