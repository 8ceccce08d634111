# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generated ``Load``/``Unload``/``UpdateLoading`` bodies for entity components."""

from __future__ import annotations

from reflectgen.codegen.writer import CodeWriter
from reflectgen.model.entities import StructureType

# ###############
# Public Interface
# ###############


def emit_component_methods(writer: CodeWriter, component: StructureType) -> None:
    """Emit the resource-loading methods of an entity component.

    Components without properties flip their status directly.
    """
    name = component.qualified_name
    requester_args = "EntityModel::LoadingContext const& context, Resource::ResourceRequesterID const& requesterID"
    writer.banner(f"Component: {name}")
    with writer.dev_only(component.is_dev_only):
        with writer.block(f"void {name}::Load( {requester_args} )"):
            if component.has_properties:
                writer.line(f"{name}::s_pTypeInfo->LoadResources( context.m_pResourceSystem, requesterID, this );")
                writer.line("m_status = Status::Loading;")
            else:
                writer.line("m_status = Status::Loaded;")
        writer.blank()

        with writer.block(f"void {name}::Unload( {requester_args} )"):
            if component.has_properties:
                writer.line(f"{name}::s_pTypeInfo->UnloadResources( context.m_pResourceSystem, requesterID, this );")
            writer.line("m_status = Status::Unloaded;")
        writer.blank()

        with writer.block(f"void {name}::UpdateLoading()"), writer.block("if ( m_status == Status::Loading )"):
            if component.has_properties:
                writer.line(f"auto const resourceLoadingStatus = {name}::s_pTypeInfo->GetResourceLoadingStatus( this );")
                with writer.block("if ( resourceLoadingStatus == LoadingStatus::Loading )"):
                    writer.line("return; // Something is still loading so early-out")
                writer.blank()
                with writer.block("if ( resourceLoadingStatus == LoadingStatus::Failed )"):
                    writer.line("m_status = EntityComponent::Status::LoadingFailed;")
                with writer.block("else"):
                    writer.line("m_status = EntityComponent::Status::Loaded;")
            else:
                writer.line("m_status = EntityComponent::Status::Loaded;")
    writer.blank()
