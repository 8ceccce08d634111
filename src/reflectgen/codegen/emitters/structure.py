# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type info blocks for reflected structures."""

from __future__ import annotations

from reflectgen.codegen.emitters.arrays import emit_array_methods
from reflectgen.codegen.emitters.comparison import emit_comparison_methods
from reflectgen.codegen.emitters.lifecycle import emit_constructor, emit_creation_methods, emit_static_registration
from reflectgen.codegen.emitters.resources import emit_resource_methods
from reflectgen.codegen.writer import CodeWriter
from reflectgen.model.entities import StructureType

# ###############
# Public Interface
# ###############


def emit_structure_type_info(writer: CodeWriter, structure: StructureType, parent_name: str) -> None:
    """Emit the full ``TTypeInfo`` specialization for *structure*.

    The emitters run in a fixed sequence: static registration, constructor,
    creation and reset, resources, arrays, then copy/equality/default.

    Args:
        writer: Destination writer at file scope.
        structure: The abstract or concrete structure to describe.
        parent_name: Qualified name of the resolved parent type.
    """
    writer.banner(f"TypeInfo: {structure.qualified_name}")
    with writer.dev_only(structure.is_dev_only):
        with writer.block("namespace EE"), writer.block("namespace TypeSystem"):
            writer.line("template<>")
            with writer.block(f"class TTypeInfo<{structure.qualified_name}> final : public TypeInfo", suffix=";"):
                writer.label("public:")
                writer.blank()
                emit_static_registration(writer, structure)
                writer.label("public:")
                writer.blank()
                emit_constructor(writer, structure, parent_name)
                emit_creation_methods(writer, structure)
                emit_resource_methods(writer, structure)
                emit_array_methods(writer, structure)
                emit_comparison_methods(writer, structure)
    writer.blank()
