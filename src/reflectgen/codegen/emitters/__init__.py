# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-type emitters that write type info blocks into a CodeWriter."""

from reflectgen.codegen.emitters.arrays import emit_array_methods
from reflectgen.codegen.emitters.comparison import emit_comparison_methods
from reflectgen.codegen.emitters.component import emit_component_methods
from reflectgen.codegen.emitters.enum import alphabetical_order, by_label, emit_enum_type_info
from reflectgen.codegen.emitters.lifecycle import emit_constructor, emit_creation_methods, emit_static_registration
from reflectgen.codegen.emitters.resources import emit_resource_methods
from reflectgen.codegen.emitters.structure import emit_structure_type_info

__all__ = [
    "alphabetical_order",
    "by_label",
    "emit_array_methods",
    "emit_comparison_methods",
    "emit_component_methods",
    "emit_constructor",
    "emit_creation_methods",
    "emit_enum_type_info",
    "emit_resource_methods",
    "emit_static_registration",
    "emit_structure_type_info",
]
