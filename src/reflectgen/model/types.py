# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Property-level representations for the reflection schema model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ArrayKind(Enum):
    """How a property stores its values."""

    NONE = "none"
    FIXED = "fixed"
    DYNAMIC = "dynamic"


class PropertyCategory(Enum):
    """Structural category of a property's declared type."""

    CORE = "core"
    ENUM = "enum"
    BIT_FLAGS = "bit-flags"
    STRUCTURE = "structure"
    RESOURCE_PTR = "resource-ptr"
    TYPE_INSTANCE = "type-instance"


class UnderlyingType(Enum):
    """Integral storage type of an enumeration."""

    UINT8 = "Uint8"
    INT8 = "Int8"
    UINT16 = "Uint16"
    INT16 = "Int16"
    UINT32 = "Uint32"
    INT32 = "Int32"


class MetadataEntry(BaseModel):
    """A single key/value annotation attached to a property.

    When ``is_flag`` is set, ``key`` names a member of the runtime's property
    metadata flag enumeration; otherwise the key is emitted as a plain string.
    """

    key: str
    value: str = ""
    is_flag: bool = False


class PropertyMetadata(BaseModel):
    """Editor-facing annotations for a property."""

    flags: int = 0
    entries: list[MetadataEntry] = _Field(default_factory=list)


@dataclass(frozen=True)
class PropertyCapabilities:
    """What the emitters may generate for one property.

    Computed once per :class:`Property` so each emitter matches on these
    fields instead of re-deriving them from the raw record.
    """

    is_array: bool
    is_dynamic_array: bool
    is_fixed_array: bool
    is_resource_ptr: bool
    is_typed_resource_ptr: bool
    is_structure: bool
    is_type_instance: bool
    owns_resources: bool
    element_type_name: str


class Property(BaseModel):
    """A reflected member of a structure type."""

    name: str
    type_name: str
    template_arg: str = ""
    property_id: int
    array_kind: ArrayKind = ArrayKind.NONE
    array_size: int = 0
    is_dev_only: bool = False
    category: PropertyCategory = PropertyCategory.CORE
    flags: int = 0
    metadata: PropertyMetadata = _Field(default_factory=PropertyMetadata)

    @cached_property
    def capabilities(self) -> PropertyCapabilities:
        """Return the cached capability classification of this property."""
        return classify_property(self)


class EnumConstant(BaseModel):
    """A labelled constant of an enumeration type."""

    label: str
    value: int
    description: str = ""


def classify_property(prop: Property) -> PropertyCapabilities:
    """Compute the capability classification for *prop*."""
    is_resource_ptr = prop.category is PropertyCategory.RESOURCE_PTR
    is_structure = prop.category is PropertyCategory.STRUCTURE
    is_type_instance = prop.category is PropertyCategory.TYPE_INSTANCE
    element_type_name = prop.type_name
    if prop.template_arg:
        element_type_name = f"{prop.type_name}<{prop.template_arg}>"
    return PropertyCapabilities(
        is_array=prop.array_kind is not ArrayKind.NONE,
        is_dynamic_array=prop.array_kind is ArrayKind.DYNAMIC,
        is_fixed_array=prop.array_kind is ArrayKind.FIXED,
        is_resource_ptr=is_resource_ptr,
        is_typed_resource_ptr=is_resource_ptr and bool(prop.template_arg),
        is_structure=is_structure,
        is_type_instance=is_type_instance,
        owns_resources=is_resource_ptr or is_structure or is_type_instance,
        element_type_name=element_type_name,
    )
