# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema model consumed by the generator (projects, headers, types, properties)."""

from reflectgen.model.entities import (
    AbstractStructType,
    DataFileType,
    EnumType,
    Header,
    Project,
    ReflectedType,
    ResourceType,
    Schema,
    StructType,
    StructureType,
    hash_type_name,
    sanitize_identifier,
)
from reflectgen.model.types import (
    ArrayKind,
    EnumConstant,
    MetadataEntry,
    Property,
    PropertyCapabilities,
    PropertyCategory,
    PropertyMetadata,
    UnderlyingType,
    classify_property,
)

__all__ = [
    # Properties
    "ArrayKind",
    "PropertyCategory",
    "UnderlyingType",
    "MetadataEntry",
    "PropertyMetadata",
    "PropertyCapabilities",
    "Property",
    "EnumConstant",
    "classify_property",
    # Types and containers
    "EnumType",
    "AbstractStructType",
    "StructType",
    "StructureType",
    "ReflectedType",
    "Header",
    "Project",
    "ResourceType",
    "DataFileType",
    "Schema",
    "hash_type_name",
    "sanitize_identifier",
]
