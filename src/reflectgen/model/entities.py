# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflected types, headers, projects and resource registrations."""

from __future__ import annotations

import zlib
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from reflectgen.model.types import EnumConstant, Property, UnderlyingType

# ###############
# Public Interface
# ###############

ROOT_NAMESPACE = "EE"
SCOPE_SEPARATOR = "::"


def sanitize_identifier(qualified_name: str) -> str:
    """Return *qualified_name* with every scope separator replaced by ``_``.

    ``EE::Animation::Skeleton`` becomes ``EE_Animation_Skeleton``; generated
    free functions are named after this form.
    """
    return qualified_name.replace(SCOPE_SEPARATOR, "_")


def hash_type_name(qualified_name: str) -> int:
    """Return the stable 32-bit type id for a qualified type name."""
    return zlib.crc32(qualified_name.encode("utf-8"))


class _TypeBase(BaseModel):
    """Fields shared by every reflected type."""

    name: str
    namespace: str = ""
    header: str
    is_dev_only: bool = False
    friendly_name: str = ""
    category: str = ""

    @property
    def qualified_name(self) -> str:
        """The namespace-qualified name, e.g. ``EE::Animation::Skeleton``."""
        return f"{self.namespace}{self.name}"

    @property
    def sanitized_name(self) -> str:
        return sanitize_identifier(self.qualified_name)

    @property
    def type_id(self) -> int:
        return hash_type_name(self.qualified_name)

    @property
    def display_name(self) -> str:
        """The friendly name, falling back to the bare type name."""
        return self.friendly_name or self.name

    @property
    def internal_namespace(self) -> str:
        """The namespace without the root ``EE::`` scope or trailing separator."""
        namespace = self.namespace
        root = ROOT_NAMESPACE + SCOPE_SEPARATOR
        if namespace.startswith(root):
            namespace = namespace[len(root) :]
        if namespace.endswith(SCOPE_SEPARATOR):
            namespace = namespace[: -len(SCOPE_SEPARATOR)]
        return namespace


class EnumType(_TypeBase):
    """A reflected enumeration."""

    kind: Literal["enum"] = "enum"
    underlying_type: UnderlyingType = UnderlyingType.UINT8
    constants: list[EnumConstant] = _Field(default_factory=list)


class _StructureBase(_TypeBase):
    """Fields shared by abstract and concrete structures."""

    parent: str | None = None
    properties: list[Property] = _Field(default_factory=list)
    is_entity_component: bool = False
    has_custom_default_instance_ctor: bool = False

    @property
    def has_properties(self) -> bool:
        return bool(self.properties)

    @property
    def has_array_properties(self) -> bool:
        return any(p.capabilities.is_array for p in self.properties)

    @property
    def has_dynamic_array_properties(self) -> bool:
        return any(p.capabilities.is_dynamic_array for p in self.properties)

    @property
    def has_resource_ptr_properties(self) -> bool:
        return any(p.capabilities.is_resource_ptr for p in self.properties)

    @property
    def has_resource_owning_properties(self) -> bool:
        """True if any property is a resource pointer or may own resources transitively."""
        return any(p.capabilities.owns_resources for p in self.properties)


class AbstractStructType(_StructureBase):
    """A structure that cannot be instantiated."""

    kind: Literal["abstract"] = "abstract"


class StructType(_StructureBase):
    """A concrete, default-constructible structure."""

    kind: Literal["struct"] = "struct"


StructureType = AbstractStructType | StructType

# A reflected type -- enumeration, abstract structure or concrete structure.
# The `kind` discriminator keeps deserialization unambiguous.
ReflectedType = Annotated[
    EnumType | AbstractStructType | StructType,
    _Field(discriminator="kind"),
]


class Header(BaseModel):
    """A source header that declares reflected types."""

    id: str
    path: str
    type_info_path: str
    project: str


class Project(BaseModel):
    """A module of the solution; owns headers and their reflected types."""

    id: str
    name: str
    module_class_name: str
    export_macro: str = ""
    type_info_directory: str
    headers: list[Header] = _Field(default_factory=list)
    dependency_count: int = 0
    is_tools_project: bool = False
    module_header: str | None = None

    @property
    def module_identifier(self) -> str:
        """The sanitized module class name used to prefix aggregate functions."""
        return sanitize_identifier(self.module_class_name)

    @property
    def type_info_header_path(self) -> str:
        return f"{self.type_info_directory.rstrip('/')}/_module.h"

    @property
    def type_info_source_path(self) -> str:
        return f"{self.type_info_directory.rstrip('/')}/_module.cpp"

    def get_module_header(self) -> Header | None:
        """Return the header holding the module class, if any."""
        for header in self.headers:
            if header.id == self.module_header:
                return header
        return None


class ResourceType(BaseModel):
    """A loadable asset category bound to a reflected type."""

    type_id: str
    resource_type_id: str = _Field(max_length=4)
    friendly_name: str = ""
    parents: list[str] = _Field(default_factory=list)
    is_dev_only: bool = False


class DataFileType(BaseModel):
    """A tooling data file bound to a reflected type."""

    type_id: str
    extension: str = _Field(max_length=4)
    friendly_name: str = ""

    @property
    def extension_fourcc(self) -> int:
        """The extension packed big-endian into a 32-bit integer."""
        value = 0
        for char in self.extension.lower():
            value = (value << 8) | (ord(char) & 0xFF)
        return value


class Schema(BaseModel):
    """Everything the schema extractor recorded for one solution."""

    projects: list[Project] = _Field(default_factory=list)
    types: list[ReflectedType] = _Field(default_factory=list)
    resource_types: list[ResourceType] = _Field(default_factory=list)
    data_file_types: list[DataFileType] = _Field(default_factory=list)
