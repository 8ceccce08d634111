# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for reflection schemas.

These checks run without generating any code and report every problem they
find at once, whereas generation stops at the first error.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from reflectgen.codegen.constants import INTERNAL_ROOT_TYPES
from reflectgen.codegen.toposort import find_cycle
from reflectgen.database.store import ReflectionDatabase
from reflectgen.model.entities import EnumType, StructureType

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue; generation still succeeds.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """An issue that makes generation fail or produce uncompilable code.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running schema validation checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors that indicate an invalid schema.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(db: ReflectionDatabase) -> ValidationResult:
    """Run all schema validation checks.

    Checks performed:

    1. **Duplicate type names** (error): two types share a qualified name.

    2. **Parent hierarchy** (error): a structure has no parent, or its parent
       is neither a reflected structure nor an internal root type.

    3. **Parent cycles** (error): the derives-from relation loops back on
       itself, e.g. ``A -> B -> A``.

    4. **Duplicate property ids** (error): two properties of one structure
       share an id, making the generated accessor branches ambiguous.

    5. **Resource parents** (error): a resource type names a parent that is
       not a registered resource type.

    6. **Empty components** (warning): entity components without properties.

    7. **Duplicate enum values** (warning): two constants of one enumeration
       share a value.

    Args:
        db: The schema to check.

    Returns:
        A :class:`ValidationResult`. An empty result means the schema is valid.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    errors.extend(_check_duplicate_type_names(db))
    errors.extend(_check_parent_hierarchy(db))
    errors.extend(_check_parent_cycles(db))
    errors.extend(_check_duplicate_property_ids(db))
    errors.extend(_check_resource_parents(db))
    warnings.extend(_check_empty_components(db))
    warnings.extend(_check_duplicate_enum_values(db))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################


def _structures(db: ReflectionDatabase) -> list[StructureType]:
    return [t for t in db.schema.types if not isinstance(t, EnumType)]


def _check_duplicate_type_names(db: ReflectionDatabase) -> list[ValidationError]:
    counts = Counter(t.qualified_name for t in db.schema.types)
    return [
        ValidationError(message=f"Type '{name}' is declared {count} times.")
        for name, count in counts.items()
        if count > 1
    ]


def _check_parent_hierarchy(db: ReflectionDatabase) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for structure in _structures(db):
        parent = structure.parent
        if parent is None:
            errors.append(ValidationError(message=f"Type '{structure.qualified_name}' has no parent type."))
            continue
        if parent in INTERNAL_ROOT_TYPES:
            continue
        resolved = db.get_type(parent)
        if resolved is None:
            errors.append(
                ValidationError(message=f"Type '{structure.qualified_name}' derives from unknown type '{parent}'.")
            )
        elif isinstance(resolved, EnumType):
            errors.append(
                ValidationError(message=f"Type '{structure.qualified_name}' derives from enumeration '{parent}'.")
            )
    return errors


def _check_parent_cycles(db: ReflectionDatabase) -> list[ValidationError]:
    # Edges point from a type to its parent; only reflected types take part.
    graph: dict[str, list[str]] = {}
    for structure in _structures(db):
        parent = structure.parent
        graph[structure.qualified_name] = [parent] if parent is not None and db.get_type(parent) is not None else []

    cycle = find_cycle(graph)
    if cycle is None:
        return []
    cycle_str = " -> ".join(cycle)
    return [ValidationError(message=f"Cyclic parent hierarchy detected: {cycle_str}.")]


def _check_duplicate_property_ids(db: ReflectionDatabase) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for structure in _structures(db):
        counts = Counter(p.property_id for p in structure.properties)
        for property_id, count in counts.items():
            if count > 1:
                errors.append(
                    ValidationError(
                        message=f"Type '{structure.qualified_name}' has {count} properties with id {property_id}."
                    )
                )
    return errors


def _check_resource_parents(db: ReflectionDatabase) -> list[ValidationError]:
    registered = {r.type_id for r in db.get_resource_types()}
    errors: list[ValidationError] = []
    for resource_type in db.get_resource_types():
        for parent in resource_type.parents:
            if parent not in registered:
                errors.append(
                    ValidationError(
                        message=(
                            f"Resource type '{resource_type.type_id}' declares parent '{parent}' "
                            "which is not a registered resource type."
                        )
                    )
                )
    return errors


def _check_empty_components(db: ReflectionDatabase) -> list[ValidationWarning]:
    return [
        ValidationWarning(message=f"Entity component '{s.qualified_name}' has no properties.")
        for s in _structures(db)
        if s.is_entity_component and not s.has_properties
    ]


def _check_duplicate_enum_values(db: ReflectionDatabase) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    for enum_type in db.schema.types:
        if not isinstance(enum_type, EnumType):
            continue
        counts = Counter(c.value for c in enum_type.constants)
        for value, count in counts.items():
            if count > 1:
                warnings.append(
                    ValidationWarning(
                        message=f"Enumeration '{enum_type.qualified_name}' has {count} constants with value {value}."
                    )
                )
    return warnings
