# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the reflection schema consistency checks."""

from reflectgen.database.store import ReflectionDatabase
from reflectgen.model.entities import EnumType, ResourceType, Schema, StructType
from reflectgen.model.types import EnumConstant, Property
from reflectgen.validation.checks import ValidationError, ValidationResult, ValidationWarning, validate

# ###############
# Test Helpers
# ###############


def _struct(name: str, parent: str | None = "EE::IReflectedType", **kwargs) -> StructType:
    return StructType(name=name, namespace="EE::", header="h", parent=parent, **kwargs)


def _prop(name: str, property_id: int) -> Property:
    return Property(name=name, type_name="float", property_id=property_id)


def _validate(types: list | None = None, resource_types: list[ResourceType] | None = None) -> ValidationResult:
    return validate(ReflectionDatabase(Schema(types=types or [], resource_types=resource_types or [])))


def _messages(items: list) -> list[str]:
    return [item.message for item in items]


# ###############
# Tests
# ###############


class TestValidationResult:
    def test_empty_result_has_no_errors(self) -> None:
        assert not ValidationResult().has_errors

    def test_result_with_error(self) -> None:
        assert ValidationResult(errors=[ValidationError(message="x")]).has_errors

    def test_warnings_alone_are_not_errors(self) -> None:
        assert not ValidationResult(warnings=[ValidationWarning(message="x")]).has_errors


class TestValidate:
    def test_valid_schema(self) -> None:
        result = _validate([_struct("Base"), _struct("Derived", parent="EE::Base")])
        assert result.errors == []
        assert result.warnings == []

    def test_duplicate_type_names(self) -> None:
        result = _validate([_struct("A"), _struct("A")])
        assert _messages(result.errors) == ["Type 'EE::A' is declared 2 times."]

    def test_missing_parent(self) -> None:
        result = _validate([_struct("A", parent=None)])
        assert _messages(result.errors) == ["Type 'EE::A' has no parent type."]

    def test_unknown_parent(self) -> None:
        result = _validate([_struct("A", parent="EE::Nope")])
        assert _messages(result.errors) == ["Type 'EE::A' derives from unknown type 'EE::Nope'."]

    def test_enum_parent(self) -> None:
        result = _validate([EnumType(name="E", namespace="EE::", header="h"), _struct("A", parent="EE::E")])
        assert _messages(result.errors) == ["Type 'EE::A' derives from enumeration 'EE::E'."]

    def test_parent_cycle(self) -> None:
        result = _validate([_struct("A", parent="EE::B"), _struct("B", parent="EE::A")])
        assert _messages(result.errors) == ["Cyclic parent hierarchy detected: EE::A -> EE::B -> EE::A."]

    def test_self_parent_is_a_cycle(self) -> None:
        result = _validate([_struct("A", parent="EE::A")])
        assert _messages(result.errors) == ["Cyclic parent hierarchy detected: EE::A -> EE::A."]

    def test_duplicate_property_ids(self) -> None:
        result = _validate([_struct("A", properties=[_prop("m_x", 5), _prop("m_y", 5)])])
        assert _messages(result.errors) == ["Type 'EE::A' has 2 properties with id 5."]

    def test_unresolved_resource_parent(self) -> None:
        result = _validate(resource_types=[ResourceType(type_id="EE::Mesh", resource_type_id="msh", parents=["EE::X"])])
        assert _messages(result.errors) == [
            "Resource type 'EE::Mesh' declares parent 'EE::X' which is not a registered resource type."
        ]

    def test_resolved_resource_parent(self) -> None:
        result = _validate(
            resource_types=[
                ResourceType(type_id="EE::Base", resource_type_id="base"),
                ResourceType(type_id="EE::Mesh", resource_type_id="msh", parents=["EE::Base"]),
            ]
        )
        assert result.errors == []

    def test_empty_component_warns(self) -> None:
        result = _validate([_struct("C", is_entity_component=True)])
        assert not result.has_errors
        assert _messages(result.warnings) == ["Entity component 'EE::C' has no properties."]

    def test_duplicate_enum_values_warn(self) -> None:
        enum_type = EnumType(
            name="E",
            namespace="EE::",
            header="h",
            constants=[EnumConstant(label="A", value=1), EnumConstant(label="B", value=1)],
        )
        result = _validate([enum_type])
        assert _messages(result.warnings) == ["Enumeration 'EE::E' has 2 constants with value 1."]

    def test_reports_all_problems_at_once(self) -> None:
        result = _validate([_struct("A", parent=None), _struct("B", parent="EE::Nope"), _struct("C", is_entity_component=True)])
        assert len(result.errors) == 2
        assert len(result.warnings) == 1
