# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the header, project and solution file composers."""

import pytest

from reflectgen.codegen.composers import (
    BuildMode,
    compose_header_type_info,
    compose_project_header,
    compose_project_source,
    compose_solution_registration,
    resolve_parent,
    select_projects,
    select_resource_types,
)
from reflectgen.codegen.composers.naming import (
    create_default_instance_function,
    dev_tools_only,
    has_default_instance,
    module_create_default_instances_function,
    module_register_types_function,
    module_unregister_types_function,
    register_type_function,
    unregister_type_function,
)
from reflectgen.codegen.errors import GenerationError, GenerationErrorKind, SchemaInvariantError
from reflectgen.database.store import ReflectionDatabase
from reflectgen.model.entities import (
    AbstractStructType,
    DataFileType,
    EnumType,
    Header,
    Project,
    ResourceType,
    Schema,
    StructType,
)

# ###############
# Test Helpers
# ###############


def _header(header_id: str, project: str) -> Header:
    return Header(
        id=header_id,
        path=f"Code/{project}/{header_id}.h",
        type_info_path=f"Code/{project}/_AutoGenerated/{header_id}.h",
        project=project,
    )


def _project(name: str, dependency_count: int = 0, is_tools_project: bool = False, module: bool = True) -> Project:
    headers = [_header(f"{name}Module", name), _header(f"{name}Types", name)]
    return Project(
        id=name,
        name=name,
        module_class_name=f"EE::{name}::{name}Module",
        export_macro=f"EE_{name.upper()}_API",
        type_info_directory=f"Code/{name}/_AutoGenerated/",
        headers=headers,
        dependency_count=dependency_count,
        is_tools_project=is_tools_project,
        module_header=f"{name}Module" if module else None,
    )


def _struct(name: str, header: str, parent: str = "EE::IReflectedType", **kwargs) -> StructType:
    return StructType(name=name, namespace="EE::", header=header, parent=parent, **kwargs)


def _db(
    types: list | None = None,
    resource_types: list[ResourceType] | None = None,
    data_file_types: list[DataFileType] | None = None,
) -> ReflectionDatabase:
    projects = [
        _project("Game", dependency_count=2),
        _project("Base", dependency_count=0),
        _project("Editor", dependency_count=1, is_tools_project=True),
        _project("Loose", module=False),
    ]
    return ReflectionDatabase(
        Schema(
            projects=projects,
            types=types or [],
            resource_types=resource_types or [],
            data_file_types=data_file_types or [],
        )
    )


# ###############
# Tests
# ###############


class TestNaming:
    def test_free_function_names(self) -> None:
        foo = StructType(name="Foo", namespace="EE::Game::", header="h", parent="EE::IReflectedType")
        assert register_type_function(foo) == "RegisterType_EE_Game_Foo"
        assert create_default_instance_function(foo) == "CreateDefaultInstance_EE_Game_Foo"
        assert unregister_type_function(foo) == "UnregisterType_EE_Game_Foo"

    def test_module_function_names(self) -> None:
        project = _project("Game")
        assert module_register_types_function(project) == "EE_Game_GameModule_RegisterTypes"
        assert module_create_default_instances_function(project) == "EE_Game_GameModule_CreateDefaultInstances"
        assert module_unregister_types_function(project) == "EE_Game_GameModule_UnregisterTypes"

    def test_only_concrete_structures_have_default_instances(self) -> None:
        assert has_default_instance(_struct("A", "h"))
        assert not has_default_instance(AbstractStructType(name="B", namespace="EE::", header="h"))
        assert not has_default_instance(EnumType(name="C", namespace="EE::", header="h"))

    def test_dev_tools_only_wraps_statement(self) -> None:
        assert dev_tools_only("Foo();", True) == "EE_DEVELOPMENT_TOOLS_ONLY( Foo() );"
        assert dev_tools_only("Foo();", False) == "Foo();"


class TestHeaderComposer:
    def test_resolve_parent_accepts_internal_root_and_reflected_types(self) -> None:
        base = _struct("Base", "BaseTypes")
        derived = _struct("Derived", "BaseTypes", parent="EE::Base")
        db = _db([base, derived])
        assert resolve_parent(db, base) == "EE::IReflectedType"
        assert resolve_parent(db, derived) == "EE::Base"

    @pytest.mark.parametrize("parent", [None, "EE::Unknown", "EE::Mode"])
    def test_resolve_parent_rejects_invalid_parents(self, parent: str | None) -> None:
        broken = StructType(name="Broken", namespace="EE::", header="BaseTypes", parent=parent)
        db = _db([EnumType(name="Mode", namespace="EE::", header="BaseTypes"), broken])
        with pytest.raises(GenerationError) as exc_info:
            resolve_parent(db, broken)
        assert exc_info.value.kind is GenerationErrorKind.INVALID_PARENT_HIERARCHY
        assert "(EE::Broken)" in exc_info.value.message

    def test_header_file_contents(self) -> None:
        base = _struct("Base", "BaseTypes")
        mode = EnumType(name="Mode", namespace="EE::", header="BaseTypes")
        component = _struct("Comp", "BaseTypes", is_entity_component=True)
        db = _db([base, mode, component])
        header = db.get_header("BaseTypes")
        generated = compose_header_type_info(db, header, [base, mode, component])
        text = generated.contents
        assert generated.path == "Code/Base/_AutoGenerated/BaseTypes.h"
        assert text.startswith("#pragma once\n")
        assert '#include "Code/Base/BaseTypes.h"' in text
        assert "// TypeInfo: EE::Base" in text
        assert "// Enum Info: EE::Mode" in text
        assert "// Component: EE::Comp" in text
        assert (
            "void RegisterType_EE_Base( TypeSystem::TypeRegistry& typeRegistry ) "
            "{ TypeSystem::TTypeInfo<EE::Base>::RegisterType( typeRegistry ); }"
        ) in text
        assert "void CreateDefaultInstance_EE_Mode" not in text

    def test_dev_only_free_functions_are_wrapped(self) -> None:
        debug = _struct("Debug", "BaseTypes", is_dev_only=True)
        db = _db([debug])
        text = compose_header_type_info(db, db.get_header("BaseTypes"), [debug]).contents
        assert "EE_DEVELOPMENT_TOOLS_ONLY( void CreateDefaultInstance_EE_Debug() " in text


class TestProjectComposer:
    def _types(self) -> list:
        return [
            _struct("Base", "BaseTypes"),
            AbstractStructType(name="Shape", namespace="EE::", header="BaseTypes", parent="EE::Base"),
            _struct("Debug", "BaseTypes", parent="EE::Base", is_dev_only=True),
        ]

    def test_project_header_declarations(self) -> None:
        text = compose_project_header(_project("Base"), self._types()).contents
        assert "// Generated For: Code/Base/BaseModule.h" in text
        assert "namespace TypeSystem { class TypeRegistry; }" in text
        assert "void RegisterType_EE_Shape( TypeSystem::TypeRegistry& typeRegistry );" in text
        assert "CreateDefaultInstance_EE_Shape" not in text
        assert "EE_DEVELOPMENT_TOOLS_ONLY( void CreateDefaultInstance_EE_Debug() );" in text
        assert "EE_BASE_API void EE_Base_BaseModule_RegisterTypes( TypeSystem::TypeRegistry& typeRegistry );" in text

    def test_project_paths(self) -> None:
        project = _project("Base")
        assert compose_project_header(project, []).path == "Code/Base/_AutoGenerated/_module.h"
        assert compose_project_source(project, []).path == "Code/Base/_AutoGenerated/_module.cpp"

    def test_unregistration_is_reverse_of_registration(self) -> None:
        text = compose_project_source(_project("Base"), self._types()).contents
        register = [text.index(f"RegisterType_EE_{n}( typeRegistry )") for n in ("Base", "Shape", "Debug")]
        unregister = [text.index(f"UnregisterType_EE_{n}( typeRegistry )") for n in ("Debug", "Shape", "Base")]
        assert register == sorted(register)
        assert unregister == sorted(unregister)
        assert max(register) < min(unregister)
        assert "CreateDefaultInstance_EE_Shape" not in text
        assert "EE_DEVELOPMENT_TOOLS_ONLY( UnregisterType_EE_Debug( typeRegistry ) );" in text


class TestSolutionComposer:
    def test_runtime_excludes_tools_and_module_less_projects(self) -> None:
        names = [p.name for p in select_projects(_db().get_projects(), BuildMode.RUNTIME)]
        assert names == ["Base", "Game"]

    def test_tools_includes_tools_projects_by_dependency_count(self) -> None:
        names = [p.name for p in select_projects(_db().get_projects(), BuildMode.TOOLS)]
        assert names == ["Base", "Editor", "Game"]

    def test_runtime_skips_dev_only_resources(self) -> None:
        debug = _struct("DebugRes", "BaseTypes", is_dev_only=True)
        db = _db(
            [debug],
            resource_types=[
                ResourceType(type_id="EE::Mesh", resource_type_id="msh"),
                ResourceType(type_id="EE::Tool", resource_type_id="tool", is_dev_only=True),
                ResourceType(type_id="EE::DebugRes", resource_type_id="dbg"),
            ],
        )
        assert [r.resource_type_id for r in select_resource_types(db, BuildMode.RUNTIME)] == ["msh"]
        assert len(select_resource_types(db, BuildMode.TOOLS)) == 3

    def test_resource_parent_is_emitted_by_resource_kind(self) -> None:
        db = _db(
            resource_types=[
                ResourceType(type_id="EE::Base", resource_type_id="base"),
                ResourceType(type_id="EE::Derived", resource_type_id="drv", parents=["EE::Base"]),
            ]
        )
        text = compose_solution_registration(db, BuildMode.RUNTIME, "Runtime.h").contents
        derived = text.index('resourceInfo.m_resourceTypeID = ResourceTypeID( "drv" );')
        parent = text.index('resourceInfo.m_parentTypes.emplace_back( ResourceTypeID( "base" ) );')
        assert parent > derived

    def test_parent_skipped_in_runtime_still_resolves(self) -> None:
        db = _db(
            resource_types=[
                ResourceType(type_id="EE::Base", resource_type_id="base", is_dev_only=True),
                ResourceType(type_id="EE::Derived", resource_type_id="drv", parents=["EE::Base"]),
            ]
        )
        text = compose_solution_registration(db, BuildMode.RUNTIME, "Runtime.h").contents
        assert 'resourceInfo.m_parentTypes.emplace_back( ResourceTypeID( "base" ) );' in text
        assert 'resourceInfo.m_resourceTypeID = ResourceTypeID( "base" );' not in text

    def test_unknown_resource_parent_raises(self) -> None:
        db = _db(resource_types=[ResourceType(type_id="EE::Derived", resource_type_id="drv", parents=["EE::Base"])])
        with pytest.raises(SchemaInvariantError) as exc_info:
            compose_solution_registration(db, BuildMode.TOOLS, "Tools.h")
        assert exc_info.value.kind is GenerationErrorKind.UNRESOLVED_RESOURCE_PARENT

    def test_data_files_only_in_tools_mode(self) -> None:
        db = _db(data_file_types=[DataFileType(type_id="EE::Settings", extension="cfg", friendly_name="Settings")])
        runtime = compose_solution_registration(db, BuildMode.RUNTIME, "Runtime.h").contents
        tools = compose_solution_registration(db, BuildMode.TOOLS, "Tools.h").contents
        assert "RegisterDataFileTypes" not in runtime
        assert "RegisterDataFileTypes( typeRegistry );" in tools
        assert f"dataFileInfo.m_extensionFourCC = {ord('c') << 16 | ord('f') << 8 | ord('g')};" in tools

    def test_teardown_mirrors_registration(self) -> None:
        text = compose_solution_registration(_db(), BuildMode.TOOLS, "Tools.h").contents
        register = text[text.index("inline void RegisterTypes(") : text.index("inline void UnregisterTypes(")]
        unregister = text[text.index("inline void UnregisterTypes(") :]

        steps = [
            "typeRegistry.RegisterInternalTypes();",
            "EE_Base_BaseModule_RegisterTypes( typeRegistry );",
            "EE_Editor_EditorModule_RegisterTypes( typeRegistry );",
            "EE_Game_GameModule_RegisterTypes( typeRegistry );",
            "EE_Base_BaseModule_CreateDefaultInstances();",
            "RegisterResourceTypes( typeRegistry );",
            "RegisterDataFileTypes( typeRegistry );",
        ]
        positions = [register.index(step) for step in steps]
        assert positions == sorted(positions)

        teardown = [
            "UnregisterDataFileTypes( typeRegistry );",
            "UnregisterResourceTypes( typeRegistry );",
            "EE_Game_GameModule_UnregisterTypes( typeRegistry );",
            "EE_Editor_EditorModule_UnregisterTypes( typeRegistry );",
            "EE_Base_BaseModule_UnregisterTypes( typeRegistry );",
            "typeRegistry.UnregisterInternalTypes();",
        ]
        positions = [unregister.index(step) for step in teardown]
        assert positions == sorted(positions)

    def test_project_module_headers_are_included(self) -> None:
        text = compose_solution_registration(_db(), BuildMode.RUNTIME, "Runtime.h").contents
        assert '#include "Code/Base/_AutoGenerated/_module.h"' in text
        assert '#include "Code/Editor/_AutoGenerated/_module.h"' not in text
