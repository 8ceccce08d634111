# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Names of the generated free functions.

These names are a binding contract with the compiled engine code; changing
them breaks downstream builds.
"""

from __future__ import annotations

from reflectgen.codegen.constants import DEV_TOOLS_ONLY_MACRO
from reflectgen.model.entities import Project, ReflectedType, StructType

# ###############
# Public Interface
# ###############


def register_type_function(reflected_type: ReflectedType) -> str:
    return f"RegisterType_{reflected_type.sanitized_name}"


def create_default_instance_function(reflected_type: ReflectedType) -> str:
    return f"CreateDefaultInstance_{reflected_type.sanitized_name}"


def unregister_type_function(reflected_type: ReflectedType) -> str:
    return f"UnregisterType_{reflected_type.sanitized_name}"


def has_default_instance(reflected_type: ReflectedType) -> bool:
    """Return True for concrete structures, the only types with a default instance."""
    return isinstance(reflected_type, StructType)


def module_register_types_function(project: Project) -> str:
    return f"{project.module_identifier}_RegisterTypes"


def module_create_default_instances_function(project: Project) -> str:
    return f"{project.module_identifier}_CreateDefaultInstances"


def module_unregister_types_function(project: Project) -> str:
    return f"{project.module_identifier}_UnregisterTypes"


def dev_tools_only(statement: str, enabled: bool) -> str:
    """Wrap *statement* in the development-tools-only macro when *enabled*.

    A trailing ``;`` moves outside the macro invocation.
    """
    if not enabled:
        return statement
    return f"{DEV_TOOLS_ONLY_MACRO}( {statement.removesuffix(';')} );"
