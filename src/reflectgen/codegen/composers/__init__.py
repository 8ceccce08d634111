# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Composers that assemble emitter output into complete generated files."""

from reflectgen.codegen.composers.header import compose_header_type_info, resolve_parent
from reflectgen.codegen.composers.project import compose_project_header, compose_project_source
from reflectgen.codegen.composers.solution import (
    BuildMode,
    compose_solution_registration,
    select_projects,
    select_resource_types,
)

__all__ = [
    "BuildMode",
    "compose_header_type_info",
    "compose_project_header",
    "compose_project_source",
    "compose_solution_registration",
    "resolve_parent",
    "select_projects",
    "select_resource_types",
]
