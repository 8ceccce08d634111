# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflection code generation: ordering, emitters, composers and orchestration."""

from reflectgen.codegen.composers import BuildMode
from reflectgen.codegen.errors import (
    GenerationDiagnostic,
    GenerationError,
    GenerationErrorKind,
    GenerationResult,
    GenerationStage,
    SchemaInvariantError,
)
from reflectgen.codegen.generator import RegistrationPaths, generate_project, generate_solution
from reflectgen.codegen.ordering import (
    sort_project_types,
    sort_projects_by_dependency_count,
    sort_types_by_dependencies,
    with_ancestors,
)
from reflectgen.codegen.sink import GeneratedFile, GeneratedFileSink, write_generated_files
from reflectgen.codegen.toposort import CycleError, find_cycle, topological_sort

__all__ = [
    "BuildMode",
    "CycleError",
    "GeneratedFile",
    "GeneratedFileSink",
    "GenerationDiagnostic",
    "GenerationError",
    "GenerationErrorKind",
    "GenerationResult",
    "GenerationStage",
    "RegistrationPaths",
    "SchemaInvariantError",
    "find_cycle",
    "generate_project",
    "generate_solution",
    "sort_project_types",
    "sort_projects_by_dependency_count",
    "sort_types_by_dependencies",
    "topological_sort",
    "with_ancestors",
    "write_generated_files",
]
