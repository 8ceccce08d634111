# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry points that drive per-project and solution-wide generation.

Generation never writes to disk; callers receive a :class:`GenerationResult`
holding every generated file, or the error that stopped the pass.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from reflectgen.codegen.composers import (
    BuildMode,
    compose_header_type_info,
    compose_project_header,
    compose_project_source,
    compose_solution_registration,
)
from reflectgen.codegen.constants import DEFAULT_RUNTIME_REGISTRATION_FILE, DEFAULT_TOOLS_REGISTRATION_FILE
from reflectgen.codegen.errors import (
    GenerationError,
    GenerationErrorKind,
    GenerationResult,
    GenerationStage,
    SchemaInvariantError,
)
from reflectgen.codegen.ordering import sort_project_types, sort_types_by_dependencies, with_ancestors
from reflectgen.codegen.sink import GeneratedFile, GeneratedFileSink
from reflectgen.codegen.toposort import CycleError
from reflectgen.database.store import ReflectionDatabase
from reflectgen.logging import get_logger
from reflectgen.model.entities import EnumType, Project

_log = get_logger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class RegistrationPaths:
    """Output paths of the two solution-wide registration files."""

    runtime: str = DEFAULT_RUNTIME_REGISTRATION_FILE
    tools: str = DEFAULT_TOOLS_REGISTRATION_FILE


def generate_project(db: ReflectionDatabase, project: Project) -> GenerationResult:
    """Generate the header type info files and module pair for one project.

    Returns:
        A result whose ``stage`` is ``DONE`` on success or ``FAILED`` when the
        project's types are cyclic or lack a valid parent.
    """
    result = GenerationResult(stage=GenerationStage.PER_PROJECT)
    try:
        output = _generate_project_files(db, project)
    except SchemaInvariantError:
        raise
    except GenerationError as exc:
        _log.debug("Generation failed for project %s: %s", project.name, exc.message)
        return result.fail(exc)
    result.files = output.files
    if output.warnings:
        result.warning = output.warnings[-1]
    result.stage = GenerationStage.DONE
    return result


def generate_solution(
    db: ReflectionDatabase,
    *,
    paths: RegistrationPaths | None = None,
    jobs: int = 1,
) -> GenerationResult:
    """Generate every project plus the runtime and tools registration files.

    Per-project generation may run on up to *jobs* worker threads; outputs are
    merged in project order so the result does not depend on scheduling. The
    aggregate files are composed only after every project succeeded.

    Args:
        db: The schema to generate from. It is only read.
        paths: Where to place the solution registration files.
        jobs: Maximum number of worker threads for per-project generation.

    Returns:
        The generation outcome. On failure it holds no files.

    Raises:
        SchemaInvariantError: If the resource type table is inconsistent.
    """
    paths = paths or RegistrationPaths()
    result = GenerationResult()
    sink = GeneratedFileSink()
    warnings: list[str] = []

    try:
        result.stage = GenerationStage.PER_PROJECT
        projects = db.get_projects()
        _check_solution_types(db)
        for project in projects:
            if project.module_header is None:
                warnings.append(f"Skipping project without a module header: {project.name}")
        for output in _generate_projects(db, [p for p in projects if p.module_header is not None], jobs):
            sink.extend(output.files)
            warnings.extend(output.warnings)

        result.stage = GenerationStage.RUNTIME_AGGREGATE
        sink.extend([compose_solution_registration(db, BuildMode.RUNTIME, paths.runtime)])
        _log.info("Composed runtime registration file %s", paths.runtime)

        result.stage = GenerationStage.TOOLS_AGGREGATE
        sink.extend([compose_solution_registration(db, BuildMode.TOOLS, paths.tools)])
        _log.info("Composed tools registration file %s", paths.tools)
    except SchemaInvariantError:
        raise
    except GenerationError as exc:
        _log.debug("Generation failed during %s: %s", result.stage.value, exc.message)
        return result.fail(exc)

    for warning in warnings:
        _log.warning(warning)
    result.files = sink.files
    result.warning = warnings[-1] if warnings else None
    result.stage = GenerationStage.DONE
    return result


# ################
# Implementation
# ################


@dataclass
class _ProjectOutput:
    files: list[GeneratedFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _generate_projects(db: ReflectionDatabase, projects: Sequence[Project], jobs: int) -> list[_ProjectOutput]:
    if jobs <= 1 or len(projects) <= 1:
        return [_generate_project_files(db, project) for project in projects]

    with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="reflectgen") as executor:
        futures = [executor.submit(_generate_project_files, db, project) for project in projects]
        try:
            return [future.result() for future in futures]
        except GenerationError:
            for future in futures:
                future.cancel()
            raise


def _generate_project_files(db: ReflectionDatabase, project: Project) -> _ProjectOutput:
    output = _ProjectOutput()
    if project.module_header is None:
        output.warnings.append(f"Skipping project without a module header: {project.name}")
        return output

    _log.debug("Generating project %s", project.name)
    declared = db.get_types_for_project(project.id)
    sort_project_types(project, with_ancestors(declared, db.get_type))
    project_types = sort_project_types(project, declared)

    for header in project.headers:
        if header.id == project.module_header:
            continue
        header_types = db.get_types_for_header(header.id)
        if not header_types:
            continue
        ordered = sort_project_types(project, header_types)
        output.files.append(compose_header_type_info(db, header, ordered))
        for reflected_type in ordered:
            if (
                not isinstance(reflected_type, EnumType)
                and reflected_type.is_entity_component
                and not reflected_type.has_properties
            ):
                output.warnings.append(
                    f"Entity component ({reflected_type.qualified_name}) has no properties; "
                    "its resources are reported as loaded immediately"
                )

    output.files.append(compose_project_header(project, project_types))
    output.files.append(compose_project_source(project, project_types))
    return output


def _check_solution_types(db: ReflectionDatabase) -> None:
    types = db.schema.types
    try:
        sort_types_by_dependencies(types)
    except CycleError as exc:
        first = types[exc.cycle[0]]
        _log.debug("Parent cycle: %s", " -> ".join(types[index].qualified_name for index in exc.cycle))
        raise GenerationError(
            GenerationErrorKind.CYCLIC_DEPENDENCY,
            f"Cyclic header dependency detected in project: {_owning_project_name(db, first.header)}",
        ) from exc


def _owning_project_name(db: ReflectionDatabase, header_id: str) -> str:
    header = db.get_header(header_id)
    if header is not None:
        for project in db.get_projects():
            if project.id == header.project:
                return project.name
    return header_id
