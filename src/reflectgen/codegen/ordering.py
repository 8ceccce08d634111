# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dependency ordering of reflected types and projects."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from reflectgen.codegen.errors import GenerationError, GenerationErrorKind
from reflectgen.codegen.toposort import CycleError, topological_sort
from reflectgen.model.entities import EnumType, Project, ReflectedType

# ###############
# Public Interface
# ###############


def parent_of(reflected_type: ReflectedType) -> str | None:
    """Return the qualified parent name of *reflected_type* (``None`` for enums)."""
    if isinstance(reflected_type, EnumType):
        return None
    return reflected_type.parent


def sort_types_by_dependencies(types: Sequence[ReflectedType]) -> list[ReflectedType]:
    """Return *types* ordered so that every parent precedes its derived types.

    Parents outside *types* impose no constraint. The input sequence is left
    untouched.

    Raises:
        CycleError: If the parent relation among *types* is cyclic.
    """
    if len(types) <= 1:
        return list(types)

    graph: dict[int, list[int]] = {index: [] for index in range(len(types))}
    index_by_name: dict[str, list[int]] = {}
    for index, reflected_type in enumerate(types):
        index_by_name.setdefault(reflected_type.qualified_name, []).append(index)
    for index, reflected_type in enumerate(types):
        parent = parent_of(reflected_type)
        if parent is None:
            continue
        for parent_index in index_by_name.get(parent, []):
            graph[parent_index].append(index)

    return [types[index] for index in topological_sort(graph)]


def with_ancestors(
    types: Sequence[ReflectedType], lookup: Callable[[str], ReflectedType | None]
) -> list[ReflectedType]:
    """Return *types* followed by every ancestor reachable through *lookup*.

    Ancestors already in *types* are not repeated; names *lookup* cannot
    resolve end the walk.
    """
    result = list(types)
    seen = {reflected_type.qualified_name for reflected_type in result}
    pending = [parent_of(reflected_type) for reflected_type in result]
    while pending:
        name = pending.pop(0)
        if name is None or name in seen:
            continue
        ancestor = lookup(name)
        if ancestor is None:
            continue
        seen.add(name)
        result.append(ancestor)
        pending.append(parent_of(ancestor))
    return result


def sort_project_types(project: Project, types: Sequence[ReflectedType]) -> list[ReflectedType]:
    """Order a project's types by inheritance.

    Raises:
        GenerationError: With kind ``CYCLIC_DEPENDENCY`` naming *project*.
    """
    try:
        return sort_types_by_dependencies(types)
    except CycleError as exc:
        raise GenerationError(
            GenerationErrorKind.CYCLIC_DEPENDENCY,
            f"Cyclic header dependency detected in project: {project.name}",
        ) from exc


def by_dependency_count(project: Project) -> int:
    """Sort key placing projects with fewer dependencies first."""
    return project.dependency_count


def sort_projects_by_dependency_count(projects: Sequence[Project]) -> list[Project]:
    """Return *projects* in ascending dependency-count order (stable)."""
    return sorted(projects, key=by_dependency_count)
