# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generic dependency ordering.

Edges point from a dependency to its dependents ("children"). The sort places
every node before all of its children and reports cycles instead of looping or
dropping nodes.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Hashable, Mapping, Sequence
from typing import TypeVar

# ###############
# Public Interface
# ###############

NodeT = TypeVar("NodeT", bound=Hashable)


class CycleError(Exception):
    """Raised when the dependency graph contains a cycle.

    Attributes:
        cycle: The nodes forming the cycle with the start node repeated at the
            end (e.g. ``["A", "B", "A"]``).
    """

    def __init__(self, cycle: Sequence[Hashable]) -> None:
        self.cycle = list(cycle)
        super().__init__("Cycle detected: " + " -> ".join(str(n) for n in self.cycle))


def topological_sort(graph: Mapping[NodeT, Sequence[NodeT]]) -> list[NodeT]:
    """Order the nodes of *graph* so that every node precedes its children.

    Uses Kahn's algorithm seeded in the mapping's iteration order, so nodes
    with no ordering constraint between them keep their input order.

    Args:
        graph: Mapping from each node to its children. Children that are not
            themselves keys of the mapping are ignored.

    Returns:
        A permutation of the mapping's keys.

    Raises:
        CycleError: If the graph contains a cycle.
    """
    in_degree: dict[NodeT, int] = {node: 0 for node in graph}
    for node, children in graph.items():
        for child in children:
            if child in in_degree and child != node:
                in_degree[child] += 1
            elif child == node:
                raise CycleError([node, node])

    ready: deque[NodeT] = deque(node for node, degree in in_degree.items() if degree == 0)
    ordered: list[NodeT] = []
    while ready:
        node = ready.popleft()
        ordered.append(node)
        for child in graph[node]:
            if child not in in_degree:
                continue
            in_degree[child] -= 1
            if in_degree[child] == 0:
                ready.append(child)

    if len(ordered) != len(in_degree):
        remaining = {node: [c for c in graph[node] if c in in_degree] for node in graph if in_degree[node] > 0}
        cycle = find_cycle(remaining)
        raise CycleError(cycle if cycle is not None else list(remaining))
    return ordered


def find_cycle(graph: Mapping[NodeT, Sequence[NodeT]]) -> list[NodeT] | None:
    """Detect a cycle in a directed graph using DFS.

    Uses a three-colour marking scheme (white/grey/black) to distinguish
    unvisited, in-progress, and fully-explored nodes.

    Returns:
        The nodes forming the cycle with the start node repeated at the end,
        or ``None`` if the graph is acyclic.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    color: dict[NodeT, int] = {}
    path: list[NodeT] = []

    def _dfs(node: NodeT) -> list[NodeT] | None:
        color[node] = GREY
        path.append(node)
        for neighbor in graph.get(node, []):
            state = color.get(neighbor, WHITE)
            if state == GREY:
                cycle_start = path.index(neighbor)
                return path[cycle_start:] + [neighbor]
            if state == WHITE:
                result = _dfs(neighbor)
                if result is not None:
                    return result
        path.pop()
        color[node] = BLACK
        return None

    for node in graph:
        if color.get(node, WHITE) == WHITE:
            result = _dfs(node)
            if result is not None:
                return result
    return None
