from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Set, Tuple

from ..defs.compose import ComposeServiceDef, ServiceName
from ..defs.compose.normalize import dependency_names


def dependency_map(
    services: Mapping[ServiceName, ComposeServiceDef],
) -> Dict[str, List[str]]:
    "depends_on relation restricted to declared services"
    return {
        name: [
            dep
            for dep in dependency_names(spec.get("depends_on"))
            if dep in services
        ]
        for name, spec in services.items()
    }


def detect_dependency_cycles(
    services: Mapping[ServiceName, ComposeServiceDef],
) -> List[List[str]]:
    """Every back edge found by a depth-first search over depends_on.

    Each cycle runs from the first occurrence of the repeated service along
    the current search path to the service closing it, followed by the
    repeated service again: ``a -> b -> c -> b`` is reported as
    ``["b", "c", "b"]``. Rotations found from different entry points are all
    reported.

    The search keeps its own stack, so long dependency chains cannot exhaust
    the interpreter's recursion limit.
    """
    graph = dependency_map(services)
    cycles: List[List[str]] = []
    visited: Set[str] = set()

    for root in graph:
        if root in visited:
            continue
        path: List[str] = [root]
        on_path: Set[str] = {root}
        stack: List[Tuple[str, Iterator[str]]] = [(root, iter(graph[root]))]
        visited.add(root)
        while stack:
            node, neighbours = stack[-1]
            neighbour = next(neighbours, None)
            if neighbour is None:
                stack.pop()
                path.pop()
                on_path.discard(node)
                continue
            if neighbour not in visited:
                visited.add(neighbour)
                on_path.add(neighbour)
                path.append(neighbour)
                stack.append((neighbour, iter(graph[neighbour])))
            elif neighbour in on_path:
                start = path.index(neighbour)
                cycles.append(path[start:] + [neighbour])
    return cycles
