from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..defs.compose.normalize import (
    build_context,
    command_args,
    dependency_names,
    environment_pairs,
    network_names,
)
from .model import GraphNode, NodeKind


def _entries(value: Any) -> List[str]:
    "ports / mounts for display, long syntax rendered as SOURCE:TARGET"
    if not isinstance(value, list):
        return []
    entries: List[str] = []
    for entry in value:
        if isinstance(entry, dict):
            host = entry.get("published", entry.get("source"))
            target = entry.get("target")
            entries.append(":".join(str(part) for part in (host, target) if part is not None))
        else:
            entries.append(str(entry))
    return entries


def describe_service(spec: Mapping[str, Any]) -> Dict[str, Any]:
    command = command_args(spec.get("command"))
    return {
        "image": spec.get("image"),
        "build": build_context(spec.get("build")),
        "container_name": spec.get("container_name"),
        "ports": _entries(spec.get("ports")),
        "volumes": _entries(spec.get("volumes")),
        "networks": network_names(spec.get("networks")),
        "environment": dict(environment_pairs(spec.get("environment"))),
        "depends_on": dependency_names(spec.get("depends_on")),
        "command": " ".join(command) if command else None,
    }


def describe_resource(spec: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "driver": spec.get("driver"),
        "external": spec.get("external"),
        "name": spec.get("name"),
    }


def describe_node(node: GraphNode) -> Dict[str, Optional[Any]]:
    """Fields a details view shows for a node.

    Every shape accepted by the document is flattened, so ``environment`` is
    always a mapping and ``networks`` / ``depends_on`` always lists.
    """
    spec = node.spec or {}
    details: Dict[str, Any] = {
        "id": node.id,
        "kind": node.kind.value,
        "label": node.label,
        "implicit": node.implicit,
    }
    if node.kind == NodeKind.SERVICE:
        details.update(describe_service(spec))
    else:
        details.update(describe_resource(spec))
    return details
