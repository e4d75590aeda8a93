from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping

from attrs import asdict

from ..graph.annotate import NodeAnnotation
from ..graph.model import ComposeGraph, GraphEdge, GraphNode


def _plain(_inst: Any, _field: Any, value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def node_to_dict(node: GraphNode) -> Dict[str, Any]:
    return {"id": node.id} | asdict(node, value_serializer=_plain)


def edge_to_dict(edge: GraphEdge) -> Dict[str, Any]:
    return {"id": edge.id} | asdict(edge, value_serializer=_plain)


def graph_to_dict(graph: ComposeGraph) -> Dict[str, Any]:
    return {
        "nodes": [node_to_dict(node) for node in graph.nodes],
        "edges": [edge_to_dict(edge) for edge in graph.edges],
    }


def annotations_to_dict(
    annotations: Mapping[str, NodeAnnotation],
) -> Dict[str, Dict[str, Any]]:
    return {id: asdict(annotation) for id, annotation in annotations.items()}
