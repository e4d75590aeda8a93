from __future__ import annotations

from typing import Collection, List, Optional

from .model import ComposeGraph, NodeKind


def matches(label: str, query: Optional[str]) -> bool:
    return not query or query.lower() in label.lower()


def filter_graph(
    graph: ComposeGraph,
    query: Optional[str] = None,
    kinds: Optional[Collection[NodeKind]] = None,
) -> ComposeGraph:
    """Sub-graph of nodes whose label contains ``query`` (ignoring case) and
    whose kind is one of ``kinds``, with the edges running between them.

    Without a query or kinds every node matches.
    """
    kept = [
        node
        for node in graph.nodes
        if matches(node.label, query) and (kinds is None or node.kind in kinds)
    ]
    kept_ids = {node.id for node in kept}
    return ComposeGraph(
        nodes=kept,
        edges=[
            edge
            for edge in graph.edges
            if edge.source in kept_ids and edge.target in kept_ids
        ],
    )


def connected_node_ids(graph: ComposeGraph, node_id: str) -> List[str]:
    "the node itself followed by its neighbours, for highlighting"
    return [node_id] + graph.neighbours(node_id)
