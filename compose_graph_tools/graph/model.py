from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from attrs import define, field


class NodeKind(str, Enum):
    SERVICE = "service"
    NETWORK = "network"
    VOLUME = "volume"

    @property
    def prefix(self) -> str:
        return _NODE_PREFIXES[self]


_NODE_PREFIXES = {
    NodeKind.SERVICE: "svc",
    NodeKind.NETWORK: "net",
    NodeKind.VOLUME: "vol",
}


class EdgeKind(str, Enum):
    NETWORK = "network"
    "service is a member of a network"
    VOLUME = "volume"
    "service mounts a volume"
    DEPENDENCY = "depends_on"
    LINK = "link"


def node_id(kind: NodeKind, name: str) -> str:
    return f"{kind.prefix}-{name}"


def service_node_id(name: str) -> str:
    return node_id(NodeKind.SERVICE, name)


@define(frozen=True)
class Position:
    x: float
    y: float


@define(kw_only=True, frozen=True)
class GraphNode:
    kind: NodeKind
    name: str
    label: str
    spec: Optional[Mapping[str, Any]] = field(default=None)
    "copy of the originating document entry, None for inferred nodes without one"
    implicit: bool = field(default=False)
    position: Optional[Position] = field(default=None)
    "top-left corner, set by the layout engine"
    source_side: Optional[str] = field(default=None)
    target_side: Optional[str] = field(default=None)

    @property
    def id(self) -> str:
        return node_id(self.kind, self.name)


@define(frozen=True)
class GraphEdge:
    source: str
    target: str
    kind: EdgeKind

    @property
    def id(self) -> str:
        return f"e-{self.source}-{self.kind.value}-{self.target}"


@define
class ComposeGraph:
    nodes: List[GraphNode] = field(factory=list)
    edges: List[GraphEdge] = field(factory=list)

    def __bool__(self) -> bool:
        return bool(self.nodes)

    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def node(self, id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == id:
                return node
        return None

    def nodes_of_kind(self, kind: NodeKind) -> List[GraphNode]:
        return [node for node in self.nodes if node.kind == kind]

    def edges_of_kind(self, kind: EdgeKind) -> List[GraphEdge]:
        return [edge for edge in self.edges if edge.kind == kind]

    def neighbours(self, id: str) -> List[str]:
        "ids of nodes sharing an edge with the given node, in edge order"
        found: Dict[str, None] = {}
        for edge in self.edges:
            if edge.source == id:
                found.setdefault(edge.target)
            elif edge.target == id:
                found.setdefault(edge.source)
        return list(found)

    def dangling_edges(self) -> List[GraphEdge]:
        known = set(self.node_ids)
        return [
            edge
            for edge in self.edges
            if edge.source not in known or edge.target not in known
        ]

    def summary(self) -> Dict[str, int]:
        return {
            f"{kind.value}s": len(self.nodes_of_kind(kind)) for kind in NodeKind
        } | {"edges": len(self.edges)}

    @classmethod
    def of(cls, nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]) -> ComposeGraph:
        return cls(nodes=list(nodes), edges=list(edges))
