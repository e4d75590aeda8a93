"""Translation of a compose document into a service / network / volume graph.

Node creation order is observable and fixed:

1. networks declared at the top level,
2. volumes declared at the top level,
3. per service, in document order: the service itself, then networks and
   volumes it references without them being declared (implicit nodes),
4. stub nodes for dependency / link targets which are not declared services.

All nodes are known before the first edge is emitted, so every edge endpoint
exists in the returned graph unless stubs are disabled.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, Optional

from attrs import define, field
import structlog

from ..defs.compose import (
    DEFAULT_NETWORK,
    ComposeDef,
    ComposeServiceDef,
    DocumentError,
    load_document,
    networks_of,
    services_of,
    volumes_of,
)
from ..defs.compose.normalize import (
    dependency_names,
    link_targets,
    mount_source,
    network_names,
)
from .model import (
    ComposeGraph,
    EdgeKind,
    GraphEdge,
    GraphNode,
    NodeKind,
    node_id,
)


log = structlog.get_logger(__name__)


class ParseStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    "document holds nothing to draw (no text, or a mapping without entries)"
    MALFORMED = "malformed"
    "text is not YAML or not a mapping"


@define(kw_only=True)
class ParseOutcome:
    status: ParseStatus
    graph: ComposeGraph = field(factory=ComposeGraph)
    error: Optional[str] = field(default=None)
    line: Optional[int] = field(default=None)


# === references


def service_networks(spec: ComposeServiceDef) -> List[str]:
    value = spec.get("networks")
    if value is None:
        return [DEFAULT_NETWORK]
    return network_names(value)


def service_volumes(spec: ComposeServiceDef) -> List[str]:
    mounts = spec.get("volumes")
    if not isinstance(mounts, list):
        return []
    return [name for name in map(mount_source, mounts) if name is not None]


def service_references(
    spec: ComposeServiceDef,
) -> Iterator[tuple[EdgeKind, NodeKind, str]]:
    for name in service_networks(spec):
        yield EdgeKind.NETWORK, NodeKind.NETWORK, name
    for name in service_volumes(spec):
        yield EdgeKind.VOLUME, NodeKind.VOLUME, name
    for name in dependency_names(spec.get("depends_on")):
        yield EdgeKind.DEPENDENCY, NodeKind.SERVICE, name
    for name in link_targets(spec.get("links")):
        yield EdgeKind.LINK, NodeKind.SERVICE, name


# === graph


def _collect_nodes(
    compose: ComposeDef,
    stub_missing_services: bool,
) -> Dict[str, GraphNode]:
    nodes: Dict[str, GraphNode] = {}

    def add(kind: NodeKind, name: str, **kwargs) -> None:
        if node_id(kind, name) not in nodes:
            nodes[node_id(kind, name)] = GraphNode(
                kind=kind, name=name, label=name, **kwargs
            )

    for name, net_spec in networks_of(compose).items():
        add(NodeKind.NETWORK, name, spec=dict(net_spec))
    for name, vol_spec in volumes_of(compose).items():
        add(NodeKind.VOLUME, name, spec=dict(vol_spec))

    services = services_of(compose)
    for name, spec in services.items():
        add(NodeKind.SERVICE, name, spec=dict(spec))
        for net in service_networks(spec):
            add(NodeKind.NETWORK, net, implicit=True)
        for vol in service_volumes(spec):
            add(NodeKind.VOLUME, vol, implicit=True)

    if stub_missing_services:
        for spec in services.values():
            for _, target_kind, target in service_references(spec):
                if target_kind == NodeKind.SERVICE:
                    add(NodeKind.SERVICE, target, implicit=True)
    return nodes


def build_graph(
    compose: ComposeDef,
    *,
    stub_missing_services: bool = True,
) -> ComposeGraph:
    """Build the graph of an already deserialized compose document.

    Edges point from the service declaring a reference to the referenced
    entity. Repeated references of the same kind between the same pair of
    nodes collapse into a single edge; references of different kinds stay
    distinct.

    With ``stub_missing_services`` disabled, dependency and link edges to
    undeclared services are still emitted but no node is created for their
    target.
    """
    nodes = _collect_nodes(compose, stub_missing_services)
    edges: Dict[GraphEdge, None] = {}
    for name, spec in services_of(compose).items():
        source = node_id(NodeKind.SERVICE, name)
        for kind, target_kind, target in service_references(spec):
            edges.setdefault(GraphEdge(source, node_id(target_kind, target), kind))
    graph = ComposeGraph.of(nodes.values(), edges)
    log.debug("graph built", **graph.summary())
    return graph


def parse_document(
    text: str,
    *,
    stub_missing_services: bool = True,
) -> ParseOutcome:
    try:
        compose = load_document(text)
    except DocumentError as e:
        if e.empty:
            return ParseOutcome(status=ParseStatus.EMPTY)
        log.debug("document not parsable", error=e.message, line=e.line)
        return ParseOutcome(
            status=ParseStatus.MALFORMED,
            error=e.message,
            line=e.line,
        )
    graph = build_graph(compose, stub_missing_services=stub_missing_services)
    return ParseOutcome(
        status=ParseStatus.OK if graph else ParseStatus.EMPTY,
        graph=graph,
    )


def parse(text: str, *, stub_missing_services: bool = True) -> ComposeGraph:
    "graph of the document, empty for anything which cannot be parsed"
    return parse_document(text, stub_missing_services=stub_missing_services).graph
