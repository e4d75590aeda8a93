"""Layered (Sugiyama style) placement of a compose graph.

Phases:
  1. cycle breaking, reversing the back edges of a depth-first search
  2. rank assignment by longest path from the sources
  3. dummy nodes on edges spanning more than one rank
  4. crossing minimisation with barycenter sweeps
  5. coordinate assignment, converted from node centers to top-left corners

Nothing is random and all ties fall back to the input order, so the same
graph and direction always give the same positions.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from attrs import define, evolve
import networkx as nx
import structlog

from ..graph.model import ComposeGraph, GraphEdge, GraphNode, NodeKind, Position
from .settings import LayoutSettings


log = structlog.get_logger(__name__)


class Direction(str, Enum):
    LR = "LR"
    "left to right"
    TB = "TB"
    "top to bottom"

    @property
    def horizontal(self) -> bool:
        return self is Direction.LR

    @property
    def target_side(self) -> str:
        return "left" if self.horizontal else "top"

    @property
    def source_side(self) -> str:
        return "right" if self.horizontal else "bottom"


def node_size(node: GraphNode, settings: LayoutSettings) -> Tuple[float, float]:
    if node.kind == NodeKind.SERVICE:
        return settings.service_width, settings.service_height
    return settings.resource_width, settings.resource_height


# === Phase 1 + 2


def _break_cycles(graph: nx.DiGraph) -> nx.DiGraph:
    on_path: Set[str] = set()
    back_edges: Set[Tuple[str, str]] = set()
    for u, v, kind in nx.dfs_labeled_edges(graph):
        if kind == "forward":
            on_path.add(v)
        elif kind == "reverse":
            on_path.discard(v)
        elif kind == "nontree" and v in on_path:
            back_edges.add((u, v))
    dag = nx.DiGraph()
    dag.add_nodes_from(graph)
    for u, v in graph.edges():
        if (u, v) in back_edges:
            dag.add_edge(v, u)
        else:
            dag.add_edge(u, v)
    return dag


def _rank(dag: nx.DiGraph) -> Dict[str, int]:
    ranks: Dict[str, int] = {}
    for node in nx.topological_sort(dag):
        ranks[node] = max(
            (ranks[pred] + 1 for pred in dag.predecessors(node)),
            default=0,
        )
    return ranks


# === Phase 3


DUMMY_PREFIX = "\0dummy-"


def _is_dummy(node: str) -> bool:
    return node.startswith(DUMMY_PREFIX)


@define
class _Layering:
    graph: nx.DiGraph
    "every edge connects neighbouring ranks"
    ranks: Dict[str, int]
    order: List[List[str]]


def _split_long_edges(dag: nx.DiGraph, ranks: Dict[str, int]) -> _Layering:
    proper = nx.DiGraph()
    proper.add_nodes_from(dag)
    ranks = dict(ranks)
    for index, (u, v) in enumerate(dag.edges()):
        prev = u
        for step in range(ranks[u] + 1, ranks[v]):
            dummy = f"{DUMMY_PREFIX}{index}-{step}"
            ranks[dummy] = step
            proper.add_edge(prev, dummy)
            prev = dummy
        proper.add_edge(prev, v)
    order: List[List[str]] = [[] for _ in range(max(ranks.values(), default=-1) + 1)]
    for node in proper.nodes:
        order[ranks[node]].append(node)
    return _Layering(graph=proper, ranks=ranks, order=order)


# === Phase 4


def _crossings(layering: _Layering, order: List[List[str]]) -> int:
    total = 0
    for upper, lower in zip(order, order[1:]):
        upper_pos = {node: i for i, node in enumerate(upper)}
        lower_pos = {node: i for i, node in enumerate(lower)}
        segments = [
            (upper_pos[u], lower_pos[v])
            for u in upper
            for v in layering.graph.successors(u)
        ]
        for i, (a_top, a_bottom) in enumerate(segments):
            for b_top, b_bottom in segments[i + 1:]:
                if (a_top - b_top) * (a_bottom - b_bottom) < 0:
                    total += 1
    return total


def _barycenter(
    node: str,
    current: int,
    neighbours: List[str],
    fixed_pos: Dict[str, int],
) -> float:
    positions = [fixed_pos[other] for other in neighbours]
    if not positions:
        return float(current)
    return sum(positions) / len(positions)


def _sweep(
    layering: _Layering,
    order: List[List[str]],
    downwards: bool,
) -> List[List[str]]:
    order = [list(rank) for rank in order]
    indices = range(1, len(order)) if downwards else range(len(order) - 2, -1, -1)
    neighbours = (
        layering.graph.predecessors if downwards else layering.graph.successors
    )
    for index in indices:
        fixed = order[index - 1] if downwards else order[index + 1]
        fixed_pos = {node: i for i, node in enumerate(fixed)}
        keyed = [
            (_barycenter(node, current, list(neighbours(node)), fixed_pos), current, node)
            for current, node in enumerate(order[index])
        ]
        # equal barycenters keep their current order
        order[index] = [node for _, _, node in sorted(keyed)]
    return order


def _minimise_crossings(layering: _Layering, passes: int) -> List[List[str]]:
    best = layering.order
    best_crossings = _crossings(layering, best)
    current = best
    for index in range(passes):
        if best_crossings == 0:
            break
        current = _sweep(layering, current, downwards=index % 2 == 0)
        crossings = _crossings(layering, current)
        if crossings < best_crossings:
            best, best_crossings = current, crossings
    return best


# === Phase 5


def _place(
    order: List[List[str]],
    sizes: Dict[str, Tuple[float, float]],
    direction: Direction,
    settings: LayoutSettings,
) -> Dict[str, Tuple[float, float]]:
    "center of every node as (x, y)"

    def main(node: str) -> float:
        width, height = sizes.get(node, (0, 0))
        return width if direction.horizontal else height

    def cross(node: str) -> float:
        width, height = sizes.get(node, (0, 0))
        return height if direction.horizontal else width

    def sep(node: str) -> float:
        return settings.edge_sep if _is_dummy(node) else settings.node_sep

    cross_centers: List[List[float]] = []
    extents: List[float] = []
    for rank in order:
        rank_centers: List[float] = []
        offset = 0.0
        for i, node in enumerate(rank):
            if i > 0:
                offset += (sep(rank[i - 1]) + sep(node)) / 2
            rank_centers.append(offset + cross(node) / 2)
            offset += cross(node)
        cross_centers.append(rank_centers)
        extents.append(offset)
    widest = max(extents, default=0.0)

    centers: Dict[str, Tuple[float, float]] = {}
    main_offset = 0.0
    for index, rank in enumerate(order):
        depth = max((main(node) for node in rank), default=0.0)
        if index > 0:
            main_offset += settings.rank_sep
        shift = (widest - extents[index]) / 2
        for node, cross_center in zip(rank, cross_centers[index]):
            main_center = main_offset + depth / 2
            cross_center += shift
            centers[node] = (
                (main_center, cross_center)
                if direction.horizontal
                else (cross_center, main_center)
            )
        main_offset += depth
    return centers


# === API


def layout(
    nodes: Sequence[GraphNode],
    edges: Sequence[GraphEdge],
    direction: Direction | str = Direction.LR,
    settings: Optional[LayoutSettings] = None,
) -> List[GraphNode]:
    """Position every node, returning copies in the given order.

    Positions are the top-left corners of the nodes. Edges referring to nodes
    which are not part of ``nodes`` are left out of the computation.
    """
    direction = Direction(direction)
    settings = settings or LayoutSettings()
    sizes = {node.id: node_size(node, settings) for node in nodes}

    graph = nx.DiGraph()
    graph.add_nodes_from(sizes)
    for edge in edges:
        if edge.source not in sizes or edge.target not in sizes:
            log.debug("edge skipped for layout", edge=edge.id)
            continue
        if edge.source != edge.target:
            graph.add_edge(edge.source, edge.target)

    dag = _break_cycles(graph)
    layering = _split_long_edges(dag, _rank(dag))
    order = _minimise_crossings(layering, settings.order_passes)
    centers = _place(order, sizes, direction, settings)
    log.debug("layout computed", direction=direction.value, ranks=len(order))

    placed: List[GraphNode] = []
    for node in nodes:
        x, y = centers[node.id]
        width, height = sizes[node.id]
        placed.append(
            evolve(
                node,
                position=Position(x=x - width / 2, y=y - height / 2),
                target_side=direction.target_side,
                source_side=direction.source_side,
            )
        )
    return placed


def layout_graph(
    graph: ComposeGraph,
    direction: Direction | str = Direction.LR,
    settings: Optional[LayoutSettings] = None,
) -> ComposeGraph:
    return ComposeGraph(
        nodes=layout(graph.nodes, graph.edges, direction, settings),
        edges=list(graph.edges),
    )
