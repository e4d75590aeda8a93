"""Tests for the layered layout engine."""

from __future__ import annotations

import pytest

from compose_graph_tools.graph import (
    EdgeKind,
    GraphEdge,
    GraphNode,
    NodeKind,
    Position,
    parse,
)
from compose_graph_tools.layout import (
    Direction,
    LayoutSettings,
    layout,
    layout_graph,
    node_size,
)


def service(name: str) -> GraphNode:
    return GraphNode(kind=NodeKind.SERVICE, name=name, label=name)


def network(name: str) -> GraphNode:
    return GraphNode(kind=NodeKind.NETWORK, name=name, label=name)


def depends(source: str, target: str) -> GraphEdge:
    return GraphEdge(f"svc-{source}", f"svc-{target}", EdgeKind.DEPENDENCY)


def positions(nodes: list[GraphNode]) -> dict[str, Position]:
    return {node.id: node.position for node in nodes}


class TestNodeSize:
    def test_defaults(self) -> None:
        settings = LayoutSettings()
        assert node_size(service("a"), settings) == (280, 150)
        assert node_size(network("x"), settings) == (150, 50)
        volume = GraphNode(kind=NodeKind.VOLUME, name="v", label="v")
        assert node_size(volume, settings) == (150, 50)


class TestPlacement:
    def test_single_node_at_origin(self) -> None:
        (placed,) = layout([service("a")], [])
        assert placed.position == Position(0, 0)

    def test_empty(self) -> None:
        assert layout([], []) == []

    def test_chain_left_to_right(self) -> None:
        placed = positions(layout([service("a"), service("b")], [depends("a", "b")]))
        assert placed["svc-a"] == Position(0, 0)
        assert placed["svc-b"] == Position(380, 0)

    def test_chain_top_to_bottom(self) -> None:
        placed = positions(
            layout([service("a"), service("b")], [depends("a", "b")], Direction.TB)
        )
        assert placed["svc-a"] == Position(0, 0)
        assert placed["svc-b"] == Position(0, 250)

    def test_direction_as_string(self) -> None:
        nodes = [service("a"), service("b")]
        edges = [depends("a", "b")]
        assert layout(nodes, edges, "TB") == layout(nodes, edges, Direction.TB)

    def test_rank_separation_setting(self) -> None:
        settings = LayoutSettings(rank_sep=200)
        placed = positions(
            layout([service("a"), service("b")], [depends("a", "b")], settings=settings)
        )
        assert placed["svc-b"].x == 480

    def test_crossing_removed(self) -> None:
        nodes = [service("a"), service("b"), network("x"), network("y")]
        edges = [
            GraphEdge("svc-a", "net-y", EdgeKind.NETWORK),
            GraphEdge("svc-b", "net-x", EdgeKind.NETWORK),
        ]
        placed = positions(layout(nodes, edges, Direction.TB))
        assert placed["svc-a"] == Position(0, 0)
        assert placed["svc-b"] == Position(330, 0)
        assert placed["net-y"] == Position(130, 250)
        assert placed["net-x"] == Position(330, 250)

    def test_long_edge_spans_ranks(self) -> None:
        nodes = [service("a"), service("b"), service("c")]
        edges = [depends("a", "b"), depends("b", "c"), depends("a", "c")]
        placed = positions(layout(nodes, edges))
        assert placed["svc-a"].x < placed["svc-b"].x < placed["svc-c"].x

    def test_nodes_do_not_overlap(self, stack_yaml: str) -> None:
        graph = layout_graph(parse(stack_yaml), Direction.TB)
        settings = LayoutSettings()
        boxes = []
        for node in graph.nodes:
            width, height = node_size(node, settings)
            boxes.append((node.position.x, node.position.y, width, height))
        for i, (x1, y1, w1, h1) in enumerate(boxes):
            for x2, y2, w2, h2 in boxes[i + 1:]:
                assert x1 + w1 <= x2 or x2 + w2 <= x1 or y1 + h1 <= y2 or y2 + h2 <= y1


class TestResult:
    def test_input_order_and_fields_kept(self, stack_yaml: str) -> None:
        graph = parse(stack_yaml)
        placed = layout(graph.nodes, graph.edges)
        assert [node.id for node in placed] == graph.node_ids
        for before, after in zip(graph.nodes, placed):
            assert after.position is not None
            assert (after.kind, after.name, after.label, after.spec) == (
                before.kind,
                before.name,
                before.label,
                before.spec,
            )
        assert all(node.position is None for node in graph.nodes)

    def test_deterministic(self, stack_yaml: str) -> None:
        graph = parse(stack_yaml)
        assert layout(graph.nodes, graph.edges) == layout(graph.nodes, graph.edges)

    @pytest.mark.parametrize(
        "direction, target, source",
        [(Direction.LR, "left", "right"), (Direction.TB, "top", "bottom")],
    )
    def test_handle_sides(self, direction: Direction, target: str, source: str) -> None:
        (placed,) = layout([service("a")], [], direction)
        assert placed.target_side == target
        assert placed.source_side == source

    def test_layout_graph_keeps_edges(self, stack_yaml: str) -> None:
        graph = parse(stack_yaml)
        placed = layout_graph(graph)
        assert placed.edges == graph.edges
        assert placed.node_ids == graph.node_ids


class TestUnusualInput:
    def test_cycle(self, cyclic_yaml: str) -> None:
        graph = layout_graph(parse(cyclic_yaml))
        assert all(node.position is not None for node in graph.nodes)

    def test_self_edge(self) -> None:
        (placed,) = layout([service("a")], [depends("a", "a")])
        assert placed.position == Position(0, 0)

    def test_dangling_edge_ignored(self) -> None:
        placed = positions(layout([service("a")], [depends("a", "ghost")]))
        assert placed == {"svc-a": Position(0, 0)}

    def test_invalid_direction(self) -> None:
        with pytest.raises(ValueError):
            layout([service("a")], [], "RL")
