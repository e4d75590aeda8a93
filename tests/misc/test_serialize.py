from __future__ import annotations

import json

from compose_graph_tools.graph import EdgeKind, GraphEdge, parse
from compose_graph_tools.graph.annotate import NodeAnnotation
from compose_graph_tools.layout import layout_graph
from compose_graph_tools.misc.serialize import (
    annotations_to_dict,
    edge_to_dict,
    graph_to_dict,
    node_to_dict,
)


class TestSerialize:
    def test_node(self) -> None:
        graph = layout_graph(parse("services:\n  a:\n    image: x\n    networks: []\n"))
        assert node_to_dict(graph.nodes[0]) == {
            "id": "svc-a",
            "kind": "service",
            "name": "a",
            "label": "a",
            "spec": {"image": "x", "networks": []},
            "implicit": False,
            "position": {"x": 0.0, "y": 0.0},
            "source_side": "right",
            "target_side": "left",
        }

    def test_edge(self) -> None:
        edge = GraphEdge("svc-a", "svc-b", EdgeKind.DEPENDENCY)
        assert edge_to_dict(edge) == {
            "id": "e-svc-a-depends_on-svc-b",
            "source": "svc-a",
            "target": "svc-b",
            "kind": "depends_on",
        }

    def test_graph_is_json(self, stack_yaml: str) -> None:
        data = graph_to_dict(layout_graph(parse(stack_yaml)))
        assert json.loads(json.dumps(data)) == data
        assert len(data["nodes"]) == 7
        assert {edge["kind"] for edge in data["edges"]} == {
            "network",
            "volume",
            "depends_on",
        }

    def test_annotations(self) -> None:
        annotations = {"svc-a": NodeAnnotation(in_cycle=True, issues=["x"])}
        assert annotations_to_dict(annotations) == {
            "svc-a": {"port_conflict": False, "in_cycle": True, "issues": ["x"]}
        }
