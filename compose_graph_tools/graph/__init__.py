from .details import (
    describe_node,
)
from .model import (
    ComposeGraph,
    EdgeKind,
    GraphEdge,
    GraphNode,
    NodeKind,
    Position,
    node_id,
    service_node_id,
)
from .parser import (
    ParseOutcome,
    ParseStatus,
    build_graph,
    parse,
    parse_document,
)
from .query import (
    connected_node_ids,
    filter_graph,
)
