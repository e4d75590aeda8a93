from .graph import (
    ComposeGraph,
    EdgeKind,
    GraphEdge,
    GraphNode,
    NodeKind,
    parse,
    parse_document,
)
from .layout import (
    Direction,
    LayoutSettings,
    layout,
    layout_graph,
)
from .validator import (
    ValidationReport,
    validate,
)
