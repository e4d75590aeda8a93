from .engine import (
    Direction,
    layout,
    layout_graph,
    node_size,
)
from .settings import (
    LayoutSettings,
)
