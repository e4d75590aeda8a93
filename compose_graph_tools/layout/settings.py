from __future__ import annotations

from typing import Dict, Mapping

from attrs import define, field, fields_dict


# multiple prefixes for adding more if naming changes
# first prefix takes precendence
ENV_PREFIXES = [
    "COMPOSE_GRAPH_LAYOUT_",
]

SERVICE_NODE_WIDTH = 280
SERVICE_NODE_HEIGHT = 150
RESOURCE_NODE_WIDTH = 150
"networks and volumes"
RESOURCE_NODE_HEIGHT = 50
RANK_SEP = 100
NODE_SEP = 50
EDGE_SEP = 10
ORDER_PASSES = 8


def parse_environ(environ: Mapping[str, str]) -> Dict[str, str]:
    known = fields_dict(LayoutSettings)
    ret = dict[str, str]()
    for key, val in environ.items():
        for prefix in ENV_PREFIXES:
            if key.startswith(prefix):
                new_key = key.removeprefix(prefix).lower()
                if new_key in known and new_key not in ret:
                    ret[new_key] = val
                break
    return ret


@define(kw_only=True, frozen=True)
class LayoutSettings:
    # === Node sizes
    service_width: float = field(converter=float, default=SERVICE_NODE_WIDTH)
    service_height: float = field(converter=float, default=SERVICE_NODE_HEIGHT)
    resource_width: float = field(converter=float, default=RESOURCE_NODE_WIDTH)
    resource_height: float = field(converter=float, default=RESOURCE_NODE_HEIGHT)
    # === Spacing
    rank_sep: float = field(converter=float, default=RANK_SEP)
    "between neighbouring ranks along the flow"
    node_sep: float = field(converter=float, default=NODE_SEP)
    "between neighbouring nodes of one rank"
    edge_sep: float = field(converter=float, default=EDGE_SEP)
    "around edges passing through a rank"
    # === Ordering
    order_passes: int = field(converter=int, default=ORDER_PASSES)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> LayoutSettings:
        return cls(**parse_environ(environ))

    def __attrs_post_init__(self):
        for name, value in (
            ("service_width", self.service_width),
            ("service_height", self.service_height),
            ("resource_width", self.resource_width),
            ("resource_height", self.resource_height),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.order_passes < 0:
            raise ValueError(f"order_passes must not be negative, got {self.order_passes}")
