from __future__ import annotations

from typing import Dict, List

from attrs import define, field

from ..validator.report import ValidationReport
from .model import ComposeGraph, service_node_id


@define(kw_only=True, frozen=True)
class NodeAnnotation:
    port_conflict: bool = field(default=False)
    in_cycle: bool = field(default=False)
    issues: List[str] = field(factory=list)
    "messages of issues and security warnings raised for the service"


def annotate(
    graph: ComposeGraph,
    report: ValidationReport,
) -> Dict[str, NodeAnnotation]:
    """Map report findings back onto the nodes of a graph.

    Services are matched by re-deriving their node id from the service name
    the report uses, nodes without findings are left out.
    """
    conflicting = set(report.conflicting_service_ids())
    cyclic = set(report.cyclic_service_ids())
    messages: Dict[str, List[str]] = {}
    for issue in [*report.issues, *report.security_warnings]:
        if issue.service is not None:
            messages.setdefault(service_node_id(issue.service), []).append(issue.message)

    annotations: Dict[str, NodeAnnotation] = {}
    for id in graph.node_ids:
        if id in conflicting or id in cyclic or id in messages:
            annotations[id] = NodeAnnotation(
                port_conflict=id in conflicting,
                in_cycle=id in cyclic,
                issues=messages.get(id, []),
            )
    return annotations
