from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from attrs import asdict, define, field

from ..graph.model import service_node_id


class Severity(str, Enum):
    ERROR = "error"
    "makes the document invalid"
    WARNING = "warning"
    INFO = "info"


@define(kw_only=True, frozen=True)
class ValidationIssue:
    severity: Severity
    message: str
    service: Optional[str] = None
    field: Optional[str] = None
    line: Optional[int] = None


@define
class PortConflict:
    port: str
    "published (host side) port as written in the document"
    services: List[str]
    "publishing services in encounter order, one entry per binding"


@define(kw_only=True)
class ValidationReport:
    issues: List[ValidationIssue] = field(factory=list)
    port_conflicts: List[PortConflict] = field(factory=list)
    cycles: List[List[str]] = field(factory=list)
    security_warnings: List[ValidationIssue] = field(factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(issue.severity == Severity.ERROR for issue in self.issues)

    def conflicting_service_ids(self) -> List[str]:
        "node ids of services publishing a conflicting port"
        return _unique_ids(
            name for conflict in self.port_conflicts for name in conflict.services
        )

    def cyclic_service_ids(self) -> List[str]:
        "node ids of services taking part in a dependency cycle"
        return _unique_ids(name for cycle in self.cycles for name in cycle)

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid} | asdict(
            self,
            value_serializer=lambda _inst, _field, value: (
                value.value if isinstance(value, Enum) else value
            ),
        )


def _unique_ids(names) -> List[str]:
    return list(dict.fromkeys(service_node_id(name) for name in names))
