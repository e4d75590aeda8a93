from __future__ import annotations

from typing import List, Mapping

from ..defs.compose import (
    DEFAULT_NETWORK,
    ComposeNetworkDef,
    ComposeServiceDef,
    NetworkName,
    ServiceName,
)
from ..defs.compose.normalize import dependency_names, network_names
from .report import Severity, ValidationIssue


def check_services(
    services: Mapping[ServiceName, ComposeServiceDef],
    networks: Mapping[NetworkName, ComposeNetworkDef],
) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for name, spec in services.items():
        if not spec.get("image") and not spec.get("build"):
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    message="Service must have either image or build specified",
                    service=name,
                    field="image/build",
                )
            )
        for dep in dependency_names(spec.get("depends_on")):
            if dep not in services:
                issues.append(
                    ValidationIssue(
                        severity=Severity.WARNING,
                        message=f"Service depends on '{dep}' which is not defined",
                        service=name,
                        field="depends_on",
                    )
                )
        # links are left unchecked
        for net in network_names(spec.get("networks")):
            if net not in networks and net != DEFAULT_NETWORK:
                issues.append(
                    ValidationIssue(
                        severity=Severity.INFO,
                        message=f"Network '{net}' is not explicitly defined (will use default)",
                        service=name,
                        field="networks",
                    )
                )
    return issues
