from __future__ import annotations

from typing import List, Mapping

from ..defs.compose import ComposeServiceDef, ServiceName
from ..defs.compose.normalize import port_host_ip
from .report import Severity, ValidationIssue


ALL_INTERFACES = frozenset(("0.0.0.0", "*"))
ROOT_USERS = frozenset(("root", "0"))


def _is_root(user: object) -> bool:
    # `user: 0` loads as an int
    if isinstance(user, bool) or not isinstance(user, (str, int)):
        return False
    return str(user) in ROOT_USERS


def detect_security_issues(
    services: Mapping[ServiceName, ComposeServiceDef],
) -> List[ValidationIssue]:
    warnings: List[ValidationIssue] = []
    for name, spec in services.items():
        ports = spec.get("ports")
        for entry in ports if isinstance(ports, list) else []:
            if port_host_ip(entry) in ALL_INTERFACES:
                warnings.append(
                    ValidationIssue(
                        severity=Severity.WARNING,
                        message="Port exposed on all interfaces (0.0.0.0). Consider restricting to specific IP.",
                        service=name,
                        field="ports",
                    )
                )
        if spec.get("privileged") is True:
            warnings.append(
                ValidationIssue(
                    severity=Severity.WARNING,
                    message="Service runs in privileged mode, which has security implications",
                    service=name,
                    field="privileged",
                )
            )
        if _is_root(spec.get("user")):
            warnings.append(
                ValidationIssue(
                    severity=Severity.WARNING,
                    message="Service runs as root user. Consider using a non-root user.",
                    service=name,
                    field="user",
                )
            )
        if spec.get("image") and not spec.get("build") and "healthcheck" not in spec:
            warnings.append(
                ValidationIssue(
                    severity=Severity.INFO,
                    message="Consider adding a healthcheck for better container management",
                    service=name,
                    field="healthcheck",
                )
            )
    return warnings
