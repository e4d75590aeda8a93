from __future__ import annotations

import structlog

from ..defs.compose import (
    DocumentError,
    load_document,
    networks_of,
    services_of,
)
from .cycles import detect_dependency_cycles
from .ports import detect_port_conflicts
from .report import Severity, ValidationIssue, ValidationReport
from .security import detect_security_issues
from .structure import check_services


log = structlog.get_logger(__name__)


def validate(text: str) -> ValidationReport:
    """Check a compose document and collect every finding.

    The text is deserialized here independently of the parser. Only a
    document which cannot be deserialized into a mapping stops the checks;
    it yields a report holding that single error.
    """
    try:
        compose = load_document(text)
    except DocumentError as e:
        log.debug("document not parsable", error=e.message, line=e.line)
        return ValidationReport(
            issues=[
                ValidationIssue(
                    severity=Severity.ERROR,
                    message=e.message,
                    line=e.line,
                )
            ],
        )
    services = services_of(compose)
    report = ValidationReport(
        issues=check_services(services, networks_of(compose)),
        port_conflicts=detect_port_conflicts(services),
        cycles=detect_dependency_cycles(services),
        security_warnings=detect_security_issues(services),
    )
    log.debug(
        "document validated",
        valid=report.is_valid,
        issues=len(report.issues),
        port_conflicts=len(report.port_conflicts),
        cycles=len(report.cycles),
        security_warnings=len(report.security_warnings),
    )
    return report
