from .cycles import (
    detect_dependency_cycles,
)
from .ports import (
    detect_port_conflicts,
)
from .report import (
    PortConflict,
    Severity,
    ValidationIssue,
    ValidationReport,
)
from .security import (
    detect_security_issues,
)
from .structure import (
    check_services,
)
from .validate import (
    validate,
)
