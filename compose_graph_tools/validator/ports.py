from __future__ import annotations

from typing import Dict, List, Mapping

from ..defs.compose import ComposeServiceDef, ServiceName
from ..defs.compose.normalize import published_port
from .report import PortConflict


def detect_port_conflicts(
    services: Mapping[ServiceName, ComposeServiceDef],
) -> List[PortConflict]:
    """Host ports published by more than one binding.

    A service publishing the same port twice is listed twice.
    """
    publishers: Dict[str, List[str]] = {}
    for name, spec in services.items():
        ports = spec.get("ports")
        if not isinstance(ports, list):
            continue
        for entry in ports:
            port = published_port(entry)
            if port is None:
                continue
            publishers.setdefault(port, []).append(name)
    return [
        PortConflict(port=port, services=names)
        for port, names in publishers.items()
        if len(names) > 1
    ]
