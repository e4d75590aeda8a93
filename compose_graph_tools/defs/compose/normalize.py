"""Normalizers for service fields which accept more than one shape.

Compose lets ``networks``, ``depends_on``, ``environment``, ``ports``,
``volumes`` and ``command`` be written either in a short (list / string) or a
long (mapping) syntax. Everything downstream only consumes the ordered
sequences returned here.
"""

from __future__ import annotations

import shlex
from typing import Any, List, Optional, Tuple

from .service import UNMANAGED_MOUNT_TYPES


HOST_PATH_PREFIXES = (".", "/", "~")
"short syntax mount sources starting with these are host bind mounts"


def _names(value: Any) -> List[str]:
    if isinstance(value, dict):
        return [str(key) for key in value.keys()]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if isinstance(item, (str, int))]
    return []


def network_names(value: Any) -> List[str]:
    return _names(value)


def dependency_names(value: Any) -> List[str]:
    return _names(value)


def link_targets(value: Any) -> List[str]:
    "strips the optional :ALIAS suffix of legacy links"
    if not isinstance(value, (list, tuple)):
        return []
    return [str(link).split(":")[0] for link in value if isinstance(link, str)]


def published_port(entry: Any) -> Optional[str]:
    """Host side of a port binding.

    For short syntax this is everything before the first colon, so
    ``"8080:80"`` gives ``"8080"`` and a bare ``"8080"`` is its own published
    port. Long syntax uses ``published`` coerced to a string. Entries of any
    other shape, and long entries whose ``published`` is missing, empty or 0,
    give None.
    """
    if isinstance(entry, str):
        return entry.split(":")[0]
    if isinstance(entry, dict):
        published = entry.get("published")
        if not published:
            return None
        return str(published)
    return None


def port_host_ip(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        if ":" not in entry:
            return None
        return entry.split(":")[0]
    if isinstance(entry, dict):
        host_ip = entry.get("host_ip")
        return None if host_ip is None else str(host_ip)
    return None


def mount_source(entry: Any) -> Optional[str]:
    "name of the managed volume a mount refers to, None for anything else"
    if isinstance(entry, str):
        source = entry.split(":")[0]
        if not source or source.startswith(HOST_PATH_PREFIXES):
            return None
        return source
    if isinstance(entry, dict):
        if entry.get("type") in UNMANAGED_MOUNT_TYPES:
            return None
        source = entry.get("source")
        if not isinstance(source, str) or not source:
            return None
        return source
    return None


def environment_pairs(value: Any) -> List[Tuple[str, Optional[str]]]:
    if isinstance(value, dict):
        return [
            (str(key), None if val is None else str(val))
            for key, val in value.items()
        ]
    if isinstance(value, (list, tuple)):
        pairs: List[Tuple[str, Optional[str]]] = []
        for item in value:
            if not isinstance(item, str):
                continue
            key, sep, val = item.partition("=")
            pairs.append((key, val if sep else None))
        return pairs
    return []


def command_args(value: Any) -> List[str]:
    if isinstance(value, str):
        try:
            return shlex.split(value)
        except ValueError:
            # unbalanced quotes
            return value.split()
    if isinstance(value, (list, tuple)):
        return [str(arg) for arg in value]
    return []


def build_context(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        context = value.get("context")
        return None if context is None else str(context)
    return None
