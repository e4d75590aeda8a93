from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, cast

import yaml

from .compose import ComposeDef
from .network import NetworkName, NetworkDef
from .service import ServiceName, ServiceDef
from .volume import VolumeName, VolumeDef


class DocumentError(ValueError):
    """The document text could not be turned into a compose mapping."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        empty: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        "1-based line of the problem as reported by the YAML parser"
        self.empty = empty
        "the text holds no YAML content at all"


def load_document(text: str) -> ComposeDef:
    try:
        content = yaml.safe_load(text)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        raise DocumentError(
            f"YAML parsing error: {e}",
            line=None if mark is None else mark.line + 1,
        ) from e
    except yaml.YAMLError as e:
        raise DocumentError(f"YAML parsing error: {e}") from e
    except RecursionError as e:
        raise DocumentError("YAML parsing error: document nested too deeply") from e
    if not isinstance(content, dict):
        raise DocumentError("Invalid YAML structure", empty=content is None)
    return cast(ComposeDef, content)


def _section(compose: Mapping[str, Any], key: str) -> Dict[str, Dict[str, Any]]:
    section = compose.get(key)
    if not isinstance(section, dict):
        return {}
    # `name:` with no body loads as None
    return {
        str(name): opts if isinstance(opts, dict) else {}
        for name, opts in section.items()
    }


def services_of(compose: ComposeDef) -> Dict[ServiceName, ServiceDef]:
    return cast(Dict[ServiceName, ServiceDef], _section(compose, "services"))


def networks_of(compose: ComposeDef) -> Dict[NetworkName, NetworkDef]:
    return cast(Dict[NetworkName, NetworkDef], _section(compose, "networks"))


def volumes_of(compose: ComposeDef) -> Dict[VolumeName, VolumeDef]:
    return cast(Dict[VolumeName, VolumeDef], _section(compose, "volumes"))
