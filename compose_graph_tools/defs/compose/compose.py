from __future__ import annotations

from typing import Mapping, NewType, Optional, TypedDict

from .network import NetworkName, NetworkDef
from .service import ServiceName, ServiceDef
from .volume import VolumeName, VolumeDef


ComposeVersion = NewType("ComposeVersion", str)


class ComposeDef(TypedDict, total=False):
    version: ComposeVersion
    services: Mapping[ServiceName, ServiceDef]
    networks: Mapping[NetworkName, Optional[NetworkDef]]
    volumes: Mapping[VolumeName, Optional[VolumeDef]]
