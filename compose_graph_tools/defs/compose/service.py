from __future__ import annotations

from typing import (
    Any,
    Literal,
    Mapping,
    NewType,
    Optional,
    Sequence,
    TypeAlias,
    TypedDict,
)

from .network import NetworkName
from .volume import VolumeName


ServiceName = NewType("ServiceName", str)
ContainerName = NewType("ContainerName", str)


# === Service Build


class _BuildLong(TypedDict, total=False):
    context: str
    dockerfile: str


BuildDef: TypeAlias = str | _BuildLong


# === Service Ports


_PortShort = NewType("_PortShort", str)
"format: [HOST_IP:]PUBLISHED[:TARGET][/PROTOCOL]"


class _PortLong(TypedDict, total=False):
    target: int | str
    published: int | str
    host_ip: str
    protocol: str


PortDef: TypeAlias = _PortShort | _PortLong


# === Service Volumes


_VolumeShort = NewType("_VolumeShort", str)
"format: [SOURCE:]TARGET[:MODE] where MODE is either rw or ro"


MountType: TypeAlias = Literal["volume", "bind", "tmpfs", "npipe"]


class _VolumeLongRequired(TypedDict, total=True):
    type: MountType
    target: str


class _VolumeLong(_VolumeLongRequired, total=False):
    source: VolumeName | str
    "volume name for type volume, host path for type bind"
    read_only: bool


VolumeDef: TypeAlias = _VolumeShort | _VolumeLong

UNMANAGED_MOUNT_TYPES = frozenset(("bind", "tmpfs", "npipe"))
"long syntax mount types which never refer to a compose volume"


# === Service


NetworksDef: TypeAlias = Sequence[NetworkName] | Mapping[NetworkName, Optional[Mapping]]
DependsOnDef: TypeAlias = Sequence[ServiceName] | Mapping[ServiceName, Optional[Mapping]]
EnvironmentDef: TypeAlias = Sequence[str] | Mapping[str, Any]
CommandDef: TypeAlias = str | Sequence[str]


class ServiceDef(TypedDict, total=False):
    image: str
    build: BuildDef
    container_name: ContainerName
    ports: Sequence[PortDef]
    volumes: Sequence[VolumeDef]
    networks: NetworksDef
    environment: EnvironmentDef
    depends_on: DependsOnDef
    links: Sequence[str]
    command: CommandDef
    privileged: bool
    user: str
    healthcheck: Mapping[str, Any]
