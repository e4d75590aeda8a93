from __future__ import annotations

from typing import NewType, TypedDict


NetworkName = NewType("NetworkName", str)
PublicNetworkName = NewType("PublicNetworkName", str)

DEFAULT_NETWORK = NetworkName("default")
"network every service joins when it does not list any"


class NetworkDef(TypedDict, total=False):
    driver: str
    external: bool
    name: PublicNetworkName
