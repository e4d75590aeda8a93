from .compose import (
    ComposeDef,
    ComposeVersion,
)
from .loader import (
    DocumentError,
    load_document,
    networks_of,
    services_of,
    volumes_of,
)
from .network import (
    DEFAULT_NETWORK,
    NetworkName,
    PublicNetworkName,
    NetworkDef as ComposeNetworkDef,
)
from .service import (
    ServiceName,
    ContainerName,
    ServiceDef as ComposeServiceDef,
    VolumeDef as ComposeServiceVolumeDef,
    PortDef as ComposeServicePortDef,
)
from .volume import (
    VolumeName,
    PublicVolumeName,
    VolumeDef as ComposeVolumeDef,
)
