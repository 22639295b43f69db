"""Configured networks."""

from enum import Enum

from ..core.exceptions import ConfigurationError
from ..core.network import NetworkConfig
from ..core.provider import HafasProvider
from ..core.transport import Transport
from ..transport import HttpTransport
from .db import DB
from .rmv import RMV


class NetworkId(str, Enum):
    DB = "db"
    RMV = "rmv"


NETWORKS: dict[NetworkId, NetworkConfig] = {
    NetworkId.DB: DB,
    NetworkId.RMV: RMV,
}


def get_provider(network: NetworkId | str, transport: Transport | None = None) -> HafasProvider:
    """Create a provider for a network.

    Args:
        network: Network id such as "db"
        transport: Transport to use, an ``HttpTransport`` with default settings if omitted

    Raises:
        ConfigurationError: If the network is unknown
    """
    try:
        network_id = NetworkId(network)
    except ValueError:
        raise ConfigurationError(f"unknown network: {network}") from None
    return HafasProvider(NETWORKS[network_id], transport or HttpTransport())


__all__ = ["DB", "NETWORKS", "RMV", "NetworkId", "get_provider"]
