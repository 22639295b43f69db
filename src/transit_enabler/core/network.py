"""Per-network configuration consumed by the shared HAFAS engine."""

import re
from dataclasses import dataclass

from .lines import LineNormalizer
from .models import Capability
from .products import ProductTable


@dataclass(frozen=True)
class NetworkConfig:
    """Everything that differs between two HAFAS backends.

    Networks are plain data; the query builders, parsers and the provider
    engine are shared.
    """

    id: str
    name: str
    api_base: str
    query_endpoint: str
    products: ProductTable
    lines: LineNormalizer
    capabilities: frozenset[Capability]
    page_encoding: str = "ISO-8859-1"

    # autocomplete, "{}" is replaced by the encoded text
    autocomplete_template: str | None = None
    autocomplete_encoding: str = "utf-8"

    # nearby stations
    nearby_station_pattern: re.Pattern[str] | None = None
    nearby_max_stations: int = 200
    nearby_max_distance: int = 5000
    nearby_distance_divisor: int = 1000
    nearby_default_distance: int = 50

    # departures
    departures_max_journeys: int = 50
    force_disable_equivs: bool = False

    # connections, appended after the shared parameters
    connection_extras: tuple[tuple[str, str], ...] = ()
    bike_param: tuple[str, str] | None = None

    def has_capabilities(self, *capabilities: Capability) -> bool:
        """True if the network supports any of the given capabilities."""
        return any(capability in self.capabilities for capability in capabilities)
