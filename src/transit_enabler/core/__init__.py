"""Core transit query functionality."""

from .context import ConnectionsContext, QueryConnectionsResult
from .exceptions import (
    ConfigurationError,
    NetworkError,
    ParseError,
    TransitError,
    UnknownEntityError,
)
from .lines import LineNormalizer, LineRule, TypeRule
from .models import (
    Accessibility,
    Capability,
    Connection,
    ConnectionsStatus,
    Departure,
    DeparturesStatus,
    Leg,
    Line,
    Location,
    LocationType,
    NearbyStationsResult,
    NearbyStatus,
    Option,
    Product,
    QueryDeparturesResult,
    StationDepartures,
    WalkSpeed,
)
from .network import NetworkConfig
from .products import ProductTable
from .provider import HafasProvider
from .transport import Transport

__all__ = [
    "Accessibility",
    "Capability",
    "ConfigurationError",
    "Connection",
    "ConnectionsContext",
    "ConnectionsStatus",
    "Departure",
    "DeparturesStatus",
    "HafasProvider",
    "Leg",
    "Line",
    "LineNormalizer",
    "LineRule",
    "Location",
    "LocationType",
    "NearbyStationsResult",
    "NearbyStatus",
    "NetworkConfig",
    "NetworkError",
    "Option",
    "ParseError",
    "Product",
    "ProductTable",
    "QueryConnectionsResult",
    "QueryDeparturesResult",
    "StationDepartures",
    "Transport",
    "TransitError",
    "TypeRule",
    "UnknownEntityError",
    "WalkSpeed",
]
