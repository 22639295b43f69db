"""Transit Enabler

A Python package querying public transport backends that have no formal
API and normalizing their answers into uniform transit records.
"""

__version__ = "0.1.0"

from .core.models import Line, Location, LocationType, Product
from .core.provider import HafasProvider
from .providers import NetworkId, get_provider

__all__ = [
    "HafasProvider",
    "Line",
    "Location",
    "LocationType",
    "NetworkId",
    "Product",
    "get_provider",
]
