"""Request URL construction for HAFAS backends."""

import logging
from dataclasses import dataclass
from enum import Enum

from ..utils.text import url_encode
from .context import ConnectionsRequest, Cursor
from .exceptions import ConfigurationError
from .models import Accessibility, Location, LocationType, Option, WalkSpeed
from .network import NetworkConfig

logger = logging.getLogger(__name__)


class ResponseShape(str, Enum):
    """Kind of payload a request answers with, selects the parser."""

    HTML_STATIONS = "html_stations"
    JSON_STOPS = "json_stops"
    JSON_SUGGESTIONS = "json_suggestions"
    XML_BOARD = "xml_board"
    XML_CONNECTIONS = "xml_connections"


@dataclass(frozen=True)
class Request:
    """A fully built backend request."""

    url: str
    shape: ResponseShape
    encoding: str


class QueryString:
    """Ordered query parameters, rendered verbatim.

    Values are inserted as given: free text must be encoded by the caller
    with the backend's charset, fixed values keep the characters HAFAS
    expects unescaped (``look_nv=get_stopweight|yes``).
    """

    def __init__(self, base: str):
        self.base = base
        self._params: list[tuple[str, str]] = []

    def __contains__(self, key: str) -> bool:
        return any(name == key for name, _ in self._params)

    def add(self, key: str, value: object) -> "QueryString":
        self._params.append((key, str(value)))
        return self

    def append(self, key: str, value: object) -> "QueryString":
        """Add a parameter unless it is already set."""
        if key in self:
            logger.warning(f"Ignoring appended parameter {key}, already set")
            return self
        return self.add(key, value)

    def render(self) -> str:
        query = "&".join(f"{key}={value}" for key, value in self._params)
        return f"{self.base}?{query}" if query else self.base


WALK_SPEEDS = {
    WalkSpeed.SLOW: "125",
    WalkSpeed.NORMAL: "100",
    WalkSpeed.FAST: "75",
}

ACCESSIBILITY_PROFILES = {
    Accessibility.NEUTRAL: "0",
    Accessibility.BARRIER_FREE: "1",
    Accessibility.LIMITED: "2",
}


def location_id(location: Location) -> str:
    """Encode a location the way HAFAS input fields expect it."""
    if location.type == LocationType.STATION and location.has_id():
        return f"A=1@L={location.id}@"
    if location.has_location():
        suffix = f"O={location.name}@" if location.name else ""
        return f"A=2@X={location.lon}@Y={location.lat}@{suffix}"
    if location.name:
        return f"A=255@O={location.name}@"
    raise ConfigurationError(f"cannot handle: {location.to_debug_string()}")


def build_nearby_stations_request(
    network: NetworkConfig, location: Location, max_distance: int, max_stations: int
) -> Request:
    """Build a nearby stations lookup.

    Coordinates are looked up via the JSON locator in meters; a bare station
    id goes to the station board's "near" page, which counts distances in
    the network's own unit (kilometers for DB, truncated).
    """
    if location.has_location():
        query = QueryString(network.api_base + "query.exe/dny")
        query.add("performLocating", 2).add("tpl", "stop2json")
        query.add("look_maxno", max_stations or network.nearby_max_stations)
        query.add("look_maxdist", max_distance or network.nearby_max_distance)
        query.add("look_stopclass", network.products.all_products_int())
        query.add("look_nv", "get_stopweight|yes")
        query.add("look_x", location.lon)
        query.add("look_y", location.lat)
        return Request(query.render(), ResponseShape.JSON_STOPS, "utf-8")

    if (
        location.type == LocationType.STATION
        and location.has_id()
        and network.nearby_station_pattern is not None
    ):
        distance = (
            max_distance // network.nearby_distance_divisor
            if max_distance
            else network.nearby_default_distance
        )
        query = QueryString(network.api_base + "bhftafel.exe/dn")
        query.add("near", "Anzeigen")
        query.add("distance", distance)
        query.add("input", location.id)
        return Request(query.render(), ResponseShape.HTML_STATIONS, network.page_encoding)

    raise ConfigurationError(f"cannot handle: {location.to_debug_string()}")


def build_departures_request(network: NetworkConfig, station_id: int, equivs: bool) -> Request:
    """Build a station board request.

    The backend is always asked for a fixed number of journeys because its
    answer may include other stations; callers trim after parsing.
    """
    disable_equivs = network.force_disable_equivs or not equivs
    query = QueryString(network.api_base + "stboard.exe/dn")
    query.add("productsFilter", network.products.all_products_bitmask())
    query.add("boardType", "dep")
    query.add("disableEquivs", "yes" if disable_equivs else "no")
    query.add("maxJourneys", network.departures_max_journeys)
    query.add("start", "yes")
    query.add("L", "vs_java3")
    query.add("input", station_id)
    return Request(query.render(), ResponseShape.XML_BOARD, network.page_encoding)


def _connections_query(network: NetworkConfig, request: ConnectionsRequest) -> QueryString:
    encoding = network.page_encoding
    query = QueryString(network.query_endpoint)
    query.add("start", "Suchen")
    query.add("REQ0JourneyStopsS0ID", url_encode(location_id(request.from_location), encoding))
    if request.via_location is not None:
        query.add(
            "REQ0JourneyStops1.0ID", url_encode(location_id(request.via_location), encoding)
        )
    query.add("REQ0JourneyStopsZ0ID", url_encode(location_id(request.to_location), encoding))
    query.add("REQ0HafasSearchForw", 1 if request.dep else 0)
    query.add("REQ0JourneyDate", request.date.strftime("%d.%m.%y"))
    query.add("REQ0JourneyTime", request.date.strftime("%H:%M"))
    query.add("REQ0JourneyProduct_prod_list_1", network.products.bitmask(request.products))
    query.add("REQ0JourneyDep_Foot_speed", WALK_SPEEDS[request.walk_speed])
    query.add("REQ0AddParamBaimprofile", ACCESSIBILITY_PROFILES[request.accessibility])
    query.add("L", "vs_java3")

    if Option.BIKE in request.options and network.bike_param is not None:
        query.append(*network.bike_param)
    for key, value in network.connection_extras:
        query.append(key, value)
    return query


def build_connections_request(network: NetworkConfig, request: ConnectionsRequest) -> Request:
    """Build the first page of a connection search."""
    query = _connections_query(network, request)
    return Request(query.render(), ResponseShape.XML_CONNECTIONS, network.page_encoding)


def build_more_connections_request(
    network: NetworkConfig, request: ConnectionsRequest, cursor: Cursor, later: bool
) -> Request:
    """Build a follow-up page relative to a previous result."""
    query = _connections_query(network, request)
    query.add("ident", url_encode(cursor.ident, network.page_encoding))
    query.add("seqnr", cursor.seqnr)
    query.add("REQ0HafasScrollDir", 1 if later else 2)
    return Request(query.render(), ResponseShape.XML_CONNECTIONS, network.page_encoding)


def build_autocomplete_request(network: NetworkConfig, constraint: str) -> Request:
    """Build a station completion request."""
    if network.autocomplete_template is None:
        raise ConfigurationError(f"{network.id} has no station completion")
    encoded = url_encode(constraint, network.autocomplete_encoding)
    url = network.api_base + network.autocomplete_template.format(encoded)
    return Request(url, ResponseShape.JSON_SUGGESTIONS, network.autocomplete_encoding)
