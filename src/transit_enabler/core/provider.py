"""Shared engine answering queries for any configured HAFAS network."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from .context import ConnectionsContext, ConnectionsRequest, QueryConnectionsResult
from .exceptions import ConfigurationError
from .models import (
    Accessibility,
    Capability,
    Location,
    NearbyStationsResult,
    Option,
    Product,
    QueryDeparturesResult,
    WalkSpeed,
)
from .network import NetworkConfig
from .parsers import (
    ParsedConnections,
    parse_connections_list,
    parse_departures_board,
    parse_station_anchors,
    parse_stops_json,
    parse_suggestions,
)
from .queries import (
    Request,
    ResponseShape,
    build_autocomplete_request,
    build_connections_request,
    build_departures_request,
    build_more_connections_request,
    build_nearby_stations_request,
)
from .transport import Transport

logger = logging.getLogger(__name__)

PARSERS: dict[ResponseShape, Callable[..., Any]] = {
    ResponseShape.HTML_STATIONS: parse_station_anchors,
    ResponseShape.JSON_STOPS: parse_stops_json,
    ResponseShape.JSON_SUGGESTIONS: parse_suggestions,
    ResponseShape.XML_BOARD: parse_departures_board,
    ResponseShape.XML_CONNECTIONS: parse_connections_list,
}


class HafasProvider:
    """Queries one network through its configuration.

    The instance holds no per-query state and can be shared between threads
    as long as the transport can.
    """

    def __init__(self, network: NetworkConfig, transport: Transport):
        """Initialize the provider.

        Args:
            network: Static configuration of the network
            transport: Collaborator fetching URLs
        """
        self.network = network
        self.transport = transport

    @property
    def id(self) -> str:
        return self.network.id

    def has_capabilities(self, *capabilities: Capability) -> bool:
        return self.network.has_capabilities(*capabilities)

    def _execute(self, request: Request, **kwargs: Any) -> Any:
        logger.info(f"{self.network.id}: fetching {request.url}")
        text = self.transport.fetch_text(request.url, request.encoding)
        return PARSERS[request.shape](text, self.network, **kwargs)

    def query_nearby_stations(
        self, location: Location, max_distance: int = 0, max_stations: int = 0
    ) -> NearbyStationsResult:
        """Find stations around a coordinate or around another station.

        Args:
            location: Location with a coordinate, or a station with an id
            max_distance: Search radius in meters, 0 for the network default
            max_stations: Maximum number of stations, 0 for all found

        Raises:
            ConfigurationError: If the location has neither coordinate nor station id
            NetworkError: If the request fails
            ParseError: If the answer cannot be understood
        """
        request = build_nearby_stations_request(self.network, location, max_distance, max_stations)
        return self._execute(request, max_stations=max_stations)

    def query_departures(
        self, station_id: int, max_departures: int = 0, equivs: bool = False
    ) -> QueryDeparturesResult:
        """Get the departure board of a station.

        Args:
            station_id: Station to query
            max_departures: Maximum departures per station, 0 for all
            equivs: Whether equivalent nearby stations may be included
        """
        request = build_departures_request(self.network, station_id, equivs)
        return self._execute(request, station_id=station_id, max_departures=max_departures)

    def query_connections(
        self,
        from_location: Location,
        via_location: Location | None,
        to_location: Location,
        date: datetime,
        dep: bool = True,
        products: Iterable[Product | str] | None = None,
        walk_speed: WalkSpeed = WalkSpeed.NORMAL,
        accessibility: Accessibility = Accessibility.NEUTRAL,
        options: Iterable[Option] = (),
    ) -> QueryConnectionsResult:
        """Search connections between two locations.

        Args:
            from_location: Origin
            via_location: Optional intermediate stop
            to_location: Destination
            date: Departure (or arrival, see ``dep``) date and time
            dep: True to search by departure time, False by arrival time
            products: Product letters to include, None for all of the network
            walk_speed: Walking speed used for transfers
            accessibility: Accessibility profile
            options: Further search options

        Raises:
            ConfigurationError: If a location or product letter cannot be handled
        """
        if products is None:
            letters = "".join(
                product.value
                for product in Product.all()
                if product in self.network.products.positions
            )
        else:
            letters = "".join(Product(product).value for product in self._checked(products))

        request = ConnectionsRequest(
            from_location=from_location,
            via_location=via_location,
            to_location=to_location,
            date=date,
            dep=dep,
            products=letters,
            walk_speed=walk_speed,
            accessibility=accessibility,
            options=frozenset(options),
        )
        parsed = self._execute(build_connections_request(self.network, request))
        return self._connections_result(request, parsed)

    def query_more_connections(
        self, context: ConnectionsContext, later: bool = True
    ) -> QueryConnectionsResult:
        """Get earlier or later connections of a previous search.

        Args:
            context: Context of a previous result, passed back unchanged
            later: True for later connections, False for earlier ones
        """
        if context._network != self.network.id:
            raise ConfigurationError(
                f"context of {context._network} cannot be used with {self.network.id}"
            )
        request = build_more_connections_request(
            self.network, context._request, context._cursor, later
        )
        parsed = self._execute(request)
        return self._connections_result(context._request, parsed)

    def autocomplete_stations(self, constraint: str) -> list[Location]:
        """Complete a partial station name."""
        return self._execute(build_autocomplete_request(self.network, constraint))

    def _checked(self, products: Iterable[Product | str]) -> list[Product | str]:
        products = list(products)
        for product in products:
            self.network.products.lookup(product)
        return products

    def _connections_result(
        self, request: ConnectionsRequest, parsed: ParsedConnections
    ) -> QueryConnectionsResult:
        context = None
        if parsed.cursor is not None:
            context = ConnectionsContext(self.network.id, request, parsed.cursor)
        return QueryConnectionsResult(
            status=parsed.status,
            from_location=request.from_location,
            via_location=request.via_location,
            to_location=request.to_location,
            context=context,
            connections=parsed.connections,
        )
