"""Unit tests for the provider engine."""

from datetime import datetime

import pytest

from transit_enabler.core.context import ConnectionsContext
from transit_enabler.core.exceptions import ConfigurationError, ParseError
from transit_enabler.core.models import (
    Capability,
    ConnectionsStatus,
    DeparturesStatus,
    Location,
    LocationType,
    NearbyStatus,
    Product,
)
from transit_enabler.core.provider import HafasProvider
from transit_enabler.providers import DB, RMV, NetworkId, get_provider

HAUPTWACHE = Location(type=LocationType.STATION, id=3000001, name="Hauptwache")
SUEDBAHNHOF = Location(type=LocationType.STATION, id=3000912, name="Südbahnhof")
WHEN = datetime(2012, 5, 1, 23, 45)


class TestGetProvider:
    """Test provider lookup."""

    def test_known_networks(self, fake_transport):
        transport = fake_transport()
        provider = get_provider("rmv", transport)
        assert provider.id == "rmv"
        assert provider.network is RMV
        assert provider.transport is transport
        assert get_provider(NetworkId.DB, transport).network is DB

    def test_unknown_network(self, fake_transport):
        with pytest.raises(ConfigurationError, match="unknown network: xyz"):
            get_provider("xyz", fake_transport())

    def test_capabilities(self, fake_transport):
        provider = get_provider("db", fake_transport())
        assert provider.has_capabilities(Capability.DEPARTURES)
        assert provider.has_capabilities(Capability.CONNECTIONS, Capability.NEARBY_STATIONS)
        assert not provider.has_capabilities()


class TestHafasProvider:
    """Test the queries of one configured network."""

    def test_nearby_by_station(self, fake_transport, db_nearby_html):
        transport = fake_transport(db_nearby_html)
        provider = HafasProvider(DB, transport)

        result = provider.query_nearby_stations(
            Location(type=LocationType.STATION, id=8000105), max_stations=3
        )

        assert len(result.stations) == 3
        assert transport.requests == [
            (
                "http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn"
                "?near=Anzeigen&distance=50&input=8000105",
                "ISO-8859-1",
            )
        ]

    def test_nearby_by_coordinate(self, fake_transport, stops_json):
        transport = fake_transport(stops_json)
        provider = HafasProvider(DB, transport)

        result = provider.query_nearby_stations(
            Location(type=LocationType.COORDINATE, lat=50108625, lon=8669604), 5000, 2
        )

        assert result.status == NearbyStatus.OK
        assert [station.id for station in result.stations] == [8000105, 8098105]
        assert "look_maxno=2&look_maxdist=5000" in transport.urls[0]

    def test_nearby_rejects_unusable_location(self, fake_transport):
        transport = fake_transport()
        provider = HafasProvider(DB, transport)
        with pytest.raises(ConfigurationError):
            provider.query_nearby_stations(Location(type=LocationType.POI, name="Zoo"))
        assert transport.requests == []

    def test_departures(self, fake_transport, departures_xml):
        transport = fake_transport(departures_xml)
        provider = HafasProvider(DB, transport)

        result = provider.query_departures(8000105, max_departures=1)

        assert result.status == DeparturesStatus.OK
        assert len(result.find_station_departures(8000105).departures) == 1
        assert "maxJourneys=50" in transport.urls[0]

    def test_parse_error_propagates(self, fake_transport):
        provider = HafasProvider(DB, fake_transport("<html>Wartungsarbeiten</html>"))
        with pytest.raises(ParseError):
            provider.query_departures(8000105)

    def test_autocomplete(self, fake_transport, suggestions_js):
        transport = fake_transport(suggestions_js)
        provider = HafasProvider(DB, transport)

        locations = provider.autocomplete_stations("Frankfurt")

        assert locations[0].id == 8000105
        assert transport.requests[0][1] == "ISO-8859-1"

    def test_connections_default_products(self, fake_transport, connections_xml):
        transport = fake_transport(connections_xml)
        provider = HafasProvider(RMV, transport)

        result = provider.query_connections(HAUPTWACHE, None, SUEDBAHNHOF, WHEN)

        assert result.status == ConnectionsStatus.OK
        assert result.from_location == HAUPTWACHE
        assert result.to_location == SUEDBAHNHOF
        assert result.via_location is None
        assert len(result.connections) == 2
        assert isinstance(result.context, ConnectionsContext)
        assert "REQ0JourneyProduct_prod_list_1=1111111111100000" in transport.urls[0]

    def test_connections_product_selection(self, fake_transport, connections_xml):
        transport = fake_transport(connections_xml)
        provider = HafasProvider(RMV, transport)

        provider.query_connections(
            HAUPTWACHE, None, SUEDBAHNHOF, WHEN, products=[Product.SUBWAY, "S"]
        )

        assert "REQ0JourneyProduct_prod_list_1=0001100000000000" in transport.urls[0]

    def test_connections_unknown_product(self, fake_transport):
        transport = fake_transport()
        provider = HafasProvider(RMV, transport)
        with pytest.raises(ConfigurationError, match="cannot handle: Z"):
            provider.query_connections(HAUPTWACHE, None, SUEDBAHNHOF, WHEN, products="UZ")
        assert transport.requests == []

    def test_connections_without_result(self, fake_transport):
        transport = fake_transport('<Err code="K890" text="No connections found." level="E"/>')
        provider = HafasProvider(RMV, transport)

        result = provider.query_connections(HAUPTWACHE, None, SUEDBAHNHOF, WHEN)

        assert result.status == ConnectionsStatus.NO_CONNECTIONS
        assert result.context is None
        assert result.connections == []


class TestMoreConnections:
    """Test paging through connection results."""

    def test_later_connections(self, fake_transport, connections_xml, later_connections_xml):
        transport = fake_transport(connections_xml, later_connections_xml)
        provider = HafasProvider(RMV, transport)

        first = provider.query_connections(HAUPTWACHE, None, SUEDBAHNHOF, WHEN)
        second = provider.query_more_connections(first.context, later=True)

        assert [connection.id for connection in second.connections] == ["C2-0"]
        assert second.connections[0].departure_time == datetime(2012, 5, 2, 0, 20)
        assert second.from_location == HAUPTWACHE
        assert transport.urls[1].startswith(transport.urls[0])
        assert transport.urls[1].endswith(
            "&ident=1f.02345678.1335852900&seqnr=1&REQ0HafasScrollDir=1"
        )

    def test_context_reusable(self, fake_transport, connections_xml, later_connections_xml):
        """Test that a context can be used again and is not advanced in place."""
        transport = fake_transport(connections_xml, later_connections_xml, later_connections_xml)
        provider = HafasProvider(RMV, transport)

        first = provider.query_connections(HAUPTWACHE, None, SUEDBAHNHOF, WHEN)
        second = provider.query_more_connections(first.context)
        provider.query_more_connections(first.context, later=False)

        assert second.context is not first.context
        assert transport.urls[2].endswith("&seqnr=1&REQ0HafasScrollDir=2")

    def test_next_page_uses_new_cursor(
        self, fake_transport, connections_xml, later_connections_xml
    ):
        transport = fake_transport(connections_xml, later_connections_xml, later_connections_xml)
        provider = HafasProvider(RMV, transport)

        first = provider.query_connections(HAUPTWACHE, None, SUEDBAHNHOF, WHEN)
        second = provider.query_more_connections(first.context)
        provider.query_more_connections(second.context)

        assert "&seqnr=2&" in transport.urls[2]

    def test_context_of_other_network(self, fake_transport, connections_xml):
        rmv = HafasProvider(RMV, fake_transport(connections_xml))
        context = rmv.query_connections(HAUPTWACHE, None, SUEDBAHNHOF, WHEN).context

        db_transport = fake_transport()
        with pytest.raises(ConfigurationError, match="cannot be used with db"):
            HafasProvider(DB, db_transport).query_more_connections(context)
        assert db_transport.requests == []
