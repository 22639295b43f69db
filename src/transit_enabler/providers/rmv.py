"""Rhein-Main-Verkehrsverbund (Frankfurt area)."""

import re

from ..core.lines import LineNormalizer, LineRule, TypeRule
from ..core.models import Capability, Product
from ..core.network import NetworkConfig
from ..core.products import ProductTable

API_BASE = "http://www.rmv.de/auskunft/bin/jp/"

PRODUCTS = ProductTable(
    width=16,
    positions={
        Product.HIGH_SPEED_TRAIN: (0, 1),
        Product.REGIONAL_TRAIN: (2,),
        Product.SUBURBAN_TRAIN: (3,),
        Product.SUBWAY: (4,),
        Product.TRAM: (5,),
        Product.BUS: (6, 7),
        Product.FERRY: (8,),
        Product.CABLECAR: (9,),
        Product.ON_DEMAND: (10,),
    },
)

LINES = LineNormalizer(
    type_overrides=(
        TypeRule("AT", Product.ON_DEMAND),  # Anruf-Sammeltaxi
        TypeRule("LTAXI", Product.ON_DEMAND),
    ),
    line_rules=(
        # sightseeing tram
        LineRule("Ebbelwei-Express", Product.TRAM),
    ),
)

NEARBY_STATIONS_BY_STATION = re.compile(
    r'<a class="stationName" href="[^"]*?stboard\.exe/dn\?[^"]*?input=(\d+)[^"]*?">([^<]*)</a>'
)

RMV = NetworkConfig(
    id="rmv",
    name="Rhein-Main-Verkehrsverbund",
    api_base=API_BASE,
    query_endpoint=API_BASE + "query.exe/dn",
    products=PRODUCTS,
    lines=LINES,
    capabilities=frozenset(
        {
            Capability.NEARBY_STATIONS,
            Capability.DEPARTURES,
            Capability.AUTOCOMPLETE_ONE_LINE,
            Capability.CONNECTIONS,
        }
    ),
    page_encoding="ISO-8859-1",
    autocomplete_template=(
        "ajax-getstop.exe/dn?getstop=1&REQ0JourneyStopsS0A=255&REQ0JourneyStopsB=12&S={}?&js=true&"
    ),
    autocomplete_encoding="utf-8",
    nearby_station_pattern=NEARBY_STATIONS_BY_STATION,
    nearby_distance_divisor=1,
    nearby_default_distance=1000,
    departures_max_journeys=50,
    connection_extras=(("REQ0Tariff_Class", "2"),),
)
