"""Deutsche Bahn (reiseauskunft.bahn.de / mobile.bahn.de)."""

import re

from ..core.lines import LINE_RUSSIA, LineNormalizer, LineRule, TypeRule
from ..core.models import Capability, Product
from ..core.network import NetworkConfig
from ..core.products import ProductTable

API_BASE = "http://mobile.bahn.de/bin/mobil/"

PRODUCTS = ProductTable(
    width=14,
    positions={
        Product.HIGH_SPEED_TRAIN: (0, 1),
        Product.REGIONAL_TRAIN: (2, 3),
        Product.SUBURBAN_TRAIN: (4,),
        Product.BUS: (5,),
        Product.FERRY: (6,),
        Product.SUBWAY: (7,),
        Product.TRAM: (8,),
        Product.ON_DEMAND: (9,),
        Product.CABLECAR: (),
    },
)

LINES = LineNormalizer(
    type_overrides=(
        TypeRule("DZ", Product.REGIONAL_TRAIN),  # Dampfzug
        TypeRule("LTT", Product.BUS),
        TypeRule("RFB", Product.ON_DEMAND, prefix=True),  # Rufbus
    ),
    type_fallbacks=(TypeRule("E", Product.UNKNOWN),),
    line_rules=(
        # Schwebebahn, counts as a tram of special design
        LineRule("Schw-B", Product.TRAM),
        LineRule(LINE_RUSSIA, Product.REGIONAL_TRAIN, regex=True),
        LineRule(r"\d{2,5}", Product.UNKNOWN, regex=True),
        LineRule("---", Product.UNKNOWN),
    ),
)

NEARBY_STATIONS_BY_STATION = re.compile(
    r'<a href="http://mobile\.bahn\.de/bin/mobil/bhftafel.exe/dn[^"]*?evaId=(\d*)&[^"]*?">([^<]*)</a>'
)

DB = NetworkConfig(
    id="db",
    name="Deutsche Bahn",
    api_base=API_BASE,
    query_endpoint="http://reiseauskunft.bahn.de/bin/query.exe/dn",
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
    autocomplete_template="ajax-getstop.exe/dn?getstop=1&REQ0JourneyStopsS0A=255&S={}?&js=true&",
    autocomplete_encoding="ISO-8859-1",
    nearby_station_pattern=NEARBY_STATIONS_BY_STATION,
    nearby_distance_divisor=1000,
    nearby_default_distance=50,
    departures_max_journeys=50,
    force_disable_equivs=True,
    connection_extras=(
        ("REQ0HafasOptimize1", "0:1"),
        ("REQ0Tariff_Class", "2"),
        ("REQ0Tariff_TravellerAge.1", "35"),
        ("REQ0Tariff_TravellerReductionClass.1", "0"),
        ("existOptimizePrice", "1"),
        ("existProductNahverkehr", "yes"),
    ),
    bike_param=("REQ0JourneyProduct_opt3", "1"),
)
