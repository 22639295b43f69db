"""Response parsers turning HAFAS payloads into canonical records."""

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from bs4 import BeautifulSoup, Tag

from ..utils.text import add_days, join_date_time, parse_date, parse_time, resolve_entities
from .context import Cursor
from .exceptions import ConfigurationError, ParseError, UnknownEntityError
from .models import (
    Connection,
    ConnectionsStatus,
    Departure,
    DeparturesStatus,
    Leg,
    Location,
    LocationType,
    NearbyStationsResult,
    NearbyStatus,
    QueryDeparturesResult,
    StationDepartures,
)
from .network import NetworkConfig

logger = logging.getLogger(__name__)

SUGGESTIONS_PATTERN = re.compile(
    r"SLs\.sls\s*=\s*(\{.*\})\s*;\s*SLs\.showSuggestion\(\s*\)\s*;", re.DOTALL
)
DELAY_PATTERN = re.compile(r"\+\s*(\d+)")

SUGGESTION_TYPES = {
    "1": LocationType.STATION,
    "2": LocationType.ADDRESS,
    "4": LocationType.POI,
}

BOARD_ERRORS = {
    "H730": DeparturesStatus.INVALID_STATION,
    "H890": DeparturesStatus.OK,
}

CONNECTION_ERRORS = {
    "K890": ConnectionsStatus.NO_CONNECTIONS,
    "K9380": ConnectionsStatus.TOO_CLOSE,
    "K9220": ConnectionsStatus.AMBIGUOUS,
    "K9260": ConnectionsStatus.AMBIGUOUS,
    "K9360": ConnectionsStatus.INVALID_DATE,
}


def _text(value: str | None) -> str:
    """Entity-decode and trim an extracted value."""
    return (resolve_entities(value) or "").strip()


def _int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"expected an integer, got {value!r}") from e


def _location(**fields: Any) -> Location:
    """Build a location from payload values; an unusable record is a parse failure."""
    try:
        return Location(**fields)
    except ConfigurationError as e:
        raise ParseError(f"unusable location in payload: {e}") from e


def _truncate(items: list[Any], maximum: int) -> list[Any]:
    if maximum == 0 or maximum >= len(items):
        return items
    return items[:maximum]


# ---------------------------------------------------------------------------
# Scraped HTML


def extract_station_anchors(page: str, pattern: re.Pattern[str]) -> list[Location]:
    """Extract station links from a station board page.

    The pattern must capture the numeric station id and the visible name.
    Matches with a malformed id and repeated ids are skipped.
    """
    stations: list[Location] = []
    seen: set[int] = set()
    for match in pattern.finditer(page):
        raw_id, raw_name = match.group(1), match.group(2)
        if not raw_id.isdigit():
            logger.debug(f"Skipping station link with malformed id {raw_id!r}")
            continue
        station_id = int(raw_id)
        name = _text(raw_name)
        if station_id == 0 or station_id in seen or not name:
            continue
        seen.add(station_id)
        stations.append(Location(type=LocationType.STATION, id=station_id, name=name))
    return stations


def parse_station_anchors(
    page: str, network: NetworkConfig, max_stations: int = 0
) -> NearbyStationsResult:
    if network.nearby_station_pattern is None:
        raise ParseError(f"{network.id} has no station page pattern")
    stations = extract_station_anchors(page, network.nearby_station_pattern)
    return NearbyStationsResult(status=None, stations=_truncate(stations, max_stations))


# ---------------------------------------------------------------------------
# Loosely structured JSON


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed JSON payload: {str(e)}") from e


def _require(record: dict[str, Any], key: str) -> Any:
    value = record.get(key)
    if value is None:
        raise ParseError(f"missing field {key!r} in {record!r}")
    return value


def parse_stops_json(
    text: str, network: NetworkConfig, max_stations: int = 0
) -> NearbyStationsResult:
    """Parse the stop2json locator answer."""
    data = _load_json(text)
    if not isinstance(data, dict):
        raise ParseError("Unexpected nearby stations payload")
    if "error" in data:
        logger.warning(f"{network.id} locator reported: {data['error']}")
        return NearbyStationsResult(status=NearbyStatus.SERVICE_DOWN)
    stops = data.get("stops")
    if not isinstance(stops, list):
        raise ParseError("Unexpected nearby stations payload")

    stations = []
    for stop in stops:
        if not isinstance(stop, dict):
            raise ParseError(f"Unexpected stop record: {stop!r}")
        stations.append(
            _location(
                type=LocationType.STATION,
                id=_int(_require(stop, "extId")),
                lat=_int(stop.get("y")),
                lon=_int(stop.get("x")),
                name=_text(str(_require(stop, "name"))),
            )
        )
    return NearbyStationsResult(status=NearbyStatus.OK, stations=_truncate(stations, max_stations))


def _parse_suggestion(suggestion: Any) -> Location | None:
    if not isinstance(suggestion, dict):
        raise ParseError(f"Unexpected suggestion record: {suggestion!r}")
    raw_type = str(_require(suggestion, "type"))
    name = _text(str(_require(suggestion, "value")))
    location_type = SUGGESTION_TYPES.get(raw_type)
    if location_type is None:
        logger.debug(f"Skipping suggestion {name!r} of type {raw_type}")
        return None
    station_id = _int(suggestion.get("extId")) if location_type == LocationType.STATION else 0
    return _location(
        type=location_type,
        id=station_id,
        lat=_int(suggestion.get("ycoord")),
        lon=_int(suggestion.get("xcoord")),
        name=name,
    )


def parse_suggestions(text: str, network: NetworkConfig) -> list[Location]:
    """Parse the ``SLs.sls={...};SLs.showSuggestion();`` completion snippet.

    Unreadable suggestions are skipped, the others are kept in order.
    """
    match = SUGGESTIONS_PATTERN.search(text)
    if not match:
        raise ParseError(f"Unexpected completion payload from {network.id}")
    data = _load_json(match.group(1))
    suggestions = data.get("suggestions") if isinstance(data, dict) else None
    if not isinstance(suggestions, list):
        raise ParseError(f"Unexpected completion payload from {network.id}")

    locations = []
    for suggestion in suggestions:
        try:
            location = _parse_suggestion(suggestion)
        except UnknownEntityError:
            raise
        except ParseError as e:
            logger.debug(f"Skipping suggestion: {e}")
            continue
        if location is not None:
            locations.append(location)
    return locations


# ---------------------------------------------------------------------------
# Lenient tagged markup


def _soup(text: str) -> BeautifulSoup:
    # html.parser tolerates the unescaped ampersands and unclosed tags HAFAS emits
    return BeautifulSoup(text, "html.parser")


def _attr(element: Tag, name: str, required: bool = False) -> str | None:
    """Read an attribute value, entity-decoded and trimmed.

    html.parser has already unescaped every HTML5 entity here, so unlike the
    regex path ``&nbsp;`` arrives as U+00A0 and ``&amp;#228;`` ends up as
    'ä'. Only references it left untouched reach ``resolve_entities``.
    """
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if value is None or not value.strip():
        if required:
            raise ParseError(f"<{element.name}> lacks {name}")
        return None
    return _text(value)


def _board_station(element: Tag) -> Location:
    return _location(
        type=LocationType.STATION,
        id=_int(_attr(element, "evaid", required=True)),
        name=_attr(element, "name") or "",
    )


def _parse_journey(element: Tag, network: NetworkConfig) -> tuple[int, Departure]:
    planned_time = join_date_time(
        parse_date(_attr(element, "fpdate", required=True) or ""),
        parse_time(_attr(element, "fptime", required=True) or ""),
    )
    line = network.lines.parse_line_and_type(_attr(element, "prod", required=True) or "")

    delay = _attr(element, "delay") or ""
    e_delay = _attr(element, "e_delay")
    cancelled = delay.lower() == "cancel"
    predicted_time = None
    delay_match = DELAY_PATTERN.search(delay)
    if not cancelled:
        if delay_match:
            predicted_time = planned_time + timedelta(minutes=int(delay_match.group(1)))
        elif e_delay is not None and e_delay.lstrip("-").isdigit():
            predicted_time = planned_time + timedelta(minutes=int(e_delay))

    departure = Departure(
        planned_time=planned_time,
        predicted_time=predicted_time,
        line=line,
        position=_attr(element, "platform"),
        destination=_attr(element, "targetloc") or _attr(element, "dir") or "",
        destination_id=_int(_attr(element, "dirnr")),
        cancelled=cancelled,
        message=_attr(element, "message"),
    )
    return _int(_attr(element, "evaid")), departure


def parse_departures_board(
    text: str, network: NetworkConfig, station_id: int, max_departures: int = 0
) -> QueryDeparturesResult:
    """Parse a ``L=vs_java3`` station board.

    One unreadable journey is skipped, the rest of the board is kept.
    """
    soup = _soup(text)
    error = soup.find("err")
    station_elements = soup.find_all("st")
    journey_elements = soup.find_all("journey")

    boards: dict[int, StationDepartures] = {}
    if isinstance(error, Tag):
        code = _attr(error, "code") or ""
        status = BOARD_ERRORS.get(code, DeparturesStatus.SERVICE_DOWN)
        if status != DeparturesStatus.OK:
            logger.info(f"{network.id} board error {code}: {_attr(error, 'text')}")
            return QueryDeparturesResult(status=status)
        # no departures in the requested period, the station itself is valid
        boards[station_id] = StationDepartures(
            location=Location(type=LocationType.STATION, id=station_id)
        )
    elif not station_elements and not journey_elements:
        raise ParseError("Unexpected station board page")

    for element in station_elements:
        try:
            location = _board_station(element)
        except UnknownEntityError:
            raise
        except ParseError as e:
            logger.debug(f"Skipping board station: {e}")
            continue
        existing = boards.get(location.id)
        if existing is None or not existing.location.name:
            boards[location.id] = StationDepartures(location=location)

    # journeys without their own station belong to the board's station
    board_station_id = next(iter(boards), station_id)
    for element in journey_elements:
        try:
            journey_station_id, departure = _parse_journey(element, network)
        except UnknownEntityError:
            raise
        except ParseError as e:
            logger.debug(f"Skipping departure: {e}")
            continue
        journey_station_id = journey_station_id or board_station_id
        board = boards.get(journey_station_id)
        if board is None:
            board = StationDepartures(
                location=Location(type=LocationType.STATION, id=journey_station_id)
            )
            boards[journey_station_id] = board
        board.departures.append(departure)

    for board in boards.values():
        board.departures = _truncate(board.departures, max_departures)

    status = DeparturesStatus.OK if station_id in boards else DeparturesStatus.INVALID_STATION
    return QueryDeparturesResult(status=status, station_departures=list(boards.values()))


@dataclass
class ParsedConnections:
    """Connections page as read from the backend, before it gets a context."""

    status: ConnectionsStatus
    cursor: Cursor | None = None
    connections: list[Connection] = field(default_factory=list)


def _stop_location(element: Tag) -> Location:
    station_id = _int(_attr(element, "stationid"))
    lat = _int(_attr(element, "y"))
    lon = _int(_attr(element, "x"))
    name = _attr(element, "name") or ""
    if station_id:
        location_type = LocationType.STATION
    elif lat or lon:
        location_type = LocationType.COORDINATE
    else:
        location_type = LocationType.ANY
    return _location(type=location_type, id=station_id, lat=lat, lon=lon, name=name)


class _Clock:
    """Turns a sequence of clock times into monotonic datetimes."""

    def __init__(self, day: date):
        self.day = day
        self.last: datetime | None = None

    def stamp(self, element: Tag) -> datetime:
        raw_date = _attr(element, "date")
        day = parse_date(raw_date) if raw_date else self.day
        value = join_date_time(day, parse_time(_attr(element, "time", required=True) or ""))
        while self.last is not None and value < self.last:
            value = add_days(value, 1)
        self.last = value
        return value


def _parse_leg(section: Tag, clock: _Clock, network: NetworkConfig) -> Leg:
    dep = section.find("dep")
    arr = section.find("arr")
    if not isinstance(dep, Tag) or not isinstance(arr, Tag):
        raise ParseError("section lacks <Dep> or <Arr>")

    departure = _stop_location(dep)
    departure_time = clock.stamp(dep)
    journey = section.find("journey")
    walk = section.find("walk")
    arrival = _stop_location(arr)
    arrival_time = clock.stamp(arr)

    if isinstance(journey, Tag):
        return Leg(
            departure=departure,
            arrival=arrival,
            departure_time=departure_time,
            arrival_time=arrival_time,
            departure_position=_attr(dep, "platform"),
            arrival_position=_attr(arr, "platform"),
            line=network.lines.parse_line_and_type(_attr(journey, "prod", required=True) or ""),
            destination=_attr(journey, "dir"),
        )
    if isinstance(walk, Tag):
        return Leg(
            departure=departure,
            arrival=arrival,
            departure_time=departure_time,
            arrival_time=arrival_time,
            min=_int(_attr(walk, "min")),
        )
    raise ParseError("section is neither <Journey> nor <Walk>")


def _parse_connection(element: Tag, network: NetworkConfig) -> Connection:
    clock = _Clock(parse_date(_attr(element, "date", required=True) or ""))
    legs = [_parse_leg(section, clock, network) for section in element.find_all("section")]
    if not legs:
        raise ParseError("connection without sections")
    return Connection(
        id=_attr(element, "id") or "",
        from_location=legs[0].departure,
        to_location=legs[-1].arrival,
        departure_time=legs[0].departure_time,
        arrival_time=legs[-1].arrival_time,
        legs=legs,
    )


def parse_connections_list(text: str, network: NetworkConfig) -> ParsedConnections:
    """Parse a connections page and its continuation cursor."""
    soup = _soup(text)
    error = soup.find("err")
    if isinstance(error, Tag):
        code = _attr(error, "code") or ""
        logger.info(f"{network.id} connections error {code}: {_attr(error, 'text')}")
        return ParsedConnections(
            status=CONNECTION_ERRORS.get(code, ConnectionsStatus.SERVICE_DOWN)
        )

    if soup.find("resc") is None:
        raise ParseError("Unexpected connections page")

    connections = []
    for element in soup.find_all("connection"):
        try:
            connections.append(_parse_connection(element, network))
        except UnknownEntityError:
            raise
        except ParseError as e:
            logger.debug(f"Skipping connection: {e}")

    cursor = None
    context_element = soup.find("conresctxt")
    if isinstance(context_element, Tag):
        ident = _attr(context_element, "ident")
        if ident:
            cursor = Cursor(ident=ident, seqnr=_int(_attr(context_element, "seqnr")))

    status = ConnectionsStatus.OK if connections else ConnectionsStatus.NO_CONNECTIONS
    return ParsedConnections(status=status, cursor=cursor, connections=connections)
