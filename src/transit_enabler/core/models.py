"""Data models for transit backend queries."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import ConfigurationError


class LocationType(str, Enum):
    """Kind of point a location refers to."""

    STATION = "station"
    ADDRESS = "address"
    POI = "poi"
    ANY = "any"
    COORDINATE = "coordinate"


class Product(str, Enum):
    """Transport mode letters shared by all networks."""

    HIGH_SPEED_TRAIN = "I"
    REGIONAL_TRAIN = "R"
    SUBURBAN_TRAIN = "S"
    SUBWAY = "U"
    TRAM = "T"
    BUS = "B"
    FERRY = "F"
    CABLECAR = "C"
    ON_DEMAND = "P"
    UNKNOWN = "?"

    @classmethod
    def all(cls) -> tuple["Product", ...]:
        """All real transport modes, without the wildcard."""
        return tuple(product for product in cls if product is not cls.UNKNOWN)


class Location(BaseModel):
    """A station, address or point of interest.

    Equality follows the backend identity: two locations of the same type are
    equal when they share a non-zero id, or when both lack an id and carry the
    same name.
    """

    model_config = ConfigDict(frozen=True)

    type: LocationType = Field(..., description="Location type")
    id: int = Field(0, description="Provider assigned id, 0 if absent")
    lat: int = Field(0, description="Latitude in micro-degrees, 0 if absent")
    lon: int = Field(0, description="Longitude in micro-degrees, 0 if absent")
    name: str = Field("", description="Display name, may be empty")

    @model_validator(mode="after")
    def _check_resolvable(self) -> "Location":
        if not (self.has_id() or self.has_location() or self.name):
            raise ConfigurationError(f"cannot handle: {self.to_debug_string()}")
        return self

    def has_id(self) -> bool:
        return self.id != 0

    def has_location(self) -> bool:
        return self.lat != 0 or self.lon != 0

    def to_debug_string(self) -> str:
        return f"[{self.type.name} {self.id} '{self.name}']"

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Location):
            return NotImplemented
        if self.type != other.type or self.id != other.id:
            return False
        if self.id != 0:
            return True
        return self.name == other.name

    def __hash__(self) -> int:
        if self.id != 0:
            return hash((self.type, self.id))
        return hash((self.type, 0, self.name))

    def __str__(self) -> str:
        return self.name


class Line(BaseModel):
    """A normalized line: transport mode plus label."""

    model_config = ConfigDict(frozen=True)

    product: Product = Field(..., description="Transport mode, '?' if unclassified")
    label: str = Field(..., description="Line label, e.g. 'S8' or 'RE4200'")
    color: str | None = Field(None, description="Display color as hex string")

    def __str__(self) -> str:
        return self.label


class NearbyStatus(str, Enum):
    OK = "ok"
    INVALID_STATION = "invalid_station"
    SERVICE_DOWN = "service_down"


class NearbyStationsResult(BaseModel):
    """Stations around a location, in the order the backend returned them."""

    status: NearbyStatus | None = Field(None, description="Diagnostic status")
    stations: list[Location] = Field(default_factory=list)


class Departure(BaseModel):
    """A single departure from a station board."""

    planned_time: datetime = Field(..., description="Scheduled departure")
    predicted_time: datetime | None = Field(None, description="Real-time estimate")
    line: Line = Field(..., description="Normalized line")
    position: str | None = Field(None, description="Platform or stop position")
    destination: str = Field("", description="Destination name")
    destination_id: int = Field(0, description="Destination station id, 0 if unknown")
    cancelled: bool = Field(False, description="Whether the trip is cancelled")
    message: str | None = Field(None, description="Free text remark")

    def __str__(self) -> str:
        return f"{self.planned_time:%H:%M} {self.line} → {self.destination}"


class StationDepartures(BaseModel):
    """Departures of one station."""

    location: Location
    departures: list[Departure] = Field(default_factory=list)


class DeparturesStatus(str, Enum):
    OK = "ok"
    INVALID_STATION = "invalid_station"
    SERVICE_DOWN = "service_down"


class QueryDeparturesResult(BaseModel):
    """Departure boards, grouped per station."""

    status: DeparturesStatus = DeparturesStatus.OK
    station_departures: list[StationDepartures] = Field(default_factory=list)

    def find_station_departures(self, station_id: int) -> StationDepartures | None:
        """Get the board of one station by id."""
        for station_departures in self.station_departures:
            if station_departures.location.id == station_id:
                return station_departures
        return None


class Leg(BaseModel):
    """One section of a connection, either a ride or a walk."""

    departure: Location
    arrival: Location
    departure_time: datetime
    arrival_time: datetime
    departure_position: str | None = None
    arrival_position: str | None = None
    line: Line | None = Field(None, description="Line ridden, None for a walk")
    destination: str | None = Field(None, description="Direction of the line")
    min: int = Field(0, description="Walking duration in minutes")

    @property
    def is_walk(self) -> bool:
        return self.line is None

    def __str__(self) -> str:
        means = f"walk {self.min}min" if self.line is None else str(self.line)
        return f"{self.departure} → {self.arrival} ({means})"


class Connection(BaseModel):
    """A trip from origin to destination made of legs."""

    id: str
    from_location: Location
    to_location: Location
    departure_time: datetime
    arrival_time: datetime
    legs: list[Leg] = Field(default_factory=list)

    @property
    def transfer_count(self) -> int:
        rides = sum(1 for leg in self.legs if not leg.is_walk)
        return max(rides - 1, 0)

    def __str__(self) -> str:
        return (
            f"{self.from_location} {self.departure_time:%H:%M} → "
            f"{self.to_location} {self.arrival_time:%H:%M}"
        )


class ConnectionsStatus(str, Enum):
    OK = "ok"
    NO_CONNECTIONS = "no_connections"
    AMBIGUOUS = "ambiguous"
    TOO_CLOSE = "too_close"
    INVALID_DATE = "invalid_date"
    SERVICE_DOWN = "service_down"


class WalkSpeed(str, Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class Accessibility(str, Enum):
    NEUTRAL = "neutral"
    LIMITED = "limited"
    BARRIER_FREE = "barrier_free"


class Option(str, Enum):
    BIKE = "bike"


class Capability(str, Enum):
    NEARBY_STATIONS = "nearby_stations"
    DEPARTURES = "departures"
    AUTOCOMPLETE_ONE_LINE = "autocomplete_one_line"
    CONNECTIONS = "connections"
