"""Continuation state for paginated connection searches."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    Accessibility,
    Connection,
    ConnectionsStatus,
    Location,
    Option,
    WalkSpeed,
)


class ConnectionsRequest(BaseModel):
    """The parameters of a connection search, kept to issue follow-up pages."""

    model_config = ConfigDict(frozen=True)

    from_location: Location
    via_location: Location | None = None
    to_location: Location
    date: datetime
    dep: bool = True
    products: str = Field(..., description="Product letters included in the search")
    walk_speed: WalkSpeed = WalkSpeed.NORMAL
    accessibility: Accessibility = Accessibility.NEUTRAL
    options: frozenset[Option] = frozenset()


@dataclass(frozen=True)
class Cursor:
    """Backend position within a result list."""

    ident: str
    seqnr: int


class ConnectionsContext:
    """Opaque token to fetch earlier or later connections of a search.

    Hand it back unchanged to ``query_more_connections``. Every call returns a
    fresh context, the old one stays valid and is never modified.
    """

    __slots__ = ("_network", "_request", "_cursor")

    def __init__(self, network: str, request: ConnectionsRequest, cursor: Cursor):
        object.__setattr__(self, "_network", network)
        object.__setattr__(self, "_request", request)
        object.__setattr__(self, "_cursor", cursor)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"<ConnectionsContext {self._network}>"


class QueryConnectionsResult(BaseModel):
    """Connections found for a search, plus the context to continue it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: ConnectionsStatus = ConnectionsStatus.OK
    from_location: Location | None = None
    via_location: Location | None = None
    to_location: Location | None = None
    context: ConnectionsContext | None = Field(None, exclude=True)
    connections: list[Connection] = Field(default_factory=list)
