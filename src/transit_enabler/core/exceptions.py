"""Custom exceptions for transit backend queries."""


class TransitError(Exception):
    """Base exception for transit query errors."""

    pass


class ConfigurationError(TransitError):
    """Raised when a provider is asked for something it cannot handle.

    This is always a programmer error: a location that carries neither id,
    coordinate nor name, an unknown product letter, or a continuation context
    handed to the wrong network.
    """

    pass


class NetworkError(TransitError):
    """Raised when there's a network-related error."""

    pass


class ParseError(TransitError):
    """Raised when a backend response does not have any expected shape."""

    pass


class UnknownEntityError(ParseError):
    """Raised when a markup entity outside the supported set is encountered."""

    def __init__(self, entity: str):
        super().__init__(f"unknown entity: {entity}")
        self.entity = entity
