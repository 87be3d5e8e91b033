"""
Exception types raised by collaborators.

Every one of these has a defined fallback in the orchestrators; none of them
is meant to reach the presentation layer.
"""


class CosmoscopeError(Exception):
    """Base class for all engine errors."""

    pass


class BackendError(CosmoscopeError):
    """Raised when an AI generation call fails."""

    pass


class LookupFailed(CosmoscopeError):
    """Raised when a geocoding, routing or imagery request fails."""

    pass


class GeolocationUnavailable(CosmoscopeError):
    """Raised when the device position is denied or unsupported."""

    pass


class ParseError(CosmoscopeError):
    """Raised when a directive payload cannot be parsed."""

    pass
