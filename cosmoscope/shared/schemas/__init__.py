"""Common models shared across the engine."""

from cosmoscope.shared.schemas.chat import (
    ChatContext,
    ChatMessage,
    CitationSource,
    InlineImage,
    MessagePart,
    Role,
)
from cosmoscope.shared.schemas.geo import Location, NamedLocation, PlaceCandidate, Route

__all__ = [
    "ChatContext",
    "ChatMessage",
    "CitationSource",
    "InlineImage",
    "MessagePart",
    "Role",
    "Location",
    "NamedLocation",
    "PlaceCandidate",
    "Route",
]
