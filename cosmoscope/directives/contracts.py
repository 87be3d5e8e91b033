"""
Directive contracts.

Pydantic models for the command shapes the assistant is prompted to emit,
plus the tagged result of classifying a reply.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from cosmoscope.shared.schemas import Location, NamedLocation, Route


def _require_number(value: Any) -> Any:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("coordinate must be a JSON number")
    return value


# =============================================================================
# Payload contracts (what the model emits)
# =============================================================================


class SetLocationPayload(BaseModel):
    """Body of a ``set_location`` command."""

    name: Optional[str] = None
    lat: float
    lng: float

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def coordinate_is_number(cls, value: Any) -> Any:
        return _require_number(value)


class RouteEndpointPayload(BaseModel):
    """One endpoint of a ``show_route`` command."""

    name: str
    lat: float
    lng: float

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def coordinate_is_number(cls, value: Any) -> Any:
        return _require_number(value)


class ShowRoutePayload(BaseModel):
    """Body of a ``show_route`` command."""

    start: RouteEndpointPayload
    end: RouteEndpointPayload
    distance: str

    @field_validator("distance", mode="before")
    @classmethod
    def distance_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


# =============================================================================
# Classification result
# =============================================================================


class SetLocation(BaseModel):
    """Move the map to a single named point."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["set_location"] = "set_location"
    name: str
    lat: float
    lng: float

    @property
    def location(self) -> Location:
        return Location(lat=self.lat, lng=self.lng)


class ShowRoute(BaseModel):
    """Display a route between two named endpoints."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["show_route"] = "show_route"
    start: NamedLocation
    end: NamedLocation
    distance_label: str

    @property
    def route(self) -> Route:
        return Route(start=self.start, end=self.end)


class PlainAnswer(BaseModel):
    """Display the reply as prose."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain_answer"] = "plain_answer"
    text: str


Directive = Union[SetLocation, ShowRoute, PlainAnswer]
