"""
Map view state.

The mode is a single tagged variant, so a selection marker and a route
overlay can never both be described as active.
"""

from typing import Annotated, Iterable, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from cosmoscope.shared.schemas import Location, Route


class IdleMode(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


class SingleSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["single_selection"] = "single_selection"
    location: Location


class RouteDisplay(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["route_display"] = "route_display"
    route: Route
    polyline: Optional[Tuple[Location, ...]] = None

    @property
    def path(self) -> Tuple[Location, ...]:
        """Detailed polyline if loaded, else the straight line."""
        return self.polyline or tuple(self.route.straight_line())


MapMode = Annotated[
    Union[IdleMode, SingleSelection, RouteDisplay], Field(discriminator="kind")
]


class MapViewState(BaseModel):
    """Center, zoom and the single active mode."""

    model_config = ConfigDict(frozen=True)

    center: Location
    zoom: int
    mode: MapMode = Field(default_factory=IdleMode)

    @property
    def selected_location(self) -> Optional[Location]:
        return self.mode.location if isinstance(self.mode, SingleSelection) else None

    @property
    def route(self) -> Optional[Route]:
        return self.mode.route if isinstance(self.mode, RouteDisplay) else None


# =============================================================================
# Overlay handles and view commands
# =============================================================================


class Marker(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: Location
    popup: str


class RouteOverlay(BaseModel):
    """Start marker, end marker and the line between them."""

    model_config = ConfigDict(frozen=True)

    start_marker: Marker
    end_marker: Marker
    path: Tuple[Location, ...]


class Bounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, points: Iterable[Location]) -> "Bounds":
        points = list(points)
        if not points:
            raise ValueError("Bounds need at least one point")
        lats = [p.lat for p in points]
        lngs = [p.lng for p in points]
        return cls(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))

    def pad(self, ratio: float) -> "Bounds":
        """Grow each side by ``ratio`` of the span."""
        lat_buffer = abs(self.north - self.south) * ratio
        lng_buffer = abs(self.east - self.west) * ratio
        return Bounds(
            south=self.south - lat_buffer,
            west=self.west - lng_buffer,
            north=self.north + lat_buffer,
            east=self.east + lng_buffer,
        )

    def contains(self, point: Location) -> bool:
        return self.south <= point.lat <= self.north and self.west <= point.lng <= self.east


class FlyTo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["fly_to"] = "fly_to"
    center: Location
    zoom: int


class FitBounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["fit_bounds"] = "fit_bounds"
    bounds: Bounds


ViewCommand = Union[FlyTo, FitBounds]
