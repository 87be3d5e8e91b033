"""
Geographic value types shared by the map, lookups and directives.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """A point on the Earth in floating point degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(description="Latitude in degrees")
    lng: float = Field(description="Longitude in degrees")

    def label(self) -> str:
        """Coordinate text used when no place name is available."""
        return f"Lat: {self.lat:.4f}, Lng: {self.lng:.4f}"


class NamedLocation(Location):
    """A route endpoint annotated with a human-readable name."""

    name: str = Field(description="Display name of the endpoint")

    def point(self) -> Location:
        return Location(lat=self.lat, lng=self.lng)


class Route(BaseModel):
    """A pair of named endpoints."""

    model_config = ConfigDict(frozen=True)

    start: NamedLocation
    end: NamedLocation

    def straight_line(self) -> List[Location]:
        """Two-point fallback path between the endpoints."""
        return [self.start.point(), self.end.point()]


class PlaceCandidate(BaseModel):
    """A ranked forward-geocoding result."""

    model_config = ConfigDict(frozen=True)

    place_id: int
    display_name: str
    location: Optional[Location] = None
