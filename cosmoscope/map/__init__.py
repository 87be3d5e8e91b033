"""Map state: view model, overlay handles and the coordinator."""

from cosmoscope.map.coordinator import MapStateCoordinator
from cosmoscope.map.state import (
    Bounds,
    FitBounds,
    FlyTo,
    IdleMode,
    MapViewState,
    Marker,
    RouteDisplay,
    RouteOverlay,
    SingleSelection,
)

__all__ = [
    "MapStateCoordinator",
    "Bounds",
    "FitBounds",
    "FlyTo",
    "IdleMode",
    "MapViewState",
    "Marker",
    "RouteDisplay",
    "RouteOverlay",
    "SingleSelection",
]
