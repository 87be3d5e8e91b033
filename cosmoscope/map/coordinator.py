"""
Map state coordinator.

Owns the map's view state, the selection marker, the route overlay and the
last view command. Callers express intent (select this point, show this
route) and never touch overlay handles directly.

Transitions:
    Idle / SingleSelection / RouteDisplay -> SingleSelection  (select_location)
    Idle / SingleSelection / RouteDisplay -> RouteDisplay     (show_route)
    any -> Idle                                                (reset)

Entering a mode always tears down the other mode's handles first.
"""

import asyncio
import logging
from typing import Callable, Iterable, Optional, Protocol, List

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
    ViewCommand,
)
from cosmoscope.shared.logging import log_state_transition
from cosmoscope.shared.schemas import Location, Route
from cosmoscope.store.observable import ObservableStore


logger = logging.getLogger(__name__)

ROUTE_BOUNDS_PADDING = 0.2


class RouteProvider(Protocol):
    async def route(self, start: Location, end: Location) -> List[Location]: ...


class MapStateCoordinator:
    """
    Arbitrates between selection mode and route mode.

    Args:
        center: Initial map center
        zoom: Initial zoom level
        routing: Collaborator used to refine straight-line routes
        city_zoom: Zoom applied to single selections by default
    """

    def __init__(
        self,
        center: Location,
        zoom: int,
        routing: Optional[RouteProvider] = None,
        city_zoom: int = 12,
    ):
        self._store = ObservableStore(MapViewState(center=center, zoom=zoom))
        self._routing = routing
        self.city_zoom = city_zoom
        self._marker: Optional[Marker] = None
        self._route_overlay: Optional[RouteOverlay] = None
        self._view: ViewCommand = FlyTo(center=center, zoom=zoom)
        self._refinement: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def get_snapshot(self) -> MapViewState:
        return self._store.get_snapshot()

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._store.subscribe(listener)

    @property
    def marker(self) -> Optional[Marker]:
        return self._marker

    @property
    def route_overlay(self) -> Optional[RouteOverlay]:
        return self._route_overlay

    @property
    def view(self) -> ViewCommand:
        return self._view

    @property
    def has_active_target(self) -> bool:
        """True when a location is selected or a route is shown."""
        return not isinstance(self.get_snapshot().mode, IdleMode)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select_location(self, location: Location, zoom: Optional[int] = None) -> None:
        """Place a single marker, tearing down any route first."""
        self._cancel_refinement()
        self._clear_route_overlay()
        self._clear_marker()

        zoom = self.city_zoom if zoom is None else zoom
        self._marker = Marker(
            location=location,
            popup=f"Selected: {location.lat:.2f}, {location.lng:.2f}",
        )
        self._commit(
            "select_location",
            MapViewState(
                center=location, zoom=zoom, mode=SingleSelection(location=location)
            ),
        )

    def show_route(self, route: Route) -> None:
        """Display a route with a straight-line path until refined."""
        self._cancel_refinement()
        self._clear_marker()
        self._clear_route_overlay()

        current = self.get_snapshot()
        self._route_overlay = self._build_overlay(route, route.straight_line())
        self._commit(
            "show_route",
            MapViewState(
                center=current.center, zoom=current.zoom, mode=RouteDisplay(route=route)
            ),
            extra={"start": route.start.name, "end": route.end.name},
        )

    def reset(self, center: Location, zoom: int) -> None:
        """Clear every overlay and return to idle."""
        self._cancel_refinement()
        self._clear_marker()
        self._clear_route_overlay()
        self._commit("reset", MapViewState(center=center, zoom=zoom, mode=IdleMode()))

    def apply_route_polyline(self, route: Route, path: Iterable[Location]) -> bool:
        """
        Replace the straight line with a detailed path.

        Ignored unless ``route`` is the route currently displayed.

        Returns:
            True if the path was applied
        """
        current = self.get_snapshot()
        mode = current.mode
        if not isinstance(mode, RouteDisplay) or mode.route != route:
            logger.debug("Discarding polyline for a route that is no longer shown")
            return False

        path = tuple(path)
        self._route_overlay = self._build_overlay(route, path)
        self._commit(
            "route_refined",
            current.model_copy(update={"mode": RouteDisplay(route=route, polyline=path)}),
            extra={"points": len(path)},
        )
        return True

    # ------------------------------------------------------------------
    # Route refinement
    # ------------------------------------------------------------------

    def start_route_refinement(self, route: Route) -> Optional[asyncio.Task]:
        """
        Fetch a detailed path for ``route`` in the background.

        Must be called from within a running event loop. A later transition
        cancels the fetch.
        """
        if self._routing is None:
            return None
        self._cancel_refinement()
        self._refinement = asyncio.get_running_loop().create_task(self._refine(route))
        return self._refinement

    async def wait_for_refinement(self) -> None:
        task = self._refinement
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _refine(self, route: Route) -> None:
        try:
            path = await self._routing.route(route.start.point(), route.end.point())
        except Exception as e:
            logger.warning(
                f"[component=map] Route lookup failed, keeping straight line: {e}"
            )
            return

        if len(path) < 2:
            logger.warning("[component=map] Route lookup returned too few points")
            return
        self.apply_route_polyline(route, path)

    def _cancel_refinement(self) -> None:
        task = self._refinement
        self._refinement = None
        if task is not None and not task.done():
            task.cancel()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_overlay(self, route: Route, path: Iterable[Location]) -> RouteOverlay:
        return RouteOverlay(
            start_marker=Marker(location=route.start.point(), popup="Start"),
            end_marker=Marker(location=route.end.point(), popup="End"),
            path=tuple(path),
        )

    def _clear_marker(self) -> None:
        self._marker = None

    def _clear_route_overlay(self) -> None:
        self._route_overlay = None

    def _follow(self, state: MapViewState) -> ViewCommand:
        # Route mode fits the overlay; center-follow would fight it.
        if isinstance(state.mode, RouteDisplay) and self._route_overlay is not None:
            overlay = self._route_overlay
            points = [
                overlay.start_marker.location,
                overlay.end_marker.location,
                *overlay.path,
            ]
            return FitBounds(bounds=Bounds.around(points).pad(ROUTE_BOUNDS_PADDING))
        return FlyTo(center=state.center, zoom=state.zoom)

    def _commit(self, event: str, state: MapViewState, extra: Optional[dict] = None) -> None:
        self._view = self._follow(state)
        log_state_transition(event, state.model_dump(), extra=extra, logger=logger)
        self._store.replace(state)
