"""
Driving route geometry from an OSRM endpoint.
"""

import logging
from typing import List, Optional

import httpx

from cosmoscope.errors import LookupFailed
from cosmoscope.shared.schemas import Location


logger = logging.getLogger(__name__)


class RoutingClient:
    """Fetches a detailed path between two points."""

    def __init__(
        self,
        base_url: str = "https://router.project-osrm.org",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5.0)
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def route(self, start: Location, end: Location) -> List[Location]:
        """
        Path geometry from ``start`` to ``end``.

        Raises:
            LookupFailed: On transport errors, non-success status, or when
                the service returns no routes
        """
        url = (
            f"{self.base_url}/route/v1/driving/"
            f"{start.lng},{start.lat};{end.lng},{end.lat}"
        )
        try:
            r = await self._client.get(
                url, params={"overview": "full", "geometries": "geojson"}
            )
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailed(f"Routing request failed: {e}") from e

        routes = data.get("routes") or []
        if not routes:
            raise LookupFailed("Routing service returned no routes")

        # OSRM coordinates are [lng, lat]
        coordinates = routes[0].get("geometry", {}).get("coordinates", [])
        return [Location(lat=lat, lng=lng) for lng, lat in coordinates]
