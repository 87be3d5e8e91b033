"""
Forward and reverse geocoding against a Nominatim endpoint.
"""

import logging
from typing import List, Optional

import httpx

from cosmoscope.errors import LookupFailed
from cosmoscope.shared.schemas import Location, PlaceCandidate


logger = logging.getLogger(__name__)


class GeocodingClient:
    """
    Thin async client over Nominatim ``/search`` and ``/reverse``.

    Any non-success status or transport error surfaces as LookupFailed.
    """

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "cosmoscope/0.1",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5.0),
            headers={"User-Agent": user_agent},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: dict):
        url = f"{self.base_url}{path}"
        try:
            r = await self._client.get(url, params=params)
            r.raise_for_status()
            return r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailed(f"Geocoding request to {path} failed: {e}") from e

    async def search(self, query: str, limit: int = 5) -> List[PlaceCandidate]:
        """
        Ranked place candidates for a free-text query.

        Args:
            query: Free-text place query
            limit: Maximum number of candidates

        Returns:
            Candidates in the order the service ranked them
        """
        data = await self._get_json(
            "/search", {"q": query, "format": "json", "limit": limit}
        )
        candidates = []
        for item in data or []:
            location = None
            if "lat" in item and "lon" in item:
                location = Location(lat=float(item["lat"]), lng=float(item["lon"]))
            candidates.append(
                PlaceCandidate(
                    place_id=item.get("place_id", 0),
                    display_name=item.get("display_name", ""),
                    location=location,
                )
            )
        return candidates

    async def reverse(self, location: Location) -> Optional[str]:
        """Display name for a point, or None if the service has none."""
        data = await self._get_json(
            "/reverse",
            {"format": "jsonv2", "lat": location.lat, "lon": location.lng},
        )
        name = (data or {}).get("display_name")
        return name or None
