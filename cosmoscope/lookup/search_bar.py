"""
Map search bar suggestions.

Typing feeds a debounced forward geocode; submitting forwards the place to
the Earth conversation as a location-lookup request.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from cosmoscope.config import AppConfig, DEFAULT_CONFIG
from cosmoscope.lookup.debounce import DebouncedLookup
from cosmoscope.lookup.geocoding import GeocodingClient
from cosmoscope.shared.schemas import PlaceCandidate


logger = logging.getLogger(__name__)

_LOOKUP_KEY = "map-search"


class MapSearchSuggester:
    """State behind the map search dropdown."""

    def __init__(
        self,
        geocoder: GeocodingClient,
        on_search: Callable[[str], Awaitable[None]],
        config: AppConfig = DEFAULT_CONFIG,
    ):
        self._geocoder = geocoder
        self._on_search = on_search
        self._config = config
        self.query = ""
        self.suggestions: List[PlaceCandidate] = []
        self.is_open = False
        self._lookup: DebouncedLookup[List[PlaceCandidate]] = DebouncedLookup(
            config.debounce_delay, self._show, self._fail
        )

    def _show(self, key: str, candidates: List[PlaceCandidate]) -> None:
        self.suggestions = candidates
        self.is_open = len(candidates) > 0

    def _fail(self, key: str, error: Exception) -> None:
        self.suggestions = []
        self.is_open = False

    def _clear(self) -> None:
        self.suggestions = []
        self.is_open = False

    def on_query_change(self, query: str) -> None:
        """Arm a suggestion lookup, or clear when the query is too short."""
        self.query = query
        if len(query) < self._config.min_query_length:
            self._lookup.cancel(_LOOKUP_KEY)
            self._clear()
            return

        limit = self._config.search_result_limit
        self._lookup.schedule(
            _LOOKUP_KEY, lambda: self._geocoder.search(query, limit=limit)
        )

    async def settle(self) -> None:
        """Wait for the pending suggestion lookup, if any."""
        await self._lookup.wait(_LOOKUP_KEY)

    async def submit(self, query: Optional[str] = None) -> None:
        """Search for ``query`` (or the current text) and reset the bar."""
        text = (self.query if query is None else query).strip()
        self._lookup.cancel(_LOOKUP_KEY)
        self.query = ""
        self._clear()
        if text:
            await self._on_search(text)

    async def choose(self, candidate: PlaceCandidate) -> None:
        await self.submit(candidate.display_name)
