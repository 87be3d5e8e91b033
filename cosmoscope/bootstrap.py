"""
Bootstrap sequencer.

Resolves the user's position once, on first activation of the Earth context,
and seeds the map with it (or with the fixed default when that fails).
"""

import asyncio
import logging
from typing import Optional, Protocol

from cosmoscope.config import AppConfig, DEFAULT_CONFIG
from cosmoscope.conversation.messages import localize
from cosmoscope.errors import GeolocationUnavailable
from cosmoscope.map import MapStateCoordinator
from cosmoscope.shared.schemas import ChatMessage, Location
from cosmoscope.store import ChatStore, SettingsStore


logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    async def current_position(self) -> Location: ...


class StaticPosition:
    """Position source for a fixed, client-reported location (or none)."""

    def __init__(self, location: Optional[Location] = None):
        self.location = location

    async def current_position(self) -> Location:
        if self.location is None:
            raise GeolocationUnavailable("No position was reported")
        return self.location


class BootstrapSequencer:
    """
    One-shot device position resolution.

    Args:
        geolocation: Position source
        map_coordinator: Receives the initial selection
        store: Transcript the located / not-located message goes to
        settings: Language read when the sequence completes
        config: Timeout, default location and zooms
    """

    def __init__(
        self,
        geolocation: GeolocationProvider,
        map_coordinator: MapStateCoordinator,
        store: ChatStore,
        settings: SettingsStore,
        config: AppConfig = DEFAULT_CONFIG,
    ):
        self._geolocation = geolocation
        self._map = map_coordinator
        self._store = store
        self._settings = settings
        self._config = config
        self._started = False
        self.located = False
        self._log = "[context=earth] [component=bootstrap] "

    @property
    def started(self) -> bool:
        return self._started

    async def run(self) -> None:
        """Resolve the position; later calls do nothing."""
        if self._started:
            logger.debug(f"{self._log}Already started, ignoring")
            return
        self._started = True

        try:
            position = await asyncio.wait_for(
                self._geolocation.current_position(),
                timeout=self._config.geolocation_timeout,
            )
        except Exception as e:
            logger.warning(f"{self._log}Could not resolve position ({type(e).__name__}): {e}")
            self._map.select_location(self._config.default_location, self._config.world_zoom)
            message_id = "not_located"
        else:
            logger.info(f"{self._log}Position resolved | {position.label()}")
            self._map.select_location(position, self._config.city_zoom)
            message_id = "located"

        self.located = True
        text = localize(message_id, self._settings.language)
        self._store.append("earth", ChatMessage.model_text(text))
