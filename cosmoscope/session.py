"""
Explorer session wiring.

Assembles stores, the map coordinator, both conversations, the bootstrap
sequencer, input assistants, the map search bar and the rover gallery from
one configuration.
"""

import logging
from typing import Optional

from cosmoscope.bootstrap import BootstrapSequencer, GeolocationProvider, StaticPosition
from cosmoscope.config import AppConfig, DEFAULT_CONFIG
from cosmoscope.conversation import (
    ChatInputAssistant,
    EarthConversation,
    MarsConversation,
    localize,
)
from cosmoscope.imagery import NasaImageryClient, RoverGallery
from cosmoscope.lookup import GeocodingClient, MapSearchSuggester, RoutingClient
from cosmoscope.map import MapStateCoordinator
from cosmoscope.shared.llm import AssistantBackend, OpenAIAssistant
from cosmoscope.shared.schemas import ChatMessage
from cosmoscope.store import ChatState, ChatStore, SettingsStore
from cosmoscope.store.settings_store import PreferenceStorage


logger = logging.getLogger(__name__)


class ExplorerSession:
    """
    One user's explorer state and the components acting on it.

    Args:
        backend: AI backend shared by both contexts
        geocoder: Forward and reverse geocoding
        routing: Route polyline provider
        imagery: NASA rover photo client
        geolocation: Device position source for the bootstrap
        preferences: Storage for the language preference
        config: Engine configuration
    """

    def __init__(
        self,
        backend: AssistantBackend,
        geocoder: GeocodingClient,
        routing: RoutingClient,
        imagery: NasaImageryClient,
        geolocation: Optional[GeolocationProvider] = None,
        preferences: Optional[PreferenceStorage] = None,
        config: AppConfig = DEFAULT_CONFIG,
    ):
        self.config = config
        self._geocoder = geocoder
        self._routing = routing
        self._imagery = imagery

        self.settings = SettingsStore(preferences)
        language = self.settings.language
        self.chat = ChatStore(
            ChatState(
                earth_messages=(ChatMessage.model_text(localize("earth_welcome", language)),),
                mars_messages=(ChatMessage.model_text(localize("mars_welcome", language)),),
            )
        )
        self.map = MapStateCoordinator(
            config.default_location,
            config.world_zoom,
            routing=routing,
            city_zoom=config.city_zoom,
        )

        self.earth = EarthConversation(
            self.chat, self.settings, self.map, backend, geocoder, config
        )
        self.mars = MarsConversation(self.chat, self.settings, backend, imagery)
        self.bootstrap_position = geolocation or StaticPosition()
        self.bootstrap = BootstrapSequencer(
            self.bootstrap_position,
            self.map,
            self.chat,
            self.settings,
            config,
        )

        self.earth_input = ChatInputAssistant("earth", self.chat, self.settings, backend, config)
        self.mars_input = ChatInputAssistant("mars", self.chat, self.settings, backend, config)
        self.map_search = MapSearchSuggester(geocoder, self.earth.handle_map_search, config)
        self.gallery = RoverGallery(imagery, config.default_sol)

        self._unsubscribe_settings = self.settings.subscribe(self._on_settings_change)

    @classmethod
    def from_config(
        cls,
        config: AppConfig = DEFAULT_CONFIG,
        geolocation: Optional[GeolocationProvider] = None,
        preferences: Optional[PreferenceStorage] = None,
    ) -> "ExplorerSession":
        """Build a session talking to the real services."""
        return cls(
            backend=OpenAIAssistant(config),
            geocoder=GeocodingClient(config.nominatim_url, config.user_agent, config.http_timeout),
            routing=RoutingClient(config.osrm_url, config.http_timeout),
            imagery=NasaImageryClient(config.nasa_api_url, config.nasa_api_key, config.http_timeout),
            geolocation=geolocation,
            preferences=preferences,
            config=config,
        )

    def _on_settings_change(self) -> None:
        self.earth.refresh_welcome(self.bootstrap.located)
        self.mars.refresh_welcome()

    async def aclose(self) -> None:
        self._unsubscribe_settings()
        self.earth_input.close()
        self.mars_input.close()
        await self._geocoder.aclose()
        await self._routing.aclose()
        await self._imagery.aclose()
        logger.info("[component=session] Session closed")
