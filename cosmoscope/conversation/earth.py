"""
Earth conversation orchestrator.

Mediates between user actions, the AI backend, the chat store and the map
coordinator. Holds no state of its own beyond its collaborators.
"""

import logging
from typing import List, Optional, Protocol

from cosmoscope.config import AppConfig, DEFAULT_CONFIG
from cosmoscope.conversation.graph import create_earth_turn_graph
from cosmoscope.conversation.messages import default_suggestions, localize, welcome_texts
from cosmoscope.imagery.encoding import ImageUpload, file_to_base64
from cosmoscope.map import MapStateCoordinator
from cosmoscope.shared.llm import AssistantBackend
from cosmoscope.shared.schemas import ChatMessage, Location
from cosmoscope.store import ChatStore, SettingsStore


logger = logging.getLogger(__name__)

LOCATION_REQUEST_PHRASE = "point out to"


class ReverseGeocoder(Protocol):
    async def reverse(self, location: Location) -> Optional[str]: ...


def is_location_request(message: str) -> bool:
    """True for messages that ask to find a place, e.g. map searches."""
    return LOCATION_REQUEST_PHRASE in message.lower()


class EarthConversation:
    """
    Request/response cycle for the Earth context.

    Args:
        store: Chat transcripts
        settings: Language source
        map_coordinator: Map state owner
        backend: AI backend
        geocoder: Reverse geocoder for map clicks
        config: Engine configuration
    """

    context = "earth"

    def __init__(
        self,
        store: ChatStore,
        settings: SettingsStore,
        map_coordinator: MapStateCoordinator,
        backend: AssistantBackend,
        geocoder: ReverseGeocoder,
        config: AppConfig = DEFAULT_CONFIG,
    ):
        self._store = store
        self._settings = settings
        self._map = map_coordinator
        self._backend = backend
        self._geocoder = geocoder
        self._config = config
        self._graph = create_earth_turn_graph(store, map_coordinator, backend)
        self._log = "[context=earth] [component=conversation] "

    @property
    def language(self) -> str:
        return self._settings.language

    def is_message_allowed(self, message: str) -> bool:
        return self._map.has_active_target or is_location_request(message)

    def default_suggestions(self) -> List[str]:
        return default_suggestions("earth", self.language)

    async def handle_user_message(self, message: str) -> None:
        """
        Answer a user message, or steer the map if the reply is a command.

        Rejected with a guidance message, without calling the backend, when
        nothing is selected and the message is not a location request.
        """
        language = self.language
        if not self.is_message_allowed(message):
            logger.info(f"{self._log}Rejected message: no location or route active")
            self._store.append(
                "earth", ChatMessage.model_text(localize("select_location_first", language))
            )
            return

        self._store.append("earth", ChatMessage.user_text(message))
        self._store.set_loading("earth", True)
        try:
            snapshot = self._map.get_snapshot()
            result = await self._graph.ainvoke(
                {
                    "message": message,
                    "language": language,
                    "history": list(self._store.messages("earth")),
                    "location": snapshot.selected_location,
                    "route": snapshot.route,
                    "reply": None,
                    "directive": None,
                    "error": None,
                    "outcome": None,
                }
            )
            logger.info(f"{self._log}Turn finished | outcome={result.get('outcome')}")
        finally:
            self._store.set_loading("earth", False)

    async def handle_image_upload(self, upload: ImageUpload) -> None:
        language = self.language
        self._store.set_loading("earth", True)
        try:
            image = file_to_base64(upload)
            self._store.append("earth", ChatMessage.user_image(image.mime_type, image.data))
            try:
                text = await self._backend.analyze_image(image, language, "earth")
            except Exception as e:
                logger.exception(f"{self._log}Error analyzing Earth image: {e}")
                text = localize("image_failed", language)
            self._store.append("earth", ChatMessage.model_text(text))
        finally:
            self._store.set_loading("earth", False)

    async def handle_map_click(self, location: Location) -> None:
        """
        Select the clicked point, then name it.

        The marker is placed before the reverse lookup starts; a failed
        lookup falls back to coordinate text.
        """
        self._map.select_location(location, self._config.city_zoom)
        language = self.language
        self._store.set_loading("earth", True)
        try:
            try:
                name = await self._geocoder.reverse(location)
            except Exception as e:
                logger.warning(f"{self._log}Reverse geocoding failed: {e}")
                name = None
            text = localize("location_selected", language, name=name or location.label())
            self._store.append("earth", ChatMessage.model_text(text))
        finally:
            self._store.set_loading("earth", False)

    async def handle_map_search(self, place: str) -> None:
        if place.strip():
            await self.handle_user_message(f'Point out to "{place}"')

    def refresh_welcome(self, located: bool) -> None:
        """Translate the untouched welcome message after a language change."""
        messages = self._store.messages("earth")
        if located or len(messages) != 1 or messages[0].role != "model":
            return
        if messages[0].text not in welcome_texts("earth"):
            return
        translated = localize("earth_welcome", self.language)
        if messages[0].text != translated:
            self._store.set_messages("earth", [ChatMessage.model_text(translated)])
