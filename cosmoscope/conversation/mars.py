"""
Mars conversation orchestrator.

No map coupling: every message goes straight to the Mars expert backend.
"""

import logging
from typing import List

from cosmoscope.conversation.messages import default_suggestions, localize, welcome_texts
from cosmoscope.imagery.encoding import ImageUpload, file_to_base64
from cosmoscope.imagery.nasa import NasaImageryClient, RoverPhoto
from cosmoscope.shared.llm import AssistantBackend
from cosmoscope.shared.schemas import ChatMessage
from cosmoscope.store import ChatStore, SettingsStore


logger = logging.getLogger(__name__)


class MarsConversation:
    """Request/response cycle for the Mars context."""

    context = "mars"

    def __init__(
        self,
        store: ChatStore,
        settings: SettingsStore,
        backend: AssistantBackend,
        imagery: NasaImageryClient,
    ):
        self._store = store
        self._settings = settings
        self._backend = backend
        self._imagery = imagery
        self._log = "[context=mars] [component=conversation] "

    @property
    def language(self) -> str:
        return self._settings.language

    def default_suggestions(self) -> List[str]:
        return default_suggestions("mars", self.language)

    async def handle_user_message(self, message: str) -> None:
        language = self.language
        self._store.append("mars", ChatMessage.user_text(message))
        self._store.set_loading("mars", True)
        try:
            try:
                text = await self._backend.mars_answer(message, language)
            except Exception as e:
                logger.exception(f"{self._log}Error getting Mars answer: {e}")
                text = localize("mars_connection_failed", language)
            self._store.append("mars", ChatMessage.model_text(text))
        finally:
            self._store.set_loading("mars", False)

    async def handle_image_upload(self, upload: ImageUpload) -> None:
        language = self.language
        self._store.set_loading("mars", True)
        try:
            image = file_to_base64(upload)
            self._store.append("mars", ChatMessage.user_image(image.mime_type, image.data))
            try:
                text = await self._backend.analyze_image(image, language, "mars")
            except Exception as e:
                logger.exception(f"{self._log}Error analyzing Mars image: {e}")
                text = localize("image_failed", language)
            self._store.append("mars", ChatMessage.model_text(text))
        finally:
            self._store.set_loading("mars", False)

    async def tell_rover_story(self, photo: RoverPhoto) -> str:
        """
        A short first-person story for a rover photo.

        Not added to the transcript. Failures return a localized notice.
        """
        language = self.language
        try:
            image = await self._imagery.fetch_image(photo.img_src)
            return await self._backend.rover_story(image, language)
        except Exception as e:
            logger.exception(f"{self._log}Error generating rover story: {e}")
            return localize("story_failed", language)

    def refresh_welcome(self) -> None:
        """Translate the untouched welcome message after a language change."""
        messages = self._store.messages("mars")
        if len(messages) != 1 or messages[0].role != "model":
            return
        if messages[0].text not in welcome_texts("mars"):
            return
        translated = localize("mars_welcome", self.language)
        if messages[0].text != translated:
            self._store.set_messages("mars", [ChatMessage.model_text(translated)])
