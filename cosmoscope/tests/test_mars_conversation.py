"""
Tests for the Mars conversation orchestrator.
"""

import asyncio

from cosmoscope.conversation import MarsConversation
from cosmoscope.errors import BackendError, LookupFailed
from cosmoscope.imagery import ImageUpload, RoverPhoto
from cosmoscope.shared.schemas import ChatMessage, InlineImage
from cosmoscope.store import ChatStore, InMemoryPreferences, SettingsStore


class _MarsBackend:
    def __init__(self, answer="Olympus Mons is a shield volcano.", error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    async def earth_answer(self, history, language, location, route):
        raise AssertionError("Mars never asks the Earth model")

    async def analyze_image(self, image, language, context):
        self.calls.append(("image", context))
        if self.error is not None:
            raise self.error
        return "Red dust."

    async def mars_answer(self, message, language):
        self.calls.append(("mars", message, language))
        if self.error is not None:
            raise self.error
        return self.answer

    async def suggest(self, user_input, history, context, language):
        return []

    async def rover_story(self, image, language):
        self.calls.append(("story", image.data))
        if self.error is not None:
            raise self.error
        return "I woke before dawn."


class _Imagery:
    def __init__(self, error=None):
        self.error = error

    async def fetch_image(self, url):
        if self.error is not None:
            raise self.error
        return InlineImage(mime_type="image/jpeg", data="cGhvdG8=")


def _make_photo():
    return RoverPhoto.model_validate(
        {
            "id": 1,
            "sol": 3000,
            "camera": {"id": 26, "name": "NAVCAM", "rover_id": 5, "full_name": "Navigation Camera"},
            "img_src": "http://mars.nasa.gov/photo.jpg",
            "earth_date": "2021-01-01",
            "rover": {
                "id": 5,
                "name": "Curiosity",
                "landing_date": "2012-08-06",
                "launch_date": "2011-11-26",
                "status": "active",
            },
        }
    )


def _make_conversation(backend, imagery=None):
    store = ChatStore()
    settings = SettingsStore(InMemoryPreferences())
    return MarsConversation(store, settings, backend, imagery or _Imagery()), store, settings


class TestMarsMessages:
    """Tests for Mars chat turns."""

    def test_no_location_guard(self):
        backend = _MarsBackend()
        conversation, store, _ = _make_conversation(backend)

        asyncio.run(conversation.handle_user_message("Where is Olympus Mons?"))

        assert [(m.role, m.text) for m in store.messages("mars")] == [
            ("user", "Where is Olympus Mons?"),
            ("model", "Olympus Mons is a shield volcano."),
        ]
        assert backend.calls == [("mars", "Where is Olympus Mons?", "en")]
        assert store.messages("earth") == ()

    def test_failure_message(self):
        conversation, store, _ = _make_conversation(_MarsBackend(error=BackendError("x")))
        asyncio.run(conversation.handle_user_message("Hi"))
        assert store.messages("mars")[-1].text == (
            "I seem to be having trouble communicating from Mars. Please try again."
        )
        assert store.get_snapshot().is_loading("mars") is False

    def test_image_uses_mars_context(self):
        backend = _MarsBackend()
        conversation, store, _ = _make_conversation(backend)
        asyncio.run(conversation.handle_image_upload(ImageUpload(data=b"img")))
        assert backend.calls == [("image", "mars")]
        assert store.messages("mars")[-1].text == "Red dust."


class TestRoverStory:
    """Tests for rover photo stories."""

    def test_story_text(self):
        backend = _MarsBackend()
        conversation, store, _ = _make_conversation(backend)
        story = asyncio.run(conversation.tell_rover_story(_make_photo()))
        assert story == "I woke before dawn."
        assert backend.calls == [("story", "cGhvdG8=")]
        assert store.messages("mars") == ()

    def test_story_failure_is_localized(self):
        conversation, _, settings = _make_conversation(
            _MarsBackend(), imagery=_Imagery(error=LookupFailed("404"))
        )
        story = asyncio.run(conversation.tell_rover_story(_make_photo()))
        assert story == "The rover could not tell its story right now. Please try again."


class TestMarsWelcome:
    """Tests for welcome translation."""

    def test_translates_only_untouched_welcome(self):
        conversation, store, settings = _make_conversation(_MarsBackend())
        store.set_messages(
            "mars",
            [ChatMessage.model_text(
                "Greetings! I am the Mars Exploration AI. Ask me anything about the Red Planet."
            )],
        )
        settings.set_language("bn")
        conversation.refresh_welcome()
        assert store.messages("mars")[0].text.startswith("শুভেচ্ছা")

        store.append("mars", ChatMessage.user_text("hi"))
        settings.set_language("en")
        conversation.refresh_welcome()
        assert store.messages("mars")[0].text.startswith("শুভেচ্ছা")
