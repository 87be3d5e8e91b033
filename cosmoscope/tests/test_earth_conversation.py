"""
Tests for the Earth conversation orchestrator.

Runs the compiled turn graph against scripted backends and checks the
transcript and map side effects of each outcome.
"""

import asyncio

from cosmoscope.conversation import EarthConversation, is_location_request
from cosmoscope.conversation.graph.router import route_reply
from cosmoscope.directives import PlainAnswer, SetLocation
from cosmoscope.errors import BackendError, LookupFailed
from cosmoscope.imagery import ImageUpload
from cosmoscope.map import MapStateCoordinator, RouteDisplay, SingleSelection
from cosmoscope.shared.llm import AssistantReply
from cosmoscope.shared.schemas import CitationSource, ChatMessage, Location
from cosmoscope.store import ChatStore, InMemoryPreferences, SettingsStore


ROUTE_REPLY = (
    '{"show_route": {"start": {"name": "Dhaka", "lat": 23.8103, "lng": 90.4125}, '
    '"end": {"name": "Cumilla", "lat": 23.4607, "lng": 91.1809}, "distance": "97 km"}}'
)


class _ScriptedBackend:
    """Backend returning a fixed Earth reply, or raising if given an exception."""

    def __init__(self, reply=None, error=None, image_text="A river delta."):
        self.reply = reply
        self.error = error
        self.image_text = image_text
        self.earth_calls = []
        self.image_calls = []

    async def earth_answer(self, history, language, location, route):
        self.earth_calls.append(
            {"history": list(history), "language": language, "location": location, "route": route}
        )
        if self.error is not None:
            raise self.error
        return self.reply

    async def analyze_image(self, image, language, context):
        self.image_calls.append((image, language, context))
        if self.error is not None:
            raise self.error
        return self.image_text

    async def mars_answer(self, message, language):
        return ""

    async def suggest(self, user_input, history, context, language):
        return []

    async def rover_story(self, image, language):
        return ""


class _Geocoder:
    def __init__(self, name=None, error=None):
        self.name = name
        self.error = error
        self.calls = []

    async def reverse(self, location):
        self.calls.append(location)
        if self.error is not None:
            raise self.error
        return self.name


class _Routing:
    def __init__(self, error=None):
        self.error = error

    async def route(self, start, end):
        raise self.error


def _make_conversation(backend, geocoder=None, routing=None, language="en"):
    store = ChatStore()
    settings = SettingsStore(InMemoryPreferences())
    if language != "en":
        settings.set_language(language)
    coordinator = MapStateCoordinator(Location(lat=41.9028, lng=12.4964), 5, routing=routing)
    conversation = EarthConversation(
        store, settings, coordinator, backend, geocoder or _Geocoder()
    )
    return conversation, store, coordinator


def _texts(store):
    return [(m.role, m.text) for m in store.messages("earth")]


class TestLocationGuard:
    """Tests for the select-a-location-first guard."""

    def test_rejects_without_selection(self):
        backend = _ScriptedBackend(reply=AssistantReply(text="unused"))
        conversation, store, _ = _make_conversation(backend)

        asyncio.run(conversation.handle_user_message("What's the weather?"))

        assert backend.earth_calls == []
        assert _texts(store) == [
            ("model", "Please select a location on the map before asking a question.")
        ]
        assert store.get_snapshot().is_loading("earth") is False

    def test_guard_is_localized(self):
        backend = _ScriptedBackend(reply=AssistantReply(text="unused"))
        conversation, store, _ = _make_conversation(backend, language="bn")
        asyncio.run(conversation.handle_user_message("hello"))
        assert store.messages("earth")[0].text.startswith("অনুগ্রহ করে")

    def test_location_request_passes_guard(self):
        assert is_location_request('Point out to "Paris"')
        assert is_location_request("please POINT OUT TO the Alps")
        assert not is_location_request("Where is Paris?")


class TestEarthTurns:
    """Tests for each turn outcome."""

    def test_set_location_moves_map(self):
        reply = AssistantReply(
            text='{"set_location": {"name": "Paris", "lat": 48.8566, "lng": 2.3522}}'
        )
        backend = _ScriptedBackend(reply=reply)
        conversation, store, coordinator = _make_conversation(backend)

        asyncio.run(conversation.handle_map_search("Paris"))

        assert _texts(store) == [
            ("user", 'Point out to "Paris"'),
            ("model", "Of course, here is Paris."),
        ]
        mode = coordinator.get_snapshot().mode
        assert isinstance(mode, SingleSelection)
        assert mode.location == Location(lat=48.8566, lng=2.3522)
        assert store.get_snapshot().is_loading("earth") is False

    def test_dhaka_to_cumilla_route_with_routing_failure(self):
        backend = _ScriptedBackend(reply=AssistantReply(text=ROUTE_REPLY))
        conversation, store, coordinator = _make_conversation(
            backend, routing=_Routing(error=LookupFailed("routing down"))
        )
        coordinator.select_location(Location(lat=23.8103, lng=90.4125))

        async def scenario():
            await conversation.handle_user_message("Route from Dhaka to Cumilla")
            await coordinator.wait_for_refinement()

        asyncio.run(scenario())

        last = store.messages("earth")[-1].text
        assert "Dhaka" in last and "Cumilla" in last and "97 km" in last
        mode = coordinator.get_snapshot().mode
        assert isinstance(mode, RouteDisplay)
        assert coordinator.marker is None
        assert coordinator.route_overlay.path == (
            Location(lat=23.8103, lng=90.4125),
            Location(lat=23.4607, lng=91.1809),
        )

    def test_plain_answer_keeps_sources(self):
        sources = [CitationSource(title="Wiki", uri="https://example.org/rome")]
        backend = _ScriptedBackend(reply=AssistantReply(text="Rome is old.", sources=sources))
        conversation, store, coordinator = _make_conversation(backend)
        coordinator.select_location(Location(lat=41.9, lng=12.5))

        asyncio.run(conversation.handle_user_message("Tell me about this place"))

        message = store.messages("earth")[-1]
        assert message.text == "Rome is old."
        assert message.sources == tuple(sources)
        call = backend.earth_calls[0]
        assert call["location"] == Location(lat=41.9, lng=12.5)
        assert call["route"] is None
        assert call["history"][-1].text == "Tell me about this place"

    def test_backend_failure_appends_connection_message(self):
        backend = _ScriptedBackend(error=BackendError("boom"))
        conversation, store, coordinator = _make_conversation(backend)
        coordinator.select_location(Location(lat=1, lng=2))

        asyncio.run(conversation.handle_user_message("Hello"))

        assert _texts(store)[-1] == (
            "model",
            "There seems to be a connection issue. Please try again.",
        )
        assert store.get_snapshot().is_loading("earth") is False

    def test_deeply_nested_reply_is_shown_as_text(self):
        text = '{"set_location": ' + "[" * 100000 + "]" * 100000 + "}"
        backend = _ScriptedBackend(reply=AssistantReply(text=text))
        conversation, store, coordinator = _make_conversation(backend)
        coordinator.select_location(Location(lat=1, lng=2))

        asyncio.run(conversation.handle_user_message("Hello"))

        assert store.messages("earth")[-1].text == text
        assert coordinator.get_snapshot().mode.location == Location(lat=1, lng=2)
        assert store.get_snapshot().is_loading("earth") is False

    def test_loading_toggles_around_turn(self):
        backend = _ScriptedBackend(reply=AssistantReply(text="ok"))
        conversation, store, coordinator = _make_conversation(backend)
        coordinator.select_location(Location(lat=1, lng=2))
        flags = []
        store.subscribe(lambda: flags.append(store.get_snapshot().is_loading("earth")))

        asyncio.run(conversation.handle_user_message("Hi"))

        assert True in flags
        assert flags[-1] is False


class TestMapClick:
    """Tests for clicking the map."""

    def test_dhaka_click(self):
        geocoder = _Geocoder(name="Dhaka, Bangladesh")
        conversation, store, coordinator = _make_conversation(
            _ScriptedBackend(), geocoder=geocoder
        )

        asyncio.run(conversation.handle_map_click(Location(lat=23.8103, lng=90.4125)))

        assert coordinator.marker.location == Location(lat=23.8103, lng=90.4125)
        assert coordinator.get_snapshot().zoom == 12
        assert _texts(store) == [("model", "Location selected: Dhaka, Bangladesh")]

    def test_reverse_failure_uses_coordinates(self):
        geocoder = _Geocoder(error=LookupFailed("offline"))
        conversation, store, _ = _make_conversation(_ScriptedBackend(), geocoder=geocoder)

        asyncio.run(conversation.handle_map_click(Location(lat=23.8103, lng=90.4125)))

        assert _texts(store) == [
            ("model", "Location selected: Lat: 23.8103, Lng: 90.4125")
        ]

    def test_click_after_route_clears_overlay(self):
        backend = _ScriptedBackend(reply=AssistantReply(text=ROUTE_REPLY))
        conversation, _, coordinator = _make_conversation(
            backend, geocoder=_Geocoder(name="Somewhere")
        )

        async def scenario():
            await conversation.handle_map_search("Cumilla")
            await conversation.handle_map_click(Location(lat=1, lng=2))

        asyncio.run(scenario())
        assert coordinator.route_overlay is None
        assert isinstance(coordinator.get_snapshot().mode, SingleSelection)


class TestImageUpload:
    """Tests for Earth image analysis."""

    def test_image_then_analysis(self):
        backend = _ScriptedBackend(image_text="Looks like a delta.")
        conversation, store, _ = _make_conversation(backend)

        asyncio.run(
            conversation.handle_image_upload(ImageUpload(mime_type="image/png", data=b"\x89PNG"))
        )

        first, second = store.messages("earth")
        assert first.role == "user"
        assert first.parts[0].inline_data.data == "iVBORw=="
        assert first.parts[0].inline_data.mime_type == "image/png"
        assert second.text == "Looks like a delta."
        assert backend.image_calls[0][2] == "earth"

    def test_image_failure_is_localized(self):
        backend = _ScriptedBackend(error=BackendError("down"))
        conversation, store, _ = _make_conversation(backend)
        asyncio.run(conversation.handle_image_upload(ImageUpload(data=b"abc")))
        assert store.messages("earth")[-1].text == (
            "An error occurred while analyzing the image. Please try again."
        )
        assert store.get_snapshot().is_loading("earth") is False


class TestWelcomeRefresh:
    """Tests for translating the untouched welcome message."""

    def test_translates_untouched_welcome(self):
        conversation, store, _ = _make_conversation(_ScriptedBackend())
        store.set_messages(
            "earth",
            [ChatMessage.model_text("Welcome to the Earth Explorer! Attempting to find your location...")],
        )
        conversation._settings.set_language("bn")
        conversation.refresh_welcome(located=False)
        assert store.messages("earth")[0].text.startswith("আর্থ এক্সপ্লোরারে")

    def test_leaves_conversation_alone(self):
        conversation, store, _ = _make_conversation(_ScriptedBackend())
        store.set_messages("earth", [ChatMessage.user_text("hi")])
        conversation._settings.set_language("bn")
        conversation.refresh_welcome(located=False)
        assert store.messages("earth")[0].text == "hi"


class TestRouter:
    """Tests for the turn router."""

    def test_routes_error_to_failure(self):
        assert route_reply({"error": "x", "reply": None}) == "failure_node"

    def test_routes_by_directive(self):
        assert route_reply(
            {"error": None, "reply": AssistantReply(text="{}"), "directive": SetLocation(name="A", lat=1, lng=2)}
        ) == "set_location_node"
        assert route_reply(
            {"error": None, "reply": AssistantReply(text="hi"), "directive": PlainAnswer(text="hi")}
        ) == "plain_answer_node"
