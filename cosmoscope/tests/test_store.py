"""
Unit tests for the observable stores.

Tests subscription semantics, transcript updates and the persisted
language preference.
"""

import json

import pytest

from cosmoscope.config import LANGUAGE_PREFERENCE_KEY
from cosmoscope.shared.schemas import ChatMessage
from cosmoscope.store import (
    ChatState,
    ChatStore,
    InMemoryPreferences,
    JsonFilePreferences,
    ObservableStore,
    SettingsStore,
)


class _BrokenPreferences:
    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")


class TestObservableStore:
    """Tests for the generic store."""

    def test_every_mutation_notifies(self):
        store = ObservableStore(0)
        calls = []
        store.subscribe(lambda: calls.append(store.get_snapshot()))
        for i in range(5):
            store.replace(i + 1)
        assert calls == [1, 2, 3, 4, 5]

    def test_update_derives_from_current(self):
        store = ObservableStore(10)
        store.update(lambda s: s * 2)
        assert store.get_snapshot() == 20

    def test_unsubscribe_is_idempotent(self):
        store = ObservableStore(0)
        calls = []
        unsubscribe = store.subscribe(lambda: calls.append(1))
        unsubscribe()
        unsubscribe()
        store.replace(1)
        assert calls == []
        assert store.listener_count == 0

    def test_subscribe_during_notification(self):
        store = ObservableStore(0)
        late_calls = []

        def first():
            store.subscribe(lambda: late_calls.append(store.get_snapshot()))

        unsubscribe = store.subscribe(first)
        store.replace(1)
        assert late_calls == []
        unsubscribe()
        store.replace(2)
        assert late_calls == [2]


class TestChatStore:
    """Tests for transcripts and loading flags."""

    def test_append_is_per_context(self):
        store = ChatStore()
        store.append("earth", ChatMessage.user_text("hello"))
        assert len(store.messages("earth")) == 1
        assert store.messages("mars") == ()

    def test_set_loading_only_notifies_on_change(self):
        store = ChatStore()
        calls = []
        store.subscribe(lambda: calls.append(1))
        store.set_loading("mars", True)
        store.set_loading("mars", True)
        store.set_loading("mars", False)
        assert len(calls) == 2
        assert store.get_snapshot().is_loading("earth") is False

    def test_set_messages_replaces_transcript(self):
        store = ChatStore()
        store.append("earth", ChatMessage.user_text("a"))
        store.set_messages("earth", [ChatMessage.model_text("b")])
        assert [m.text for m in store.messages("earth")] == ["b"]

    def test_seeded_with_initial_state(self):
        initial = ChatState(mars_messages=(ChatMessage.model_text("Welcome to Mars"),))
        store = ChatStore(initial)
        assert store.get_snapshot() is initial
        assert store.messages("earth") == ()


class TestSettingsStore:
    """Tests for language and theme settings."""

    def test_defaults_to_english(self):
        assert SettingsStore().language == "en"

    def test_set_language_twice_notifies_once(self):
        storage = InMemoryPreferences()
        settings = SettingsStore(storage)
        calls = []
        settings.subscribe(lambda: calls.append(settings.language))
        settings.set_language("bn")
        settings.set_language("bn")
        assert calls == ["bn"]
        assert storage.get(LANGUAGE_PREFERENCE_KEY) == "bn"

    def test_reads_persisted_language(self):
        settings = SettingsStore(InMemoryPreferences({LANGUAGE_PREFERENCE_KEY: "bn"}))
        assert settings.language == "bn"

    def test_invalid_persisted_value_falls_back(self):
        settings = SettingsStore(InMemoryPreferences({LANGUAGE_PREFERENCE_KEY: "fr"}))
        assert settings.language == "en"

    def test_unreadable_storage_falls_back(self):
        settings = SettingsStore(_BrokenPreferences())
        assert settings.language == "en"

    def test_unwritable_storage_still_updates(self):
        settings = SettingsStore(_BrokenPreferences())
        calls = []
        settings.subscribe(lambda: calls.append(1))
        settings.set_language("bn")
        assert settings.language == "bn"
        assert calls == [1]

    def test_unsupported_language_raises(self):
        with pytest.raises(ValueError):
            SettingsStore().set_language("fr")

    def test_json_file_preferences(self, tmp_path):
        path = tmp_path / "prefs.json"
        settings = SettingsStore(JsonFilePreferences(str(path)))
        settings.set_language("bn")
        assert json.loads(path.read_text(encoding="utf-8")) == {LANGUAGE_PREFERENCE_KEY: "bn"}
        assert SettingsStore(JsonFilePreferences(str(path))).language == "bn"

    def test_corrupted_preference_file_is_replaced(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        settings = SettingsStore(JsonFilePreferences(str(path)))
        assert settings.language == "en"
        calls = []
        settings.subscribe(lambda: calls.append(settings.language))
        settings.set_language("bn")
        assert calls == ["bn"]
        assert json.loads(path.read_text(encoding="utf-8")) == {LANGUAGE_PREFERENCE_KEY: "bn"}

    def test_set_theme_noop_when_equal(self):
        settings = SettingsStore()
        calls = []
        settings.subscribe(lambda: calls.append(1))
        settings.set_theme("dark")
        settings.set_theme("light")
        assert calls == [1]
        assert settings.get_snapshot().theme == "light"
