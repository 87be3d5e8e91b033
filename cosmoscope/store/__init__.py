"""
Observable stores for transcripts and settings.

Modules:
- observable: Generic pub/sub state container
- chat_store: Earth and Mars transcripts
- settings_store: Language and theme with a persisted language preference
"""

from cosmoscope.store.observable import ObservableStore
from cosmoscope.store.chat_store import ChatState, ChatStore
from cosmoscope.store.settings_store import (
    InMemoryPreferences,
    JsonFilePreferences,
    Settings,
    SettingsStore,
)

__all__ = [
    "ObservableStore",
    "ChatState",
    "ChatStore",
    "InMemoryPreferences",
    "JsonFilePreferences",
    "Settings",
    "SettingsStore",
]
