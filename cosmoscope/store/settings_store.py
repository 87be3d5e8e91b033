"""
Process-wide user settings.

Language is read once from a persisted preference and written back on every
explicit change. Setting a value equal to the current one does nothing and
fires no notification.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Literal, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from cosmoscope.config import LANGUAGE_PREFERENCE_KEY
from cosmoscope.store.observable import ObservableStore


logger = logging.getLogger(__name__)

Language = Literal["en", "bn"]
Theme = Literal["light", "dark"]

SUPPORTED_LANGUAGES = ("en", "bn")
DEFAULT_LANGUAGE: Language = "en"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: Language = DEFAULT_LANGUAGE
    theme: Theme = "dark"


class PreferenceStorage(Protocol):
    """String key/value storage scoped to the session."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryPreferences:
    """Preference storage that lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferences:
    """Preference storage backed by a small JSON file, survives reloads."""

    def __init__(self, path: str):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            logger.warning(f"Ignoring corrupted preference file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)


def load_initial_language(storage: PreferenceStorage) -> Language:
    """Read the persisted language, falling back to English on anything odd."""
    try:
        stored = storage.get(LANGUAGE_PREFERENCE_KEY)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read language preference: {e}")
        return DEFAULT_LANGUAGE
    if stored in SUPPORTED_LANGUAGES:
        return stored
    return DEFAULT_LANGUAGE


class SettingsStore(ObservableStore[Settings]):
    """Observable settings with a persisted language preference."""

    def __init__(self, storage: Optional[PreferenceStorage] = None):
        self._storage = storage if storage is not None else InMemoryPreferences()
        super().__init__(Settings(language=load_initial_language(self._storage)))

    @property
    def language(self) -> Language:
        return self._state.language

    def set_language(self, language: Language) -> None:
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        if self._state.language == language:
            return
        self._state = self._state.model_copy(update={"language": language})
        try:
            self._storage.set(LANGUAGE_PREFERENCE_KEY, language)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not save language preference: {e}")
        self._notify()

    def set_theme(self, theme: Theme) -> None:
        if self._state.theme == theme:
            return
        self.replace(self._state.model_copy(update={"theme": theme}))
