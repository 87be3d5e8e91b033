"""
Chat input suggestions.

Two sources feed the same suggestion list:
    - contextual follow-ups, fetched once a reply has landed and the input is empty
    - typed autocomplete, debounced while the user types

Both share a single debounce key so the newest request always wins.
"""

import logging
from typing import Callable, List, Optional

from cosmoscope.config import AppConfig, DEFAULT_CONFIG
from cosmoscope.conversation.messages import default_suggestions
from cosmoscope.lookup.debounce import DebouncedLookup
from cosmoscope.shared.llm import AssistantBackend
from cosmoscope.shared.schemas import ChatContext
from cosmoscope.store import ChatStore, SettingsStore


logger = logging.getLogger(__name__)


class ChatInputAssistant:
    """
    Suggestion state behind one chat input box.

    Args:
        context: Which transcript this input belongs to
        store: Chat store, watched for the end of a request cycle
        settings: Language source
        backend: AI backend producing suggestions
        config: Debounce and length policy
    """

    def __init__(
        self,
        context: ChatContext,
        store: ChatStore,
        settings: SettingsStore,
        backend: AssistantBackend,
        config: AppConfig = DEFAULT_CONFIG,
    ):
        self.context = context
        self._store = store
        self._settings = settings
        self._backend = backend
        self._config = config
        self._key = f"suggestions-{context}"
        self._log = f"[context={context}] [component=suggestions] "
        self.input = ""
        self.suggestions: List[str] = default_suggestions(context, settings.language)
        self._lookup: DebouncedLookup[List[str]] = DebouncedLookup(
            config.debounce_delay, self._show, self._fail
        )
        self._was_loading = store.get_snapshot().is_loading(context)
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_store_change)

    def _show(self, key: str, suggestions: List[str]) -> None:
        self.suggestions = suggestions

    def _fail(self, key: str, error: Exception) -> None:
        self.suggestions = []

    def _on_store_change(self) -> None:
        loading = self._store.get_snapshot().is_loading(self.context)
        finished = self._was_loading and not loading
        self._was_loading = loading
        if finished and self.input == "":
            logger.debug(f"{self._log}Request cycle finished, refreshing suggestions")
            self._lookup.schedule(self._key, self._contextual, delay=0)

    async def _contextual(self) -> List[str]:
        language = self._settings.language
        history = list(self._store.messages(self.context))
        try:
            suggestions = await self._backend.suggest("", history, self.context, language)
        except Exception as e:
            logger.warning(f"{self._log}Contextual suggestions failed: {e}")
            suggestions = []
        return suggestions or default_suggestions(self.context, language)

    def on_input_change(self, text: str) -> None:
        """Update suggestions for the current input text."""
        self.input = text
        if text == "":
            self._lookup.cancel(self._key)
            self.suggestions = default_suggestions(self.context, self._settings.language)
            return
        if len(text) < self._config.min_query_length:
            self._lookup.cancel(self._key)
            self.suggestions = []
            return

        language = self._settings.language
        history = list(self._store.messages(self.context))
        self._lookup.schedule(
            self._key,
            lambda: self._backend.suggest(text, history, self.context, language),
        )

    def on_send(self) -> None:
        """The input was submitted: clear it and every suggestion."""
        self._lookup.cancel(self._key)
        self.input = ""
        self.suggestions = []

    async def settle(self) -> None:
        await self._lookup.wait(self._key)

    def close(self) -> None:
        self._lookup.cancel_all()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
