"""
Chat transcript store.

Owns the Earth and Mars transcripts plus a per-context loading flag. Only the
conversation orchestrators mutate it; views subscribe and re-render.
"""

from typing import Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from cosmoscope.shared.schemas import ChatContext, ChatMessage
from cosmoscope.store.observable import ObservableStore


class ChatState(BaseModel):
    """Snapshot of every transcript."""

    model_config = ConfigDict(frozen=True)

    earth_messages: Tuple[ChatMessage, ...] = Field(default_factory=tuple)
    mars_messages: Tuple[ChatMessage, ...] = Field(default_factory=tuple)
    loading: Dict[str, bool] = Field(
        default_factory=lambda: {"earth": False, "mars": False}
    )

    def messages(self, context: ChatContext) -> Tuple[ChatMessage, ...]:
        return self.earth_messages if context == "earth" else self.mars_messages

    def is_loading(self, context: ChatContext) -> bool:
        return self.loading.get(context, False)


def _field_for(context: ChatContext) -> str:
    return "earth_messages" if context == "earth" else "mars_messages"


class ChatStore(ObservableStore[ChatState]):
    """Append-only transcripts keyed by chat context."""

    def __init__(self, initial: Optional[ChatState] = None):
        super().__init__(initial if initial is not None else ChatState())

    def append(self, context: ChatContext, message: ChatMessage) -> None:
        field_name = _field_for(context)
        current = getattr(self._state, field_name)
        self.replace(self._state.model_copy(update={field_name: current + (message,)}))

    def set_messages(self, context: ChatContext, messages: Iterable[ChatMessage]) -> None:
        self.replace(
            self._state.model_copy(update={_field_for(context): tuple(messages)})
        )

    def set_loading(self, context: ChatContext, loading: bool) -> None:
        if self._state.is_loading(context) == loading:
            return
        flags = dict(self._state.loading)
        flags[context] = loading
        self.replace(self._state.model_copy(update={"loading": flags}))

    def messages(self, context: ChatContext) -> Tuple[ChatMessage, ...]:
        return self._state.messages(context)
