from cosmoscope.conversation.earth import EarthConversation, is_location_request
from cosmoscope.conversation.mars import MarsConversation
from cosmoscope.conversation.messages import (
    default_suggestions,
    localize,
    welcome_texts,
)
from cosmoscope.conversation.suggestions import ChatInputAssistant

__all__ = [
    "EarthConversation",
    "MarsConversation",
    "ChatInputAssistant",
    "is_location_request",
    "localize",
    "default_suggestions",
    "welcome_texts",
]
