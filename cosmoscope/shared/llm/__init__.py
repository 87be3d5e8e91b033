"""LLM client utilities and the assistant backend."""

from cosmoscope.shared.llm.client import (
    AssistantBackend,
    AssistantReply,
    OpenAIAssistant,
    call_llm,
    get_cached_client,
)

__all__ = [
    "AssistantBackend",
    "AssistantReply",
    "OpenAIAssistant",
    "call_llm",
    "get_cached_client",
]
