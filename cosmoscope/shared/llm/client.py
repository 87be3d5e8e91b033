"""
OpenAI client with retry logic.

Provides a cached async client and wrappers for chat calls with automatic
retries using tenacity, plus the assistant backend the conversations talk to.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from dotenv import load_dotenv
from openai import AsyncOpenAI
from pydantic import BaseModel, Field
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from cosmoscope.config import AppConfig, DEFAULT_CONFIG
from cosmoscope.errors import BackendError
from cosmoscope.prompts.builders import (
    build_earth_system_prompt,
    build_image_prompt,
    build_mars_system_prompt,
    build_rover_story_prompt,
    build_suggestion_messages,
    history_to_messages,
    image_content,
)
from cosmoscope.shared.schemas import (
    ChatContext,
    ChatMessage,
    CitationSource,
    InlineImage,
    Location,
    Route,
)

load_dotenv()

logger = logging.getLogger(__name__)

# Module-level cache for the OpenAI client
_client: Optional[AsyncOpenAI] = None


def get_cached_client(api_key_env: str = "OPENAI_API_KEY") -> AsyncOpenAI:
    """
    Returns a cached instance of the async OpenAI client.

    The client is created once and reused for all subsequent calls.
    """
    global _client
    if _client is None:
        api_key = os.environ.get(api_key_env)
        if not api_key:
            raise ValueError(
                f"{api_key_env} environment variable is not set. "
                "Please set it to your OpenAI API key."
            )
        _client = AsyncOpenAI(api_key=api_key)
    return _client


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((Exception,)),
    reraise=True,
)
async def call_llm(
    messages: List[Dict[str, Any]],
    model: str = "gpt-4.1-mini",
    client: Optional[AsyncOpenAI] = None,
    **options: Any,
) -> str:
    """
    Call the OpenAI Chat Completion API with automatic retries.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier to use (default: gpt-4.1-mini)
        client: Optional client instance. If not provided, uses cached client.
        **options: Extra keyword arguments for ``chat.completions.create``

    Returns:
        The assistant's response content as a string.

    Raises:
        Exception: If all retry attempts fail.
    """
    text, _ = await _complete(messages, model, client, options)
    return text


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((Exception,)),
    reraise=True,
)
async def call_llm_with_sources(
    messages: List[Dict[str, Any]],
    model: str = "gpt-4.1-mini",
    client: Optional[AsyncOpenAI] = None,
    **options: Any,
) -> Tuple[str, List[CitationSource]]:
    """
    Call the Chat Completion API and return content with citation sources.

    Search-enabled models attach ``url_citation`` annotations to the message;
    each becomes a CitationSource.

    Returns:
        Tuple of (response content, citation sources)
    """
    return await _complete(messages, model, client, options)


async def _complete(
    messages: List[Dict[str, Any]],
    model: str,
    client: Optional[AsyncOpenAI],
    options: Dict[str, Any],
) -> Tuple[str, List[CitationSource]]:
    if client is None:
        client = get_cached_client()

    response = await client.chat.completions.create(
        model=model,
        messages=messages,
        **options,
    )

    message = response.choices[0].message
    content = (message.content or "").strip()

    sources: List[CitationSource] = []
    for annotation in getattr(message, "annotations", None) or []:
        citation = getattr(annotation, "url_citation", None)
        if getattr(annotation, "type", None) != "url_citation" or citation is None:
            continue
        sources.append(CitationSource(title=citation.title or citation.url, uri=citation.url))

    return content, sources


# =============================================================================
# Assistant backend
# =============================================================================


class AssistantReply(BaseModel):
    """Text answer plus optional grounding sources."""

    text: str
    sources: List[CitationSource] = Field(default_factory=list)


class AssistantBackend(Protocol):
    """What the conversation orchestrators need from the AI backend."""

    async def earth_answer(
        self,
        history: Sequence[ChatMessage],
        language: str,
        location: Optional[Location],
        route: Optional[Route],
    ) -> AssistantReply: ...

    async def analyze_image(
        self, image: InlineImage, language: str, context: ChatContext
    ) -> str: ...

    async def mars_answer(self, message: str, language: str) -> str: ...

    async def suggest(
        self,
        user_input: str,
        history: Sequence[ChatMessage],
        context: ChatContext,
        language: str,
    ) -> List[str]: ...

    async def rover_story(self, image: InlineImage, language: str) -> str: ...


class OpenAIAssistant:
    """
    AssistantBackend implemented on the OpenAI Chat Completion API.

    Failures are logged and re-raised as BackendError, except for
    suggestions, which degrade to an empty list.
    """

    def __init__(self, config: AppConfig = DEFAULT_CONFIG, client: Optional[AsyncOpenAI] = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = get_cached_client(self.config.api_key_env)
        return self._client

    def _retrying(self, call):
        """Rebind a retried LLM call to the configured attempts and backoff."""
        return call.retry_with(
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_exponential(
                multiplier=1,
                min=self.config.retry_min_wait,
                max=self.config.retry_max_wait,
            ),
        )

    async def earth_answer(
        self,
        history: Sequence[ChatMessage],
        language: str,
        location: Optional[Location],
        route: Optional[Route],
    ) -> AssistantReply:
        """Answer or emit a map command, grounded with web search."""
        messages = [
            {
                "role": "system",
                "content": build_earth_system_prompt(language, location, route),
            }
        ]
        messages.extend(history_to_messages(history))
        try:
            text, sources = await self._retrying(call_llm_with_sources)(
                messages,
                model=self.config.search_model,
                client=self.client,
                web_search_options={},
            )
        except Exception as e:
            logger.exception(f"[component=llm] Error getting Earth answer: {e}")
            raise BackendError("Failed to communicate with the AI backend.") from e
        return AssistantReply(text=text, sources=sources)

    async def analyze_image(
        self, image: InlineImage, language: str, context: ChatContext
    ) -> str:
        messages = [
            {
                "role": "user",
                "content": [
                    image_content(image),
                    {"type": "text", "text": build_image_prompt(context, language)},
                ],
            }
        ]
        try:
            return await self._retrying(call_llm)(
                messages, model=self.config.model, client=self.client
            )
        except Exception as e:
            logger.exception(f"[component=llm] Error analyzing {context} image: {e}")
            raise BackendError("Failed to communicate with the AI backend.") from e

    async def mars_answer(self, message: str, language: str) -> str:
        messages = [
            {"role": "system", "content": build_mars_system_prompt(language)},
            {"role": "user", "content": message},
        ]
        try:
            return await self._retrying(call_llm)(
                messages, model=self.config.model, client=self.client
            )
        except Exception as e:
            logger.exception(f"[component=llm] Error getting Mars answer: {e}")
            raise BackendError("Failed to communicate with the AI backend.") from e

    async def rover_story(self, image: InlineImage, language: str) -> str:
        messages = [
            {
                "role": "user",
                "content": [
                    image_content(image),
                    {"type": "text", "text": build_rover_story_prompt(language)},
                ],
            }
        ]
        try:
            return await self._retrying(call_llm)(
                messages, model=self.config.model, client=self.client
            )
        except Exception as e:
            logger.exception(f"[component=llm] Error generating rover story: {e}")
            raise BackendError("Failed to communicate with the AI backend.") from e

    async def suggest(
        self,
        user_input: str,
        history: Sequence[ChatMessage],
        context: ChatContext,
        language: str,
    ) -> List[str]:
        """Up to ``suggestion_count`` suggestions; [] on any failure."""
        messages = build_suggestion_messages(
            user_input,
            history,
            context,
            language,
            count=self.config.suggestion_count,
            history_size=self.config.suggestion_history,
        )
        try:
            raw = await self._retrying(call_llm)(
                messages, model=self.config.model, client=self.client
            )
            return parse_suggestions(raw, self.config.suggestion_count)
        except Exception as e:
            logger.error(f"[component=llm] Error getting suggestions: {e}")
            return []


def parse_suggestions(raw: str, limit: int = 3) -> List[str]:
    """
    Parse a JSON array of strings.

    Returns:
        At most ``limit`` strings, or [] if the payload is not a string array
    """
    try:
        data = json.loads(raw.strip())
    except json.JSONDecodeError:
        return []
    if isinstance(data, list) and all(isinstance(s, str) for s in data):
        return data[:limit]
    return []
