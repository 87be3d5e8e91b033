"""
Prompt builders.

Turn transcripts and map context into OpenAI chat messages.
"""

from typing import Any, Dict, List, Optional, Sequence

from cosmoscope.prompts.templates import (
    EARTH_BASE_CONTEXT,
    EARTH_LANGUAGE_INSTRUCTIONS,
    EARTH_LOCATION_CONTEXT,
    EARTH_ROUTE_CONTEXT,
    EARTH_SYSTEM_PROMPT,
    IMAGE_ANALYSIS_PROMPTS,
    MARS_LANGUAGE_INSTRUCTIONS,
    MARS_SYSTEM_PROMPT,
    RESPONSE_LANGUAGE_INSTRUCTIONS,
    ROVER_STORY_PROMPT,
    STORY_LANGUAGE_INSTRUCTIONS,
    SUGGESTION_CONTEXT_INSTRUCTIONS,
    SUGGESTION_GOAL_FOLLOW_UP,
    SUGGESTION_GOAL_TYPING,
    SUGGESTION_LANGUAGE_INSTRUCTIONS,
    SUGGESTION_SYSTEM_PROMPT,
)
from cosmoscope.shared.schemas import ChatMessage, InlineImage, Location, Route


def _pick(table: Dict[str, str], language: str) -> str:
    return table.get(language, table["en"])


def image_content(image: InlineImage) -> Dict[str, Any]:
    """OpenAI content part for an inline base64 image."""
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{image.mime_type};base64,{image.data}"},
    }


def build_earth_context(location: Optional[Location], route: Optional[Route]) -> str:
    context = EARTH_BASE_CONTEXT
    if location is not None:
        context += EARTH_LOCATION_CONTEXT.format(lat=location.lat, lng=location.lng)
    if route is not None:
        context += EARTH_ROUTE_CONTEXT.format(start=route.start.name, end=route.end.name)
    return context


def build_earth_system_prompt(
    language: str,
    location: Optional[Location] = None,
    route: Optional[Route] = None,
) -> str:
    """
    Build the map-control system prompt.

    Args:
        language: Response language code
        location: Currently selected location, if any
        route: Currently displayed route, if any

    Returns:
        Formatted system prompt string
    """
    return EARTH_SYSTEM_PROMPT.format(
        context=build_earth_context(location, route),
        language_instruction=_pick(EARTH_LANGUAGE_INSTRUCTIONS, language),
    )


def message_to_openai(message: ChatMessage, text_only: bool = False) -> Dict[str, Any]:
    """
    Convert a transcript message into an OpenAI chat message.

    Model turns become plain-text assistant messages. User turns keep image
    parts unless ``text_only`` is set.
    """
    if message.role == "model":
        return {"role": "assistant", "content": message.text}

    if text_only:
        return {"role": "user", "content": message.text}

    content: List[Dict[str, Any]] = []
    for part in message.parts:
        if part.text is not None:
            content.append({"type": "text", "text": part.text})
        elif part.inline_data is not None:
            content.append(image_content(part.inline_data))
    return {"role": "user", "content": content}


def history_to_messages(history: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
    return [message_to_openai(message) for message in history]


def build_mars_system_prompt(language: str) -> str:
    return MARS_SYSTEM_PROMPT.format(
        language_instruction=_pick(MARS_LANGUAGE_INSTRUCTIONS, language)
    )


def build_image_prompt(context: str, language: str) -> str:
    return IMAGE_ANALYSIS_PROMPTS[context].format(
        language_instruction=_pick(RESPONSE_LANGUAGE_INSTRUCTIONS, language)
    )


def build_rover_story_prompt(language: str) -> str:
    return ROVER_STORY_PROMPT.format(
        language_instruction=_pick(STORY_LANGUAGE_INSTRUCTIONS, language)
    )


def build_suggestion_messages(
    user_input: str,
    history: Sequence[ChatMessage],
    context: str,
    language: str,
    count: int = 3,
    history_size: int = 4,
) -> List[Dict[str, Any]]:
    """
    Build the autocomplete / follow-up suggestion request.

    Only the last ``history_size`` messages are sent, text only.
    """
    goal = SUGGESTION_GOAL_TYPING if user_input else SUGGESTION_GOAL_FOLLOW_UP
    system_prompt = SUGGESTION_SYSTEM_PROMPT.format(
        count=count,
        goal_instruction=goal,
        context_instruction=SUGGESTION_CONTEXT_INSTRUCTIONS[context],
        language_instruction=_pick(SUGGESTION_LANGUAGE_INSTRUCTIONS, language),
    )
    recent = list(history)[-history_size:] if history_size > 0 else []
    messages = [{"role": "system", "content": system_prompt}]
    messages.extend(message_to_openai(m, text_only=True) for m in recent)
    messages.append({"role": "user", "content": f'Current input: "{user_input}"'})
    return messages
