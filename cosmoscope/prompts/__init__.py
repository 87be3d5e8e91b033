"""Prompt templates and builders for the exploration assistant."""

from cosmoscope.prompts.builders import (
    build_earth_system_prompt,
    build_image_prompt,
    build_mars_system_prompt,
    build_rover_story_prompt,
    build_suggestion_messages,
    history_to_messages,
)

__all__ = [
    "build_earth_system_prompt",
    "build_image_prompt",
    "build_mars_system_prompt",
    "build_rover_story_prompt",
    "build_suggestion_messages",
    "history_to_messages",
]
