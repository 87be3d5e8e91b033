"""
Command extraction from assistant replies.

The assistant is prompted to answer map requests with a bare JSON command,
but it is a free-text model: commands arrive wrapped in prose, in code
fences, or not at all. Extraction is therefore tolerant and total. Anything
that is not a recognized command becomes a plain answer, and nothing raises.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from cosmoscope.directives.contracts import (
    Directive,
    PlainAnswer,
    SetLocation,
    SetLocationPayload,
    ShowRoute,
    ShowRoutePayload,
)
from cosmoscope.directives.scanner import find_balanced_object
from cosmoscope.shared.schemas import Location, NamedLocation


logger = logging.getLogger(__name__)


def _to_set_location(payload: SetLocationPayload) -> SetLocation:
    name = payload.name or Location(lat=payload.lat, lng=payload.lng).label()
    return SetLocation(name=name, lat=payload.lat, lng=payload.lng)


def _to_show_route(payload: ShowRoutePayload) -> ShowRoute:
    return ShowRoute(
        start=NamedLocation(
            name=payload.start.name, lat=payload.start.lat, lng=payload.start.lng
        ),
        end=NamedLocation(name=payload.end.name, lat=payload.end.lat, lng=payload.end.lng),
        distance_label=payload.distance,
    )


def classify_command(command: Dict[str, Any], text: str) -> Directive:
    """
    Classify a parsed JSON object.

    ``set_location`` is checked before ``show_route``; only one directive is
    honored per reply.

    Args:
        command: Parsed JSON object found in the reply
        text: Original reply, returned verbatim when nothing matches

    Returns:
        The matching directive, or PlainAnswer(text)
    """
    if "set_location" in command:
        try:
            return _to_set_location(
                SetLocationPayload.model_validate(command["set_location"])
            )
        except ValidationError as e:
            logger.debug(f"set_location payload rejected: {e.error_count()} errors")

    if "show_route" in command:
        try:
            return _to_show_route(ShowRoutePayload.model_validate(command["show_route"]))
        except ValidationError as e:
            logger.debug(f"show_route payload rejected: {e.error_count()} errors")

    return PlainAnswer(text=text)


def extract_directive(text: str) -> Directive:
    """
    Turn a raw assistant reply into a directive.

    Args:
        text: Raw text returned by the AI backend

    Returns:
        SetLocation, ShowRoute, or PlainAnswer carrying ``text`` unchanged
    """
    found = find_balanced_object(text)
    if found is None:
        return PlainAnswer(text=text)

    _, command = found
    directive = classify_command(command, text)
    logger.debug(f"Reply classified as {directive.kind}")
    return directive
