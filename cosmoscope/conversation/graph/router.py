"""
Routing logic for the Earth turn graph.

Picks the outcome node from what the backend call produced.
"""

import logging
from typing import Literal

from cosmoscope.conversation.graph.state import EarthTurnState
from cosmoscope.directives import SetLocation, ShowRoute


logger = logging.getLogger(__name__)


def route_reply(
    state: EarthTurnState,
) -> Literal["failure_node", "set_location_node", "show_route_node", "plain_answer_node"]:
    """
    Determine the outcome node for a turn.

    Routing logic:
    1. Backend error -> failure
    2. SetLocation directive -> set_location
    3. ShowRoute directive -> show_route
    4. Otherwise -> plain_answer
    """
    _log = "[context=earth] [graph=turn] [router=route_reply] "

    if state.get("error") is not None or state.get("reply") is None:
        logger.info(f"{_log}Routing to 'failure_node'")
        return "failure_node"

    directive = state.get("directive")
    if isinstance(directive, SetLocation):
        logger.info(f"{_log}Routing to 'set_location_node' | name={directive.name}")
        return "set_location_node"

    if isinstance(directive, ShowRoute):
        logger.info(
            f"{_log}Routing to 'show_route_node' | "
            f"start={directive.start.name}, end={directive.end.name}"
        )
        return "show_route_node"

    logger.info(f"{_log}Routing to 'plain_answer_node'")
    return "plain_answer_node"
