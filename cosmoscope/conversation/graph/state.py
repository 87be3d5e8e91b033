"""
Earth turn state schema.

Carries one user message through the request/response cycle: backend call,
directive extraction, and exactly one outcome node.
"""

from typing import List, Optional, TypedDict

from cosmoscope.directives import Directive
from cosmoscope.shared.llm import AssistantReply
from cosmoscope.shared.schemas import ChatMessage, Location, Route


class EarthTurnState(TypedDict):
    """
    State schema for the Earth turn graph.

    The transcript itself lives in the chat store; ``history`` is the
    snapshot sent to the backend.
    """

    # Request
    message: str
    language: str
    history: List[ChatMessage]
    location: Optional[Location]
    route: Optional[Route]

    # Backend result
    reply: Optional[AssistantReply]
    directive: Optional[Directive]
    error: Optional[str]

    # Which outcome node ran
    outcome: Optional[str]
