"""Earth turn graph: backend call, directive routing, outcome nodes."""

from cosmoscope.conversation.graph.build import create_earth_turn_graph

__all__ = ["create_earth_turn_graph"]
