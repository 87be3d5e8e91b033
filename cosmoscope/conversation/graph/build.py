"""
Earth turn graph construction.

    Entry -> ask_model -> route_reply
      -> "set_location_node" -> END
      -> "show_route_node"   -> END
      -> "plain_answer_node" -> END
      -> "failure_node"      -> END

Every node is a coroutine so store and map mutations stay on the event loop.
"""

import logging
from typing import Any, Dict

from langgraph.graph import StateGraph, END

from cosmoscope.conversation.graph.router import route_reply
from cosmoscope.conversation.graph.state import EarthTurnState
from cosmoscope.conversation.messages import localize
from cosmoscope.directives import extract_directive
from cosmoscope.map import MapStateCoordinator
from cosmoscope.shared.llm import AssistantBackend
from cosmoscope.shared.schemas import ChatMessage
from cosmoscope.store import ChatStore


logger = logging.getLogger(__name__)

_ROUTES = {
    "failure_node": "failure_node",
    "set_location_node": "set_location_node",
    "show_route_node": "show_route_node",
    "plain_answer_node": "plain_answer_node",
}


def create_earth_turn_graph(
    store: ChatStore,
    map_coordinator: MapStateCoordinator,
    backend: AssistantBackend,
):
    """
    Create and compile the Earth turn graph.

    Args:
        store: Transcript store the outcome nodes append to
        map_coordinator: Receives SetLocation / ShowRoute intents
        backend: AI backend answering the turn

    Returns:
        Compiled LangGraph application ready for ``ainvoke``.
    """
    _log = "[context=earth] [graph=turn] "

    async def ask_model(state: EarthTurnState) -> Dict[str, Any]:
        logger.info(
            f"{_log}[node=ask_model] Entering node | history={len(state['history'])}, "
            f"has_location={state.get('location') is not None}, "
            f"has_route={state.get('route') is not None}"
        )
        try:
            reply = await backend.earth_answer(
                state["history"],
                state["language"],
                state.get("location"),
                state.get("route"),
            )
            directive = extract_directive(reply.text)
        except Exception as e:
            logger.exception(f"{_log}[node=ask_model] Backend call failed: {e}")
            return {"error": str(e)}

        return {"reply": reply, "directive": directive}

    async def set_location_node(state: EarthTurnState) -> Dict[str, Any]:
        directive = state["directive"]
        text = localize("set_location_confirmed", state["language"], name=directive.name)
        store.append("earth", ChatMessage.model_text(text))
        map_coordinator.select_location(directive.location)
        return {"outcome": "set_location"}

    async def show_route_node(state: EarthTurnState) -> Dict[str, Any]:
        directive = state["directive"]
        text = localize(
            "show_route_confirmed",
            state["language"],
            start=directive.start.name,
            end=directive.end.name,
            distance=directive.distance_label,
        )
        store.append("earth", ChatMessage.model_text(text))
        route = directive.route
        map_coordinator.show_route(route)
        map_coordinator.start_route_refinement(route)
        return {"outcome": "show_route"}

    async def plain_answer_node(state: EarthTurnState) -> Dict[str, Any]:
        reply = state["reply"]
        store.append("earth", ChatMessage.model_text(reply.text, reply.sources))
        return {"outcome": "plain_answer"}

    async def failure_node(state: EarthTurnState) -> Dict[str, Any]:
        text = localize("earth_connection_failed", state["language"])
        store.append("earth", ChatMessage.model_text(text))
        return {"outcome": "failed"}

    graph = StateGraph(EarthTurnState)

    graph.add_node("ask_model", ask_model)
    graph.add_node("set_location_node", set_location_node)
    graph.add_node("show_route_node", show_route_node)
    graph.add_node("plain_answer_node", plain_answer_node)
    graph.add_node("failure_node", failure_node)

    graph.set_entry_point("ask_model")
    graph.add_conditional_edges("ask_model", route_reply, _ROUTES)

    for node in _ROUTES.values():
        graph.add_edge(node, END)

    return graph.compile()
