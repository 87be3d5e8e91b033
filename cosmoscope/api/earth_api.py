"""
FastAPI endpoints for the Earth explorer.

Covers the chat, map clicks, map search, image uploads and the one-shot
position bootstrap.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cosmoscope.api.dependencies import get_session
from cosmoscope.api.schemas import (
    BootstrapRequest,
    EarthStateResponse,
    ImageRequest,
    MapResponse,
    MessageRequest,
    PlaceSuggestionsResponse,
    SearchRequest,
    SuggestionsResponse,
    TranscriptResponse,
)
from cosmoscope.bootstrap import StaticPosition
from cosmoscope.session import ExplorerSession
from cosmoscope.shared.schemas import Location


# Create router for the Earth context
router = APIRouter(prefix="/api/earth", tags=["earth"])


def build_earth_state(session: ExplorerSession) -> EarthStateResponse:
    """Snapshot of the Earth transcript and map."""
    snapshot = session.chat.get_snapshot()
    return EarthStateResponse(
        transcript=TranscriptResponse(
            messages=list(snapshot.messages("earth")),
            loading=snapshot.is_loading("earth"),
            suggestions=session.earth_input.suggestions,
        ),
        map=MapResponse(
            state=session.map.get_snapshot(),
            marker=session.map.marker,
            route_overlay=session.map.route_overlay,
            view=session.map.view,
        ),
        located=session.bootstrap.located,
    )


@router.get("/state", response_model=EarthStateResponse)
async def get_state(session: ExplorerSession = Depends(get_session)) -> EarthStateResponse:
    """Current Earth transcript, map state and overlays."""
    return build_earth_state(session)


@router.post("/bootstrap", response_model=EarthStateResponse)
async def bootstrap(
    request: BootstrapRequest,
    session: ExplorerSession = Depends(get_session),
) -> EarthStateResponse:
    """
    Seed the map with the client's position.

    Only the first call has any effect; send no coordinates when the client
    could not resolve its position.
    """
    geolocation = session.bootstrap_position
    if isinstance(geolocation, StaticPosition) and not session.bootstrap.started:
        geolocation.location = request.location()
    await session.bootstrap.run()
    return build_earth_state(session)


@router.post("/message", response_model=EarthStateResponse)
async def send_message(
    request: MessageRequest,
    session: ExplorerSession = Depends(get_session),
) -> EarthStateResponse:
    """Send a chat message in the Earth context."""
    session.earth_input.on_send()
    await session.earth.handle_user_message(request.text)
    await session.earth_input.settle()
    return build_earth_state(session)


@router.post("/click", response_model=EarthStateResponse)
async def click_map(
    location: Location,
    session: ExplorerSession = Depends(get_session),
) -> EarthStateResponse:
    """Select a point on the map."""
    await session.earth.handle_map_click(location)
    await session.earth_input.settle()
    return build_earth_state(session)


@router.post("/search", response_model=EarthStateResponse)
async def search_place(
    request: SearchRequest,
    session: ExplorerSession = Depends(get_session),
) -> EarthStateResponse:
    """Submit the map search bar."""
    await session.map_search.submit(request.place)
    await session.earth_input.settle()
    return build_earth_state(session)


@router.get("/search/suggestions", response_model=PlaceSuggestionsResponse)
async def place_suggestions(
    q: str = Query(""),
    session: ExplorerSession = Depends(get_session),
) -> PlaceSuggestionsResponse:
    """Place candidates for the text typed in the map search bar."""
    session.map_search.on_query_change(q)
    await session.map_search.settle()
    return PlaceSuggestionsResponse(suggestions=session.map_search.suggestions)


@router.get("/suggestions", response_model=SuggestionsResponse)
async def input_suggestions(
    text: str = Query(""),
    session: ExplorerSession = Depends(get_session),
) -> SuggestionsResponse:
    """Suggestions for the Earth chat input."""
    session.earth_input.on_input_change(text)
    await session.earth_input.settle()
    return SuggestionsResponse(suggestions=session.earth_input.suggestions)


@router.post("/image", response_model=EarthStateResponse)
async def upload_image(
    request: ImageRequest,
    session: ExplorerSession = Depends(get_session),
) -> EarthStateResponse:
    """Upload an image for analysis in the Earth context."""
    if not request.mime_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported media type: {request.mime_type}",
        )
    await session.earth.handle_image_upload(request.to_upload())
    await session.earth_input.settle()
    return build_earth_state(session)
