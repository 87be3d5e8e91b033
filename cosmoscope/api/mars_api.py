"""
FastAPI endpoints for the Mars explorer.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cosmoscope.api.dependencies import get_session
from cosmoscope.api.schemas import (
    GalleryResponse,
    ImageRequest,
    MessageRequest,
    StoryRequest,
    StoryResponse,
    SuggestionsResponse,
    TranscriptResponse,
)
from cosmoscope.session import ExplorerSession


# Create router for the Mars context
router = APIRouter(prefix="/api/mars", tags=["mars"])


def build_transcript(session: ExplorerSession) -> TranscriptResponse:
    snapshot = session.chat.get_snapshot()
    return TranscriptResponse(
        messages=list(snapshot.messages("mars")),
        loading=snapshot.is_loading("mars"),
        suggestions=session.mars_input.suggestions,
    )


def build_gallery(session: ExplorerSession) -> GalleryResponse:
    gallery = session.gallery
    return GalleryResponse(
        sol=gallery.sol,
        page=gallery.page,
        photos=gallery.photos,
        has_more=gallery.has_more,
        error=gallery.error,
    )


@router.get("/state", response_model=TranscriptResponse)
async def get_state(session: ExplorerSession = Depends(get_session)) -> TranscriptResponse:
    """Current Mars transcript."""
    return build_transcript(session)


@router.post("/message", response_model=TranscriptResponse)
async def send_message(
    request: MessageRequest,
    session: ExplorerSession = Depends(get_session),
) -> TranscriptResponse:
    """Ask the Mars expert."""
    session.mars_input.on_send()
    await session.mars.handle_user_message(request.text)
    await session.mars_input.settle()
    return build_transcript(session)


@router.get("/suggestions", response_model=SuggestionsResponse)
async def input_suggestions(
    text: str = Query(""),
    session: ExplorerSession = Depends(get_session),
) -> SuggestionsResponse:
    """Suggestions for the Mars chat input."""
    session.mars_input.on_input_change(text)
    await session.mars_input.settle()
    return SuggestionsResponse(suggestions=session.mars_input.suggestions)


@router.post("/image", response_model=TranscriptResponse)
async def upload_image(
    request: ImageRequest,
    session: ExplorerSession = Depends(get_session),
) -> TranscriptResponse:
    """Upload an image for analysis in the Mars context."""
    if not request.mime_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported media type: {request.mime_type}",
        )
    await session.mars.handle_image_upload(request.to_upload())
    await session.mars_input.settle()
    return build_transcript(session)


@router.get("/photos", response_model=GalleryResponse)
async def get_photos(
    sol: str = Query(""),
    session: ExplorerSession = Depends(get_session),
) -> GalleryResponse:
    """
    Rover photos for a sol.

    Without a sol the gallery is (re)loaded for the current one.
    """
    if sol:
        await session.gallery.search(sol)
    elif not session.gallery.photos:
        await session.gallery.load(session.gallery.sol, 1)
    return build_gallery(session)


@router.post("/photos/more", response_model=GalleryResponse)
async def more_photos(session: ExplorerSession = Depends(get_session)) -> GalleryResponse:
    """Load the next page of the current sol."""
    await session.gallery.load_more()
    return build_gallery(session)


@router.post("/story", response_model=StoryResponse)
async def rover_story(
    request: StoryRequest,
    session: ExplorerSession = Depends(get_session),
) -> StoryResponse:
    """A short story told by the rover about one of the loaded photos."""
    photo = next((p for p in session.gallery.photos if p.id == request.photo_id), None)
    if photo is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Photo {request.photo_id} not found",
        )
    story = await session.mars.tell_rover_story(photo)
    return StoryResponse(photo_id=photo.id, story=story)
