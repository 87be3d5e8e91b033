"""
FastAPI endpoints for user settings.
"""

from fastapi import APIRouter, Depends

from cosmoscope.api.dependencies import get_session
from cosmoscope.api.schemas import LanguageRequest, SettingsResponse, ThemeRequest
from cosmoscope.session import ExplorerSession


# Create router for settings
router = APIRouter(prefix="/api/settings", tags=["settings"])


def build_settings(session: ExplorerSession) -> SettingsResponse:
    snapshot = session.settings.get_snapshot()
    return SettingsResponse(language=snapshot.language, theme=snapshot.theme)


@router.get("", response_model=SettingsResponse)
async def get_settings(session: ExplorerSession = Depends(get_session)) -> SettingsResponse:
    return build_settings(session)


@router.put("/language", response_model=SettingsResponse)
async def set_language(
    request: LanguageRequest,
    session: ExplorerSession = Depends(get_session),
) -> SettingsResponse:
    """Switch the UI language; untouched welcome messages are translated."""
    session.settings.set_language(request.language)
    return build_settings(session)


@router.put("/theme", response_model=SettingsResponse)
async def set_theme(
    request: ThemeRequest,
    session: ExplorerSession = Depends(get_session),
) -> SettingsResponse:
    session.settings.set_theme(request.theme)
    return build_settings(session)
