"""
Request and response models for the API.
"""

import base64
import binascii
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from cosmoscope.imagery import ImageUpload, RoverPhoto
from cosmoscope.map import MapViewState, Marker, RouteOverlay
from cosmoscope.map.state import FitBounds, FlyTo
from cosmoscope.shared.schemas import ChatMessage, Location, PlaceCandidate
from cosmoscope.store.settings_store import Language, Theme


class MessageRequest(BaseModel):
    text: str = Field(..., min_length=1)


class SearchRequest(BaseModel):
    place: str


class BootstrapRequest(BaseModel):
    """Device position reported by the client, if it has one."""

    lat: Optional[float] = None
    lng: Optional[float] = None

    def location(self) -> Optional[Location]:
        if self.lat is None or self.lng is None:
            return None
        return Location(lat=self.lat, lng=self.lng)


class ImageRequest(BaseModel):
    """An image upload carried as base64 text."""

    filename: str = ""
    mime_type: str = "image/jpeg"
    data: str

    @field_validator("data")
    @classmethod
    def data_is_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("data must be base64 encoded") from e
        return value

    def to_upload(self) -> ImageUpload:
        return ImageUpload(
            filename=self.filename,
            mime_type=self.mime_type,
            data=base64.b64decode(self.data),
        )


class TranscriptResponse(BaseModel):
    messages: List[ChatMessage]
    loading: bool
    suggestions: List[str]


class MapResponse(BaseModel):
    state: MapViewState
    marker: Optional[Marker] = None
    route_overlay: Optional[RouteOverlay] = None
    view: Union[FlyTo, FitBounds]


class EarthStateResponse(BaseModel):
    transcript: TranscriptResponse
    map: MapResponse
    located: bool


class SuggestionsResponse(BaseModel):
    suggestions: List[str]


class PlaceSuggestionsResponse(BaseModel):
    suggestions: List[PlaceCandidate]


class GalleryResponse(BaseModel):
    sol: int
    page: int
    photos: List[RoverPhoto]
    has_more: bool
    error: str = ""


class StoryRequest(BaseModel):
    photo_id: int


class StoryResponse(BaseModel):
    photo_id: int
    story: str


class SettingsResponse(BaseModel):
    language: Language
    theme: Theme


class LanguageRequest(BaseModel):
    language: Language


class ThemeRequest(BaseModel):
    theme: Theme
