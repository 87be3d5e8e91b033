"""
Mars rover imagery client.

Fetches photo pages by sol from the NASA Mars Rover Photos API.
"""

import base64
import logging
import re
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field

from cosmoscope.errors import LookupFailed
from cosmoscope.shared.schemas import InlineImage


logger = logging.getLogger(__name__)


class RoverCamera(BaseModel):
    id: int
    name: str
    rover_id: int
    full_name: str


class RoverInfo(BaseModel):
    id: int
    name: str
    landing_date: str
    launch_date: str
    status: str


class RoverPhoto(BaseModel):
    """One rover photo record."""

    id: int
    sol: int
    camera: RoverCamera
    img_src: str = Field(description="Source URL of the image")
    earth_date: str
    rover: RoverInfo


class NasaImageryClient:
    """Paged fetch-by-sol over the rover photos endpoint."""

    def __init__(
        self,
        api_url: str = "https://api.nasa.gov/mars-photos/api/v1/rovers/curiosity/photos",
        api_key: str = "DEMO_KEY",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5.0), follow_redirects=True
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_photos(self, sol: int, page: int = 1) -> List[RoverPhoto]:
        """
        One page of photos for a sol.

        Returns:
            Photo records in API order; an empty list means no more pages

        Raises:
            LookupFailed: On transport errors or non-success status
        """
        try:
            r = await self._client.get(
                self.api_url,
                params={"sol": sol, "api_key": self.api_key, "page": page},
            )
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailed(f"Failed to fetch photos from NASA API: {e}") from e
        return [RoverPhoto.model_validate(p) for p in data.get("photos", [])]

    async def fetch_image(self, url: str) -> InlineImage:
        """
        Download an image as a base64 payload.

        NASA image URLs are often plain http; they are upgraded to https.
        """
        secure_url = re.sub(r"^http:", "https:", url)
        try:
            r = await self._client.get(secure_url)
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise LookupFailed(f"Failed to fetch image {secure_url}: {e}") from e
        mime_type = r.headers.get("content-type", "image/jpeg").split(";")[0]
        return InlineImage(
            mime_type=mime_type, data=base64.b64encode(r.content).decode("ascii")
        )
