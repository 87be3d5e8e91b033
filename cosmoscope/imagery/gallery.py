"""
Rover photo gallery paging.
"""

import logging
from typing import List

from cosmoscope.errors import LookupFailed
from cosmoscope.imagery.nasa import NasaImageryClient, RoverPhoto


logger = logging.getLogger(__name__)


class RoverGallery:
    """
    Pages through rover photos for one sol at a time.

    An empty page marks the sol as exhausted.
    """

    def __init__(self, client: NasaImageryClient, sol: int = 3000):
        self._client = client
        self.sol = sol
        self.page = 1
        self.photos: List[RoverPhoto] = []
        self.has_more = True
        self.is_loading = False
        self.error = ""

    async def load(self, sol: int, page: int = 1) -> None:
        self.is_loading = True
        self.error = ""
        try:
            photos = await self._client.fetch_photos(sol, page)
        except LookupFailed as e:
            logger.warning(f"[context=mars] [component=gallery] {e}")
            self.error = "Failed to fetch photos from NASA. Please try again later."
            return
        finally:
            self.is_loading = False

        self.sol = sol
        self.photos = photos if page == 1 else self.photos + photos
        if not photos:
            self.has_more = False
            if page == 1:
                self.error = (
                    f"No photos found for Sol {sol}. The rover might have been resting."
                )
        else:
            self.has_more = True
            self.page = page

    async def load_more(self) -> None:
        """Fetch the next page unless busy or exhausted."""
        if self.is_loading or not self.has_more:
            return
        await self.load(self.sol, self.page + 1)

    async def search(self, sol_text: str) -> bool:
        """
        Switch to the sol typed by the user.

        Returns:
            False (with an error set) if the text is not a positive integer
        """
        try:
            sol = int(sol_text.strip())
        except ValueError:
            sol = 0
        if sol <= 0:
            self.error = "Please enter a valid Sol number (e.g., 1000)."
            return False

        self.page = 1
        self.photos = []
        self.has_more = True
        await self.load(sol, 1)
        return True
