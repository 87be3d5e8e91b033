"""
Tests for the NASA imagery client, the rover gallery and upload encoding.
"""

import asyncio

import httpx
import pytest

from cosmoscope.errors import LookupFailed
from cosmoscope.imagery import ImageUpload, NasaImageryClient, RoverGallery, file_to_base64


def _make_photo(photo_id, sol=1000):
    return {
        "id": photo_id,
        "sol": sol,
        "camera": {"id": 20, "name": "FHAZ", "rover_id": 5, "full_name": "Front Hazard Avoidance Camera"},
        "img_src": f"http://mars.jpl.nasa.gov/msl-raw-images/{photo_id}.JPG",
        "earth_date": "2015-05-30",
        "rover": {
            "id": 5,
            "name": "Curiosity",
            "landing_date": "2012-08-06",
            "launch_date": "2011-11-26",
            "status": "active",
        },
    }


def _make_client(pages):
    """Client serving ``pages[page]`` for every sol; missing pages are empty."""
    requests = []

    def handler(request):
        if request.url.host == "mars.jpl.nasa.gov":
            requests.append(str(request.url))
            return httpx.Response(200, content=b"jpeg", headers={"content-type": "image/jpeg"})
        params = dict(request.url.params)
        requests.append(params)
        if params.get("sol") == "13":
            return httpx.Response(500)
        page = int(params["page"])
        return httpx.Response(200, json={"photos": pages.get(page, [])})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NasaImageryClient("https://nasa.test/photos", api_key="KEY", client=client), requests


class TestNasaImageryClient:
    """Tests for photo pages and image download."""

    def test_fetch_photos_sends_sol_page_and_key(self):
        client, requests = _make_client({1: [_make_photo(1)]})
        photos = asyncio.run(client.fetch_photos(1000, 1))
        assert requests == [{"sol": "1000", "api_key": "KEY", "page": "1"}]
        assert photos[0].camera.name == "FHAZ"
        assert photos[0].rover.name == "Curiosity"

    def test_non_success_raises(self):
        client, _ = _make_client({})
        with pytest.raises(LookupFailed):
            asyncio.run(client.fetch_photos(13, 1))

    def test_fetch_image_upgrades_to_https(self):
        client, requests = _make_client({})
        image = asyncio.run(client.fetch_image("http://mars.jpl.nasa.gov/msl-raw-images/1.JPG"))
        assert requests == ["https://mars.jpl.nasa.gov/msl-raw-images/1.JPG"]
        assert image.mime_type == "image/jpeg"
        assert image.data == "anBlZw=="


class TestRoverGallery:
    """Tests for gallery paging."""

    def test_load_and_load_more(self):
        client, _ = _make_client({1: [_make_photo(1), _make_photo(2)], 2: [_make_photo(3)]})
        gallery = RoverGallery(client, sol=1000)

        async def scenario():
            await gallery.load(1000)
            await gallery.load_more()
            await gallery.load_more()
            await gallery.load_more()

        asyncio.run(scenario())
        assert [p.id for p in gallery.photos] == [1, 2, 3]
        assert gallery.has_more is False
        assert gallery.page == 2
        assert gallery.error == ""

    def test_empty_first_page(self):
        client, _ = _make_client({})
        gallery = RoverGallery(client)
        asyncio.run(gallery.load(5000))
        assert gallery.photos == []
        assert gallery.error == "No photos found for Sol 5000. The rover might have been resting."

    def test_fetch_failure(self):
        client, _ = _make_client({})
        gallery = RoverGallery(client)
        asyncio.run(gallery.load(13))
        assert gallery.error == "Failed to fetch photos from NASA. Please try again later."
        assert gallery.is_loading is False

    def test_search_rejects_non_positive(self):
        client, requests = _make_client({})
        gallery = RoverGallery(client)
        assert asyncio.run(gallery.search("abc")) is False
        assert asyncio.run(gallery.search("-3")) is False
        assert gallery.error == "Please enter a valid Sol number (e.g., 1000)."
        assert requests == []

    def test_search_resets_paging(self):
        client, _ = _make_client({1: [_make_photo(7, sol=42)]})
        gallery = RoverGallery(client)
        assert asyncio.run(gallery.search(" 42 ")) is True
        assert gallery.sol == 42
        assert gallery.page == 1
        assert [p.id for p in gallery.photos] == [7]


class TestUploadEncoding:
    """Tests for upload encoding."""

    def test_base64_without_prefix(self):
        image = file_to_base64(ImageUpload(filename="a.png", mime_type="image/png", data=b"hello"))
        assert image.mime_type == "image/png"
        assert image.data == "aGVsbG8="
