"""Mars imagery: NASA client, gallery paging, upload encoding."""

from cosmoscope.imagery.encoding import ImageUpload, file_to_base64
from cosmoscope.imagery.gallery import RoverGallery
from cosmoscope.imagery.nasa import NasaImageryClient, RoverPhoto

__all__ = [
    "ImageUpload",
    "file_to_base64",
    "RoverGallery",
    "NasaImageryClient",
    "RoverPhoto",
]
