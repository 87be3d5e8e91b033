"""
Upload encoding.
"""

import base64

from pydantic import BaseModel

from cosmoscope.shared.schemas import InlineImage


class ImageUpload(BaseModel):
    """A user-supplied image file."""

    filename: str = ""
    mime_type: str = "image/jpeg"
    data: bytes


def file_to_base64(upload: ImageUpload) -> InlineImage:
    """Embed an upload as a base64 payload without a data URL prefix."""
    encoded = base64.b64encode(upload.data).decode("ascii")
    return InlineImage(mime_type=upload.mime_type, data=encoded)
