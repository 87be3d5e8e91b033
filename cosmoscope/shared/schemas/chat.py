"""
Chat transcript models.

Messages are frozen once built; transcripts are tuples so a snapshot handed to
a listener can never be mutated behind its back.
"""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


Role = Literal["user", "model"]
ChatContext = Literal["earth", "mars"]


class InlineImage(BaseModel):
    """Base64 image payload embedded in a message."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(description="MIME type, e.g. image/jpeg")
    data: str = Field(description="Base64 encoded bytes, no data URL prefix")


class MessagePart(BaseModel):
    """Either a text fragment or an inline image."""

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    inline_data: Optional[InlineImage] = None


class CitationSource(BaseModel):
    """A web source the assistant used for a grounded answer."""

    model_config = ConfigDict(frozen=True)

    title: str
    uri: str


class ChatMessage(BaseModel):
    """A single transcript entry."""

    model_config = ConfigDict(frozen=True)

    role: Role
    parts: Tuple[MessagePart, ...] = Field(default_factory=tuple)
    sources: Optional[Tuple[CitationSource, ...]] = None

    @classmethod
    def model_text(
        cls, text: str, sources: Optional[List[CitationSource]] = None
    ) -> "ChatMessage":
        return cls(
            role="model",
            parts=(MessagePart(text=text),),
            sources=tuple(sources) if sources else None,
        )

    @classmethod
    def user_text(cls, text: str) -> "ChatMessage":
        return cls(role="user", parts=(MessagePart(text=text),))

    @classmethod
    def user_image(cls, mime_type: str, data: str) -> "ChatMessage":
        return cls(
            role="user",
            parts=(MessagePart(inline_data=InlineImage(mime_type=mime_type, data=data)),),
        )

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(part.text for part in self.parts if part.text)
