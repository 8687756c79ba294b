from __future__ import annotations

import base64
from enum import Enum
from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import PositiveInt
from pydantic import field_validator


class Tone(str, Enum):
    """Writing register requested for the draft."""

    PROFESSIONAL = "professional"
    ANALYTICAL = "analytical"
    BRAND = "brand"


class Capability(str, Enum):
    """Provider-side capabilities a request may enable."""

    WEB_GROUNDING = "web-grounding"


class ReportParameters(BaseModel):
    """Structured parameters of one generation request."""

    model_config = ConfigDict(frozen=True)

    company_name: str = ""
    reporting_period: str = ""
    standards: list[str] = Field(..., min_length=1)
    target_length: PositiveInt = 500
    tone: Tone = Tone.PROFESSIONAL
    include_tables: bool = False
    include_charts: bool = False
    use_web_search: bool = False

    @field_validator("tone", mode="before")  # type: ignore
    @classmethod
    def fallback_tone(cls, v: object) -> Tone:
        """Unknown tone selectors fall back to the professional register."""
        if isinstance(v, Tone):
            return v
        try:
            return Tone(str(v).strip().lower())
        except ValueError:
            return Tone.PROFESSIONAL


class SourceFile(BaseModel):
    """An uploaded file as received from the client."""

    model_config = ConfigDict(frozen=True)

    name: str
    media_type: str = ""
    content: bytes


class SourceMaterial(BaseModel):
    """Free text, files and reference links supplied for a generation request."""

    raw_text: str = ""
    files: list[SourceFile] = Field(default_factory=list)
    urls: list[str] = Field(default_factory=list)

    @field_validator("urls")  # type: ignore
    @classmethod
    def drop_blank_urls(cls, v: list[str]) -> list[str]:
        # Duplicates are kept on purpose, in input order
        return [url.strip() for url in v if url and url.strip()]


class TextSegment(BaseModel):
    """Literal instruction text or text extracted from a file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class BinarySegment(BaseModel):
    """Inline binary content tagged with its media type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["binary"] = "binary"
    media_type: str
    data: bytes

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


Segment = Annotated[TextSegment | BinarySegment, Field(discriminator="kind")]


class ProcessedPart(BaseModel):
    """Normalized extraction result for one uploaded file.

    Exactly one of three shapes: inline binary data with a media type,
    extracted text, or a diagnostic placeholder text. Placeholders name the
    offending file inside their text and nowhere else.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["binary", "text", "placeholder"]
    text: str = ""
    media_type: str | None = None
    data: bytes | None = None

    @classmethod
    def binary(cls, media_type: str, data: bytes) -> ProcessedPart:
        return cls(kind="binary", media_type=media_type, data=data)

    @classmethod
    def extracted(cls, text: str) -> ProcessedPart:
        return cls(kind="text", text=text)

    @classmethod
    def placeholder(cls, text: str) -> ProcessedPart:
        return cls(kind="placeholder", text=text)

    @property
    def is_placeholder(self) -> bool:
        return self.kind == "placeholder"

    def as_segment(self) -> TextSegment | BinarySegment:
        if self.kind == "binary":
            return BinarySegment(media_type=self.media_type or "application/octet-stream", data=self.data or b"")
        return TextSegment(text=self.text)


class AssembledRequest(BaseModel):
    """Ordered request segments plus the capabilities to enable for them."""

    model_config = ConfigDict(frozen=True)

    segments: list[Segment]
    capabilities: frozenset[Capability] = frozenset()
    reference_context: str = ""


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One entry of the user-visible chat transcript."""

    role: ChatRole
    text: str
    attachment_count: int = 0


class TurnResult(BaseModel):
    """Outcome of one dialogue turn. `updated_document` is set only when the assistant replaced the report."""

    reply_text: str
    updated_document: str | None = None
