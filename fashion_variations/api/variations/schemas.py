import base64
from dataclasses import dataclass
from pydantic import BaseModel, Field
from typing import List, Literal, Optional


@dataclass(frozen=True)
class UploadedImage:
    """One buffered upload part. Lives only for the duration of the request."""
    data: bytes
    mime_type: str
    role: Literal["dress", "person"]
    filename: Optional[str] = None

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("utf-8")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of a single pose generation: a URL on success, a reason on failure."""
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.url is not None


class GeneratedImageRef(BaseModel):
    id: str
    url: str = Field(..., description="Remote provider URL or the local placeholder path")


class GenerationResponse(BaseModel):
    images: List[GeneratedImageRef]
    message: Optional[str] = None
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
