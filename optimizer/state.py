from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypedDict

from .errors import ErrorKind


class OptimizationState(TypedDict):
    content: str            # Resume text exactly as submitted
    prompt: str             # Instruction prompt with the resume interpolated
    optimized_content: str  # Text returned by the generation backend


class WorkflowState(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    OPTIMIZING = "optimizing"
    OPTIMIZED = "optimized"
    FAILED = "failed"


class MediaKind(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    PLAIN_TEXT = "plain_text"
    LATEX = "latex"


MIME_MEDIA_KINDS = {
    "application/pdf": MediaKind.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": MediaKind.DOCX,
    "text/plain": MediaKind.PLAIN_TEXT,
    "application/x-tex": MediaKind.LATEX,
    "text/x-tex": MediaKind.LATEX,
}


def detect_media_kind(content_type: Optional[str], name: Optional[str]) -> Optional[MediaKind]:
    """Map a declared MIME type (or a .tex name as fallback) to an accepted kind."""
    kind = MIME_MEDIA_KINDS.get(content_type or "")
    if kind is not None:
        return kind
    if name and name.endswith(".tex"):
        return MediaKind.LATEX
    return None


@dataclass(frozen=True)
class Document:
    name: str
    size_bytes: int
    media_kind: MediaKind
    raw_text: str

    @property
    def size_kb(self) -> str:
        return f"{self.size_bytes / 1024:.2f}"


@dataclass(frozen=True)
class OptimizationResult:
    text: str


@dataclass(frozen=True)
class Notice:
    """User-facing feedback for a controller action, rendered as a toast."""

    title: str
    description: str
    destructive: bool = False
    error: Optional[ErrorKind] = None


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    data: bytes
    media_type: str = "text/plain"
