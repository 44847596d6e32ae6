"""
Client-side workflow for one resume optimization session.

The controller owns every piece of mutable session state and moves it
through an explicit state machine:

    EMPTY -> LOADED -> OPTIMIZING -> OPTIMIZED | FAILED

``reset()`` returns to EMPTY from anywhere, loading a file goes to LOADED from
anywhere, and a FAILED attempt may be optimized again. Only one optimize
request is ever outstanding, even one whose document has since been replaced.
Committing a document or resetting advances a session epoch, and a response
issued under an older epoch is dropped. Reads are tracked the same way, so a
read that completes after a newer load or a reset is dropped too.
"""
import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Optional, Protocol

from .client import OptimizationClient
from .errors import ErrorKind
from .state import (
    Document,
    ExportArtifact,
    Notice,
    OptimizationResult,
    WorkflowState,
    detect_media_kind,
)

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "resume.txt"

INVALID_FILE_NOTICE = Notice(
    title="Invalid file type",
    description="Please upload a PDF, DOCX, TXT, or LaTeX file.",
    destructive=True,
    error=ErrorKind.INVALID_FILE_TYPE,
)
EMPTY_CONTENT_NOTICE = Notice(
    title="No resume uploaded",
    description="Please upload a resume first.",
    destructive=True,
    error=ErrorKind.EMPTY_CONTENT,
)
OPTIMIZED_NOTICE = Notice(
    title="Resume optimized!",
    description="Your resume has been improved with AI suggestions.",
)
FAILED_NOTICE = Notice(
    title="Optimization failed",
    description="There was an error optimizing your resume. Please try again.",
    destructive=True,
    error=ErrorKind.NETWORK_FAILURE,
)
UNREADABLE_FILE_NOTICE = Notice(
    title="Upload failed",
    description="The file could not be read. Please try again.",
    destructive=True,
    error=ErrorKind.UNREADABLE_FILE,
)
DOWNLOAD_NOTICE = Notice(
    title="Download started",
    description="Your optimized resume is being downloaded.",
)


class SelectedFile(Protocol):
    name: str
    content_type: Optional[str]
    size: int

    async def read(self) -> bytes:
        ...


@dataclass
class BytesFile:
    """A selected file whose bytes are already in memory."""

    name: str
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    async def read(self) -> bytes:
        return self.data

    @classmethod
    def from_upload(cls, uploaded) -> "BytesFile":
        # Streamlit's UploadedFile exposes name, type and getvalue()
        return cls(name=uploaded.name, content_type=uploaded.type, data=uploaded.getvalue())


class OptimizeBackend(Protocol):
    async def optimize(self, content: str) -> str:
        ...


class WorkflowController:
    def __init__(self, client: Optional[OptimizeBackend] = None):
        self.client = client or OptimizationClient()
        self._state = WorkflowState.EMPTY
        self._document: Optional[Document] = None
        self._result: Optional[OptimizationResult] = None
        # Advanced whenever the document changes; requests carry the value they started with.
        self._epoch = 0
        # Advanced by every load attempt and reset; reads carry the value they started with.
        self._load_epoch = 0
        self._outstanding = False

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def document(self) -> Optional[Document]:
        return self._document

    @property
    def original_text(self) -> str:
        return self._document.raw_text if self._document else ""

    @property
    def optimized_text(self) -> str:
        return self._result.text if self._result else ""

    @property
    def is_optimizing(self) -> bool:
        return self._state is WorkflowState.OPTIMIZING

    @property
    def can_optimize(self) -> bool:
        return (
            self._state in (WorkflowState.LOADED, WorkflowState.FAILED)
            and not self._outstanding
        )

    @property
    def can_export(self) -> bool:
        return self._state is WorkflowState.OPTIMIZED

    def _transition(self, new_state: WorkflowState) -> None:
        logger.info("Workflow %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    async def load_file(self, selected: Optional[SelectedFile]) -> Optional[Notice]:
        """Validate and read a selected file. Rejections never touch state."""
        if selected is None:
            return None

        media_kind = detect_media_kind(selected.content_type, selected.name)
        if media_kind is None:
            logger.info("Rejected %s with type %r", selected.name, selected.content_type)
            return INVALID_FILE_NOTICE

        self._load_epoch += 1
        load_epoch = self._load_epoch
        try:
            data = await selected.read()
        except OSError:
            logger.error("Could not read %s", selected.name, exc_info=True)
            return UNREADABLE_FILE_NOTICE
        if load_epoch != self._load_epoch:
            logger.debug("Discarding read of %s, session moved on", selected.name)
            return None

        # Committing a document invalidates every request issued for the previous one.
        self._epoch += 1
        self._document = Document(
            name=selected.name,
            size_bytes=selected.size,
            media_kind=media_kind,
            raw_text=data.decode("utf-8", errors="replace"),
        )
        self._result = None
        self._transition(WorkflowState.LOADED)
        return Notice(
            title="File uploaded",
            description=f"{selected.name} is ready to be optimized.",
        )

    async def optimize(self) -> Optional[Notice]:
        """Send the loaded resume for optimization, at most one request at a time."""
        if self._outstanding or self._state in (WorkflowState.OPTIMIZING, WorkflowState.OPTIMIZED):
            return None
        if not self.original_text:
            return EMPTY_CONTENT_NOTICE

        epoch = self._epoch
        self._outstanding = True
        self._transition(WorkflowState.OPTIMIZING)
        try:
            optimized = await self.client.optimize(self._document.raw_text)
        except asyncio.CancelledError:
            if epoch == self._epoch:
                self._transition(WorkflowState.FAILED)
            raise
        except Exception as e:
            if epoch != self._epoch:
                logger.debug("Discarding failed optimize response from an earlier session state")
                return None
            logger.error("Error optimizing resume", exc_info=True)
            self._transition(WorkflowState.FAILED)
            # The user sees the same message either way; the kind is kept for callers.
            return replace(FAILED_NOTICE, error=getattr(e, "kind", ErrorKind.NETWORK_FAILURE))
        finally:
            self._outstanding = False

        if epoch != self._epoch:
            logger.debug("Discarding optimize response from an earlier session state")
            return None

        self._result = OptimizationResult(text=optimized)
        self._transition(WorkflowState.OPTIMIZED)
        return OPTIMIZED_NOTICE

    def reset(self) -> None:
        self._epoch += 1
        self._load_epoch += 1
        self._document = None
        self._result = None
        self._transition(WorkflowState.EMPTY)

    def export_result(self) -> Optional[ExportArtifact]:
        if not self.can_export:
            return None
        name = self._document.name if self._document and self._document.name else DEFAULT_EXPORT_NAME
        return ExportArtifact(
            filename=f"optimized-{name}",
            data=self._result.text.encode("utf-8"),
        )
