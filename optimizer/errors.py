from enum import Enum


class ErrorKind(str, Enum):
    INVALID_FILE_TYPE = "invalid_file_type"
    EMPTY_CONTENT = "empty_content"
    MISSING_CONTENT = "missing_content"
    GENERATION_FAILED = "generation_failed"
    NETWORK_FAILURE = "network_failure"
    UNREADABLE_FILE = "unreadable_file"


class ResumeOptimizerError(Exception):
    """Base class for resume optimizer failures."""


class GenerationError(ResumeOptimizerError):
    """The text generation backend failed or returned something unusable."""


class NetworkFailure(ResumeOptimizerError):
    """
    The optimize request did not come back with usable content.

    ``kind`` is GENERATION_FAILED when the service answered with its own
    ``{error}`` body, NETWORK_FAILURE for everything else.
    """

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.NETWORK_FAILURE):
        super().__init__(message)
        self.kind = kind
