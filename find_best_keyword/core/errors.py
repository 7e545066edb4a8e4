from enum import Enum


class FailureKind(str, Enum):
    REQUEST_FAILED = "request_failed"
    NOT_FOUND = "not_found"
    JOB_FAILED = "job_failed"
    POLL_TIMEOUT = "poll_timeout"
    INVALID_START = "invalid_start"


class KeywordJobError(Exception):
    """Terminal failure of a find-best-keyword job run.

    ``str(error)`` is always the human readable message, so callers that only
    care about the text can ignore ``kind``.
    """

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"KeywordJobError(kind={self.kind.value!r}, message={self.message!r})"
