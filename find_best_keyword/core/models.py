from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from find_best_keyword.core.errors import FailureKind


class Job(BaseModel):
    """Snapshot of a remote job as returned by the status endpoint."""

    # "processing", "completed" or "failed"; anything else is non-terminal.
    status: str
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def is_failed(self) -> bool:
        return self.status == "failed"


class StartResult(BaseModel):
    """Outcome of ``POST /v1/find-best-keyword``, also parsed from its body."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    job_id: Optional[str] = Field(default=None, alias="jobId")
    error: Optional[str] = None
    # Set locally on failures, never sent by the server.
    kind: Optional[FailureKind] = Field(default=None, exclude=True)

    @classmethod
    def ok(cls, job_id: str) -> "StartResult":
        return cls(success=True, job_id=job_id)

    @classmethod
    def fail(
        cls, error: str, kind: FailureKind = FailureKind.REQUEST_FAILED
    ) -> "StartResult":
        return cls(success=False, error=error, kind=kind)


class GetJobResult(BaseModel):
    """Outcome of ``GET /v1/find-best-keyword/{jobId}``, also parsed from its body."""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Optional[Job] = None
    error: Optional[str] = None
    kind: Optional[FailureKind] = Field(default=None, exclude=True)

    @classmethod
    def ok(cls, job: Job) -> "GetJobResult":
        return cls(success=True, data=job)

    @classmethod
    def fail(
        cls, error: str, kind: FailureKind = FailureKind.REQUEST_FAILED
    ) -> "GetJobResult":
        return cls(success=False, error=error, kind=kind)
