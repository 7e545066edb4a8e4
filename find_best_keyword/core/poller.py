from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from find_best_keyword.core.config import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_POLL_TIMEOUT_MS,
)
from find_best_keyword.core.errors import FailureKind, KeywordJobError
from find_best_keyword.core.models import GetJobResult

FetchJob = Callable[[str], Awaitable[GetJobResult]]


class PollState(str, Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class PollEvent:
    job_id: str
    state: PollState
    elapsed_ms: float
    status: Optional[str] = None
    detail: Optional[str] = None


PollObserver = Callable[[PollEvent], None]


def log_poll_event(event: PollEvent) -> None:
    """Default observer: write each transition to the logging module."""
    if event.state is PollState.RUNNING:
        logging.info(f"Polling job [{event.job_id}] status: {event.status}")
    elif event.state is PollState.SUCCEEDED:
        logging.info(
            f"Job [{event.job_id}] completed after {event.elapsed_ms:.0f}ms"
        )
    else:
        logging.warning(f"Job [{event.job_id}] {event.state.value}: {event.detail}")


class JobPoller:
    """
    Polls a job until it reaches a terminal state or the timeout expires.

    Each tick checks the deadline first, then performs exactly one fetch.
    The next tick starts ``interval_ms`` after the previous fetch returned,
    so fetches for one poll never overlap.
    """

    def __init__(
        self,
        fetch: FetchJob,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS,
        observer: Optional[PollObserver] = log_poll_event,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.fetch = fetch
        self.interval_ms = interval_ms
        self.timeout_ms = timeout_ms
        self.observer = observer
        self.clock = clock
        self.sleep = sleep

    async def poll(self, job_id: str) -> Optional[str]:
        """Return the completed job's result, or raise KeywordJobError."""
        started = self.clock()

        while True:
            elapsed_ms = (self.clock() - started) * 1000
            if elapsed_ms >= self.timeout_ms:
                raise self._fail(
                    job_id,
                    PollState.TIMED_OUT,
                    elapsed_ms,
                    FailureKind.POLL_TIMEOUT,
                    f"Polling timed out after {self.timeout_ms}ms",
                )

            try:
                fetched = await self.fetch(job_id)
            except Exception as e:
                raise self._fail(
                    job_id,
                    PollState.FAILED,
                    elapsed_ms,
                    FailureKind.REQUEST_FAILED,
                    str(e) or "Unknown error occurred during polling.",
                ) from e

            if not fetched.success or fetched.data is None:
                raise self._fail(
                    job_id,
                    PollState.FAILED,
                    elapsed_ms,
                    fetched.kind or FailureKind.REQUEST_FAILED,
                    fetched.error or "Unknown error occurred during polling.",
                )

            job = fetched.data
            if job.is_completed:
                self._emit(
                    PollEvent(job_id, PollState.SUCCEEDED, elapsed_ms, job.status)
                )
                return job.result

            if job.is_failed:
                raise self._fail(
                    job_id,
                    PollState.FAILED,
                    elapsed_ms,
                    FailureKind.JOB_FAILED,
                    job.error or "Job failed.",
                    status=job.status,
                )

            self._emit(PollEvent(job_id, PollState.RUNNING, elapsed_ms, job.status))
            await self.sleep(self.interval_ms / 1000)

    def _fail(
        self,
        job_id: str,
        state: PollState,
        elapsed_ms: float,
        kind: FailureKind,
        message: str,
        status: Optional[str] = None,
    ) -> KeywordJobError:
        self._emit(PollEvent(job_id, state, elapsed_ms, status, message))
        return KeywordJobError(kind, message)

    def _emit(self, event: PollEvent) -> None:
        if self.observer is not None:
            self.observer(event)
