import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from find_best_keyword.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_POLL_TIMEOUT_MS,
    DEFAULT_REQUEST_TIMEOUT,
    AppConfig,
)
from find_best_keyword.core.errors import FailureKind, KeywordJobError
from find_best_keyword.core.models import GetJobResult, StartResult
from find_best_keyword.core.poller import JobPoller, PollObserver, log_poll_event

JOBS_PATH = "/v1/find-best-keyword"
START_OK_STATUSES = (200, 201, 202)
# Building the request (URL, JSON body) can fail before any HTTPError is possible.
REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError, TypeError)


class FindBestKeywordClient:
    """Client for the asynchronous find-best-keyword job API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        observer: Optional[PollObserver] = log_poll_event,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the keyword service
            timeout: Per-request timeout in seconds, independent of polling
            headers: Extra headers sent with every request
            transport: Optional httpx transport, mainly for tests
            observer: Receives poll transitions; None disables them
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json", **(headers or {})}
        self.transport = transport
        self.observer = observer

    @classmethod
    def from_config(cls, cfg: AppConfig, **kwargs: Any) -> "FindBestKeywordClient":
        return cls(base_url=cfg.base_url, timeout=cfg.request_timeout, **kwargs)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            transport=self.transport,
        )

    async def start_job(self, prompt: str) -> StartResult:
        """Start a new job for ``prompt``. Never raises."""
        try:
            async with self._client() as client:
                response = await client.post(JOBS_PATH, json={"prompt": prompt})
        except REQUEST_ERRORS as e:
            logging.error(f"Error starting find-best-keyword job: {e}")
            return StartResult.fail(
                str(e) or "Unknown error occurred while starting the job."
            )

        if response.status_code not in START_OK_STATUSES:
            logging.warning(f"Unexpected response status: {response.status_code}")
            return StartResult.fail(_error_message(response))

        try:
            body = StartResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logging.error(f"Invalid start response: {e}")
            return StartResult.fail(f"Invalid response body: {e}")

        if not body.success or not body.job_id:
            return StartResult.fail(body.error or "Failed to start the job.")

        logging.info(f"Job started successfully: {body.job_id}")
        return StartResult.ok(body.job_id)

    async def get_job(self, job_id: str) -> GetJobResult:
        """Fetch the current status/result snapshot of ``job_id``. Never raises."""
        try:
            async with self._client() as client:
                response = await client.get(f"{JOBS_PATH}/{job_id}")
        except REQUEST_ERRORS as e:
            logging.error(f"Error retrieving job [{job_id}]: {e}")
            return GetJobResult.fail(
                str(e) or "Unknown error occurred while retrieving the job."
            )

        if response.status_code == 404:
            logging.warning(f"Job ID [{job_id}] not found.")
            return GetJobResult.fail("Job ID not found.", FailureKind.NOT_FOUND)

        if response.status_code != 200:
            logging.warning(f"Unexpected response status: {response.status_code}")
            return GetJobResult.fail(_error_message(response))

        try:
            body = GetJobResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logging.error(f"Invalid job response for [{job_id}]: {e}")
            return GetJobResult.fail(f"Invalid response body: {e}")

        if not body.success or body.data is None:
            return GetJobResult.fail(
                body.error or "Unknown error occurred while retrieving the job."
            )

        logging.debug(f"Retrieved job [{job_id}] status: {body.data.status}")
        return GetJobResult.ok(body.data)

    async def poll_job(
        self,
        job_id: str,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS,
    ) -> Optional[str]:
        """Poll ``job_id`` until it completes, fails or ``timeout_ms`` elapses.

        Raises:
            KeywordJobError: on any terminal failure, including timeout.
        """
        poller = JobPoller(
            self.get_job,
            interval_ms=interval_ms,
            timeout_ms=timeout_ms,
            observer=self.observer,
        )
        return await poller.poll(job_id)

    async def run(
        self,
        prompt: str,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS,
    ) -> Optional[str]:
        """Start a job for ``prompt`` and poll it to completion."""
        started = await self.start_job(prompt)
        if not started.success or not started.job_id:
            message = started.error or "Failed to start the job."
            logging.error(f"Error running find-best-keyword job: {message}")
            raise KeywordJobError(FailureKind.INVALID_START, message)

        logging.info(f"Started job [{started.job_id}], now polling...")
        try:
            return await self.poll_job(started.job_id, interval_ms, timeout_ms)
        except KeywordJobError as e:
            logging.error(f"Error running find-best-keyword job: {e.message}")
            raise


def _error_message(response: httpx.Response) -> str:
    """Prefer the server's ``error`` field, fall back to the status code."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"Unexpected response status: {response.status_code}"
