import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

DEFAULT_BASE_URL = "https://http-erabu-eidos-production-80.schnworks.com"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_POLL_INTERVAL_MS = 3000
DEFAULT_POLL_TIMEOUT_MS = 60000


class AppConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    poll_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS

    debug: bool = False

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value


def load_config() -> AppConfig:
    """Load configuration from environment variables (and a .env file if present)."""
    load_dotenv()
    try:
        return AppConfig(
            base_url=os.getenv("FIND_BEST_KEYWORD_BASE_URL", DEFAULT_BASE_URL),
            request_timeout=os.getenv(
                "FIND_BEST_KEYWORD_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT
            ),
            poll_interval_ms=os.getenv(
                "FIND_BEST_KEYWORD_POLL_INTERVAL_MS", DEFAULT_POLL_INTERVAL_MS
            ),
            poll_timeout_ms=os.getenv(
                "FIND_BEST_KEYWORD_POLL_TIMEOUT_MS", DEFAULT_POLL_TIMEOUT_MS
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )
    except ValidationError:
        logging.error("Configuration error", exc_info=True)
        raise
