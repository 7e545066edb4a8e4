from typing import Callable, List

import httpx
import pytest

from find_best_keyword.services.keyword_client import FindBestKeywordClient


class FakeClock:
    """Monotonic clock whose time only moves when ``sleep`` is awaited."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def events():
    return []


@pytest.fixture
def make_client(events) -> Callable[..., FindBestKeywordClient]:
    def _make(handler) -> FindBestKeywordClient:
        return FindBestKeywordClient(
            base_url="https://keywords.test/",
            transport=httpx.MockTransport(handler),
            observer=events.append,
        )

    return _make
