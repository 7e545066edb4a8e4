import pytest

import main as cli
from find_best_keyword.core import config
from find_best_keyword.core.errors import FailureKind, KeywordJobError
from find_best_keyword.services.keyword_client import FindBestKeywordClient


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)


@pytest.mark.asyncio
async def test_main_prints_result(monkeypatch, capsys):
    seen = {}

    async def fake_run(self, prompt, interval_ms, timeout_ms):
        seen.update(
            prompt=prompt,
            interval_ms=interval_ms,
            timeout_ms=timeout_ms,
            base_url=self.base_url,
        )
        return "keyword42"

    monkeypatch.setattr(FindBestKeywordClient, "run", fake_run)

    code = await cli.main(
        ["shoes", "--interval", "10", "--timeout", "0", "--base-url", "http://x/"]
    )

    assert code == 0
    assert capsys.readouterr().out.strip() == "keyword42"
    assert seen == {
        "prompt": "shoes",
        "interval_ms": 10,
        "timeout_ms": 0,
        "base_url": "http://x",
    }


@pytest.mark.asyncio
async def test_main_returns_error_code_on_failure(monkeypatch):
    async def fake_run(self, prompt, interval_ms, timeout_ms):
        raise KeywordJobError(FailureKind.POLL_TIMEOUT, "Polling timed out after 1ms")

    monkeypatch.setattr(FindBestKeywordClient, "run", fake_run)

    assert await cli.main(["shoes"]) == 1
