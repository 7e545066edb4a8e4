import pytest
from pydantic import ValidationError

from find_best_keyword.core import config


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in (
        "FIND_BEST_KEYWORD_BASE_URL",
        "FIND_BEST_KEYWORD_REQUEST_TIMEOUT",
        "FIND_BEST_KEYWORD_POLL_INTERVAL_MS",
        "FIND_BEST_KEYWORD_POLL_TIMEOUT_MS",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = config.load_config()

    assert cfg.base_url == config.DEFAULT_BASE_URL
    assert cfg.request_timeout == 10.0
    assert cfg.poll_interval_ms == 3000
    assert cfg.poll_timeout_ms == 60000
    assert cfg.debug is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FIND_BEST_KEYWORD_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("FIND_BEST_KEYWORD_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("FIND_BEST_KEYWORD_POLL_INTERVAL_MS", "500")
    monkeypatch.setenv("FIND_BEST_KEYWORD_POLL_TIMEOUT_MS", "9000")
    monkeypatch.setenv("DEBUG", "TRUE")

    cfg = config.load_config()

    assert cfg.base_url == "http://localhost:8080"
    assert cfg.request_timeout == 2.5
    assert cfg.poll_interval_ms == 500
    assert cfg.poll_timeout_ms == 9000
    assert cfg.debug is True


def test_invalid_values_raise(monkeypatch):
    monkeypatch.setenv("FIND_BEST_KEYWORD_POLL_TIMEOUT_MS", "soon")

    with pytest.raises(ValidationError):
        config.load_config()


def test_blank_base_url_rejected(monkeypatch):
    monkeypatch.setenv("FIND_BEST_KEYWORD_BASE_URL", "  ")

    with pytest.raises(ValidationError):
        config.load_config()
