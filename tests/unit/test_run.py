"""Unit tests for the development server runner."""

import pytest
import uvicorn

import run
from app.config import get_settings


@pytest.fixture
def uvicorn_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    get_settings.cache_clear()
    yield calls
    get_settings.cache_clear()


@pytest.mark.unit
def test_runner_uses_configured_host_and_port(monkeypatch, uvicorn_calls):
    monkeypatch.setenv("RESUME_STUDIO_HOST", "127.0.0.1")
    monkeypatch.setenv("RESUME_STUDIO_PORT", "9001")
    monkeypatch.setenv("RESUME_STUDIO_DEBUG", "false")

    run.main()

    assert uvicorn_calls == [(
        "app.main:app",
        {"host": "127.0.0.1", "port": 9001, "reload": False, "log_level": "info"},
    )]


@pytest.mark.unit
def test_runner_reloads_in_debug(monkeypatch, uvicorn_calls):
    monkeypatch.setenv("RESUME_STUDIO_DEBUG", "true")

    run.main()

    _, kwargs = uvicorn_calls[0]
    assert kwargs["reload"] is True
    assert kwargs["log_level"] == "debug"
