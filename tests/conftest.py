"""Shared fixtures for the YouTube Tools test suite."""

from __future__ import annotations

import io
import json
from typing import Optional
from unittest.mock import MagicMock

import pytest
import requests
from rich.console import Console

from youtube_tools.config.settings import Settings

_ENV_VARS = (
    "DATABASE_URL",
    "DB_MIN_CONNECTIONS",
    "DB_MAX_CONNECTIONS",
    "RAPIDAPI_KEY",
    "RAPIDAPI_TRANSCRIPT_HOST",
    "TRANSCRIPT_CHUNK_SIZE",
    "YOUTUBE_API_KEY",
    "DEFAULT_LANGUAGE",
    "REQUEST_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "RAPIDAPI_KEY": "rapid-test-key",
        "YOUTUBE_API_KEY": "youtube-test-key",
        "DATABASE_URL": "postgresql://tester@localhost:5432/youtube_tools_test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200)


def make_response(status_code: int = 200, payload: object = None, text: Optional[str] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    body = text if text is not None else json.dumps(payload)
    response._content = body.encode("utf-8")  # pylint: disable=protected-access
    response.encoding = "utf-8"
    return response


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)
