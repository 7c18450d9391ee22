"""
Shared pytest fixtures for Lifeline tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import collections.abc as _abc
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import httpx as _httpx
import pytest as _pytest

import lifeline.api.credentials as credentials
import lifeline.config as config
import lifeline.preferences as preferences

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "VITE_GEMINI_API_KEY",
    "VITE_DEEPSEEK_API_KEY",
    "VITE_OPENAI_API_KEY",
    "LIFELINE_ENV_FILE",
    "LIFELINE_CONFIG_DIR",
]


# =============================================================================
# HTTP mocking
# =============================================================================


class ScriptedAPI:
    """
    Scripted HTTP backend for httpx.MockTransport.

    Each request consumes the next scripted item: an httpx.Response is
    returned, an exception is raised. Every request is recorded in order.
    """

    def __init__(self, items: _abc.Iterable[_httpx.Response | Exception]) -> None:
        self._items = list(items)
        self.requests: list[_httpx.Request] = []

    def _handle(self, request: _httpx.Request) -> _httpx.Response:
        self.requests.append(request)
        if not self._items:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def client(self) -> _httpx.AsyncClient:
        return _httpx.AsyncClient(transport=_httpx.MockTransport(self._handle))

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@_pytest.fixture
def scripted_api() -> _typing.Callable[..., ScriptedAPI]:
    """
    Factory for scripted HTTP backends.

    Usage:
        def test_something(scripted_api):
            backend = scripted_api(httpx.Response(200, json={...}))
            caller = GeminiCaller(backend.client())
    """

    def _factory(*items: _httpx.Response | Exception) -> ScriptedAPI:
        return ScriptedAPI(items)

    return _factory


def gemini_body(text: str) -> dict[str, _typing.Any]:
    """A successful generateContent response body."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def chat_body(content: str) -> dict[str, _typing.Any]:
    """A successful chat-completions response body."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@_pytest.fixture
def gemini_response() -> _typing.Callable[[str], _httpx.Response]:
    """Factory for successful Gemini responses."""
    return lambda text: _httpx.Response(200, json=gemini_body(text))


@_pytest.fixture
def chat_response() -> _typing.Callable[[str], _httpx.Response]:
    """Factory for successful chat-completions responses."""
    return lambda content: _httpx.Response(200, json=chat_body(content))


# =============================================================================
# Preferences
# =============================================================================


@_pytest.fixture
def memory_storage() -> preferences.MemoryStore:
    """Empty in-process preference storage."""
    return preferences.MemoryStore()


@_pytest.fixture
def preference_store(memory_storage: preferences.MemoryStore) -> preferences.PreferenceStore:
    """
    PreferenceStore over in-memory storage with an empty environment.

    API keys are stored in the same storage (api_key_<name> items).
    """
    return preferences.PreferenceStore(
        memory_storage,
        credentials.StorageCredentialStore(memory_storage),
        environ={},
    )


# =============================================================================
# Settings / environment isolation
# =============================================================================


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with test-related keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {
        k: v
        for k, v in _os.environ.items()
        if k not in ENV_KEYS_TO_CLEAR and not k.startswith("LIFELINE_")
    }


@_pytest.fixture
def config_dir(
    tmp_path: _pathlib.Path,
    clean_env: dict[str, str],
    monkeypatch: _pytest.MonkeyPatch,
) -> _abc.Iterator[_pathlib.Path]:
    """
    Isolated user config directory.

    Sets LIFELINE_CONFIG_DIR and runs the test from an empty working
    directory so no real user or project config is picked up.
    """
    user_dir = tmp_path / "config"
    user_dir.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    env = dict(clean_env, LIFELINE_CONFIG_DIR=str(user_dir))
    with _mock.patch.dict(_os.environ, env, clear=True):
        yield user_dir


@_pytest.fixture
def clean_settings(config_dir: _pathlib.Path) -> config.Settings:  # noqa: ARG001
    """Settings isolated from environment, .env and config files."""
    return config.Settings.construct_without_dotenv()
