"""
Global test configuration: environment isolation and provider fakes.
"""

from collections.abc import Callable
import os
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

from google.genai import types
import pytest

from gemini_studio.config import FrozenConfig, resolve_config


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "contract: behavioral contracts of the public API")
    config.addinivalue_line("markers", "security: secret handling invariants")


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_gemini_env(request, monkeypatch):
    """Ensure a clean credential/config environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture
def config() -> FrozenConfig:
    """Frozen config with a programmatic API key and a short poll interval."""
    return resolve_config({"api_key": "test-key", "poll_interval_seconds": 10.0})


@pytest.fixture
def make_response() -> Callable[..., types.GenerateContentResponse]:
    """Build a real SDK response with one candidate.

    Usage:
        make_response(types.Part(text="hi"), grounding_chunks=[...])
    """

    def _make(
        *parts: types.Part, grounding_chunks: list[types.GroundingChunk] | None = None
    ) -> types.GenerateContentResponse:
        metadata = (
            types.GroundingMetadata(grounding_chunks=grounding_chunks)
            if grounding_chunks
            else None
        )
        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(role="model", parts=list(parts)),
                    grounding_metadata=metadata,
                )
            ]
        )

    return _make


class FakeProvider:
    """Stands in for ``google.genai.Client``; records every call."""

    def __init__(self) -> None:
        self.models = SimpleNamespace(
            generate_content=AsyncMock(),
            generate_videos=AsyncMock(),
        )
        self.operations = SimpleNamespace(get=AsyncMock())
        self.aio = SimpleNamespace(models=self.models, operations=self.operations)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def provider_factory(provider) -> Any:
    """Factory returning ``provider`` and recording the keys it was given."""

    def _factory(api_key: str) -> FakeProvider:
        _factory.keys.append(api_key)
        return provider

    _factory.keys = []
    return _factory
