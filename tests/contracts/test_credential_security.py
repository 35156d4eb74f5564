"""Security contracts for API key handling.

The key must never appear in any representation of the configuration, and
every remote operation must fail before touching the network when it is
absent.
"""

import logging

import pytest

from gemini_studio import StudioClient, resolve_config
from gemini_studio.core.types import Failure
from gemini_studio.exceptions import MissingCredentialError
from gemini_studio.response.schemas import Slide

SECRET = "sk-super-secret-value"


class TestCredentialRedaction:
    """The API key is never rendered."""

    @pytest.mark.contract
    @pytest.mark.security
    def test_repr_and_str_redact_key(self):
        """Contract: str/repr of the config never contain the key."""
        config = resolve_config({"api_key": SECRET})
        assert SECRET not in str(config)
        assert SECRET not in repr(config)
        assert "[REDACTED]" in repr(config)

    @pytest.mark.contract
    @pytest.mark.security
    def test_audit_redacts_key_from_every_source(self, tmp_path, monkeypatch):
        """Contract: audit output hides the key whatever its origin."""
        env_file = tmp_path / ".env"
        env_file.write_text(f"GEMINI_API_KEY={SECRET}\n")
        assert SECRET not in resolve_config(env_file=env_file).audit()

        monkeypatch.setenv("GEMINI_API_KEY", SECRET)
        assert SECRET not in resolve_config().audit()

    @pytest.mark.contract
    @pytest.mark.security
    def test_resolution_logging_is_redacted(self, caplog):
        """Contract: debug logging during resolution never shows the key."""
        with caplog.at_level(logging.DEBUG, logger="gemini_studio"):
            resolve_config({"api_key": SECRET})
        assert SECRET not in caplog.text


class TestFailFast:
    """Missing credentials stop every operation before any remote call."""

    @pytest.mark.contract
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("search", ("q",)),
            ("maps_query", ("q",)),
            ("search_videos", ("q",)),
            ("execute_code", ("print(1)",)),
            ("translate", ("hola", "English")),
            ("slide_visual", ("Title",)),
            ("educational_video", ("waves",)),
        ],
    )
    async def test_operations_fail_without_key(self, provider_factory, method, args):
        """Contract: MissingCredentialError is raised and no client is built."""
        client = StudioClient(resolve_config(), client_factory=provider_factory)
        with pytest.raises(MissingCredentialError):
            await getattr(client, method)(*args)
        assert provider_factory.keys == []

    @pytest.mark.contract
    @pytest.mark.asyncio
    async def test_slide_fan_out_reports_missing_key_per_slide(self, provider_factory):
        """Contract: batch visuals surface the credential failure per slide."""
        client = StudioClient(resolve_config(), client_factory=provider_factory)
        slide = Slide(title="T", bullets=[], speaker_notes="")
        results = await client.slide_visuals([slide, slide])
        assert all(isinstance(r, Failure) for r in results.values())
        assert all(isinstance(r.error, MissingCredentialError) for r in results.values())
