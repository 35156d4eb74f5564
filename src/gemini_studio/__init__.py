"""Orchestration client for the Gemini-powered learning studio."""

import importlib.metadata
import logging

from gemini_studio.audio import AudioSampleBuffer, decode_pcm16, encode_wav
from gemini_studio.client import StudioClient
from gemini_studio.config import FrozenConfig, require_api_key, resolve_config
from gemini_studio.core.types import (
    AsyncJob,
    ContextDocument,
    Failure,
    GeoLocation,
    GroundedAnswer,
    NotebookAnswer,
    RequestContext,
    Result,
    Success,
)
from gemini_studio.exceptions import (
    ConfigurationError,
    CorruptAudioPayloadError,
    JobDeadlineExceededError,
    JobPollFailedError,
    MalformedResponseError,
    MissingCredentialError,
    RemoteCallFailedError,
    StudioError,
)
from gemini_studio.jobs import wait_for_completion
from gemini_studio.response import (
    NotebookGuide,
    Quiz,
    ResponseEnvelope,
    Slide,
    SpeechAnalysis,
    extract_json,
    extract_structured,
)
from gemini_studio.telemetry import TelemetryContext, TelemetryReporter
from gemini_studio.tools import Capability, ToolDeclarations, parse_capabilities, select_tools

try:
    __version__ = importlib.metadata.version("gemini-studio")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Library logging stays silent unless the application configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Client
    "StudioClient",
    # Configuration
    "FrozenConfig",
    "resolve_config",
    "require_api_key",
    # Core components
    "extract_json",
    "extract_structured",
    "wait_for_completion",
    "decode_pcm16",
    "encode_wav",
    "select_tools",
    "parse_capabilities",
    # Types
    "AudioSampleBuffer",
    "AsyncJob",
    "Capability",
    "ContextDocument",
    "GeoLocation",
    "GroundedAnswer",
    "NotebookAnswer",
    "NotebookGuide",
    "Quiz",
    "RequestContext",
    "ResponseEnvelope",
    "Slide",
    "SpeechAnalysis",
    "ToolDeclarations",
    "Result",
    "Success",
    "Failure",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    # Exceptions
    "StudioError",
    "ConfigurationError",
    "MissingCredentialError",
    "MalformedResponseError",
    "JobPollFailedError",
    "JobDeadlineExceededError",
    "CorruptAudioPayloadError",
    "RemoteCallFailedError",
]
