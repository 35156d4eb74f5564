"""Typed exceptions for the studio orchestration client.

Every failure that crosses the public API surfaces as one of these types so
callers can render an appropriate message without string matching.
"""


class StudioError(Exception):
    """Base exception for studio client errors"""  # noqa: D415


class ConfigurationError(StudioError):
    """Raised when configuration values are invalid"""  # noqa: D415


class MissingCredentialError(StudioError):
    """Raised before any network call when the API key is missing or empty"""  # noqa: D415


class MalformedResponseError(StudioError):
    """Raised when a structured value cannot be recovered from a response.

    The raw response text is kept on ``raw_text`` for diagnostics.
    """

    def __init__(self, message: str, *, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class JobPollFailedError(StudioError):
    """Raised when polling a long-running job errors"""  # noqa: D415


class JobDeadlineExceededError(JobPollFailedError):
    """Raised when a caller-supplied polling deadline elapses"""  # noqa: D415


class CorruptAudioPayloadError(StudioError):
    """Raised when a PCM payload cannot be decoded"""  # noqa: D415


class RemoteCallFailedError(StudioError):
    """Raised when the remote service or transport fails.

    ``status_code`` carries the upstream HTTP status when known.
    ``is_credential_error`` is True when upstream rejected the API key, and
    ``is_transient`` is True for rate limits, server errors and transport
    failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        is_credential_error: bool = False,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_credential_error = is_credential_error
        self.is_transient = is_transient
