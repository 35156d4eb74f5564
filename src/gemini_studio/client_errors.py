"""Normalization of provider and transport failures."""

from typing import Any

from google.genai import errors as genai_errors
import httpx

from .exceptions import RemoteCallFailedError

_CREDENTIAL_STATUS_CODES = frozenset({401, 403})
_TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
_CREDENTIAL_HINTS = ("api key not valid", "api_key_invalid", "permission denied")


def _status_code(error: Exception) -> int | None:
    code: Any = getattr(error, "code", None)
    if isinstance(code, int):
        return code
    return None


def to_remote_call_failed(error: Exception, operation: str) -> RemoteCallFailedError:
    """Wrap ``error`` in a ``RemoteCallFailedError`` with classification.

    Credential problems (401/403 or an invalid-key message) and transient
    failures (timeouts, rate limits, 5xx, transport errors) are flagged so
    callers can tell them apart without parsing messages.
    """
    if isinstance(error, RemoteCallFailedError):
        return error

    message = str(error)
    lowered = message.lower()

    if isinstance(error, genai_errors.APIError):
        status = _status_code(error)
        credential = status in _CREDENTIAL_STATUS_CODES or any(
            hint in lowered for hint in _CREDENTIAL_HINTS
        )
        transient = status in _TRANSIENT_STATUS_CODES or (
            status is not None and status >= 500
        )
        if credential:
            summary = "Request rejected: the API key is invalid or lacks permission"
        elif status == 429:
            summary = "Rate limit exceeded"
        else:
            summary = "Remote call failed"
        return RemoteCallFailedError(
            f"{summary} during {operation} (status {status}): {message}",
            status_code=status,
            is_credential_error=credential,
            is_transient=transient,
        )

    if isinstance(error, httpx.TransportError | TimeoutError):
        return RemoteCallFailedError(
            f"Network failure during {operation}: {message or type(error).__name__}",
            is_transient=True,
        )

    return RemoteCallFailedError(f"Remote call failed during {operation}: {message}")
