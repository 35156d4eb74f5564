"""Shared helpers for request builders and response handlers."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable, Sequence
from typing import Any

from gemini_studio.core.types import ContextDocument
from gemini_studio.exceptions import MalformedResponseError
from gemini_studio.response.envelope import ResponseEnvelope
from gemini_studio.response.json_extraction import extract_structured

SOURCE_SEPARATOR = "\n---\n"
NO_DOCUMENTS_TEXT = "No personal documents provided."


def format_sources(docs: Sequence[ContextDocument]) -> str:
    """Render documents as ``SOURCE:``/``CONTENT:`` blocks."""
    return SOURCE_SEPARATOR.join(
        f"SOURCE: {d.title}\nCONTENT: {d.content}" for d in docs
    )


def join_context(entries: Iterable[str]) -> str:
    return SOURCE_SEPARATOR.join(entries)


def decode_inline_payload(payload: bytes | str, label: str = "payload") -> bytes:
    """Accept raw bytes, base64 text, or a base64 data URI.

    Raises:
        ValueError: If text input is not strictly valid base64.
    """
    if isinstance(payload, bytes):
        return payload
    encoded = payload.split(",", 1)[1] if payload.startswith("data:") else payload
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"{label} must be bytes or base64 text: {e}") from e


def knowledge_entries(items: Iterable[ContextDocument | str]) -> list[str]:
    """Flatten documents into ``[title]: content`` knowledge-base entries.

    Strings are taken as already-rendered entries.
    """
    return [
        f"[{item.title}]: {item.content}" if isinstance(item, ContextDocument) else item
        for item in items
    ]


def handle_text(envelope: ResponseEnvelope, default: str = "") -> str:
    """Return the response text, or ``default`` when there is none."""
    text = envelope.text
    return text if text else default


def handle_structured(envelope: ResponseEnvelope, schema: Any) -> Any:
    """Extract and validate the JSON body of a structured generation call.

    A schema was already declared to the service; this is the second,
    local line of defense.

    Raises:
        MalformedResponseError: If the response is empty, unparseable, or
            does not conform to ``schema``.
    """
    text = envelope.text
    if not text or not text.strip():
        raise MalformedResponseError("Structured response was empty", raw_text=text)
    return extract_structured(text, schema)
