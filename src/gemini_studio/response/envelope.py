"""Typed envelope over provider responses.

Handlers pattern-match over ``TextPart | InlineDataPart`` instead of probing
optional attributes on SDK objects.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import logging
from typing import Any

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class TextPart:
    text: str


@dataclasses.dataclass(frozen=True, slots=True)
class InlineDataPart:
    """Binary payload returned inline (image or audio bytes)."""

    data: bytes
    mime_type: str | None = None

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


type ResponsePart = TextPart | InlineDataPart


@dataclasses.dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    """The first candidate of a response, reduced to what handlers read."""

    parts: tuple[ResponsePart, ...] = ()
    grounding_chunks: tuple[Any, ...] = ()

    @property
    def text(self) -> str | None:
        """Concatenated text parts, or None when there are none."""
        texts = [p.text for p in self.parts if isinstance(p, TextPart)]
        if not texts:
            return None
        return "".join(texts)

    def first_inline_data(self) -> InlineDataPart | None:
        for part in self.parts:
            match part:
                case InlineDataPart():
                    return part
                case _:
                    continue
        return None

    @classmethod
    def from_sdk(cls, response: Any) -> ResponseEnvelope:
        """Build an envelope from a ``GenerateContentResponse``.

        Missing candidates, content or parts yield an empty envelope. Thought
        parts are dropped.
        """
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return cls()
        candidate = candidates[0]

        parts: list[ResponsePart] = []
        content = getattr(candidate, "content", None)
        for raw in getattr(content, "parts", None) or []:
            if getattr(raw, "thought", None):
                continue
            inline = getattr(raw, "inline_data", None)
            if inline is not None and getattr(inline, "data", None) is not None:
                parts.append(
                    InlineDataPart(
                        data=_as_bytes(inline.data),
                        mime_type=getattr(inline, "mime_type", None),
                    )
                )
                continue
            text = getattr(raw, "text", None)
            if isinstance(text, str):
                parts.append(TextPart(text))

        metadata = getattr(candidate, "grounding_metadata", None)
        chunks = tuple(getattr(metadata, "grounding_chunks", None) or ())
        return cls(parts=tuple(parts), grounding_chunks=chunks)


def _as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, bytes):
        return data
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        logger.debug("Inline data was not base64; keeping raw UTF-8 bytes")
        return data.encode("utf-8")
