"""Resilient JSON extraction from model output.

Models asked for pure JSON sometimes prepend prose or wrap the payload in
Markdown fences. ``extract_json`` tries, in order:

1) strict ``json.loads`` of the whole text
2) the content of the first ```` ```json ... ``` ```` or ```` ``` ... ``` ```` fence
3) the span from the first ``{`` to the last ``}`` (inclusive)

No other repair is attempted. Only objects and arrays count as a result.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import TypeAdapter, ValidationError

from gemini_studio.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)


def _loads_structured(candidate: str) -> dict[str, Any] | list[Any] | None:
    try:
        value = json.loads(candidate)
    except ValueError:
        return None
    if isinstance(value, dict | list):
        return value
    return None


def _extract_fenced(text: str) -> str | None:
    """Return content inside the first code fence, if present."""
    m = _FENCE_RE.search(text)
    if m:
        return m.group(1)
    return None


def _extract_brace_span(text: str) -> str | None:
    """Return text from the first '{' to the last '}' when they are ordered."""
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and first < last:
        return text[first : last + 1]
    return None


def extract_json(text: str) -> dict[str, Any] | list[Any]:
    """Recover a JSON object or array from loosely formatted text.

    Raises:
        MalformedResponseError: If every strategy fails. The original text is
            available on ``raw_text``.
    """
    if not isinstance(text, str):
        raise MalformedResponseError(
            f"Expected response text, got {type(text).__name__}", raw_text=None
        )

    value = _loads_structured(text)
    if value is not None:
        return value

    fenced = _extract_fenced(text)
    if fenced is not None:
        value = _loads_structured(fenced)
        if value is not None:
            logger.debug("Recovered JSON from fenced code block")
            return value

    span = _extract_brace_span(text)
    if span is not None:
        value = _loads_structured(span)
        if value is not None:
            logger.debug("Recovered JSON from brace span")
            return value

    logger.debug("JSON extraction failed for %d chars of text", len(text))
    raise MalformedResponseError("No parseable JSON found in response", raw_text=text)


def extract_structured[T](text: str, schema: type[T] | Any) -> T:
    """Extract JSON and validate it against a pydantic schema.

    ``schema`` may be a model class or any type pydantic can adapt, such as
    ``list[Slide]``.

    Raises:
        MalformedResponseError: If extraction fails or the value does not
            conform to ``schema``.
    """
    value = extract_json(text)
    try:
        return TypeAdapter(schema).validate_python(value)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Response does not match the expected schema: {e.error_count()} error(s)",
            raw_text=text,
        ) from e
