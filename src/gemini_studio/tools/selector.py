"""Plugin-gated tool selection.

Maps the set of enabled capabilities onto the tool declarations attached to a
request. Web search and maps are declared tools. Code execution and video
metadata search are prompt framings, not tool attachments; builders apply
those themselves.
"""

from __future__ import annotations

from collections.abc import Iterable
import dataclasses
from enum import Enum
import logging

from google.genai import types

from gemini_studio.core.types import RequestContext

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Independently toggleable studio plugins."""

    WEB_SEARCH = "google-search"
    MAPS = "google-maps"
    VIDEO_METADATA_SEARCH = "youtube-data"
    CODE_EXECUTION = "python-core"


PROMPT_TEMPLATE_CAPABILITIES = frozenset(
    {Capability.CODE_EXECUTION, Capability.VIDEO_METADATA_SEARCH}
)


@dataclasses.dataclass(frozen=True, slots=True)
class ToolDeclarations:
    """Tools, retrieval config and prompt framings for one request."""

    tools: tuple[types.Tool, ...] = ()
    tool_config: types.ToolConfig | None = None
    prompt_framings: frozenset[Capability] = frozenset()

    def config_fields(self) -> dict[str, object]:
        """Fields to merge into a ``GenerateContentConfig``.

        Empty selections contribute nothing.
        """
        fields: dict[str, object] = {}
        if self.tools:
            fields["tools"] = list(self.tools)
        if self.tool_config is not None:
            fields["tool_config"] = self.tool_config
        return fields


def parse_capabilities(ids: Iterable[str | Capability]) -> frozenset[Capability]:
    """Convert plugin identifiers to capabilities, skipping unknown ones."""
    found: set[Capability] = set()
    for raw in ids:
        try:
            found.add(Capability(raw))
        except ValueError:
            logger.debug("Ignoring unknown capability id %r", raw)
    return frozenset(found)


def select_tools(
    enabled: Iterable[Capability],
    context: RequestContext | None = None,
) -> ToolDeclarations:
    """Build the tool declarations for the enabled capabilities.

    A missing location never blocks a maps request; the tool is attached
    without location bias.
    """
    enabled_set = frozenset(enabled)
    ctx = context or RequestContext()

    tools: list[types.Tool] = []
    tool_config: types.ToolConfig | None = None

    if Capability.WEB_SEARCH in enabled_set:
        tools.append(types.Tool(google_search=types.GoogleSearch()))

    if Capability.MAPS in enabled_set:
        tools.append(types.Tool(google_maps=types.GoogleMaps()))
        if ctx.location is not None:
            tool_config = types.ToolConfig(
                retrieval_config=types.RetrievalConfig(
                    lat_lng=types.LatLng(
                        latitude=ctx.location.latitude,
                        longitude=ctx.location.longitude,
                    )
                )
            )

    return ToolDeclarations(
        tools=tuple(tools),
        tool_config=tool_config,
        prompt_framings=enabled_set & PROMPT_TEMPLATE_CAPABILITIES,
    )
