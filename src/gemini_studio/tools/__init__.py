"""Capability and tool selection."""

from .selector import (
    PROMPT_TEMPLATE_CAPABILITIES,
    Capability,
    ToolDeclarations,
    parse_capabilities,
    select_tools,
)

__all__ = [
    "PROMPT_TEMPLATE_CAPABILITIES",
    "Capability",
    "ToolDeclarations",
    "parse_capabilities",
    "select_tools",
]
