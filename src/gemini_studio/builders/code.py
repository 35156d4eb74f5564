"""Prompt-framed Python execution.

Code execution is a prompt template rather than a declared tool: the model is
asked to act as the interpreter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from google.genai import types

from gemini_studio.core.types import RemoteRequest

from .base import handle_text

if TYPE_CHECKING:
    from gemini_studio.config import FrozenConfig
    from gemini_studio.response.envelope import ResponseEnvelope

CODE_EXECUTION_SYSTEM_INSTRUCTION = (
    "You are a Python execution environment and math tutor. "
    "Provide the exact output of the code provided."
)


def build_code_execution_request(config: FrozenConfig, code: str) -> RemoteRequest:
    prompt = (
        "Execute this Python code and provide the output/result. "
        "If it's mathematical, show steps.\n\n"
        f"CODE:\n{code}"
    )
    return RemoteRequest(
        model=config.text_model,
        contents=prompt,
        config=types.GenerateContentConfig(
            system_instruction=CODE_EXECUTION_SYSTEM_INSTRUCTION
        ),
    )


def handle_code_execution_response(envelope: ResponseEnvelope) -> str:
    return handle_text(envelope)
