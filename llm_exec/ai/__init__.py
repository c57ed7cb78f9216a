"""
The `ai` package talks to the language model: it assembles the prompt,
sends the request and turns the reply into a runnable command.
"""

from .assistant import suggest_command
from .llm import LLMClient, LLMCompletionResponse
from .prompt import build_prompt, build_request, extract_command


__all__ = [
    "LLMClient",
    "LLMCompletionResponse",
    "build_prompt",
    "build_request",
    "extract_command",
    "suggest_command",
]
