"""
Provider caller implementations.

Each provider is in its own submodule for clean separation.
DeepSeek and OpenAI share the chat-completions caller.
"""

import lifeline.api.providers.deepseek.provider as _deepseek
import lifeline.api.providers.gemini.provider as _gemini
import lifeline.api.providers.openai.provider as _openai

# Re-export callers for convenient access
DeepSeekCaller = _deepseek.DeepSeekCaller
GeminiCaller = _gemini.GeminiCaller
OpenAICaller = _openai.OpenAICaller

CALLER_TYPES = {
    "gemini": GeminiCaller,
    "deepseek": DeepSeekCaller,
    "openai": OpenAICaller,
}
"""Mapping of provider id to caller class."""

__all__ = [
    "CALLER_TYPES",
    "DeepSeekCaller",
    "GeminiCaller",
    "OpenAICaller",
]
