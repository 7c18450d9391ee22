"""OpenAI provider caller."""

from __future__ import annotations

import typing as _typing

import lifeline.api.providers.chat_completions as chat_completions
import lifeline.api.types as types


class OpenAICaller(chat_completions.ChatCompletionsCaller):
    """OpenAI chat-completions API (default model: gpt-4o-mini)."""

    provider_id: _typing.ClassVar[types.ProviderId] = "openai"
    label: _typing.ClassVar[str] = "OpenAI"
    url: _typing.ClassVar[str] = "https://api.openai.com/v1/chat/completions"
