"""DeepSeek provider caller."""

from __future__ import annotations

import typing as _typing

import lifeline.api.providers.chat_completions as chat_completions
import lifeline.api.types as types


class DeepSeekCaller(chat_completions.ChatCompletionsCaller):
    """DeepSeek chat-completions API (default model: deepseek-chat)."""

    provider_id: _typing.ClassVar[types.ProviderId] = "deepseek"
    label: _typing.ClassVar[str] = "DeepSeek"
    url: _typing.ClassVar[str] = "https://api.deepseek.com/v1/chat/completions"
