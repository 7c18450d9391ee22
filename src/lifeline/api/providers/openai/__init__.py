"""OpenAI provider package."""

import lifeline.api.providers.openai.provider as _provider

OpenAICaller = _provider.OpenAICaller

__all__ = ["OpenAICaller"]
