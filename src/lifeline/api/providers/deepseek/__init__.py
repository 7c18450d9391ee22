"""DeepSeek provider package."""

import lifeline.api.providers.deepseek.provider as _provider

DeepSeekCaller = _provider.DeepSeekCaller

__all__ = ["DeepSeekCaller"]
