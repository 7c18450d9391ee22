"""Gemini provider package."""

import lifeline.api.providers.gemini.provider as _provider

GeminiCaller = _provider.GeminiCaller

__all__ = ["GeminiCaller"]
