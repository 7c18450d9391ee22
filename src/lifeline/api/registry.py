"""
Static registry of supported LLM providers.

The mapping from ProviderId to ProviderConfig is total: every id in
PROVIDER_IDS has exactly one entry, and every entry has at least one
candidate model.
"""

from __future__ import annotations

import typing as _typing

import lifeline.api.errors as errors
import lifeline.api.types as types

AI_PROVIDERS: dict[types.ProviderId, types.ProviderConfig] = {
    "gemini": types.ProviderConfig(
        id="gemini",
        display_name="Google Gemini",
        credential_key="gemini",
        candidate_models=(
            "gemini-1.5-flash",
            "gemini-1.5-flash-latest",
            "gemini-2.0-flash-exp",
            "gemini-pro",
        ),
    ),
    "deepseek": types.ProviderConfig(
        id="deepseek",
        display_name="DeepSeek",
        credential_key="deepseek",
        candidate_models=("deepseek-chat", "deepseek-coder"),
    ),
    "openai": types.ProviderConfig(
        id="openai",
        display_name="OpenAI (ChatGPT)",
        credential_key="openai",
        candidate_models=("gpt-4o-mini", "gpt-4o", "gpt-3.5-turbo"),
    ),
}


def is_provider_id(value: _typing.Any) -> _typing.TypeGuard[types.ProviderId]:
    """Check whether value is exactly one of the supported provider ids."""
    return isinstance(value, str) and value in AI_PROVIDERS


def get_provider_config(provider_id: str) -> types.ProviderConfig:
    """
    Look up the configuration for a provider.

    Raises:
        UnsupportedProviderError: If provider_id is not a supported provider.
    """
    if not is_provider_id(provider_id):
        raise errors.UnsupportedProviderError(provider_id)
    return AI_PROVIDERS[provider_id]


def default_model(provider_id: str) -> str:
    """Return the preferred (first) candidate model of a provider."""
    return get_provider_config(provider_id).default_model
