"""
LLM provider dispatch for Lifeline.

Provides a single entry point for generating text with one of the
supported providers:
- Google Gemini (with per-model fallback)
- DeepSeek (chat completions)
- OpenAI (chat completions)
"""

from lifeline.api.base import ProviderCaller
from lifeline.api.dispatcher import (
    Dispatcher,
    create_dispatcher,
    create_preference_store,
)
from lifeline.api.errors import (
    AllCandidatesExhaustedError,
    HttpError,
    LifelineAPIError,
    MalformedResponseError,
    MissingCredentialError,
    TransportError,
    UnparsableResponseError,
    UnsupportedProviderError,
)
from lifeline.api.registry import (
    AI_PROVIDERS,
    default_model,
    get_provider_config,
    is_provider_id,
)
from lifeline.api.types import PROVIDER_IDS, ProviderConfig, ProviderId

__all__ = [
    # Base class
    "ProviderCaller",
    # Dispatcher
    "Dispatcher",
    "create_dispatcher",
    "create_preference_store",
    # Exceptions
    "AllCandidatesExhaustedError",
    "HttpError",
    "LifelineAPIError",
    "MalformedResponseError",
    "MissingCredentialError",
    "TransportError",
    "UnparsableResponseError",
    "UnsupportedProviderError",
    # Registry
    "AI_PROVIDERS",
    "PROVIDER_IDS",
    "ProviderConfig",
    "ProviderId",
    "default_model",
    "get_provider_config",
    "is_provider_id",
]
