"""
Shared constants for Lifeline.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Provider defaults
DEFAULT_PROVIDER = "gemini"
"""Provider used when no valid selection has been saved."""

SELECTED_PROVIDER_KEY = "selected_ai_model"
"""Storage key holding the user's selected provider."""

API_KEY_STORAGE_PREFIX = "api_key_"
"""Storage key prefix for API keys kept in the preferences storage."""

CREDENTIAL_ENV_PREFIX = "VITE_"
"""Prefix of the environment fallback for API keys (VITE_<NAME>_API_KEY)."""

# Generation defaults (shared by every provider)
DEFAULT_TEMPERATURE = 0.7
"""Sampling temperature for all providers."""

DEFAULT_MAX_TOKENS = 2048
"""Maximum tokens in a generated answer."""

GEMINI_TOP_K = 40
GEMINI_TOP_P = 0.95

SYSTEM_PROMPT = (
    "You are an experienced medical professional certified in emergency "
    "medicine and first aid."
)
"""System instruction sent to chat-completions providers."""

# Transport defaults
DEFAULT_HTTP_TIMEOUT = 120.0
"""Default HTTP timeout in seconds (LLM answers can take a while)."""
