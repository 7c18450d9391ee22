"""
Type definitions for the provider registry.

These types describe the closed set of supported providers and their
static configuration.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

ProviderId = _typing.Literal["gemini", "deepseek", "openai"]
"""Identifier of a supported LLM provider."""

PROVIDER_IDS: tuple[ProviderId, ...] = _typing.get_args(ProviderId)
"""Every ProviderId, in registry order."""


@_dataclasses.dataclass(frozen=True)
class ProviderConfig:
    """Static configuration for one provider."""

    id: ProviderId
    display_name: str
    credential_key: str
    """Name used to look the API key up in the credential store."""

    candidate_models: tuple[str, ...]
    """Models in order of preference. The first one is the default."""

    @property
    def default_model(self) -> str:
        return self.candidate_models[0]
