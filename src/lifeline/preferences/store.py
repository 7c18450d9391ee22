"""
Preference store: the selected provider and per-provider API keys.

This is the only layer that suppresses errors. Storage failures degrade to
the default provider (or an absent key) and are logged, so the dispatcher
never fails because a preferences file is unreadable.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import os as _os
import typing as _typing

import lifeline.api.credentials as credentials
import lifeline.api.registry as registry
import lifeline.api.types as api_types
import lifeline.constants as _constants
import lifeline.preferences.storage as storage

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class PreferenceLookup:
    """Result of reading the selected provider."""

    provider: api_types.ProviderId
    source: _typing.Literal["stored", "default"]
    """"stored" if the saved value was used, "default" otherwise."""

    error: Exception | None = None
    """Storage failure that forced the default, if any."""

    @property
    def is_default(self) -> bool:
        return self.source == "default"


class PreferenceStore:
    """
    Reads and writes user preferences through injected collaborators.

    Args:
        storage: Persistent key-value storage holding the selected provider.
        credential_store: Where API keys are looked up first.
        environ: Fallback mapping for API keys (defaults to os.environ).
        env_prefix: Prefix of fallback variables (VITE_<NAME>_API_KEY).
    """

    def __init__(
        self,
        storage: storage.KeyValueStore,
        credential_store: credentials.CredentialStore,
        *,
        environ: _typing.Mapping[str, str] | None = None,
        env_prefix: str = _constants.CREDENTIAL_ENV_PREFIX,
    ) -> None:
        self._storage = storage
        self._credential_store = credential_store
        self._environ = environ if environ is not None else _os.environ
        self._env_prefix = env_prefix

    def env_var_for(self, provider_id: api_types.ProviderId) -> str:
        """Environment variable consulted when no key is stored."""
        config = registry.get_provider_config(provider_id)
        return credentials.credential_env_var(config.credential_key, self._env_prefix)

    # =========================================================================
    # Credentials
    # =========================================================================

    def get_credential(self, provider_id: api_types.ProviderId) -> str | None:
        """
        Resolve the API key for a provider.

        Stored key first, then the environment fallback. Empty values count
        as absent. Never raises.
        """
        if not registry.is_provider_id(provider_id):
            return None
        config = registry.AI_PROVIDERS[provider_id]

        try:
            saved_key = self._credential_store.get_api_key(config.credential_key)
        except Exception as e:
            _logger.warning(
                "Error loading %s API key from credential store: %s",
                config.display_name,
                e,
            )
            saved_key = None
        if saved_key:
            return saved_key

        env_var = credentials.credential_env_var(config.credential_key, self._env_prefix)
        try:
            env_key = self._environ.get(env_var)
        except Exception as e:
            _logger.warning("Error reading %s from environment: %s", env_var, e)
            env_key = None
        return env_key or None

    # =========================================================================
    # Selected provider
    # =========================================================================

    def load_selected_provider(self) -> PreferenceLookup:
        """Read the selected provider, reporting where the answer came from."""
        try:
            saved = self._storage.get_item(_constants.SELECTED_PROVIDER_KEY)
        except Exception as e:
            _logger.error("Error loading selected provider: %s", e)
            return PreferenceLookup(
                provider=_constants.DEFAULT_PROVIDER,  # type: ignore[arg-type]
                source="default",
                error=e,
            )

        if registry.is_provider_id(saved):
            return PreferenceLookup(provider=saved, source="stored")

        if saved is not None:
            _logger.debug("Ignoring unknown saved provider %r", saved)
        return PreferenceLookup(
            provider=_constants.DEFAULT_PROVIDER,  # type: ignore[arg-type]
            source="default",
        )

    def get_selected_provider(self) -> api_types.ProviderId:
        """Selected provider, or the default when none (or garbage) is saved."""
        return self.load_selected_provider().provider

    def set_selected_provider(self, provider_id: api_types.ProviderId) -> bool:
        """
        Save the selected provider.

        Best-effort: storage failures are logged and reported by returning
        False, never raised.
        """
        try:
            self._storage.set_item(_constants.SELECTED_PROVIDER_KEY, provider_id)
        except Exception as e:
            _logger.error("Error saving selected provider: %s", e)
            return False
        return True
