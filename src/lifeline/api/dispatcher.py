"""
Dispatcher: route a prompt to the selected provider.

Resolution order for the provider:
1. Explicit `provider` argument
2. The selection saved in the preference store
3. The default provider (applied by the preference store)

The dispatcher performs no retries of its own. Caller failures propagate
unchanged.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import httpx as _httpx

import lifeline.api.base as base
import lifeline.api.errors as errors
import lifeline.api.providers as providers
import lifeline.api.registry as registry
import lifeline.constants as _constants

_logger = _logging.getLogger(__name__)

if _typing.TYPE_CHECKING:
    import lifeline.config as config
    import lifeline.preferences.store as preferences_store


class Dispatcher:
    """
    Routes prompts to provider callers.

    Use as an async context manager (or call close()) to release the HTTP
    client when the dispatcher created it.

    Args:
        preferences: Source of the selected provider and API keys.
        client: Shared HTTP client. Created (and owned) when omitted.
        timeout: Timeout for an owned client, in seconds.
        callers: Override the caller for some providers (mainly for tests).
    """

    def __init__(
        self,
        preferences: preferences_store.PreferenceStore,
        client: _httpx.AsyncClient | None = None,
        *,
        timeout: float = _constants.DEFAULT_HTTP_TIMEOUT,
        callers: _typing.Mapping[str, base.ProviderCaller] | None = None,
    ) -> None:
        self._preferences = preferences
        self._owns_client = client is None
        self._client = client or _httpx.AsyncClient(timeout=timeout)
        self._callers: dict[str, base.ProviderCaller] = {
            provider_id: caller_cls(self._client)
            for provider_id, caller_cls in providers.CALLER_TYPES.items()
        }
        if callers:
            self._callers.update(callers)

    @property
    def preferences(self) -> preferences_store.PreferenceStore:
        return self._preferences

    def get_caller(self, provider_id: str) -> base.ProviderCaller:
        """
        Return the caller for a provider.

        Raises:
            UnsupportedProviderError: If no caller handles provider_id.
        """
        caller = self._callers.get(provider_id)
        if caller is None:
            raise errors.UnsupportedProviderError(provider_id)
        return caller

    async def call_ai(self, prompt: str, provider: str | None = None) -> str:
        """
        Generate text for prompt with the given or selected provider.

        Args:
            prompt: User prompt.
            provider: Provider id. Defaults to the saved selection.

        Returns:
            Generated text.

        Raises:
            UnsupportedProviderError: provider is not a supported id.
            MissingCredentialError: No API key configured (no request sent).
            LifelineAPIError: Any failure from the provider caller.
        """
        selected = provider or self._preferences.get_selected_provider()
        provider_config = registry.get_provider_config(selected)
        caller = self.get_caller(selected)

        api_key = self._preferences.get_credential(provider_config.id)
        if not api_key:
            raise errors.MissingCredentialError(
                provider_config.id,
                provider_config.display_name,
                self._preferences.env_var_for(provider_config.id),
            )

        _logger.info("Calling %s API...", provider_config.display_name)
        return await caller.call(prompt, api_key)

    async def close(self) -> None:
        """Close the HTTP client if this dispatcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Dispatcher:
        return self

    async def __aexit__(self, *exc_info: _typing.Any) -> None:
        await self.close()


def create_preference_store(
    settings: config.Settings | None = None,
) -> preferences_store.PreferenceStore:
    """
    Build the preference store described by settings.

    The selected provider lives in the preferences JSON file. API keys come
    from the credentials file when one is configured, otherwise from the
    preferences file itself.
    """
    import lifeline.api.credentials as credentials
    import lifeline.config as config
    import lifeline.preferences as preferences

    if settings is None:
        settings = config.Settings()

    storage = preferences.JsonFileStore(settings.preferences_path)

    credential_store: credentials.CredentialStore
    if settings.credentials.file:
        credential_store = credentials.JsonCredentialStore(settings.credentials.file)
    else:
        credential_store = credentials.StorageCredentialStore(storage)

    return preferences.PreferenceStore(
        storage,
        credential_store,
        env_prefix=settings.credentials.env_prefix,
    )


def create_dispatcher(settings: config.Settings | None = None) -> Dispatcher:
    """
    Create a Dispatcher from configuration.

    Args:
        settings: Settings to use. Loaded from the environment and config
            files when omitted.

    Returns:
        Dispatcher owning its HTTP client.
    """
    import lifeline.config as config

    if settings is None:
        settings = config.Settings()

    return Dispatcher(
        create_preference_store(settings),
        timeout=settings.http.timeout,
    )
