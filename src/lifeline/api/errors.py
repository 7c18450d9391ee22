"""
Exceptions raised by provider callers and the dispatcher.

Every message is human-readable and meant to be shown to the user verbatim.
"""

from __future__ import annotations

import typing as _typing


class LifelineAPIError(Exception):
    """Base class for all dispatch failures."""

    def __init__(self, message: str, provider_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.provider_id = provider_id


class MissingCredentialError(LifelineAPIError):
    """No API key is configured for the selected provider."""

    def __init__(self, provider_id: str, display_name: str, env_var: str) -> None:
        super().__init__(
            f"Please configure your {display_name} API key "
            f"(save it in your credentials or set {env_var}).",
            provider_id,
        )
        self.display_name = display_name
        self.env_var = env_var


class UnsupportedProviderError(LifelineAPIError):
    """Provider id is outside the supported set."""

    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Unsupported AI provider: {provider_id}", provider_id)


class HttpError(LifelineAPIError):
    """Provider answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        provider_id: str | None = None,
    ) -> None:
        super().__init__(message, provider_id)
        self.status_code = status_code


class MalformedResponseError(LifelineAPIError):
    """Provider answered 2xx but the body did not have the expected shape."""


class UnparsableResponseError(MalformedResponseError):
    """Provider answered 2xx with a body that is not valid JSON."""


class TransportError(LifelineAPIError):
    """The HTTP exchange itself failed (connection, timeout, protocol)."""


class AllCandidatesExhaustedError(LifelineAPIError):
    """Every candidate model was rejected with a recoverable failure."""

    def __init__(
        self,
        provider_id: str,
        models: _typing.Sequence[str],
        last_error: LifelineAPIError | None = None,
    ) -> None:
        super().__init__(
            "All Gemini models failed. Please check your API key and quota.",
            provider_id,
        )
        self.models = tuple(models)
        self.last_error = last_error
