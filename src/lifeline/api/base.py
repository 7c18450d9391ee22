"""
Abstract base class for provider callers.

A caller performs the HTTP exchange with one vendor's REST API and extracts
the generated text. All callers (Gemini, DeepSeek, OpenAI) implement this
interface.
"""

from __future__ import annotations

import abc as _abc
import json as _json
import logging as _logging
import typing as _typing

import httpx as _httpx

import lifeline.api.errors as errors
import lifeline.api.registry as registry
import lifeline.api.types as types
import lifeline.constants as _constants

_logger = _logging.getLogger(__name__)


def extract_error_message(response: _httpx.Response) -> str | None:
    """
    Pull the vendor's human-readable message out of an error response.

    Both Google and OpenAI-style APIs answer with
    ``{"error": {"message": "..."}}``. Returns None when the body is not JSON
    or has no such message.
    """
    try:
        data = response.json()
    except (_json.JSONDecodeError, UnicodeDecodeError):
        return None

    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class ProviderCaller(_abc.ABC):
    """
    Abstract base for provider callers.

    Callers share an httpx.AsyncClient. When none is given, the caller
    creates its own and closes it in close().
    """

    provider_id: _typing.ClassVar[types.ProviderId]

    label: _typing.ClassVar[str]
    """Short vendor name used in error messages (e.g. 'DeepSeek')."""

    def __init__(
        self,
        client: _httpx.AsyncClient | None = None,
        *,
        timeout: float = _constants.DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self._owns_client = client is None
        self._client = client or _httpx.AsyncClient(timeout=timeout)

    @property
    def config(self) -> types.ProviderConfig:
        return registry.AI_PROVIDERS[self.provider_id]

    @property
    def client(self) -> _httpx.AsyncClient:
        return self._client

    @_abc.abstractmethod
    async def call(self, prompt: str, api_key: str, model: str | None = None) -> str:
        """
        Generate text for prompt.

        Args:
            prompt: User prompt.
            api_key: Provider API key.
            model: Model override. If None, the provider picks its default
                (or, for Gemini, walks its candidate list).

        Returns:
            Generated text.

        Raises:
            LifelineAPIError: On any failure.
        """
        ...

    async def _post(
        self,
        url: str,
        payload: dict[str, _typing.Any],
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> _httpx.Response:
        """POST a JSON payload, translating transport failures."""
        try:
            return await self._client.post(
                url,
                json=payload,
                headers=headers,
                params=params,
            )
        except _httpx.HTTPError as e:
            # url only; Gemini keys travel in params
            _logger.debug("%s request to %s failed: %r", self.label, url, e)
            raise errors.TransportError(
                f"{self.label} API request failed: {e}",
                self.provider_id,
            ) from e

    def _http_error(self, response: _httpx.Response) -> errors.HttpError:
        """Build the HttpError for a non-2xx response."""
        message = extract_error_message(response)
        return errors.HttpError(
            response.status_code,
            message or f"{self.label} API error: {response.status_code}",
            self.provider_id,
        )

    async def close(self) -> None:
        """Close the HTTP client if this caller created it."""
        if self._owns_client:
            await self._client.aclose()
