"""
Shared caller for OpenAI-style chat-completions APIs.

DeepSeek and OpenAI speak the same request/response contract; subclasses
only set the endpoint and the vendor label. There is no model fallback:
one request with the requested (or default) model.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import typing as _typing

import lifeline.api.base as base
import lifeline.api.errors as errors
import lifeline.constants as _constants

_logger = _logging.getLogger(__name__)


def build_payload(prompt: str, model: str) -> dict[str, _typing.Any]:
    """Build the two-message chat-completions request body."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": _constants.SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        "temperature": _constants.DEFAULT_TEMPERATURE,
        "max_tokens": _constants.DEFAULT_MAX_TOKENS,
    }


def extract_content(data: _typing.Any) -> str | None:
    """Return choices[0].message.content, or None if absent."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) and content else None


class ChatCompletionsCaller(base.ProviderCaller):
    """Caller for a /v1/chat/completions endpoint with bearer auth."""

    url: _typing.ClassVar[str]

    async def call(self, prompt: str, api_key: str, model: str | None = None) -> str:
        """
        Send one chat-completions request.

        Raises:
            HttpError: Non-2xx status (vendor message when available).
            MalformedResponseError: 2xx without choices[0].message.content.
                UnparsableResponseError when the body is not JSON.
            TransportError: The HTTP exchange failed.
        """
        model_to_use = model or self.config.default_model
        _logger.debug("Requesting %s model %s", self.label, model_to_use)

        response = await self._post(
            self.url,
            build_payload(prompt, model_to_use),
            headers={"Authorization": f"Bearer {api_key}"},
        )

        if not response.is_success:
            raise self._http_error(response)

        try:
            data = response.json()
        except (_json.JSONDecodeError, UnicodeDecodeError) as e:
            raise errors.UnparsableResponseError(
                f"Invalid response from {self.label} API",
                self.provider_id,
            ) from e

        content = extract_content(data)
        if content is None:
            raise errors.MalformedResponseError(
                f"Invalid response from {self.label} API",
                self.provider_id,
            )
        return content
