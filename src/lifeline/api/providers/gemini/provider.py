"""
Google Gemini provider caller.

Gemini model availability differs between API keys and regions, and each
model has its own quota. The caller therefore walks an ordered list of
candidate models and moves on when a model is missing (404) or out of
quota (429). Any other failure stops the walk.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import typing as _typing

import lifeline.api.base as base
import lifeline.api.errors as errors
import lifeline.api.types as types
import lifeline.constants as _constants

_logger = _logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

RECOVERABLE_STATUS_CODES: frozenset[int] = frozenset({404, 429})
"""Statuses that reject one model but leave the others worth trying."""


def is_recoverable(error: errors.LifelineAPIError) -> bool:
    """
    Whether a failure only rules out the current candidate model.

    Decided on the structured status code, never on message text.
    """
    if isinstance(error, errors.HttpError):
        return error.status_code in RECOVERABLE_STATUS_CODES
    # 2xx with parsed JSON but nothing usable in it
    return isinstance(error, errors.MalformedResponseError) and not isinstance(
        error, errors.UnparsableResponseError
    )


def build_payload(prompt: str) -> dict[str, _typing.Any]:
    """Build the generateContent request body."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": _constants.DEFAULT_TEMPERATURE,
            "topK": _constants.GEMINI_TOP_K,
            "topP": _constants.GEMINI_TOP_P,
            "maxOutputTokens": _constants.DEFAULT_MAX_TOKENS,
        },
    }


def extract_text(data: _typing.Any) -> str | None:
    """Return candidates[0].content.parts[0].text, or None if absent."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None


class GeminiCaller(base.ProviderCaller):
    """Caller for the Gemini generateContent endpoint."""

    provider_id: _typing.ClassVar[types.ProviderId] = "gemini"
    label: _typing.ClassVar[str] = "Gemini"

    @staticmethod
    def endpoint(model: str) -> str:
        return f"{GEMINI_API_BASE}/models/{model}:generateContent"

    async def call(self, prompt: str, api_key: str, model: str | None = None) -> str:
        """
        Try each candidate model in order and return the first answer.

        Raises:
            HttpError: A candidate failed with a non-recoverable status.
            TransportError: The HTTP exchange failed.
            UnparsableResponseError: A candidate answered 2xx with a body
                that is not JSON.
            AllCandidatesExhaustedError: Every candidate was rejected with a
                recoverable failure.
        """
        models_to_try = [model] if model else list(self.config.candidate_models)
        last_error: errors.LifelineAPIError | None = None

        for model_name in models_to_try:
            try:
                return await self._generate(model_name, prompt, api_key)
            except errors.LifelineAPIError as e:
                if not is_recoverable(e):
                    raise
                _logger.warning(
                    "Gemini model %s unavailable (%s), trying next candidate",
                    model_name,
                    e,
                )
                last_error = e

        raise errors.AllCandidatesExhaustedError(
            self.provider_id,
            models_to_try,
            last_error,
        )

    async def _generate(self, model: str, prompt: str, api_key: str) -> str:
        """Issue one generateContent request against a single model."""
        _logger.debug("Requesting Gemini model %s", model)
        response = await self._post(
            self.endpoint(model),
            build_payload(prompt),
            params={"key": api_key},
        )

        if not response.is_success:
            raise self._http_error(response)

        try:
            data = response.json()
        except (_json.JSONDecodeError, UnicodeDecodeError) as e:
            raise errors.UnparsableResponseError(
                f"Invalid response from Gemini model {model}",
                self.provider_id,
            ) from e

        text = extract_text(data)
        if text is None:
            raise errors.MalformedResponseError(
                f"Invalid response from Gemini model {model}",
                self.provider_id,
            )
        return text
