"""Tests for the Gemini caller and its candidate-model fallback."""

import json as _json

import httpx as _httpx
import pytest as _pytest

import lifeline.api.errors as errors
import lifeline.api.providers.gemini.provider as gemini_provider


def _status(code: int, message: str | None = None) -> _httpx.Response:
    if message is None:
        return _httpx.Response(code, text="")
    return _httpx.Response(code, json={"error": {"code": code, "message": message}})


class TestIsRecoverable:
    """Tests for the per-model recoverability predicate."""

    @_pytest.mark.parametrize("status_code", [404, 429])
    def test_recoverable_statuses(self, status_code: int) -> None:
        """Model-not-found and quota errors only rule out one model."""
        error = errors.HttpError(status_code, "whatever", "gemini")
        assert gemini_provider.is_recoverable(error) is True

    @_pytest.mark.parametrize("status_code", [400, 401, 403, 500, 503])
    def test_fatal_statuses(self, status_code: int) -> None:
        """Other statuses stop the walk."""
        error = errors.HttpError(status_code, "whatever", "gemini")
        assert gemini_provider.is_recoverable(error) is False

    def test_message_text_is_not_inspected(self) -> None:
        """A message mentioning 429 does not make a 500 recoverable."""
        error = errors.HttpError(500, "upstream returned 429", "gemini")
        assert gemini_provider.is_recoverable(error) is False

    def test_transport_error_is_fatal(self) -> None:
        """Network failures are not tied to one model."""
        error = errors.TransportError("connection refused", "gemini")
        assert gemini_provider.is_recoverable(error) is False

    def test_missing_text_is_recoverable(self) -> None:
        """A parsed 2xx with no usable text moves on to the next model."""
        error = errors.MalformedResponseError("empty", "gemini")
        assert gemini_provider.is_recoverable(error) is True

    def test_unparsable_body_is_fatal(self) -> None:
        """A 2xx body that is not JSON stops the walk."""
        error = errors.UnparsableResponseError("not json", "gemini")
        assert gemini_provider.is_recoverable(error) is False


class TestPayload:
    """Tests for request shaping."""

    def test_build_payload(self) -> None:
        """The prompt is wrapped in contents/parts with fixed generation settings."""
        payload = gemini_provider.build_payload("How do I treat a burn?")
        assert payload == {
            "contents": [{"parts": [{"text": "How do I treat a burn?"}]}],
            "generationConfig": {
                "temperature": 0.7,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 2048,
            },
        }

    def test_endpoint(self) -> None:
        """Each model has its own generateContent endpoint."""
        assert gemini_provider.GeminiCaller.endpoint("gemini-pro") == (
            "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
        )

    @_pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
            {"candidates": [{"finishReason": "SAFETY"}]},
            ["not", "a", "dict"],
        ],
    )
    def test_extract_text_missing(self, data: object) -> None:
        """Absent or empty text yields None."""
        assert gemini_provider.extract_text(data) is None


class TestGeminiCaller:
    """Tests for GeminiCaller.call."""

    @_pytest.mark.asyncio
    async def test_first_candidate_success(self, scripted_api, gemini_response) -> None:
        """A good first answer returns immediately."""
        backend = scripted_api(gemini_response("Apply cool water."))
        caller = gemini_provider.GeminiCaller(backend.client())

        result = await caller.call("burn?", "g-key")

        assert result == "Apply cool water."
        assert backend.call_count == 1
        request = backend.requests[0]
        assert request.method == "POST"
        assert request.url.params["key"] == "g-key"
        assert _json.loads(request.content) == gemini_provider.build_payload("burn?")

    @_pytest.mark.asyncio
    async def test_falls_through_404_and_429(self, scripted_api, gemini_response) -> None:
        """404 then 429 then 200 returns the third model's text after three calls."""
        backend = scripted_api(
            _status(404, "models/gemini-1.5-flash is not found"),
            _status(429, "Resource has been exhausted"),
            gemini_response("third model answer"),
        )
        caller = gemini_provider.GeminiCaller(backend.client())

        result = await caller.call("prompt", "g-key")

        assert result == "third model answer"
        assert backend.call_count == 3
        assert backend.paths == [
            "/v1beta/models/gemini-1.5-flash:generateContent",
            "/v1beta/models/gemini-1.5-flash-latest:generateContent",
            "/v1beta/models/gemini-2.0-flash-exp:generateContent",
        ]

    @_pytest.mark.asyncio
    async def test_all_candidates_exhausted(self, scripted_api) -> None:
        """Every candidate answering 429 raises exhaustion after one call each."""
        backend = scripted_api(*(_status(429, "quota") for _ in range(4)))
        caller = gemini_provider.GeminiCaller(backend.client())

        with _pytest.raises(errors.AllCandidatesExhaustedError) as exc_info:
            await caller.call("prompt", "g-key")

        assert backend.call_count == 4
        assert exc_info.value.models == caller.config.candidate_models
        assert isinstance(exc_info.value.last_error, errors.HttpError)
        assert exc_info.value.last_error.status_code == 429
        assert "All Gemini models failed" in str(exc_info.value)

    @_pytest.mark.asyncio
    async def test_fatal_status_stops_walk(self, scripted_api) -> None:
        """A 403 on the first model is raised without trying the rest."""
        backend = scripted_api(_status(403, "API key not valid"))
        caller = gemini_provider.GeminiCaller(backend.client())

        with _pytest.raises(errors.HttpError) as exc_info:
            await caller.call("prompt", "bad-key")

        assert backend.call_count == 1
        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == "API key not valid"

    @_pytest.mark.asyncio
    async def test_explicit_model_500(self, scripted_api) -> None:
        """A single requested model answering 500 fails after one call."""
        backend = scripted_api(_status(500))
        caller = gemini_provider.GeminiCaller(backend.client())

        with _pytest.raises(errors.HttpError) as exc_info:
            await caller.call("prompt", "g-key", model="gemini-pro")

        assert backend.call_count == 1
        assert backend.paths == ["/v1beta/models/gemini-pro:generateContent"]
        assert str(exc_info.value) == "Gemini API error: 500"

    @_pytest.mark.asyncio
    async def test_explicit_model_recoverable_exhausts(self, scripted_api) -> None:
        """A single requested model answering 404 exhausts the one-item list."""
        backend = scripted_api(_status(404))
        caller = gemini_provider.GeminiCaller(backend.client())

        with _pytest.raises(errors.AllCandidatesExhaustedError) as exc_info:
            await caller.call("prompt", "g-key", model="gemini-pro")

        assert backend.call_count == 1
        assert exc_info.value.models == ("gemini-pro",)

    @_pytest.mark.asyncio
    async def test_missing_text_tries_next_model(self, scripted_api, gemini_response) -> None:
        """A parsed 2xx without text moves on to the next candidate."""
        backend = scripted_api(
            _httpx.Response(200, json={"candidates": []}),
            _httpx.Response(200, json={"candidates": [{"finishReason": "SAFETY"}]}),
            gemini_response("ok"),
        )
        caller = gemini_provider.GeminiCaller(backend.client())

        assert await caller.call("prompt", "g-key") == "ok"
        assert backend.call_count == 3

    @_pytest.mark.asyncio
    async def test_non_json_body_stops_walk(self, scripted_api, gemini_response) -> None:
        """A 2xx that is not JSON is raised without trying the rest."""
        backend = scripted_api(
            _httpx.Response(200, text="<html>not json</html>"),
            gemini_response("never reached"),
        )
        caller = gemini_provider.GeminiCaller(backend.client())

        with _pytest.raises(errors.UnparsableResponseError) as exc_info:
            await caller.call("prompt", "g-key")

        assert backend.call_count == 1
        assert str(exc_info.value) == "Invalid response from Gemini model gemini-1.5-flash"

    @_pytest.mark.asyncio
    async def test_transport_error_is_fatal(self, scripted_api) -> None:
        """A connection failure is raised as TransportError without retrying."""
        backend = scripted_api(_httpx.ConnectError("connection refused"))
        caller = gemini_provider.GeminiCaller(backend.client())

        with _pytest.raises(errors.TransportError) as exc_info:
            await caller.call("prompt", "g-key")

        assert backend.call_count == 1
        assert exc_info.value.provider_id == "gemini"
        assert isinstance(exc_info.value.__cause__, _httpx.ConnectError)

    @_pytest.mark.asyncio
    async def test_recoverable_then_fatal(self, scripted_api) -> None:
        """A fatal status after a recoverable one still stops the walk."""
        backend = scripted_api(_status(404), _status(400, "Invalid argument"))
        caller = gemini_provider.GeminiCaller(backend.client())

        with _pytest.raises(errors.HttpError, match="Invalid argument"):
            await caller.call("prompt", "g-key")

        assert backend.call_count == 2


class TestClientOwnership:
    """Tests for HTTP client lifecycle."""

    @_pytest.mark.asyncio
    async def test_injected_client_not_closed(self, scripted_api) -> None:
        """close() leaves a shared client open."""
        client = scripted_api().client()
        caller = gemini_provider.GeminiCaller(client)

        await caller.close()

        assert client.is_closed is False
        await client.aclose()

    @_pytest.mark.asyncio
    async def test_owned_client_closed(self) -> None:
        """close() closes a client the caller created."""
        caller = gemini_provider.GeminiCaller()

        await caller.close()

        assert caller.client.is_closed is True
