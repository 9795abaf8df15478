"""Testes do transporte Gemini (httpx com MockTransport)."""

from __future__ import annotations

import json

import httpx
import pytest

from ai.models.grounded_query import GroundedQuery, ModelTier, ToolConfig
from ai.utils.retry import is_transient_error
from app.infra.ai import GeminiClient
from app.infra.ai._gemini_http import (
    API_KEY_HEADER,
    build_generate_payload,
    build_generate_url,
    classify_http_error,
    parse_generate_response,
)
from config.settings.ai.gemini import GeminiSettings
from utils.errors import ConfigurationError, UpstreamError, UpstreamTransientError

SETTINGS = GeminiSettings(api_key="test-key", base_url="https://gemini.test/v1beta")
QUERY = GroundedQuery(
    prompt="Liste clínicas",
    tools=ToolConfig(),
    model_tier=ModelTier.STANDARD,
    model="gemini-2.5-flash",
    temperature=0.2,
)

SUCCESS_BODY = {
    "candidates": [
        {
            "content": {"parts": [{"text": '[{"nome": '}, {"text": '"A"}]'}]},
            "finishReason": "STOP",
            "groundingMetadata": {
                "groundingChunks": [
                    {"maps": {"title": "Clínica A", "uri": "https://maps/a"}},
                    {"web": {"title": "Clínica A", "uri": "https://a.com"}},
                    {"other": {}},
                ]
            },
        }
    ],
    "usageMetadata": {"totalTokenCount": 321},
}


def _client(handler) -> tuple[GeminiClient, httpx.AsyncClient]:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiClient(settings=SETTINGS, http_client=http_client), http_client


class TestPayload:
    def test_url_and_payload(self) -> None:
        assert (
            build_generate_url("https://gemini.test/v1beta/", "gemini-2.5-flash")
            == "https://gemini.test/v1beta/models/gemini-2.5-flash:generateContent"
        )
        payload = build_generate_payload(QUERY)
        assert payload["contents"] == [{"role": "user", "parts": [{"text": "Liste clínicas"}]}]
        assert payload["generationConfig"] == {"temperature": 0.2}
        assert payload["tools"] == [{"googleMaps": {}}, {"googleSearch": {}}]
        assert "toolConfig" not in payload


class TestParseResponse:
    def test_concatenates_text_and_reads_citations(self) -> None:
        response = parse_generate_response(SUCCESS_BODY)

        assert response.text == '[{"nome": "A"}]'
        assert response.finish_reason == "STOP"
        assert len(response.citations) == 2
        assert response.citations[0].maps is not None
        assert response.citations[0].maps.uri == "https://maps/a"
        assert response.citations[1].web is not None
        assert response.citations[1].web.uri == "https://a.com"

    @pytest.mark.parametrize(
        "body",
        [None, [], {}, {"candidates": []}, {"candidates": [{"content": {"parts": []}}]}],
    )
    def test_missing_text_is_none(self, body: object) -> None:
        response = parse_generate_response(body)

        assert response.text is None
        assert response.citations == ()


class TestClassifyHttpError:
    @pytest.mark.parametrize("status_code", [500, 503])
    def test_server_errors_are_transient(self, status_code: int) -> None:
        error = classify_http_error(httpx.Response(status_code, text="boom"))

        assert isinstance(error, UpstreamTransientError)
        assert error.status_code == status_code
        assert str(error) == "boom"

    def test_textual_status_is_transient(self) -> None:
        body = {"error": {"code": 429, "message": "sobrecarga", "status": "UNAVAILABLE"}}

        error = classify_http_error(httpx.Response(429, json=body))

        assert isinstance(error, UpstreamTransientError)
        assert error.status == "UNAVAILABLE"
        assert str(error) == "sobrecarga"

    def test_client_errors_are_definitive(self) -> None:
        body = {"error": {"message": "API key not valid", "status": "INVALID_ARGUMENT"}}

        error = classify_http_error(httpx.Response(400, json=body))

        assert type(error) is UpstreamError
        assert error.status == "INVALID_ARGUMENT"

    def test_empty_body_uses_status_line(self) -> None:
        error = classify_http_error(httpx.Response(404))

        assert str(error) == "HTTP 404"


class TestGeminiClient:
    @pytest.mark.asyncio
    async def test_generate_success(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=SUCCESS_BODY)

        client, http_client = _client(handler)
        async with http_client:
            response = await client.generate(QUERY)

        assert response.text == '[{"nome": "A"}]'
        request = captured[0]
        assert request.headers[API_KEY_HEADER] == "test-key"
        assert str(request.url) == (
            "https://gemini.test/v1beta/models/gemini-2.5-flash:generateContent"
        )
        assert json.loads(request.content)["generationConfig"]["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_io(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=SUCCESS_BODY)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = GeminiClient(settings=SETTINGS, api_key="", http_client=http_client)

        async with http_client:
            with pytest.raises(ConfigurationError):
                await client.generate(QUERY)

        assert client.configured is False
        assert calls == []

    @pytest.mark.asyncio
    async def test_http_503_raises_transient(self) -> None:
        client, http_client = _client(lambda request: httpx.Response(503, text="indisponível"))

        async with http_client:
            with pytest.raises(UpstreamTransientError):
                await client.generate(QUERY)

    @pytest.mark.asyncio
    async def test_read_timeout_is_definitive(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("lento", request=request)

        client, http_client = _client(handler)
        async with http_client:
            with pytest.raises(UpstreamError, match="Timeout") as exc_info:
                await client.generate(QUERY)

        assert not isinstance(exc_info.value, UpstreamTransientError)
        assert exc_info.value.status == "DEADLINE_EXCEEDED"
        assert not is_transient_error(exc_info.value)

    @pytest.mark.asyncio
    async def test_connect_timeout_is_transient(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("sem resposta", request=request)

        client, http_client = _client(handler)
        async with http_client:
            with pytest.raises(UpstreamTransientError, match="conexão"):
                await client.generate(QUERY)

    @pytest.mark.asyncio
    async def test_connection_error_is_transient(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("sem rota", request=request)

        client, http_client = _client(handler)
        async with http_client:
            with pytest.raises(UpstreamTransientError, match="Falha de rede"):
                await client.generate(QUERY)

    @pytest.mark.asyncio
    async def test_invalid_json_is_definitive(self) -> None:
        client, http_client = _client(lambda request: httpx.Response(200, text="<html>"))

        async with http_client:
            with pytest.raises(UpstreamError, match="JSON"):
                await client.generate(QUERY)

    @pytest.mark.asyncio
    async def test_close_keeps_injected_client_open(self) -> None:
        client, http_client = _client(lambda request: httpx.Response(200, json=SUCCESS_BODY))

        await client.close()

        assert http_client.is_closed is False
        await http_client.aclose()
