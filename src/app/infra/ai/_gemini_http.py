"""Helper para chamadas HTTP à API Gemini (generateContent).

Implementação concreta de IO: classifica falhas na fronteira do
transporte (transitória vs definitiva) e normaliza a resposta.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from ai.models.grounded_query import CitationSource, GroundedResponse, GroundingCitation
from ai.utils.retry import TRANSIENT_STATUS_CODES, TRANSIENT_STATUS_NAMES
from utils.errors import ConfigurationError, UpstreamError, UpstreamTransientError

if TYPE_CHECKING:
    from ai.models.grounded_query import GroundedQuery

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-goog-api-key"
TIMEOUT_STATUS = "DEADLINE_EXCEEDED"


def build_generate_url(base_url: str, model: str) -> str:
    """URL do endpoint generateContent para o modelo."""
    return f"{base_url.rstrip('/')}/models/{model}:generateContent"


def build_generate_payload(query: GroundedQuery) -> dict[str, Any]:
    """Corpo da requisição generateContent."""
    payload: dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": query.prompt}]}],
        "generationConfig": {"temperature": query.temperature},
    }
    payload.update(query.tools.to_payload())
    return payload


def _citation_source(data: Any) -> CitationSource | None:
    if not isinstance(data, Mapping):
        return None
    title = data.get("title")
    uri = data.get("uri")
    return CitationSource(
        title=title if isinstance(title, str) else "",
        uri=uri if isinstance(uri, str) else "",
    )


def parse_grounding_citations(candidate: Mapping[str, Any]) -> tuple[GroundingCitation, ...]:
    """Extrai `groundingMetadata.groundingChunks` (mapas e/ou web)."""
    metadata = candidate.get("groundingMetadata")
    if not isinstance(metadata, Mapping):
        return ()
    chunks = metadata.get("groundingChunks")
    if not isinstance(chunks, list):
        return ()

    citations: list[GroundingCitation] = []
    for chunk in chunks:
        if not isinstance(chunk, Mapping):
            continue
        maps = _citation_source(chunk.get("maps"))
        web = _citation_source(chunk.get("web"))
        if maps is None and web is None:
            continue
        citations.append(GroundingCitation(maps=maps, web=web))
    return tuple(citations)


def parse_generate_response(data: Any) -> GroundedResponse:
    """Normaliza o JSON de generateContent em GroundedResponse.

    Concatena todas as partes de texto do primeiro candidato.
    """
    if not isinstance(data, Mapping):
        return GroundedResponse(text=None)
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return GroundedResponse(text=None)
    candidate = candidates[0]
    if not isinstance(candidate, Mapping):
        return GroundedResponse(text=None)

    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, Mapping) else None
    texts: list[str] = []
    if isinstance(parts, list):
        for part in parts:
            if isinstance(part, Mapping) and isinstance(part.get("text"), str):
                texts.append(part["text"])

    finish_reason = candidate.get("finishReason")
    return GroundedResponse(
        text="".join(texts) or None,
        citations=parse_grounding_citations(candidate),
        finish_reason=finish_reason if isinstance(finish_reason, str) else None,
    )


def classify_http_error(response: httpx.Response) -> UpstreamError:
    """Converte resposta de erro em UpstreamError/UpstreamTransientError."""
    message: str | None = None
    status: str | None = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping) and isinstance(body.get("error"), Mapping):
        error = body["error"]
        raw_message = error.get("message")
        raw_status = error.get("status")
        message = str(raw_message) if raw_message else None
        status = raw_status if isinstance(raw_status, str) and raw_status else None
    if not message:
        message = response.text[:500] or f"HTTP {response.status_code}"

    transient = (
        response.status_code in TRANSIENT_STATUS_CODES or status in TRANSIENT_STATUS_NAMES
    )
    error_cls = UpstreamTransientError if transient else UpstreamError
    return error_cls(str(message), status_code=response.status_code, status=status)


async def call_gemini_api(
    *,
    http_client: httpx.AsyncClient,
    api_key: str,
    base_url: str,
    query: GroundedQuery,
) -> GroundedResponse:
    """Executa uma chamada generateContent.

    Args:
        http_client: Cliente HTTP async
        api_key: Chave da API Gemini
        base_url: URL base da API
        query: Consulta montada (prompt, ferramentas, modelo, temperatura)

    Returns:
        GroundedResponse (texto pode ser None)

    Raises:
        ConfigurationError: Chave ausente (antes de qualquer IO)
        UpstreamTransientError: 500/503, INTERNAL/UNAVAILABLE, timeout de
            conexão ou falha de rede
        UpstreamError: Timeout de leitura/escrita (DEADLINE_EXCEEDED) e
            demais falhas
    """
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY não configurada")

    headers = {
        API_KEY_HEADER: api_key,
        "Content-Type": "application/json",
    }
    url = build_generate_url(base_url, query.model)

    try:
        response = await http_client.post(
            url,
            headers=headers,
            json=build_generate_payload(query),
        )
    except httpx.ConnectTimeout as e:
        logger.warning("gemini_connect_timeout", extra={"model": query.model})
        raise UpstreamTransientError(f"Timeout de conexão com o Gemini: {e}") from e
    except httpx.TimeoutException as e:
        # Timeout de leitura/escrita não é repetido
        logger.warning(
            "gemini_timeout",
            extra={"model": query.model, "error_type": type(e).__name__},
        )
        raise UpstreamError(
            f"Timeout na chamada ao Gemini: {e}",
            status=TIMEOUT_STATUS,
        ) from e
    except httpx.TransportError as e:
        logger.warning(
            "gemini_transport_error",
            extra={"model": query.model, "error_type": type(e).__name__},
        )
        raise UpstreamTransientError(f"Falha de rede na chamada ao Gemini: {e}") from e

    if response.is_error:
        error = classify_http_error(response)
        logger.warning(
            "gemini_http_error",
            extra={
                "model": query.model,
                "status_code": response.status_code,
                "status": error.status,
                "transient": isinstance(error, UpstreamTransientError),
            },
        )
        raise error

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError("Resposta do Gemini não é JSON válido") from e

    result = parse_generate_response(data)
    logger.debug(
        "gemini_call_success",
        extra={
            "model": query.model,
            "finish_reason": result.finish_reason,
            "citations": len(result.citations),
            "tokens_used": (data.get("usageMetadata") or {}).get("totalTokenCount")
            if isinstance(data, Mapping)
            else None,
        },
    )
    return result
