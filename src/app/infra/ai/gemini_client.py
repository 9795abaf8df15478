"""Cliente Gemini real para produção.

Implementa GroundedGenerationProtocol com chamadas à API REST do Gemini
usando httpx. Sem retry aqui: o retry fica no ProspectClient.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from ai.core.client import GroundedGenerationProtocol
from app.infra.ai._gemini_http import call_gemini_api
from config.settings.ai.gemini import get_gemini_settings
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from ai.models.grounded_query import GroundedQuery, GroundedResponse
    from config.settings.ai.gemini import GeminiSettings

logger = logging.getLogger(__name__)


class GeminiClient(GroundedGenerationProtocol):
    """Transporte de geração com grounding (mapas + busca web)."""

    __slots__ = ("_api_key", "_http_client", "_owns_http_client", "_settings")

    def __init__(
        self,
        settings: GeminiSettings | None = None,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Inicializa cliente Gemini.

        Args:
            settings: Configurações do Gemini (env se None)
            api_key: Sobrescreve a chave das configurações
            http_client: Cliente HTTP compartilhado (criado sob demanda se None)
        """
        self._settings = settings or get_gemini_settings()
        self._api_key = api_key if api_key is not None else self._settings.api_key
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _get_http_client(self) -> httpx.AsyncClient:
        """Obtém ou cria cliente HTTP."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.timeout_seconds, connect=10.0),
            )
        return self._http_client

    async def generate(self, query: GroundedQuery) -> GroundedResponse:
        if not self._api_key:
            logger.error("gemini_api_key_missing", extra={"model": query.model})
            raise ConfigurationError("GEMINI_API_KEY não configurada")
        return await call_gemini_api(
            http_client=self._get_http_client(),
            api_key=self._api_key,
            base_url=self._settings.base_url,
            query=query,
        )

    async def close(self) -> None:
        """Fecha o cliente HTTP quando criado internamente."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
