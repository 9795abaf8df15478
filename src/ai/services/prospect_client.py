"""Cliente de prospecção — uma chamada de geração com grounding.

Fluxo de uma rodada:
1. Monta a consulta (prompt + ferramentas + modelo)
2. Chama o transporte via retry com backoff
3. Parseia o texto em contatos (falha de parse = lista vazia)
4. Preenche maps_link/website ausentes a partir das citações
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from ai.config.settings import ProspectingSettings, get_prospecting_settings
from ai.prompts.prospecting_prompt import build_grounded_query
from ai.rules.enrichment import enrich_contacts
from ai.utils.contact_parser import parse_contacts_with_diagnostic
from ai.utils.retry import run_with_retry
from config.logging import log_fallback
from utils.errors import ProspectingError, UpstreamEmptyResponse, UpstreamError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from ai.core.client import GroundedGenerationProtocol
    from ai.models.contact import ContactRecord
    from ai.models.grounded_query import GroundedQuery, GroundedResponse
    from ai.models.search_params import LatLng, SearchParams

logger = logging.getLogger(__name__)


class ProspectClient:
    """Executa uma rodada de prospecção contra o transporte de IA."""

    __slots__ = ("_settings", "_sleep", "_transport")

    def __init__(
        self,
        transport: GroundedGenerationProtocol,
        settings: ProspectingSettings | None = None,
        sleep: Callable[[float], Awaitable[object]] | None = None,
    ) -> None:
        """Inicializa cliente.

        Args:
            transport: Implementação do GroundedGenerationProtocol
            settings: Configurações de prospecção
            sleep: Função de espera do backoff (injetável em testes)
        """
        self._transport = transport
        self._settings = settings or get_prospecting_settings()
        self._sleep = sleep or asyncio.sleep

    async def fetch_batch(
        self,
        params: SearchParams,
        exclusions: Sequence[str],
        target_count: int,
        *,
        lat_lng: LatLng | None = None,
    ) -> list[ContactRecord]:
        """Busca um lote de contatos.

        Args:
            params: Parâmetros de busca
            exclusions: Nomes que o modelo deve evitar
            target_count: Quantidade solicitada ao modelo
            lat_lng: Dica geográfica para a ferramenta de mapas

        Returns:
            Contatos parseados (vazio quando a resposta não tem JSON válido)

        Raises:
            ConfigurationError: Credencial ausente
            UpstreamError: Falha upstream não recuperável
        """
        query = build_grounded_query(
            params,
            exclusions,
            target_count,
            lat_lng=lat_lng,
            settings=self._settings,
        )
        started_at = time.perf_counter()
        response = await self._generate(query)

        try:
            raw_text = response.require_text()
        except UpstreamEmptyResponse as e:
            logger.warning("prospect_empty_response", extra={"reason": str(e)})
            raw_text = ""

        outcome = parse_contacts_with_diagnostic(raw_text)
        if outcome.diagnostic is not None:
            log_fallback(logger, "contact_parser", reason=outcome.diagnostic, collected=0)

        contacts = enrich_contacts(outcome.contacts, response.citations)
        logger.info(
            "prospect_batch_fetched",
            extra={
                "model": query.model,
                "requested": target_count,
                "parsed": len(contacts),
                "dropped": outcome.dropped,
                "citations": len(response.citations),
                "elapsed_ms": round((time.perf_counter() - started_at) * 1000, 1),
            },
        )
        return contacts

    async def _generate(self, query: GroundedQuery) -> GroundedResponse:
        """Chama o transporte com retry; erros fora da taxonomia viram UpstreamError."""
        retry = self._settings.retry
        try:
            return await run_with_retry(
                lambda: self._transport.generate(query),
                retry.max_retries,
                retry.initial_delay_ms,
                sleep=self._sleep,
            )
        except ProspectingError:
            raise
        except Exception as e:
            raise UpstreamError(str(e) or type(e).__name__) from e
