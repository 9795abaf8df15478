"""Acumulador de lotes — paginação interna com exclusões.

Cada rodada pede ao ProspectClient um lote, descarta nomes já vistos e
acumula o restante até atingir a meta, esgotar as rodadas ou parar de
haver progresso. Resultado parcial é um desfecho válido.

Garantias:
- Nenhum nome repetido no resultado
- No máximo `max_rounds` chamadas ao cliente por busca
- Rodada é atômica: falha no meio não mescla nada daquela rodada
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ai.config.settings import ProspectingSettings, get_prospecting_settings
from config.logging import log_fallback

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from ai.models.contact import ContactRecord
    from ai.models.search_params import LatLng, SearchParams
    from ai.services.prospect_client import ProspectClient

logger = logging.getLogger(__name__)


def filter_new_contacts(
    batch: Sequence[ContactRecord],
    seen_names: set[str],
) -> list[ContactRecord]:
    """Remove contatos cujo nome já foi visto (comparação exata).

    Também elimina duplicatas dentro do próprio lote.
    """
    fresh: list[ContactRecord] = []
    batch_names: set[str] = set()
    for contact in batch:
        if contact.name in seen_names or contact.name in batch_names:
            continue
        batch_names.add(contact.name)
        fresh.append(contact)
    return fresh


def rank_by_completeness(contacts: Sequence[ContactRecord]) -> list[ContactRecord]:
    """Ordena (estável) pelos mais enriquecidos primeiro."""
    return sorted(contacts, key=lambda c: c.completeness_score(), reverse=True)


class BatchAccumulator:
    """Executa a busca completa em até N rodadas sequenciais."""

    def __init__(
        self,
        client: ProspectClient,
        settings: ProspectingSettings | None = None,
        sleep: Callable[[float], Awaitable[object]] | None = None,
    ) -> None:
        self._client = client
        self._settings = settings or get_prospecting_settings()
        self._sleep = sleep or asyncio.sleep

    def target_for(self, params: SearchParams) -> int:
        """Meta de contatos: menor quando a busca profunda está ativa."""
        batch = self._settings.batch
        return batch.deep_search_target_count if params.deep_search_active else batch.target_count

    def request_size(self, needed: int) -> int:
        """Quantidade pedida ao modelo (com margem para descartes)."""
        batch = self._settings.batch
        return max(batch.min_request_count, needed + batch.over_request_margin)

    async def search(
        self,
        params: SearchParams,
        *,
        lat_lng: LatLng | None = None,
    ) -> list[ContactRecord]:
        """Busca contatos até a meta.

        Args:
            params: Parâmetros de busca (exclude_names semeia as exclusões)
            lat_lng: Dica geográfica repassada ao cliente

        Returns:
            Contatos acumulados, sem nomes repetidos (pode ser vazio)

        Raises:
            ConfigurationError | UpstreamError: Falha na primeira rodada
        """
        batch_cfg = self._settings.batch
        target = self.target_for(params)
        collected: list[ContactRecord] = []
        exclusions: list[str] = list(params.exclude_names)
        seen_names: set[str] = set(exclusions)

        for round_number in range(1, batch_cfg.max_rounds + 1):
            needed = target - len(collected)
            requested = self.request_size(needed)

            try:
                batch = await self._client.fetch_batch(
                    params,
                    exclusions,
                    requested,
                    lat_lng=lat_lng,
                )
            except Exception as e:
                if round_number == 1:
                    raise
                log_fallback(
                    logger,
                    "batch_accumulator",
                    reason=f"round_{round_number}_failed: {type(e).__name__}",
                    collected=len(collected),
                )
                break

            if not batch:
                logger.info(
                    "batch_round_empty",
                    extra={"round": round_number, "collected": len(collected)},
                )
                break

            fresh = filter_new_contacts(batch, seen_names)
            if not fresh:
                logger.info(
                    "batch_round_no_new_contacts",
                    extra={"round": round_number, "returned": len(batch)},
                )
                break

            if params.deep_search_active:
                fresh = rank_by_completeness(fresh)

            collected.extend(fresh)
            for contact in fresh:
                exclusions.append(contact.name)
                seen_names.add(contact.name)

            logger.info(
                "batch_round_completed",
                extra={
                    "round": round_number,
                    "requested": requested,
                    "returned": len(batch),
                    "accepted": len(fresh),
                    "collected": len(collected),
                    "target": target,
                },
            )

            if len(collected) >= target:
                break
            if round_number < batch_cfg.max_rounds:
                await self._sleep(batch_cfg.round_pause_seconds)

        return collected
