"""Fakes do pipeline de prospecção para testes."""

from __future__ import annotations

import asyncio
from typing import Any

from ai.models.contact import ContactRecord
from ai.models.grounded_query import GroundedQuery, GroundedResponse
from ai.models.search_params import LatLng, SearchParams


def make_contact(name: str, **fields: Any) -> ContactRecord:
    return ContactRecord(name=name, **fields)


def make_contacts(prefix: str, count: int, **fields: Any) -> list[ContactRecord]:
    return [make_contact(f"{prefix} {i}", **fields) for i in range(1, count + 1)]


class FakeSleep:
    """Substitui asyncio.sleep registrando as esperas."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeTransport:
    """Transporte roteirizado: cada item é uma resposta ou exceção."""

    def __init__(self, *script: GroundedResponse | BaseException) -> None:
        self._script = list(script)
        self.queries: list[GroundedQuery] = []

    async def generate(self, query: GroundedQuery) -> GroundedResponse:
        self.queries.append(query)
        if not self._script:
            return GroundedResponse(text=None)
        item = self._script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class ScriptedProspectClient:
    """ProspectClient roteirizado por rodada (lista ou exceção)."""

    def __init__(self, *batches: list[ContactRecord] | BaseException) -> None:
        self._batches = list(batches)
        self.calls: list[dict[str, Any]] = []

    async def fetch_batch(
        self,
        params: SearchParams,
        exclusions: list[str],
        target_count: int,
        *,
        lat_lng: LatLng | None = None,
    ) -> list[ContactRecord]:
        self.calls.append(
            {
                "params": params,
                "exclusions": list(exclusions),
                "target_count": target_count,
                "lat_lng": lat_lng,
            }
        )
        if not self._batches:
            return []
        batch = self._batches.pop(0)
        if isinstance(batch, BaseException):
            raise batch
        return list(batch)


class ControlledAccumulator:
    """Acumulador cujas buscas só resolvem quando o teste manda.

    Cada chamada a `search` cria um Future pendente em `pending`.
    """

    def __init__(self) -> None:
        self.pending: list[asyncio.Future[list[ContactRecord]]] = []
        self.calls: list[SearchParams] = []

    async def search(
        self,
        params: SearchParams,
        *,
        lat_lng: LatLng | None = None,
    ) -> list[ContactRecord]:
        future: asyncio.Future[list[ContactRecord]] = asyncio.get_running_loop().create_future()
        self.calls.append(params)
        self.pending.append(future)
        return await future

    async def wait_for_calls(self, count: int) -> None:
        while len(self.calls) < count:
            await asyncio.sleep(0)


class InstantAccumulator:
    """Acumulador que devolve resultados roteirizados imediatamente."""

    def __init__(self, *results: list[ContactRecord] | BaseException) -> None:
        self._results = list(results)
        self.calls: list[SearchParams] = []

    async def search(
        self,
        params: SearchParams,
        *,
        lat_lng: LatLng | None = None,
    ) -> list[ContactRecord]:
        self.calls.append(params)
        item = self._results.pop(0) if self._results else []
        if isinstance(item, BaseException):
            raise item
        return list(item)
