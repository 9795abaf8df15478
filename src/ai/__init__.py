"""Módulo AI do Prospector IA.

Pipeline de prospecção com grounding (mapas + busca web):
1. GroundedQueryBuilder - monta prompt, ferramentas e modelo
2. ProspectClient - uma chamada ao modelo (retry + parse + enriquecimento)
3. BatchAccumulator - até 3 rodadas com exclusões, sem nomes repetidos

ai/ não faz IO direto: o transporte HTTP fica em app/infra/ai.
"""

from ai.config import ProspectingSettings, get_prospecting_settings
from ai.core import GroundedGenerationProtocol
from ai.models import ContactRecord, GroundedQuery, GroundedResponse, LatLng, SearchParams
from ai.prompts import build_grounded_query
from ai.services import BatchAccumulator, ProspectClient
from ai.utils import parse_contacts, run_with_retry

__all__ = [
    "BatchAccumulator",
    "ContactRecord",
    "GroundedGenerationProtocol",
    "GroundedQuery",
    "GroundedResponse",
    "LatLng",
    "ProspectClient",
    "ProspectingSettings",
    "SearchParams",
    "build_grounded_query",
    "get_prospecting_settings",
    "parse_contacts",
    "run_with_retry",
]
