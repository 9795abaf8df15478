"""Modelos/DTOs para IA.

Re-exporta contatos, parâmetros de busca e contratos do transporte.
"""

from ai.models.contact import (
    NOT_AVAILABLE,
    NOT_AVAILABLE_MAPS,
    UNNAMED_BUSINESS,
    ContactRecord,
    is_absent,
)
from ai.models.grounded_query import (
    CitationSource,
    GroundedQuery,
    GroundedResponse,
    GroundingCitation,
    ModelTier,
    ToolConfig,
)
from ai.models.search_params import LatLng, SearchParams

__all__ = [
    "NOT_AVAILABLE",
    "NOT_AVAILABLE_MAPS",
    "UNNAMED_BUSINESS",
    "CitationSource",
    "ContactRecord",
    "GroundedQuery",
    "GroundedResponse",
    "GroundingCitation",
    "LatLng",
    "ModelTier",
    "SearchParams",
    "ToolConfig",
    "is_absent",
]
