"""Contratos da chamada de geração com grounding (mapas + busca web).

Define a consulta montada pelo builder de prompt e a resposta
normalizada devolvida pelo transporte de IA.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from utils.errors import UpstreamEmptyResponse

if TYPE_CHECKING:
    from ai.models.search_params import LatLng


class ModelTier(Enum):
    """Camada de modelo selecionada para a consulta."""

    FAST = "fast"  # Baixa latência, menos minucioso
    STANDARD = "standard"


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Ferramentas de grounding solicitadas ao modelo.

    Atributos:
        maps_grounding: Solicita a ferramenta de mapas
        search_grounding: Solicita a ferramenta de busca web
        lat_lng: Dica geográfica para a ferramenta de mapas (opcional)
    """

    maps_grounding: bool = True
    search_grounding: bool = True
    lat_lng: LatLng | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serializa no formato `tools`/`toolConfig` da API Gemini."""
        tools: list[dict[str, Any]] = []
        if self.maps_grounding:
            tools.append({"googleMaps": {}})
        if self.search_grounding:
            tools.append({"googleSearch": {}})

        payload: dict[str, Any] = {"tools": tools}
        if self.lat_lng is not None:
            payload["toolConfig"] = {
                "retrievalConfig": {
                    "latLng": {
                        "latitude": self.lat_lng.latitude,
                        "longitude": self.lat_lng.longitude,
                    }
                }
            }
        return payload


@dataclass(frozen=True, slots=True)
class GroundedQuery:
    """Consulta pronta para o transporte de IA."""

    prompt: str
    tools: ToolConfig
    model_tier: ModelTier
    model: str
    temperature: float


@dataclass(frozen=True, slots=True)
class CitationSource:
    """Fonte citada pelo grounding (título + URI)."""

    title: str = ""
    uri: str = ""


@dataclass(frozen=True, slots=True)
class GroundingCitation:
    """Chunk de grounding: entrada de mapas e/ou página web."""

    maps: CitationSource | None = None
    web: CitationSource | None = None


@dataclass(frozen=True, slots=True)
class GroundedResponse:
    """Resposta normalizada do transporte.

    Atributos:
        text: Texto bruto do modelo (None quando não houve payload)
        citations: Metadados de grounding (pode ser vazio)
        finish_reason: Motivo de término reportado pelo modelo
    """

    text: str | None
    citations: tuple[GroundingCitation, ...] = field(default_factory=tuple)
    finish_reason: str | None = None

    def require_text(self) -> str:
        """Retorna o texto ou levanta UpstreamEmptyResponse."""
        if not self.text:
            raise UpstreamEmptyResponse(
                f"Resposta sem texto (finish_reason={self.finish_reason or 'desconhecido'})"
            )
        return self.text
