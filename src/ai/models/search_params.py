"""Parâmetros de busca do usuário.

Imutáveis por requisição: cada rodada de paginação constrói uma nova
instância via `with_excluded_names`, nunca alterando a do chamador.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS = ("location", "niche")


class LatLng(BaseModel):
    """Coordenadas usadas como dica de recuperação da ferramenta de mapas."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class SearchParams(BaseModel):
    """Intenção de busca do usuário.

    Atributos:
        location: Localização alvo (cidade, estado ou país)
        niche: Nicho de mercado
        type: Tipo de estabelecimento (vazio = sem escopo)
        radius: Raio de busca (vazio = sem escopo)
        whatsapp_only: Restringe a telefones celulares
        fast_mode: Usa o modelo rápido (menos minucioso)
        deep_search_*: Cruza cada empresa com busca web/redes sociais
        exclude_names: Nomes já coletados, em ordem
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    location: str = ""
    niche: str = ""
    type: str = ""
    radius: str = ""
    whatsapp_only: bool = False
    fast_mode: bool = False
    deep_search_web: bool = False
    deep_search_instagram: bool = False
    deep_search_facebook: bool = False
    deep_search_linkedin: bool = False
    exclude_names: tuple[str, ...] = ()

    @property
    def deep_search_active(self) -> bool:
        """True se qualquer flag de busca profunda estiver ligada."""
        return (
            self.deep_search_web
            or self.deep_search_instagram
            or self.deep_search_facebook
            or self.deep_search_linkedin
        )

    def deep_search_platforms(self) -> tuple[str, ...]:
        """Plataformas solicitadas na busca profunda, em ordem fixa."""
        flags = (
            ("website", self.deep_search_web),
            ("instagram", self.deep_search_instagram),
            ("facebook", self.deep_search_facebook),
            ("linkedin", self.deep_search_linkedin),
        )
        return tuple(name for name, enabled in flags if enabled)

    def missing_required_fields(self) -> tuple[str, ...]:
        """Campos obrigatórios vazios (localização e nicho)."""
        return tuple(name for name in REQUIRED_FIELDS if not getattr(self, name).strip())

    def with_excluded_names(self, names: Iterable[str]) -> SearchParams:
        """Retorna cópia com `exclude_names` substituído."""
        return self.model_copy(update={"exclude_names": tuple(names)})
