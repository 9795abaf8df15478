"""Contrato do contato comercial (lead) retornado pela prospecção.

Campos textuais ausentes usam o sentinela NOT_AVAILABLE em vez de None.
Todo consumidor (enriquecimento, filtros, exportação) deve usar `is_absent`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

NOT_AVAILABLE = "Não disponível"
NOT_AVAILABLE_MAPS = "Não disponível no Maps"
UNNAMED_BUSINESS = "Empresa sem nome"

ABSENT_SENTINELS = frozenset({NOT_AVAILABLE, NOT_AVAILABLE_MAPS})

# Campos considerados no score de completude (busca profunda)
SOCIAL_FIELDS = ("website", "instagram", "facebook", "linkedin")


def is_absent(value: str | None) -> bool:
    """Retorna True se o valor é vazio ou um sentinela de ausência."""
    if value is None:
        return True
    stripped = value.strip()
    return not stripped or stripped in ABSENT_SENTINELS


class ContactRecord(BaseModel):
    """Um lead comercial normalizado.

    Invariantes: `name` nunca vazio; `rating` em [0, 5] e
    `review_count` >= 0.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(default=UNNAMED_BUSINESS, min_length=1)
    phone: str = NOT_AVAILABLE
    has_whatsapp: bool = False
    email: str = NOT_AVAILABLE
    website: str = NOT_AVAILABLE
    instagram: str = NOT_AVAILABLE
    facebook: str = NOT_AVAILABLE
    linkedin: str = NOT_AVAILABLE
    address: str = NOT_AVAILABLE
    maps_link: str = NOT_AVAILABLE
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    web_summary: str = ""

    def completeness_score(self) -> int:
        """Conta campos de presença digital preenchidos (website + redes)."""
        return sum(1 for field_name in SOCIAL_FIELDS if not is_absent(getattr(self, field_name)))
