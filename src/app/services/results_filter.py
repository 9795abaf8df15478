"""Filtros aplicados sobre o conjunto de resultados da sessão.

Filtragem pura (sem IO); o conjunto filtrado também alimenta o export CSV.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ai.models.contact import ContactRecord, is_absent

WhatsAppMode = Literal["all", "with_whatsapp", "no_whatsapp"]
RatingMode = Literal["all", "positive", "negative"]

# Avaliação a partir da qual um contato é considerado "positivo"
POSITIVE_RATING_THRESHOLD = 4.0

_NON_DIGITS = re.compile(r"\D")


class ResultsFilter(BaseModel):
    """Critérios de filtragem (todos opcionais)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    ddd: str | None = None
    whatsapp_mode: WhatsAppMode = "all"
    rating_mode: RatingMode = "all"
    min_reviews: int | None = Field(default=None, ge=0)

    def matches(self, contact: ContactRecord) -> bool:
        """Verifica se o contato passa em todos os critérios."""
        needle = self.name.strip().lower()
        if needle and needle not in contact.name.lower():
            return False

        if self.ddd:
            digits = phone_digits(contact.phone)
            if not digits.startswith(self.ddd):
                return False

        if self.whatsapp_mode == "with_whatsapp" and not contact.has_whatsapp:
            return False
        if self.whatsapp_mode == "no_whatsapp" and contact.has_whatsapp:
            return False

        if self.rating_mode == "positive" and contact.rating < POSITIVE_RATING_THRESHOLD:
            return False
        if self.rating_mode == "negative" and contact.rating >= POSITIVE_RATING_THRESHOLD:
            return False

        if self.min_reviews is not None and contact.review_count < self.min_reviews:
            return False

        return True


def phone_digits(phone: str) -> str:
    """Dígitos do telefone (vazio para o sentinela de ausência)."""
    if is_absent(phone):
        return ""
    return _NON_DIGITS.sub("", phone)


def filter_contacts(
    contacts: Iterable[ContactRecord],
    criteria: ResultsFilter | None = None,
) -> list[ContactRecord]:
    """Aplica os critérios preservando a ordem original."""
    if criteria is None:
        return list(contacts)
    return [c for c in contacts if criteria.matches(c)]


def available_ddds(contacts: Sequence[ContactRecord]) -> list[str]:
    """DDDs distintos (dois primeiros dígitos do telefone), ordenados."""
    ddds: set[str] = set()
    for contact in contacts:
        digits = phone_digits(contact.phone)
        if len(digits) >= 2:
            ddds.add(digits[:2])
    return sorted(ddds)
