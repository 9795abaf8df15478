"""Parser da resposta de prospecção.

Converte o texto bruto do modelo em lista validada de ContactRecord.
Nunca levanta exceção: entradas malformadas resultam em lista vazia e
a causa volta como diagnóstico não fatal.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from ai.models.contact import NOT_AVAILABLE, UNNAMED_BUSINESS, ContactRecord
from ai.utils._json_extractor import (
    find_json_array,
    normalize_python_literals,
    strip_trailing_commas,
)

logger = logging.getLogger(__name__)

# Campo do ContactRecord -> chaves aceitas na saída do modelo (pt-BR primeiro)
_TEXT_FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "phone": ("telefone", "phone"),
    "email": ("email",),
    "website": ("website", "site"),
    "instagram": ("instagram",),
    "facebook": ("facebook",),
    "linkedin": ("linkedin",),
    "address": ("endereco", "endereço", "address"),
    "maps_link": ("link_maps", "maps_link", "mapsLink"),
}
_NAME_KEYS = ("nome", "name")
_WHATSAPP_KEYS = ("whatsapp", "has_whatsapp")
_RATING_KEYS = ("rating", "avaliacao")
_REVIEW_COUNT_KEYS = ("reviewCount", "review_count")
_SUMMARY_KEYS = ("web_summary", "webSummary", "resumo_web")

MAX_RATING = 5.0
MAX_REVIEW_COUNT = 10_000_000


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Resultado do parse com diagnóstico opcional.

    Atributos:
        contacts: Contatos válidos (pode ser vazio)
        diagnostic: Causa da lista vazia, quando houve falha de formato
        dropped: Entradas descartadas por não terem nome
    """

    contacts: list[ContactRecord] = field(default_factory=list)
    diagnostic: str | None = None
    dropped: int = 0


def parse_contacts(raw_text: str) -> list[ContactRecord]:
    """Parseia resposta do modelo em contatos (sem diagnóstico)."""
    return parse_contacts_with_diagnostic(raw_text).contacts


def parse_contacts_with_diagnostic(raw_text: str) -> ParseOutcome:
    """Parseia resposta do modelo em contatos.

    Args:
        raw_text: Texto bruto retornado pelo modelo

    Returns:
        ParseOutcome com contatos e causa de falha (se houver)
    """
    try:
        array_text = find_json_array(raw_text)
        if array_text is None:
            return ParseOutcome(diagnostic="no_json_array")

        cleaned = normalize_python_literals(strip_trailing_commas(array_text))
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            return ParseOutcome(diagnostic=f"invalid_json: {e.msg}")

        if not isinstance(data, list):
            return ParseOutcome(diagnostic="not_a_list")

        contacts = [_to_contact(item) for item in data if _has_name(item)]
        return ParseOutcome(contacts=contacts, dropped=len(data) - len(contacts))
    except Exception as e:
        logger.warning("contact_parse_failed", extra={"error_type": type(e).__name__})
        return ParseOutcome(diagnostic=f"unexpected: {type(e).__name__}")


def _has_name(item: Any) -> bool:
    """True se a entrada é objeto com nome não vazio."""
    if not isinstance(item, dict):
        return False
    return _first_text(item, _NAME_KEYS) is not None


def _first_text(item: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    """Primeiro valor string não vazio entre as chaves."""
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _first_present(item: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    return None


def _to_contact(item: dict[str, Any]) -> ContactRecord:
    """Mapeia entrada do modelo para ContactRecord com defaults/sentinelas."""
    fields: dict[str, Any] = {
        name: _first_text(item, keys) or NOT_AVAILABLE
        for name, keys in _TEXT_FIELD_KEYS.items()
    }
    return ContactRecord(
        name=_first_text(item, _NAME_KEYS) or UNNAMED_BUSINESS,
        has_whatsapp=bool(_first_present(item, _WHATSAPP_KEYS)),
        rating=_parse_rating(_first_present(item, _RATING_KEYS)),
        review_count=_parse_review_count(_first_present(item, _REVIEW_COUNT_KEYS)),
        web_summary=_first_text(item, _SUMMARY_KEYS) or "",
        **fields,
    )


def _is_number(value: Any) -> bool:
    """Número finito (int ou float). bool e strings numéricas não contam."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _parse_rating(value: Any) -> float:
    # int x float: comparação exata, sem OverflowError
    if not _is_number(value) or value < 0 or value > MAX_RATING:
        return 0.0
    return float(value)


def _parse_review_count(value: Any) -> int:
    if not _is_number(value) or value < 0 or value > MAX_REVIEW_COUNT:
        return 0
    return int(value)
