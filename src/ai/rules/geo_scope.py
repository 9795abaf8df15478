"""Classificação determinística do escopo geográfico da busca.

O escopo orienta a instrução geográfica do prompt:
- NATIONAL: país inteiro → priorizar grandes regiões metropolitanas
- STATE: estado/província → priorizar principais cidades da região
- LOCAL: cidade/bairro → respeitar o raio (expandir na paginação)
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from ai.config.prompt_assets_loader import load_prompt_yaml, require_asset_keys

GEO_SCOPES_ASSET = "geo_scopes.yaml"


class GeoScope(Enum):
    """Escopo geográfico da localização."""

    NATIONAL = "national"
    STATE = "state"
    LOCAL = "local"


@dataclass(frozen=True, slots=True)
class GeoVocabulary:
    """Vocabulário carregado do asset YAML (já normalizado)."""

    national: frozenset[str]
    state_prefixes: tuple[str, ...]
    state_codes: frozenset[str]
    state_names: frozenset[str]
    ambiguous_capitals: frozenset[str]
    expanded_radius: str
    default_radius: str


def normalize_place(text: str) -> str:
    """Minúsculas, sem acentos e com espaços colapsados."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    without_marks = "".join(c for c in decomposed if not unicodedata.combining(c))
    return " ".join(without_marks.lower().split())


@lru_cache(maxsize=1)
def get_geo_vocabulary() -> GeoVocabulary:
    """Carrega e normaliza o vocabulário geográfico (cacheado)."""
    data = load_prompt_yaml(GEO_SCOPES_ASSET)
    require_asset_keys(GEO_SCOPES_ASSET, data, ("national", "states"))
    states: dict[str, str] = data.get("states") or {}
    return GeoVocabulary(
        national=frozenset(normalize_place(n) for n in data.get("national") or []),
        state_prefixes=tuple(normalize_place(p) for p in data.get("state_prefixes") or []),
        state_codes=frozenset(normalize_place(code) for code in states),
        state_names=frozenset(normalize_place(name) for name in states.values()),
        ambiguous_capitals=frozenset(
            normalize_place(n) for n in data.get("ambiguous_capitals") or []
        ),
        expanded_radius=str(data.get("expanded_radius") or "30km"),
        default_radius=str(data.get("default_radius") or "5km"),
    )


def classify_location(location: str, vocabulary: GeoVocabulary | None = None) -> GeoScope:
    """Classifica a localização informada pelo usuário.

    Partes finais que nomeiam um país (ex: "Curitiba, PR, Brasil") são
    descartadas antes da análise.

    Args:
        location: Texto livre da localização
        vocabulary: Vocabulário (usa o asset padrão se None)

    Returns:
        GeoScope correspondente (LOCAL quando indeterminado)
    """
    vocab = vocabulary or get_geo_vocabulary()
    parts = [normalize_place(p) for p in (location or "").split(",")]
    parts = [p for p in parts if p]
    if not parts:
        return GeoScope.LOCAL

    while parts and parts[-1] in vocab.national:
        parts.pop()
    if not parts:
        return GeoScope.NATIONAL
    if len(parts) > 1:
        return GeoScope.LOCAL

    place = parts[0]
    if place.startswith(vocab.state_prefixes):
        return GeoScope.STATE
    if place in vocab.state_codes:
        return GeoScope.STATE
    if place in vocab.state_names and place not in vocab.ambiguous_capitals:
        return GeoScope.STATE
    return GeoScope.LOCAL
