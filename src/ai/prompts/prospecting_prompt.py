"""Prompt de prospecção com grounding (mapas + busca web).

Monta o prompt em blocos: missão, escopo geográfico, exclusões, busca
profunda, filtro de WhatsApp e formato de saída.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ai.config.settings import ProspectingSettings, get_prospecting_settings
from ai.models.contact import NOT_AVAILABLE
from ai.models.grounded_query import GroundedQuery, ModelTier, ToolConfig
from ai.rules.geo_scope import GeoScope, classify_location, get_geo_vocabulary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ai.models.search_params import LatLng, SearchParams

PROSPECTING_MISSION = """Aja como um Agente de Prospecção Digital Avançado.
Sua missão é localizar {target_count} contatos públicos REAIS de empresas do nicho "{niche}"{type_clause} em "{location}"."""

GEO_NATIONAL = """ESCOPO GEOGRÁFICO: a localização é um país inteiro.
Distribua a busca pelas principais regiões metropolitanas e capitais, priorizando os maiores centros comerciais."""

GEO_STATE = """ESCOPO GEOGRÁFICO: a localização é um estado/região.
Priorize a capital e as principais cidades da região, cobrindo mais de um município."""

GEO_LOCAL_FIRST_PASS = """ESCOPO GEOGRÁFICO: cidade/bairro.
Raio de busca: {radius}. Mantenha-se dentro desse raio."""

GEO_LOCAL_EXPANDED = """ESCOPO GEOGRÁFICO: cidade/bairro — PAGINAÇÃO.
As empresas mais próximas já foram capturadas. EXPANDA o raio para pelo menos {expanded_radius} e inclua bairros vizinhos e municípios limítrofes."""

EXCLUSION_BLOCK = """EXCLUSÕES: as empresas abaixo JÁ foram capturadas. NÃO as repita:
{names}"""

DEEP_SEARCH_BLOCK = """BUSCA PROFUNDA:
Para CADA empresa encontrada, use a ferramenta 'googleSearch' para cruzar os dados e localizar: {platforms}.
Preencha "web_summary" com um resumo curto (1 frase) do que a empresa oferece.
NÃO invente URLs. Se não encontrar o link oficial, use exatamente "{sentinel}"."""

MAPS_ONLY_BLOCK = """MODO RÁPIDO DE DADOS:
Use SOMENTE os dados retornados pela ferramenta 'googleMaps'. NÃO faça buscas adicionais na web.
Campos não presentes no Maps devem ser "{sentinel}"."""

WHATSAPP_ONLY_BLOCK = """FILTRO WHATSAPP:
Retorne APENAS empresas cujo telefone seja celular (no Brasil, número com 9 dígitos iniciando em 9 após o DDD).
Marque "whatsapp": true para esses números."""

OUTPUT_FORMAT_BLOCK = """FORMATO DE SAÍDA (OBRIGATÓRIO):
Responda com EXATAMENTE UM array JSON dentro de um bloco ```json ... ```. Nenhum outro array na resposta.
Cada item deve ter os campos:
- nome (string)
- telefone (string)
- whatsapp (booleano)
- email (string)
- website (string)
- instagram (string)
- facebook (string)
- linkedin (string)
- endereco (string)
- link_maps (string)
- rating (número de 0 a 5)
- reviewCount (número inteiro)
- web_summary (string)
Use "{sentinel}" para qualquer campo de texto desconhecido. Use null, true e false (JSON), nunca None/True/False."""

_PLATFORM_LABELS = {
    "website": "site oficial",
    "instagram": "perfil do Instagram",
    "facebook": "página do Facebook",
    "linkedin": "página do LinkedIn",
}


def _format_geo_block(params: SearchParams, exclusions: Sequence[str]) -> str:
    vocab = get_geo_vocabulary()
    scope = classify_location(params.location, vocab)
    if scope is GeoScope.NATIONAL:
        return GEO_NATIONAL
    if scope is GeoScope.STATE:
        return GEO_STATE
    if exclusions:
        return GEO_LOCAL_EXPANDED.format(expanded_radius=vocab.expanded_radius)
    return GEO_LOCAL_FIRST_PASS.format(radius=params.radius.strip() or vocab.default_radius)


def _format_exclusion_block(exclusions: Sequence[str], limit: int) -> str:
    if not exclusions:
        return ""
    tail = list(exclusions)[-limit:] if limit > 0 else []
    if not tail:
        return ""
    return EXCLUSION_BLOCK.format(names=", ".join(tail))


def _format_search_mode_block(params: SearchParams) -> str:
    platforms = params.deep_search_platforms()
    if not platforms:
        return MAPS_ONLY_BLOCK.format(sentinel=NOT_AVAILABLE)
    labels = ", ".join(_PLATFORM_LABELS[p] for p in platforms)
    return DEEP_SEARCH_BLOCK.format(platforms=labels, sentinel=NOT_AVAILABLE)


def format_prospecting_prompt(
    params: SearchParams,
    exclusions: Sequence[str],
    target_count: int,
    *,
    exclusion_limit: int = 1000,
) -> str:
    """Formata o prompt completo de prospecção.

    Args:
        params: Parâmetros de busca
        exclusions: Nomes já coletados (apenas o final da lista entra)
        target_count: Quantidade solicitada nesta rodada
        exclusion_limit: Máximo de nomes de exclusão no prompt
    """
    type_clause = f" (tipo: {params.type.strip()})" if params.type.strip() else ""
    blocks = [
        PROSPECTING_MISSION.format(
            target_count=target_count,
            niche=params.niche.strip(),
            type_clause=type_clause,
            location=params.location.strip(),
        ),
        _format_geo_block(params, exclusions),
        _format_exclusion_block(exclusions, exclusion_limit),
        _format_search_mode_block(params),
        WHATSAPP_ONLY_BLOCK if params.whatsapp_only else "",
        OUTPUT_FORMAT_BLOCK.format(sentinel=NOT_AVAILABLE),
    ]
    return "\n\n".join(block for block in blocks if block)


def build_grounded_query(
    params: SearchParams,
    exclusions: Sequence[str],
    target_count: int,
    *,
    lat_lng: LatLng | None = None,
    settings: ProspectingSettings | None = None,
) -> GroundedQuery:
    """Monta a consulta (prompt + ferramentas + modelo) de uma rodada."""
    cfg = settings or get_prospecting_settings()
    tier = ModelTier.FAST if params.fast_mode else ModelTier.STANDARD
    model_cfg = cfg.models.get_for_tier(tier)

    return GroundedQuery(
        prompt=format_prospecting_prompt(
            params,
            exclusions,
            target_count,
            exclusion_limit=cfg.batch.exclusion_prompt_limit,
        ),
        tools=ToolConfig(maps_grounding=True, search_grounding=True, lat_lng=lat_lng),
        model_tier=tier,
        model=model_cfg.model,
        temperature=model_cfg.temperature,
    )
