"""Regras determinísticas para IA.

Re-exporta escopo geográfico e enriquecimento por citações.
"""

from ai.rules.enrichment import backfill_from_citation, enrich_contacts, match_citation
from ai.rules.geo_scope import GeoScope, classify_location

__all__ = [
    "GeoScope",
    "backfill_from_citation",
    "classify_location",
    "enrich_contacts",
    "match_citation",
]
