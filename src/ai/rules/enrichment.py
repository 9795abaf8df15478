"""Cruzamento de contatos com metadados de grounding.

Casamento best-effort por substring de título. O preenchimento só
ocorre em campos ausentes: valor informado pelo modelo nunca é
sobrescrito.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ai.models.contact import ContactRecord, is_absent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ai.models.grounded_query import CitationSource, GroundingCitation

# Títulos muito curtos casariam com quase qualquer nome
MIN_TITLE_LENGTH = 3


def _title_matches(source: CitationSource | None, contact_name: str) -> bool:
    if source is None or not source.title:
        return False
    title = source.title.strip().lower()
    if len(title) < MIN_TITLE_LENGTH:
        return False
    return title in contact_name or contact_name in title


def match_citation(
    contact_name: str,
    citations: Sequence[GroundingCitation],
) -> GroundingCitation | None:
    """Retorna a primeira citação cujo título casa com o nome do contato.

    Casa quando o título (mapas ou web) contém o nome, ou o nome contém
    o título, sem diferenciar maiúsculas.
    """
    name = contact_name.strip().lower()
    if not name:
        return None
    for citation in citations:
        if _title_matches(citation.maps, name) or _title_matches(citation.web, name):
            return citation
    return None


def backfill_from_citation(
    contact: ContactRecord,
    citation: GroundingCitation,
) -> ContactRecord:
    """Preenche `maps_link`/`website` ausentes a partir da citação."""
    updates: dict[str, str] = {}
    if citation.maps is not None and citation.maps.uri and is_absent(contact.maps_link):
        updates["maps_link"] = citation.maps.uri
    if citation.web is not None and citation.web.uri and is_absent(contact.website):
        updates["website"] = citation.web.uri
    if not updates:
        return contact
    return contact.model_copy(update=updates)


def enrich_contacts(
    contacts: Sequence[ContactRecord],
    citations: Sequence[GroundingCitation],
) -> list[ContactRecord]:
    """Aplica o cruzamento a todos os contatos (sem casamento = inalterado)."""
    if not citations:
        return list(contacts)
    enriched: list[ContactRecord] = []
    for contact in contacts:
        citation = match_citation(contact.name, citations)
        enriched.append(contact if citation is None else backfill_from_citation(contact, citation))
    return enriched
