"""Testes do cruzamento de contatos com citações de grounding."""

from __future__ import annotations

from ai.models.contact import NOT_AVAILABLE, NOT_AVAILABLE_MAPS, ContactRecord
from ai.models.grounded_query import CitationSource, GroundingCitation
from ai.rules.enrichment import backfill_from_citation, enrich_contacts, match_citation


def _maps(title: str, uri: str) -> GroundingCitation:
    return GroundingCitation(maps=CitationSource(title=title, uri=uri))


def _web(title: str, uri: str) -> GroundingCitation:
    return GroundingCitation(web=CitationSource(title=title, uri=uri))


class TestMatchCitation:
    def test_title_contains_name_case_insensitive(self) -> None:
        citation = _maps("CLÍNICA SORRISO - Centro", "https://maps/1")

        assert match_citation("Clínica Sorriso", [citation]) is citation

    def test_name_contains_title(self) -> None:
        citation = _web("Sorriso", "https://sorriso.com.br")

        assert match_citation("Clínica Sorriso Ltda", [citation]) is citation

    def test_short_titles_never_match(self) -> None:
        assert match_citation("Clínica AB", [_maps("AB", "https://maps/ab")]) is None

    def test_no_match_returns_none(self) -> None:
        assert match_citation("Padaria Central", [_maps("Oficina Sul", "x")]) is None
        assert match_citation("", [_maps("Oficina Sul", "x")]) is None

    def test_first_matching_citation_wins(self) -> None:
        first = _maps("Padaria Central", "https://maps/1")
        second = _maps("Padaria Central Filial", "https://maps/2")

        assert match_citation("Padaria Central", [first, second]) is first


class TestBackfill:
    def test_fills_absent_maps_link_and_website(self) -> None:
        contact = ContactRecord(name="Padaria Central", maps_link=NOT_AVAILABLE_MAPS)
        citation = GroundingCitation(
            maps=CitationSource(title="Padaria Central", uri="https://maps/1"),
            web=CitationSource(title="Padaria Central", uri="https://padaria.com"),
        )

        enriched = backfill_from_citation(contact, citation)

        assert enriched.maps_link == "https://maps/1"
        assert enriched.website == "https://padaria.com"

    def test_never_overwrites_present_values(self) -> None:
        contact = ContactRecord(
            name="Padaria Central",
            maps_link="https://maps/original",
            website="https://original.com",
        )
        citation = GroundingCitation(
            maps=CitationSource(title="Padaria Central", uri="https://maps/outro"),
            web=CitationSource(title="Padaria Central", uri="https://outro.com"),
        )

        assert backfill_from_citation(contact, citation) is contact

    def test_empty_uri_is_ignored(self) -> None:
        contact = ContactRecord(name="Padaria Central")

        enriched = backfill_from_citation(contact, _maps("Padaria Central", ""))

        assert enriched.maps_link == NOT_AVAILABLE


class TestEnrichContacts:
    def test_only_matched_contacts_change(self) -> None:
        contacts = [
            ContactRecord(name="Padaria Central", website="https://padaria.com"),
            ContactRecord(name="Oficina Sul"),
        ]
        citations = [
            _web("Padaria Central", "https://outro.com"),
            _maps("Oficina Sul", "https://maps/2"),
        ]

        enriched = enrich_contacts(contacts, citations)

        assert enriched[0].website == "https://padaria.com"
        assert enriched[1].maps_link == "https://maps/2"
        assert enriched[1].website == NOT_AVAILABLE

    def test_without_citations_returns_copy(self) -> None:
        contacts = [ContactRecord(name="A Ltda")]

        result = enrich_contacts(contacts, [])

        assert result == contacts
        assert result is not contacts
