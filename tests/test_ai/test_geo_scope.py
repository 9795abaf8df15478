"""Testes da classificação de escopo geográfico."""

from __future__ import annotations

import pytest

from ai.rules.geo_scope import GeoScope, classify_location, get_geo_vocabulary, normalize_place


def test_normalize_place_strips_accents_and_spaces() -> None:
    assert normalize_place("  São   Paulo ") == "sao paulo"
    assert normalize_place("") == ""


@pytest.mark.parametrize(
    ("location", "expected"),
    [
        ("Brasil", GeoScope.NATIONAL),
        ("brazil", GeoScope.NATIONAL),
        ("Paraná", GeoScope.STATE),
        ("PR", GeoScope.STATE),
        ("Estado de Goiás", GeoScope.STATE),
        ("Minas Gerais, Brasil", GeoScope.STATE),
        ("São Paulo", GeoScope.LOCAL),
        ("São Paulo, SP", GeoScope.LOCAL),
        ("Curitiba, PR, Brasil", GeoScope.LOCAL),
        ("Moema", GeoScope.LOCAL),
        ("", GeoScope.LOCAL),
    ],
)
def test_classify_location(location: str, expected: GeoScope) -> None:
    assert classify_location(location) is expected


def test_vocabulary_defaults_loaded_from_asset() -> None:
    vocab = get_geo_vocabulary()

    assert vocab.expanded_radius == "30km"
    assert vocab.default_radius == "5km"
    assert "sp" in vocab.state_codes
