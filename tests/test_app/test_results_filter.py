"""Testes dos filtros sobre o conjunto de resultados."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ai.models.contact import NOT_AVAILABLE
from app.services.results_filter import (
    ResultsFilter,
    available_ddds,
    filter_contacts,
    phone_digits,
)
from tests.fakes.prospecting import make_contact

CONTACTS = [
    make_contact(
        "Clínica Sorriso",
        phone="(41) 99999-0000",
        has_whatsapp=True,
        rating=4.8,
        review_count=120,
    ),
    make_contact("Odonto Center", phone="11 3333-4444", rating=3.9, review_count=8),
    make_contact("Dental Prime", phone=NOT_AVAILABLE, rating=4.0, review_count=0),
]


def _names(criteria: ResultsFilter | None) -> list[str]:
    return [c.name for c in filter_contacts(CONTACTS, criteria)]


def test_no_criteria_keeps_everything_in_order() -> None:
    assert _names(None) == ["Clínica Sorriso", "Odonto Center", "Dental Prime"]
    assert _names(ResultsFilter()) == ["Clínica Sorriso", "Odonto Center", "Dental Prime"]


def test_name_filter_is_case_insensitive_substring() -> None:
    assert _names(ResultsFilter(name="  odonto ")) == ["Odonto Center"]


def test_ddd_filter_uses_phone_digits() -> None:
    assert _names(ResultsFilter(ddd="41")) == ["Clínica Sorriso"]
    assert _names(ResultsFilter(ddd="21")) == []


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        ("with_whatsapp", ["Clínica Sorriso"]),
        ("no_whatsapp", ["Odonto Center", "Dental Prime"]),
    ],
)
def test_whatsapp_modes(mode: str, expected: list[str]) -> None:
    assert _names(ResultsFilter(whatsapp_mode=mode)) == expected


def test_rating_modes_split_at_threshold() -> None:
    assert _names(ResultsFilter(rating_mode="positive")) == ["Clínica Sorriso", "Dental Prime"]
    assert _names(ResultsFilter(rating_mode="negative")) == ["Odonto Center"]


def test_min_reviews() -> None:
    assert _names(ResultsFilter(min_reviews=10)) == ["Clínica Sorriso"]
    assert _names(ResultsFilter(min_reviews=0)) == [c.name for c in CONTACTS]


def test_criteria_are_combined() -> None:
    criteria = ResultsFilter(rating_mode="positive", whatsapp_mode="no_whatsapp")

    assert _names(criteria) == ["Dental Prime"]


def test_invalid_criteria_rejected() -> None:
    with pytest.raises(ValidationError):
        ResultsFilter(min_reviews=-1)
    with pytest.raises(ValidationError):
        ResultsFilter(whatsapp_mode="talvez")


def test_phone_digits_and_available_ddds() -> None:
    assert phone_digits("(41) 99999-0000") == "41999990000"
    assert phone_digits(NOT_AVAILABLE) == ""
    assert available_ddds(CONTACTS) == ["11", "41"]
