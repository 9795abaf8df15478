"""Testes do extrator de arrays JSON."""

from __future__ import annotations

from ai.utils._json_extractor import (
    find_json_array,
    normalize_python_literals,
    strip_trailing_commas,
)


def test_find_json_array_prefers_fenced_block() -> None:
    text = 'lista [a]\n```json\n[{"nome": "A"}]\n```'

    assert find_json_array(text) == '[{"nome": "A"}]'


def test_find_json_array_returns_first_balanced_span() -> None:
    text = 'antes [{"nome": "A"}] meio [{"nome": "B"}] fim'

    assert find_json_array(text) == '[{"nome": "A"}]'


def test_find_json_array_ignores_brackets_inside_strings() -> None:
    text = '[{"nome": "Loja ] Centro"}] depois'

    assert find_json_array(text) == '[{"nome": "Loja ] Centro"}]'


def test_find_json_array_truncated_returns_none() -> None:
    assert find_json_array('[{"nome": "A"},') is None
    assert find_json_array("") is None
    assert find_json_array("sem array") is None


def test_strip_trailing_commas_outside_strings_only() -> None:
    assert strip_trailing_commas('[{"a": 1,}, ]') == '[{"a": 1} ]'
    assert strip_trailing_commas('["x,]"]') == '["x,]"]'


def test_normalize_python_literals_outside_strings_only() -> None:
    text = '[{"nome": "True Burger", "ok": True, "x": None, "y": False}]'

    assert normalize_python_literals(text) == (
        '[{"nome": "True Burger", "ok": true, "x": null, "y": false}]'
    )


def test_find_json_array_stops_at_first_fenced_block() -> None:
    text = (
        '```json\n[{"nome": "A"}]\nObs: dados do Maps\n```\n\n'
        'Outros:\n```json\n[{"nome": "B"}]\n```'
    )

    assert find_json_array(text) == '[{"nome": "A"}]'


def test_find_json_array_skips_fenced_blocks_without_array() -> None:
    text = '```\nnota\n```\n```json\n[{"nome": "C"}] fim\n```'

    assert find_json_array(text) == '[{"nome": "C"}]'
