"""Prompts do módulo AI.

Arquivos:
- prospecting_prompt.py: prompt de prospecção e montagem da consulta
- yaml/geo_scopes.yaml: vocabulário de escopo geográfico
"""

from ai.prompts.prospecting_prompt import build_grounded_query, format_prospecting_prompt

__all__ = [
    "build_grounded_query",
    "format_prospecting_prompt",
]
