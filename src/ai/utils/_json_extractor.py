"""Extrator de arrays JSON de respostas de LLM.

Localiza o array em respostas que misturam markdown e prosa e corrige
artefatos comuns de modelos antes do parse:
- Vírgula final antes de `]`/`}`
- Literais Python (None/True/False) fora de strings
"""

from __future__ import annotations

import re

# Corpo de cada bloco ```json ... ``` (um bloco por vez)
_FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)

# String JSON completa (com escapes): preservada intacta pelas substituições
_STRING = r'"(?:\\.|[^"\\])*"'
_TRAILING_COMMA_PATTERN = re.compile(_STRING + r"|,(\s*[\]}])")
_PYTHON_LITERAL_PATTERN = re.compile(_STRING + r"|\b(None|True|False)\b")

_PYTHON_TO_JSON = {"None": "null", "True": "true", "False": "false"}


def find_json_array(text: str) -> str | None:
    """Retorna o primeiro array JSON encontrado no texto.

    Ordem de busca:
    1. Primeiro bloco de código cercado que começa com um array (texto
       após o array, dentro do bloco, é ignorado)
    2. Primeiro array balanceado em qualquer ponto do texto

    Args:
        text: Resposta bruta da LLM

    Returns:
        Trecho do array ou None se não encontrado (ou truncado)
    """
    if not text or not isinstance(text, str):
        return None

    for block in _FENCED_BLOCK_PATTERN.finditer(text):
        body = block.group(1)
        if body.startswith("["):
            return _balanced_span(body, 0)

    start = text.find("[")
    if start == -1:
        return None
    return _balanced_span(text, start)


def _balanced_span(text: str, start: int) -> str | None:
    """Retorna o trecho `[...]` balanceado a partir de `start`.

    Colchetes dentro de strings são ignorados.
    """
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def strip_trailing_commas(json_text: str) -> str:
    """Remove vírgulas finais antes de `]` ou `}` (fora de strings)."""
    return _TRAILING_COMMA_PATTERN.sub(
        lambda match: match.group(1) if match.group(1) is not None else match.group(0),
        json_text,
    )


def normalize_python_literals(json_text: str) -> str:
    """Reescreve None/True/False soltos para null/true/false.

    Ocorrências dentro de strings (ex: "None Ltda") não são tocadas.
    """
    return _PYTHON_LITERAL_PATTERN.sub(
        lambda match: _PYTHON_TO_JSON[match.group(1)] if match.group(1) else match.group(0),
        json_text,
    )
