"""Leitura dos assets YAML versionados junto aos prompts.

Só aceita nomes de arquivo simples dentro de `ai/prompts/yaml/`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from collections.abc import Iterable

PROMPT_ASSETS_DIR = Path(__file__).resolve().parents[1] / "prompts" / "yaml"
_ALLOWED_SUFFIXES = (".yaml", ".yml")


class PromptAssetError(RuntimeError):
    """Asset de prompt ausente, fora do diretório ou malformado."""


def _asset_path(name: str) -> Path:
    candidate = Path(name)
    if not name or candidate.name != name:
        raise PromptAssetError(f"Nome de asset inválido: {name!r}")
    if candidate.suffix not in _ALLOWED_SUFFIXES:
        raise PromptAssetError(f"Asset deve ser YAML: {name}")
    return PROMPT_ASSETS_DIR / candidate


@lru_cache(maxsize=16)
def load_prompt_yaml(name: str) -> dict[str, Any]:
    """Lê `ai/prompts/yaml/<name>` e devolve o mapeamento raiz.

    Raises:
        PromptAssetError: Nome inválido, arquivo inexistente, YAML
            quebrado ou raiz que não é mapeamento
    """
    path = _asset_path(name)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PromptAssetError(f"Asset não encontrado: {name}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise PromptAssetError(f"YAML inválido em {name}: {exc}") from exc

    if not isinstance(data, dict):
        raise PromptAssetError(f"Raiz de {name} deve ser um mapeamento")
    return data


def require_asset_keys(name: str, data: dict[str, Any], keys: Iterable[str]) -> None:
    """Falha se alguma chave obrigatória estiver ausente no asset."""
    missing = sorted(key for key in keys if key not in data)
    if missing:
        raise PromptAssetError(f"{name} sem as chaves: {', '.join(missing)}")


def clear_prompt_assets_cache() -> None:
    load_prompt_yaml.cache_clear()
