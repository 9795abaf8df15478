"""Configuração de IA.

Re-exporta settings de prospecção e o loader de assets YAML.
"""

from ai.config.prompt_assets_loader import (
    PromptAssetError,
    clear_prompt_assets_cache,
    load_prompt_yaml,
    require_asset_keys,
)
from ai.config.settings import (
    DEFAULT_PROSPECTING_SETTINGS,
    BatchSettings,
    ModelTierConfig,
    ModelTierSettings,
    ProspectingSettings,
    RetrySettings,
    get_prospecting_settings,
)

__all__ = [
    "DEFAULT_PROSPECTING_SETTINGS",
    "BatchSettings",
    "ModelTierConfig",
    "ModelTierSettings",
    "PromptAssetError",
    "ProspectingSettings",
    "RetrySettings",
    "clear_prompt_assets_cache",
    "get_prospecting_settings",
    "load_prompt_yaml",
    "require_asset_keys",
]
