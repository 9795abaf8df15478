"""Configurações do pipeline de prospecção.

Define settings tipados para modelos, rodadas de paginação e retry.
Os valores numéricos são ajustáveis; apenas deduplicação e o teto de
rodadas são invariantes do pipeline.

Arquitetura de modelos:
- FAST: gemini-2.5-flash-lite — baixa latência, temperatura mínima
- STANDARD: gemini-2.5-flash — extração estruturada com grounding de mapas
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ai.models.grounded_query import ModelTier

MODEL_GEMINI_FLASH = "gemini-2.5-flash"
MODEL_GEMINI_FLASH_LITE = "gemini-2.5-flash-lite"


@dataclass(frozen=True, slots=True)
class ModelTierSettings:
    """Configuração de uma camada de modelo.

    Atributos:
        model: Nome do modelo
        temperature: Temperatura (baixa para determinismo da saída estruturada)
    """

    model: str = MODEL_GEMINI_FLASH
    temperature: float = 0.2


@dataclass(frozen=True, slots=True)
class ModelTierConfig:
    """Modelos por camada (rápida x padrão)."""

    fast: ModelTierSettings = field(
        default_factory=lambda: ModelTierSettings(
            model=MODEL_GEMINI_FLASH_LITE,
            temperature=0.1,
        )
    )
    standard: ModelTierSettings = field(
        default_factory=lambda: ModelTierSettings(
            model=MODEL_GEMINI_FLASH,
            temperature=0.2,
        )
    )

    def get_for_tier(self, tier: ModelTier) -> ModelTierSettings:
        """Retorna configuração para a camada."""
        return {
            ModelTier.FAST: self.fast,
            ModelTier.STANDARD: self.standard,
        }[tier]


@dataclass(frozen=True, slots=True)
class BatchSettings:
    """Política de acumulação em rodadas.

    Atributos:
        target_count: Meta de contatos sem busca profunda
        deep_search_target_count: Meta com busca profunda (mais cara por item)
        max_rounds: Teto de chamadas upstream por busca
        min_request_count: Mínimo solicitado por rodada
        over_request_margin: Folga para absorver duplicados/inválidos
        round_pause_seconds: Pausa entre rodadas
        exclusion_prompt_limit: Máximo de nomes de exclusão no prompt
    """

    target_count: int = 50
    deep_search_target_count: int = 30
    max_rounds: int = 3
    min_request_count: int = 10
    over_request_margin: int = 5
    round_pause_seconds: float = 1.5
    exclusion_prompt_limit: int = 1000


@dataclass(frozen=True, slots=True)
class RetrySettings:
    """Backoff exponencial para erros transitórios do upstream."""

    max_retries: int = 3
    initial_delay_ms: int = 1000


@dataclass(frozen=True, slots=True)
class ProspectingSettings:
    """Agregador de todas as configurações de prospecção.

    Exemplo de uso:
        settings = ProspectingSettings()
        # ou com customização
        settings = ProspectingSettings(
            batch=BatchSettings(target_count=20),
        )
    """

    models: ModelTierConfig = field(default_factory=ModelTierConfig)
    batch: BatchSettings = field(default_factory=BatchSettings)
    retry: RetrySettings = field(default_factory=RetrySettings)


# Settings padrão (singleton imutável)
DEFAULT_PROSPECTING_SETTINGS = ProspectingSettings()


def get_prospecting_settings() -> ProspectingSettings:
    """Retorna configurações de prospecção.

    Os modelos podem ser sobrescritos por env (GEMINI_MODEL,
    GEMINI_FAST_MODEL) via GeminiSettings.
    """
    from config.settings.ai.gemini import get_gemini_settings

    gemini = get_gemini_settings()
    defaults = DEFAULT_PROSPECTING_SETTINGS.models
    if gemini.model == defaults.standard.model and gemini.fast_model == defaults.fast.model:
        return DEFAULT_PROSPECTING_SETTINGS

    return ProspectingSettings(
        models=ModelTierConfig(
            fast=ModelTierSettings(model=gemini.fast_model, temperature=defaults.fast.temperature),
            standard=ModelTierSettings(
                model=gemini.model,
                temperature=defaults.standard.temperature,
            ),
        ),
    )
