"""Configuração do pytest para o projeto Prospector IA."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import get_base_settings, get_gemini_settings, get_history_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings são cacheadas por processo; cada teste lê o env atual."""
    get_base_settings.cache_clear()
    get_gemini_settings.cache_clear()
    get_history_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_gemini_settings.cache_clear()
    get_history_settings.cache_clear()
