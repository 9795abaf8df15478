"""Testes do wiring (factories, registro de sessões e validação de startup)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from ai.services.batch_accumulator import BatchAccumulator
from app.bootstrap import resolve_log_level, validate_runtime_settings
from app.bootstrap.dependencies import (
    create_batch_accumulator,
    create_history_store,
    create_session_registry,
    create_transport,
)
from app.infra.ai import GeminiClient
from app.infra.stores import MemoryHistoryStore, RedisHistoryStore
from app.sessions import SearchSession
from config.settings import HistorySettings
from tests.fakes.prospecting import FakeTransport, InstantAccumulator
from utils.errors import ConfigurationError


def test_memory_history_store_by_default() -> None:
    store = create_history_store(HistorySettings(max_items=5))

    assert isinstance(store, MemoryHistoryStore)


def test_redis_history_store_when_configured() -> None:
    with patch("app.bootstrap.dependencies.create_async_redis_client") as factory:
        store = create_history_store(
            HistorySettings(backend="redis", redis_url="redis://localhost:6379/0")
        )

    assert isinstance(store, RedisHistoryStore)
    factory.assert_called_once_with("redis://localhost:6379/0")


def test_transport_without_key_is_created_unconfigured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)

    transport = create_transport()

    assert isinstance(transport, GeminiClient)
    assert transport.configured is False


def test_batch_accumulator_wiring() -> None:
    assert isinstance(create_batch_accumulator(FakeTransport()), BatchAccumulator)


class TestSessionRegistry:
    def test_get_or_create_reuses_session(self) -> None:
        registry = create_session_registry(InstantAccumulator(), MemoryHistoryStore())

        session = registry.get_or_create("user-1")

        assert isinstance(session, SearchSession)
        assert registry.get_or_create("user-1") is session
        assert registry.get("user-2") is None
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_discard_and_close_all(self) -> None:
        registry = create_session_registry(InstantAccumulator(), MemoryHistoryStore())
        registry.get_or_create("user-1")
        registry.get_or_create("user-2")

        assert await registry.discard("user-1") is True
        assert await registry.discard("user-1") is False
        await registry.close_all()

        assert len(registry) == 0


class TestValidateRuntimeSettings:
    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)

        validate_runtime_settings()

    def test_production_fails_fast(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.setenv("HISTORY_BACKEND", "memory")

        with pytest.raises(ConfigurationError, match="production"):
            validate_runtime_settings()

    def test_production_with_full_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("GEMINI_API_KEY", "abc")
        monkeypatch.setenv("HISTORY_BACKEND", "redis")
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/0")

        validate_runtime_settings()


class TestResolveLogLevel:
    def test_explicit_level_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("DEBUG", "true")

        assert resolve_log_level() == "WARNING"

    @pytest.mark.parametrize(("debug", "expected"), [("true", "DEBUG"), ("", "INFO")])
    def test_debug_flag_without_explicit_level(
        self, monkeypatch: pytest.MonkeyPatch, debug: str, expected: str
    ) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("DEBUG", debug)

        assert resolve_log_level() == expected
