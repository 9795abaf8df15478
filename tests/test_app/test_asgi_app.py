"""Testes da montagem da aplicação ASGI (CORS, correlation_id, rotas)."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient


@pytest.fixture
def app_module(monkeypatch: pytest.MonkeyPatch) -> Iterator[object]:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setenv("CORS_ORIGINS", "https://painel.test")
    import app.app as module

    yield module
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def _cors_options(fastapi_app: object) -> dict[str, object]:
    for middleware in fastapi_app.user_middleware:
        if middleware.cls is CORSMiddleware:
            return middleware.kwargs
    raise AssertionError("CORSMiddleware não registrado")


def test_cors_uses_configured_origins(app_module) -> None:
    options = _cors_options(app_module.create_app())

    assert options["allow_origins"] == ["https://painel.test"]
    assert options["allow_credentials"] is True


def test_health_echoes_correlation_id(app_module) -> None:
    client = TestClient(app_module.create_app())

    response = client.get("/health", headers={"X-Correlation-Id": "corr-7"})

    assert response.status_code == 200
    assert response.headers["X-Correlation-Id"] == "corr-7"


def test_generates_correlation_id_when_missing(app_module) -> None:
    client = TestClient(app_module.create_app())

    response = client.get("/health")

    assert len(response.headers["X-Correlation-Id"]) == 32
