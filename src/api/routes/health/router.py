"""Endpoints de liveness/readiness do Prospector IA."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()

REDIS_PING_TIMEOUT_SECONDS = 2.0

CheckStatus = Literal["ok", "failed", "skipped"]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class HealthResponse(BaseModel):
    """Resposta do liveness probe."""

    status: str
    service: str
    environment: str
    timestamp: str
    version: str = "1.0.0"


class ProbeResult(BaseModel):
    """Resultado da verificação de uma dependência."""

    status: CheckStatus
    latency_ms: float | None = None
    error: str | None = None

    @property
    def healthy(self) -> bool:
        return self.status != "failed"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: o processo responde, sem tocar dependências."""
    base = get_base_settings()
    return HealthResponse(
        status="healthy",
        service=base.service_name,
        environment=base.environment,
        timestamp=_utc_now(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: histórico em Redis (quando configurado) e chave do Gemini.

    Histórico em memória não tem o que verificar e aparece como "skipped".
    """
    state = request.app.state
    checks = {
        "redis": await _probe_redis(getattr(state, "redis_client", None)),
        "gemini": _probe_gemini(bool(getattr(state, "gemini_configured", False))),
    }
    ready = all(check.healthy for check in checks.values())
    if not ready:
        failed = sorted(name for name, check in checks.items() if not check.healthy)
        logger.warning("readiness_failed", extra={"failed_checks": failed})

    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "checks": {name: check.model_dump() for name, check in checks.items()},
            "timestamp": _utc_now(),
        },
    )


async def _probe_redis(redis_client: Any | None) -> ProbeResult:
    if redis_client is None:
        return ProbeResult(status="skipped")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=REDIS_PING_TIMEOUT_SECONDS)
    except TimeoutError:
        return ProbeResult(status="failed", error="timeout")
    except Exception as exc:
        return ProbeResult(status="failed", error=type(exc).__name__)
    elapsed_ms = (time.perf_counter() - started_at) * 1000
    return ProbeResult(status="ok", latency_ms=round(elapsed_ms, 2))


def _probe_gemini(configured: bool) -> ProbeResult:
    if configured:
        return ProbeResult(status="ok")
    return ProbeResult(status="failed", error="api_key_missing")
