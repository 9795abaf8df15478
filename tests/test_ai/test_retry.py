"""Testes do retry com backoff exponencial."""

from __future__ import annotations

import pytest

from ai.utils.retry import is_transient_error, run_with_retry
from tests.fakes.prospecting import FakeSleep
from utils.errors import ConfigurationError, UpstreamError, UpstreamTransientError


class _Operation:
    """Operação que falha com os erros roteirizados e depois retorna 'ok'."""

    def __init__(self, *errors: BaseException) -> None:
        self._errors = list(errors)
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self._errors:
            raise self._errors.pop(0)
        return "ok"


class _StatusError(Exception):
    def __init__(self, status: object) -> None:
        super().__init__("status")
        self.status = status


class TestIsTransientError:
    def test_typed_transient_error(self) -> None:
        assert is_transient_error(UpstreamTransientError("x", status_code=503))

    def test_status_code_attribute(self) -> None:
        assert is_transient_error(UpstreamError("x", status_code=500))
        assert not is_transient_error(UpstreamError("x", status_code=400))

    def test_textual_status(self) -> None:
        assert is_transient_error(_StatusError("UNAVAILABLE"))
        assert is_transient_error(_StatusError("internal"))
        assert not is_transient_error(_StatusError("INVALID_ARGUMENT"))

    def test_numeric_status(self) -> None:
        assert is_transient_error(_StatusError(503))
        assert not is_transient_error(_StatusError(429))

    def test_unrelated_errors(self) -> None:
        assert not is_transient_error(ValueError("x"))
        assert not is_transient_error(ConfigurationError("sem chave"))


class TestRunWithRetry:
    @pytest.mark.asyncio
    async def test_transient_failures_then_success(self) -> None:
        sleep = FakeSleep()
        operation = _Operation(
            UpstreamTransientError("falha", status_code=503),
            UpstreamTransientError("falha", status="INTERNAL"),
        )

        result = await run_with_retry(operation, 3, 100, sleep=sleep)

        assert result == "ok"
        assert operation.calls == 3
        assert sleep.calls == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_non_transient_error_propagates_after_one_call(self) -> None:
        sleep = FakeSleep()
        operation = _Operation(UpstreamError("bad request", status_code=400))

        with pytest.raises(UpstreamError, match="bad request"):
            await run_with_retry(operation, 3, 100, sleep=sleep)

        assert operation.calls == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_deadline_exceeded_is_not_retried(self) -> None:
        sleep = FakeSleep()
        operation = _Operation(UpstreamError("Timeout", status="DEADLINE_EXCEEDED"))

        with pytest.raises(UpstreamError, match="Timeout"):
            await run_with_retry(operation, 3, 100, sleep=sleep)

        assert operation.calls == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_last_error(self) -> None:
        sleep = FakeSleep()
        operation = _Operation(*(UpstreamTransientError(f"falha {i}") for i in range(4)))

        with pytest.raises(UpstreamTransientError, match="falha 3"):
            await run_with_retry(operation, 3, 100, sleep=sleep)

        assert operation.calls == 4
        assert sleep.calls == [0.1, 0.2, 0.4]

    @pytest.mark.asyncio
    async def test_zero_retries_calls_once(self) -> None:
        operation = _Operation(UpstreamTransientError("falha"))

        with pytest.raises(UpstreamTransientError):
            await run_with_retry(operation, 0, 100, sleep=FakeSleep())

        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_logs_scheduled_retry(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("WARNING")
        operation = _Operation(UpstreamTransientError("falha"))

        await run_with_retry(operation, 1, 50, sleep=FakeSleep())

        records = [r for r in caplog.records if r.getMessage() == "upstream_retry_scheduled"]
        assert len(records) == 1
        assert records[0].delay_ms == 50
