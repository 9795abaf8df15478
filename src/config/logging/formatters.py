"""Formatter JSON dos logs do serviço."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de saída dos campos fixos em cada linha JSON
LOG_FIELDS = ("asctime", "levelname", "name", "message", "correlation_id", "service")

REQUIRED_LOG_FIELDS = frozenset(LOG_FIELDS)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(*, ensure_ascii: bool = False) -> JsonFormatter:
    """Formatter com os campos fixos seguidos dos `extra` do record.

    Texto em português (ex: mensagens de erro do upstream) sai sem
    escapes `\\uXXXX` por padrão.

    Exemplo:
        {"asctime": "...", "level": "INFO", "logger": "ai.services.batch_accumulator",
         "message": "batch_round_completed", "correlation_id": "abc",
         "service": "prospector_ia", "round": 1, "accepted": 12}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=ensure_ascii,
    )
