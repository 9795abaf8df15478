"""Filters de logging do Prospector IA.

- CorrelationIdFilter: injeta correlation_id e service em cada record
- ContactDataFilter: remove dados de contato passados via `extra`
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Chaves de `extra` que carregariam dados de empresas prospectadas
CONTACT_DATA_KEYS = frozenset(
    {
        "contact_name",
        "contact_names",
        "nome",
        "telefone",
        "phone",
        "email",
        "endereco",
        "address",
        "exclude_names",
    }
)


class CorrelationIdFilter(logging.Filter):
    """Completa o record com correlation_id (do contexto) e service.

    Um correlation_id passado explicitamente via `extra` é mantido.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id = correlation_id_getter

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            getter = self._correlation_id
            record.correlation_id = getter() if getter is not None else ""
        record.service = self._service_name
        return True


class ContactDataFilter(logging.Filter):
    """Descarta campos de contato do record e anota quais foram removidos.

    O record nunca é suprimido; só perde os campos em `keys`.
    """

    def __init__(self, keys: Iterable[str] = CONTACT_DATA_KEYS) -> None:
        super().__init__()
        self._keys = frozenset(keys)

    def filter(self, record: logging.LogRecord) -> bool:
        removed = sorted(key for key in self._keys if key in record.__dict__)
        for key in removed:
            del record.__dict__[key]
        if removed:
            record.redacted_fields = removed
        return True
