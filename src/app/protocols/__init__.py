"""Protocolos e contratos do core da aplicação."""

from .auth_service import AuthServiceProtocol, HeaderAuthService
from .history_store import DEFAULT_HISTORY_LIMIT, HistoryStoreProtocol, SearchHistoryItem

__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "AuthServiceProtocol",
    "HeaderAuthService",
    "HistoryStoreProtocol",
    "SearchHistoryItem",
]
