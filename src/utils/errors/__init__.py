"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationError,
    ProspectingError,
    SearchValidationError,
    UpstreamEmptyResponse,
    UpstreamError,
    UpstreamTransientError,
)

__all__ = [
    "ConfigurationError",
    "ProspectingError",
    "SearchValidationError",
    "UpstreamEmptyResponse",
    "UpstreamError",
    "UpstreamTransientError",
]
