"""Utilitários de IA.

Re-exporta o parser de contatos e a política de retry.
"""

from ai.utils.contact_parser import ParseOutcome, parse_contacts, parse_contacts_with_diagnostic
from ai.utils.retry import is_transient_error, run_with_retry

__all__ = [
    "ParseOutcome",
    "is_transient_error",
    "parse_contacts",
    "parse_contacts_with_diagnostic",
    "run_with_retry",
]
