"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto.
"""

from app.services.csv_export import export_contacts_csv, export_filename
from app.services.error_messages import normalize_error_message
from app.services.results_filter import ResultsFilter, available_ddds, filter_contacts

__all__ = [
    "ResultsFilter",
    "available_ddds",
    "export_contacts_csv",
    "export_filename",
    "filter_contacts",
    "normalize_error_message",
]
