"""Exportação CSV do conjunto (filtrado) de resultados.

UTF-8 com BOM para abrir corretamente em planilhas; todas as colunas
entre aspas; valores sentinela exportados como célula vazia.
"""

from __future__ import annotations

import csv
import io
import re
import unicodedata
from collections.abc import Iterable

from ai.models.contact import ContactRecord, is_absent
from ai.models.search_params import SearchParams

CSV_BOM = "\ufeff"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"

CSV_COLUMNS: tuple[tuple[str, str], ...] = (
    ("Nome", "name"),
    ("Telefone", "phone"),
    ("WhatsApp", "has_whatsapp"),
    ("Email", "email"),
    ("Website", "website"),
    ("Instagram", "instagram"),
    ("Facebook", "facebook"),
    ("LinkedIn", "linkedin"),
    ("Endereço", "address"),
    ("Link Maps", "maps_link"),
    ("Avaliação", "rating"),
    ("Num. Avaliações", "review_count"),
    ("Resumo Web", "web_summary"),
)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9\-]+")


def _cell(contact: ContactRecord, field: str) -> str:
    value = getattr(contact, field)
    if isinstance(value, bool):
        return "Sim" if value else "Não"
    if isinstance(value, str):
        return "" if is_absent(value) else value
    return str(value)


def contact_to_row(contact: ContactRecord) -> list[str]:
    """Linha CSV na ordem fixa de colunas."""
    return [_cell(contact, field) for _, field in CSV_COLUMNS]


def export_contacts_csv(contacts: Iterable[ContactRecord]) -> str:
    """Gera o conteúdo CSV (com BOM) dos contatos informados."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([header for header, _ in CSV_COLUMNS])
    for contact in contacts:
        writer.writerow(contact_to_row(contact))
    return CSV_BOM + buffer.getvalue()


def export_filename(params: SearchParams) -> str:
    """Nome de arquivo `prospects_<nicho>_<local>.csv` (ASCII) seguro para download."""
    parts = ["prospects"]
    for value in (params.niche, params.location):
        ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
        slug = _UNSAFE_FILENAME_CHARS.sub("_", ascii_value.strip()).strip("_")
        if slug:
            parts.append(slug)
    return "_".join(parts) + ".csv"
