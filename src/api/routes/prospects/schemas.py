"""Schemas HTTP das rotas de prospecção."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ai.models.contact import ContactRecord
from ai.models.search_params import LatLng, SearchParams


class SearchRequest(BaseModel):
    """Corpo de POST /prospects/search."""

    model_config = ConfigDict(extra="ignore")

    location: str = ""
    niche: str = ""
    type: str = ""
    radius: str = ""
    whatsapp_only: bool = False
    fast_mode: bool = False
    deep_search_web: bool = False
    deep_search_instagram: bool = False
    deep_search_facebook: bool = False
    deep_search_linkedin: bool = False
    lat_lng: LatLng | None = None

    def to_params(self) -> SearchParams:
        return SearchParams.model_validate(self.model_dump(exclude={"lat_lng"}))


class ResultsResponse(BaseModel):
    """Resultados filtrados da sessão."""

    total: int
    filtered: int
    available_ddds: list[str]
    results: list[ContactRecord]


class ValidationErrorDetail(BaseModel):
    message: str
    missing_fields: list[str]
