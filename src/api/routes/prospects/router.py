"""Endpoints da sessão de busca (busca, paginação, resultados, export)."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from api.routes.dependencies import CurrentUser, Registry
from api.routes.prospects.schemas import ResultsResponse, SearchRequest, ValidationErrorDetail
from app.services.csv_export import CSV_MEDIA_TYPE, export_contacts_csv, export_filename
from app.services.results_filter import (
    RatingMode,
    ResultsFilter,
    WhatsAppMode,
    available_ddds,
    filter_contacts,
)
from app.sessions.models import LoadMoreOutcome, SessionSnapshot
from utils.errors import SearchValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_results_filter(
    name: Annotated[str, Query()] = "",
    ddd: Annotated[str | None, Query(pattern=r"^\d{2}$")] = None,
    whatsapp_mode: Annotated[WhatsAppMode, Query()] = "all",
    rating_mode: Annotated[RatingMode, Query()] = "all",
    min_reviews: Annotated[int | None, Query(ge=0)] = None,
) -> ResultsFilter:
    return ResultsFilter(
        name=name,
        ddd=ddd,
        whatsapp_mode=whatsapp_mode,
        rating_mode=rating_mode,
        min_reviews=min_reviews,
    )


Filters = Annotated[ResultsFilter, Depends(get_results_filter)]


@router.post("/search", response_model=SessionSnapshot)
async def start_search(
    body: SearchRequest,
    user_id: CurrentUser,
    registry: Registry,
) -> SessionSnapshot:
    """Inicia uma nova busca e aguarda sua conclusão."""
    session = registry.get_or_create(user_id)
    try:
        return await session.start_search(body.to_params(), lat_lng=body.lat_lng)
    except SearchValidationError as e:
        detail = ValidationErrorDetail(message=str(e), missing_fields=list(e.missing_fields))
        raise HTTPException(
            status_code=422,
            detail=detail.model_dump(),
        ) from e


@router.post("/load-more", response_model=LoadMoreOutcome)
async def load_more(user_id: CurrentUser, registry: Registry) -> LoadMoreOutcome:
    """Carrega mais resultados; durante uma paginação, cancela-a."""
    return await registry.get_or_create(user_id).load_more()


@router.get("/session", response_model=SessionSnapshot)
async def get_session(user_id: CurrentUser, registry: Registry) -> SessionSnapshot:
    return registry.get_or_create(user_id).snapshot()


@router.get("/results", response_model=ResultsResponse)
async def get_results(
    user_id: CurrentUser,
    registry: Registry,
    criteria: Filters,
) -> ResultsResponse:
    """Resultados da sessão com filtros aplicados."""
    contacts = registry.get_or_create(user_id).results
    filtered = filter_contacts(contacts, criteria)
    return ResultsResponse(
        total=len(contacts),
        filtered=len(filtered),
        available_ddds=available_ddds(contacts),
        results=filtered,
    )


@router.get("/export.csv")
async def export_csv(
    user_id: CurrentUser,
    registry: Registry,
    criteria: Filters,
) -> Response:
    """Exporta o conjunto filtrado em CSV."""
    session = registry.get_or_create(user_id)
    snapshot = session.snapshot()
    if snapshot.params is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Nenhuma busca realizada nesta sessão",
        )
    filtered = filter_contacts(snapshot.results, criteria)
    logger.info(
        "results_exported",
        extra={"user_id": user_id, "rows": len(filtered), "total": snapshot.result_count},
    )
    return Response(
        content=export_contacts_csv(filtered).encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(snapshot.params)}"'
        },
    )
