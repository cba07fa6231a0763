"""Quote Routes — HTTP surface over QuoteService.

Invariants:
    - Static paths (/recent, /statistics, ...) registered before /{quote_id}
    - Service faults (QuoteDeskError) propagate to the global error handlers
    - List endpoints never fail: the service returns safe defaults
    - DELETE checks existence first: 404 for an unknown id, 503 when the
      store fails, 204 on success
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from quotedesk.api.dependencies import get_quote_service
from quotedesk.config import get_settings
from quotedesk.core.domain_types import SEARCH_ALL, QuoteStatus
from quotedesk.core.errors import ErrorContext, PersistenceError
from quotedesk.schemas.records import (
    CalculateTotalRequest, QuoteCreate, QuoteItemCreate, QuoteUpdate,
)
from quotedesk.services.quote_service import QuoteService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/quotes", tags=["quotes"])


@router.get("")
async def list_quotes(
    q: str | None = Query(None, max_length=200),
    field: str = Query(SEARCH_ALL, max_length=50),
    service: QuoteService = Depends(get_quote_service),
):
    """All quotes, or those matching q in field ("all" = any field)."""
    if q:
        return {"quotes": await service.search(q, field)}
    return {"quotes": await service.get_all()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_quote(
    body: QuoteCreate, service: QuoteService = Depends(get_quote_service),
):
    return await service.create(body.to_fields())


@router.get("/recent")
async def recent_quotes(
    limit: int | None = Query(None, ge=1, le=100),
    service: QuoteService = Depends(get_quote_service),
):
    return {"quotes": await service.get_recent(limit or get_settings().recent_limit)}


@router.get("/statistics")
async def quote_statistics(service: QuoteService = Depends(get_quote_service)):
    return await service.get_statistics()


@router.get("/by-status/{quote_status}")
async def quotes_by_status(
    quote_status: QuoteStatus,
    service: QuoteService = Depends(get_quote_service),
):
    return {"quotes": await service.get_by_status(quote_status)}


@router.get("/by-pc/{pc_id}")
async def quotes_by_pc_number(
    pc_id: str, service: QuoteService = Depends(get_quote_service),
):
    return {"quotes": await service.get_by_parent(pc_id)}


@router.post("/calculate-total")
async def calculate_total(body: CalculateTotalRequest):
    """Preview the total of unsaved items (no persistence)."""
    return {"total_amount": QuoteService.calculate_total(body.items)}


@router.get("/{quote_id}")
async def get_quote(
    quote_id: str, service: QuoteService = Depends(get_quote_service),
):
    return await service.get_by_id(quote_id)


@router.patch("/{quote_id}")
async def update_quote(
    quote_id: str, body: QuoteUpdate,
    service: QuoteService = Depends(get_quote_service),
):
    return await service.update(quote_id, body.to_fields())


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(
    quote_id: str, service: QuoteService = Depends(get_quote_service),
):
    await service.get_by_id(quote_id)
    if not await service.delete(quote_id):
        raise PersistenceError(
            "Quote could not be deleted", "delete",
            ErrorContext(entity_kind=service.config.kind.value, record_id=quote_id),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{quote_id}/items", status_code=status.HTTP_201_CREATED)
async def add_quote_item(
    quote_id: str, body: QuoteItemCreate,
    service: QuoteService = Depends(get_quote_service),
):
    item = body.model_dump(exclude_unset=True, mode="json")
    return await service.add_item(quote_id, item)


@router.delete("/{quote_id}/items/{item_id}")
async def remove_quote_item(
    quote_id: str, item_id: str,
    service: QuoteService = Depends(get_quote_service),
):
    return await service.remove_item(quote_id, item_id)
