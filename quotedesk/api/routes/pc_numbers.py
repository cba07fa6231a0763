"""PC Number Routes — HTTP surface over PcNumberService.

Invariants:
    - Static paths registered before /{pc_id}
    - DELETE checks existence first (404), then reports store failure as 503
    - /companies refreshes the company directory before filtering it
"""

from fastapi import APIRouter, Depends, Query, Response, status

from quotedesk.api.dependencies import get_pc_number_service
from quotedesk.config import get_settings
from quotedesk.core.domain_types import SEARCH_ALL, PcStatus
from quotedesk.core.errors import ErrorContext, PersistenceError
from quotedesk.schemas.records import PcNumberCreate, PcNumberUpdate
from quotedesk.services.pc_number_service import PcNumberService

router = APIRouter(prefix="/api/v1/pc-numbers", tags=["pc-numbers"])


@router.get("")
async def list_pc_numbers(
    q: str | None = Query(None, max_length=200),
    field: str = Query(SEARCH_ALL, max_length=50),
    service: PcNumberService = Depends(get_pc_number_service),
):
    if q:
        return {"pc_numbers": await service.search(q, field)}
    return {"pc_numbers": await service.get_all()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pc_number(
    body: PcNumberCreate,
    service: PcNumberService = Depends(get_pc_number_service),
):
    return await service.create(body.to_fields())


@router.get("/recent")
async def recent_pc_numbers(
    limit: int | None = Query(None, ge=1, le=100),
    service: PcNumberService = Depends(get_pc_number_service),
):
    return {"pc_numbers": await service.get_recent(limit or get_settings().recent_limit)}


@router.get("/statistics")
async def pc_number_statistics(
    service: PcNumberService = Depends(get_pc_number_service),
):
    return await service.get_statistics()


@router.get("/companies")
async def list_companies(
    q: str | None = Query(None, max_length=200),
    service: PcNumberService = Depends(get_pc_number_service),
):
    await service.load_companies()
    return {"companies": service.search_companies(q)}


@router.get("/by-status/{pc_status}")
async def pc_numbers_by_status(
    pc_status: PcStatus,
    service: PcNumberService = Depends(get_pc_number_service),
):
    return {"pc_numbers": await service.get_by_status(pc_status)}


@router.get("/{pc_id}")
async def get_pc_number(
    pc_id: str, service: PcNumberService = Depends(get_pc_number_service),
):
    return await service.get_by_id(pc_id)


@router.patch("/{pc_id}")
async def update_pc_number(
    pc_id: str, body: PcNumberUpdate,
    service: PcNumberService = Depends(get_pc_number_service),
):
    return await service.update(pc_id, body.to_fields())


@router.delete("/{pc_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pc_number(
    pc_id: str, service: PcNumberService = Depends(get_pc_number_service),
):
    await service.get_by_id(pc_id)
    if not await service.delete(pc_id):
        raise PersistenceError(
            "PC Number could not be deleted", "delete",
            ErrorContext(entity_kind=service.config.kind.value, record_id=pc_id),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
