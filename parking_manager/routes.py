from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from parking_manager.auth import require_operator
from parking_manager.config import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from parking_manager.database import get_db
from parking_manager.schemas import (
    ParkingLotRead,
    ParkingLotUpdate,
    ParkingLotWrite,
    ParkingSessionRead,
    ParkingSessionUpdate,
    ParkingSessionWrite,
    VehicleRead,
    VehicleUpdate,
    VehicleWrite,
)
from parking_manager.services import ParkingLotService, ParkingSessionService, VehicleService


def build_router(service_class, read_schema, write_schema, update_schema, search_param: str) -> APIRouter:
    """CRUD, search and bulk routes for one record type, all behind basic auth."""
    router = APIRouter(dependencies=[Depends(require_operator)])

    def get_service(db: AsyncSession = Depends(get_db)):
        return service_class(db)

    @router.get("", response_model=List[read_schema])
    async def list_records(
        page_number: int = Query(DEFAULT_PAGE_NUMBER, alias="pageNumber"),
        page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
        service=Depends(get_service),
    ):
        return await service.list(page_number, page_size)

    # declared before /{record_id} so "search" is not parsed as an id
    @router.get("/search", response_model=List[read_schema])
    async def search_records(
        term: Optional[str] = Query(None, alias=search_param),
        service=Depends(get_service),
    ):
        return await service.search(term)

    @router.get("/{record_id}", response_model=read_schema)
    async def get_record(record_id: int, service=Depends(get_service)):
        return await service.get(record_id)

    @router.post("", response_model=read_schema, status_code=HTTP_201_CREATED)
    async def create_record(
        payload: write_schema, request: Request, response: Response, service=Depends(get_service)
    ):
        created = await service.create(payload)
        response.headers["Location"] = f"{request.url.path.rstrip('/')}/{created.id}"
        return created

    @router.post("/bulk", response_model=List[read_schema])
    async def bulk_create_records(payloads: List[write_schema], service=Depends(get_service)):
        return await service.bulk_create(payloads)

    @router.put("/{record_id}", status_code=HTTP_204_NO_CONTENT)
    async def update_record(record_id: int, payload: update_schema, service=Depends(get_service)):
        await service.update(record_id, payload)

    @router.delete("/{record_id}", status_code=HTTP_204_NO_CONTENT)
    async def delete_record(record_id: int, service=Depends(get_service)):
        await service.delete(record_id)

    return router


parking_lots = build_router(ParkingLotService, ParkingLotRead, ParkingLotWrite, ParkingLotUpdate, "name")
vehicles = build_router(VehicleService, VehicleRead, VehicleWrite, VehicleUpdate, "plateNumber")
parking_sessions = build_router(
    ParkingSessionService, ParkingSessionRead, ParkingSessionWrite, ParkingSessionUpdate, "plateNumber"
)
