"""Status router - FastAPI endpoints for appointment statuses"""

from fastapi import APIRouter, Depends

from ...auth import get_current_owner
from ...persistence import DocumentStore, get_document_store
from .schemas import AppStatus, StatusCreate, StatusUpdate
from .service import StatusService

router = APIRouter(prefix="/statuses", tags=["Statuses"])


def get_status_service(store: DocumentStore = Depends(get_document_store)) -> StatusService:
    return StatusService(store)


@router.get("", response_model=list[AppStatus])
async def get_statuses(
    owner_id: str = Depends(get_current_owner),
    service: StatusService = Depends(get_status_service),
):
    """Get all statuses, seeding the default set for a new owner"""
    return service.get_statuses(owner_id)


@router.post("", response_model=AppStatus, status_code=201)
async def create_status(
    data: StatusCreate,
    owner_id: str = Depends(get_current_owner),
    service: StatusService = Depends(get_status_service),
):
    return service.create_status(data, owner_id)


@router.put("/{status_id}", response_model=AppStatus)
async def update_status(
    status_id: str,
    data: StatusUpdate,
    owner_id: str = Depends(get_current_owner),
    service: StatusService = Depends(get_status_service),
):
    return service.update_status(status_id, data, owner_id)


@router.delete("/{status_id}")
async def delete_status(
    status_id: str,
    owner_id: str = Depends(get_current_owner),
    service: StatusService = Depends(get_status_service),
):
    service.delete_status(status_id, owner_id)
    return {"message": "Status deleted"}
