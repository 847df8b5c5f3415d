"""Staff router - FastAPI endpoints for team members"""

from fastapi import APIRouter, Depends

from ...auth import get_current_owner
from ...persistence import DocumentStore, get_document_store
from ..clients.schemas import DeleteResponse
from .schemas import Staff, StaffCreate, StaffUpdate
from .service import StaffService

router = APIRouter(prefix="/staff", tags=["Staff"])


def get_staff_service(store: DocumentStore = Depends(get_document_store)) -> StaffService:
    return StaffService(store)


@router.get("", response_model=list[Staff])
async def get_staff(
    owner_id: str = Depends(get_current_owner),
    service: StaffService = Depends(get_staff_service),
):
    return service.get_staff(owner_id)


@router.get("/{staff_id}", response_model=Staff)
async def get_member(
    staff_id: str,
    owner_id: str = Depends(get_current_owner),
    service: StaffService = Depends(get_staff_service),
):
    return service.get_member(staff_id, owner_id)


@router.post("", response_model=Staff, status_code=201)
async def create_member(
    data: StaffCreate,
    owner_id: str = Depends(get_current_owner),
    service: StaffService = Depends(get_staff_service),
):
    return service.create_member(data, owner_id)


@router.put("/{staff_id}", response_model=Staff)
async def update_member(
    staff_id: str,
    data: StaffUpdate,
    owner_id: str = Depends(get_current_owner),
    service: StaffService = Depends(get_staff_service),
):
    return service.update_member(staff_id, data, owner_id)


@router.delete("/{staff_id}", response_model=DeleteResponse)
async def delete_member(
    staff_id: str,
    owner_id: str = Depends(get_current_owner),
    service: StaffService = Depends(get_staff_service),
):
    return service.delete_member(staff_id, owner_id)
