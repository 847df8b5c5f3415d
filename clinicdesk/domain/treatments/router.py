"""Treatment router - FastAPI endpoints for treatments"""

from fastapi import APIRouter, Depends

from ...auth import get_current_owner
from ...persistence import DocumentStore, get_document_store
from ..clients.schemas import DeleteResponse
from .schemas import ServiceType, TreatmentCreate, TreatmentUpdate
from .service import TreatmentService

router = APIRouter(prefix="/treatments", tags=["Treatments"])


def get_treatment_service(store: DocumentStore = Depends(get_document_store)) -> TreatmentService:
    return TreatmentService(store)


@router.get("", response_model=list[ServiceType])
async def get_treatments(
    owner_id: str = Depends(get_current_owner),
    service: TreatmentService = Depends(get_treatment_service),
):
    return service.get_treatments(owner_id)


@router.get("/{treatment_id}", response_model=ServiceType)
async def get_treatment(
    treatment_id: str,
    owner_id: str = Depends(get_current_owner),
    service: TreatmentService = Depends(get_treatment_service),
):
    return service.get_treatment(treatment_id, owner_id)


@router.post("", response_model=ServiceType, status_code=201)
async def create_treatment(
    data: TreatmentCreate,
    owner_id: str = Depends(get_current_owner),
    service: TreatmentService = Depends(get_treatment_service),
):
    return service.create_treatment(data, owner_id)


@router.put("/{treatment_id}", response_model=ServiceType)
async def update_treatment(
    treatment_id: str,
    data: TreatmentUpdate,
    owner_id: str = Depends(get_current_owner),
    service: TreatmentService = Depends(get_treatment_service),
):
    return service.update_treatment(treatment_id, data, owner_id)


@router.delete("/{treatment_id}", response_model=DeleteResponse)
async def delete_treatment(
    treatment_id: str,
    owner_id: str = Depends(get_current_owner),
    service: TreatmentService = Depends(get_treatment_service),
):
    return service.delete_treatment(treatment_id, owner_id)
