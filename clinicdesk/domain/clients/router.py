"""Client router - FastAPI endpoints for client operations"""

import logging

from fastapi import APIRouter, Depends

from ...auth import get_current_owner
from ...persistence import DocumentStore, get_document_store
from .schemas import Client, ClientCreate, ClientUpdate, DeleteResponse
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(store: DocumentStore = Depends(get_document_store)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(store)


@router.get("", response_model=list[Client])
async def get_clients(
    owner_id: str = Depends(get_current_owner),
    service: ClientService = Depends(get_client_service),
):
    """Get all clients for the current owner"""
    return service.get_clients(owner_id)


@router.get("/{client_id}", response_model=Client)
async def get_client(
    client_id: str,
    owner_id: str = Depends(get_current_owner),
    service: ClientService = Depends(get_client_service),
):
    return service.get_client(client_id, owner_id)


@router.post("", response_model=Client, status_code=201)
async def create_client(
    data: ClientCreate,
    owner_id: str = Depends(get_current_owner),
    service: ClientService = Depends(get_client_service),
):
    return service.create_client(data, owner_id)


@router.put("/{client_id}", response_model=Client)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    owner_id: str = Depends(get_current_owner),
    service: ClientService = Depends(get_client_service),
):
    return service.update_client(client_id, data, owner_id)


@router.delete("/{client_id}", response_model=DeleteResponse)
async def delete_client(
    client_id: str,
    owner_id: str = Depends(get_current_owner),
    service: ClientService = Depends(get_client_service),
):
    """Delete a client; the response counts future appointments left pointing at it"""
    return service.delete_client(client_id, owner_id)


@router.post("/{client_id}/finished-treatments/{service_type_id}", response_model=Client)
async def toggle_finished_treatment(
    client_id: str,
    service_type_id: str,
    owner_id: str = Depends(get_current_owner),
    service: ClientService = Depends(get_client_service),
):
    """Toggle whether follow-ups are tracked for this treatment"""
    return service.toggle_finished_treatment(client_id, service_type_id, owner_id)
