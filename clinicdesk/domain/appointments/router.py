"""Appointment router - FastAPI endpoints for the appointment book"""

import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...auth import get_current_owner
from ...persistence import DocumentStore, get_document_store
from .schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    DropRequest,
    OverlapResponse,
    ResizeRequest,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(store: DocumentStore = Depends(get_document_store)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(store)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[Appointment])
async def get_appointments(
    start: Optional[dt.date] = Query(None),
    end: Optional[dt.date] = Query(None),
    staff_id: Optional[str] = Query(None, alias="staffId"),
    service_type_id: Optional[str] = Query(None, alias="serviceTypeId"),
    status_id: Optional[str] = Query(None, alias="statusId"),
    client_id: Optional[str] = Query(None, alias="clientId"),
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    """List appointments ordered by date and start time, optionally filtered"""
    return service.get_appointments(
        owner_id,
        start=start,
        end=end,
        staff_id=staff_id,
        service_type_id=service_type_id,
        status_id=status_id,
        client_id=client_id,
    )


@router.get("/{appointment_id}", response_model=Appointment)
async def get_appointment(
    appointment_id: str,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.get_appointment(appointment_id, owner_id)


@router.post("", response_model=Appointment, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.create_appointment(data, owner_id)


@router.put("/{appointment_id}", response_model=Appointment)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.update_appointment(appointment_id, data, owner_id)


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: str,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.delete_appointment(appointment_id, owner_id)
    return {"message": "Appointment deleted"}


# ============================================================================
# CALENDAR WORKFLOWS
# ============================================================================


@router.post("/{appointment_id}/complete", response_model=Appointment)
async def quick_complete(
    appointment_id: str,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Mark the appointment with the default billable status"""
    return service.quick_complete(appointment_id, owner_id)


@router.post("/{appointment_id}/drop", response_model=Appointment)
async def drop_appointment(
    appointment_id: str,
    data: DropRequest,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Move or copy the appointment to the slot it was dropped on"""
    return service.drop(appointment_id, data, owner_id)


@router.post("/{appointment_id}/resize", response_model=Appointment)
async def resize_appointment(
    appointment_id: str,
    data: ResizeRequest,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.resize(appointment_id, data, owner_id)


@router.get("/{appointment_id}/overlaps", response_model=OverlapResponse)
async def get_overlaps(
    appointment_id: str,
    owner_id: str = Depends(get_current_owner),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.get_appointment(appointment_id, owner_id)
    return OverlapResponse(appointmentId=appointment.id, conflicts=service.find_overlaps(appointment, owner_id))
