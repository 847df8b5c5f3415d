"""Treatment service - Business logic for treatment operations"""

import datetime as dt
import logging
from typing import Optional

from fastapi import HTTPException

from ...persistence.base import DocumentStore
from ..appointments.repository import AppointmentRepository
from ..clients.schemas import DeleteResponse
from .repository import TreatmentRepository
from .schemas import ServiceType, TreatmentCreate, TreatmentUpdate

logger = logging.getLogger(__name__)


class TreatmentService:
    """Service layer for treatment business logic"""

    def __init__(self, store: DocumentStore):
        self.repo = TreatmentRepository(store)
        self.appointments = AppointmentRepository(store)

    def get_treatments(self, owner_id: str) -> list[ServiceType]:
        return self.repo.list(owner_id)

    def get_treatment(self, treatment_id: str, owner_id: str) -> ServiceType:
        treatment = self.repo.get(treatment_id, owner_id)
        if not treatment:
            raise HTTPException(status_code=404, detail="Treatment not found")
        return treatment

    def create_treatment(self, data: TreatmentCreate, owner_id: str) -> ServiceType:
        logger.info(f"📥 Creating treatment '{data.name}' for owner: {owner_id}")
        treatment = ServiceType(
            name=data.name,
            default_price=data.defaultPrice,
            default_duration=data.defaultDuration,
            recurrence_days=data.recurrenceDays,
            upcoming_threshold_days=data.upcomingThresholdDays,
        )
        if data.color:
            treatment.color = data.color
        return self.repo.save(treatment, owner_id)

    def update_treatment(self, treatment_id: str, data: TreatmentUpdate, owner_id: str) -> ServiceType:
        """Update a treatment; booked appointments keep the price and duration they were saved with"""
        treatment = self.get_treatment(treatment_id, owner_id)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.defaultPrice is not None:
            updates["default_price"] = data.defaultPrice
        if data.defaultDuration is not None:
            updates["default_duration"] = data.defaultDuration
        if data.recurrenceDays is not None:
            updates["recurrence_days"] = data.recurrenceDays
        if data.color is not None:
            updates["color"] = data.color
        if data.upcomingThresholdDays is not None:
            updates["upcoming_threshold_days"] = data.upcomingThresholdDays

        return self.repo.save(treatment.model_copy(update=updates), owner_id)

    def delete_treatment(
        self, treatment_id: str, owner_id: str, today: Optional[dt.date] = None
    ) -> DeleteResponse:
        treatment = self.get_treatment(treatment_id, owner_id)
        future_count = self.appointments.count_future(
            owner_id, today or dt.date.today(), service_type_id=treatment.id
        )
        if future_count:
            logger.warning(f"⚠️ Deleting treatment {treatment.id} with {future_count} future appointment(s)")

        self.repo.delete(treatment.id, owner_id)
        return DeleteResponse(message="Treatment deleted", futureAppointments=future_count)
