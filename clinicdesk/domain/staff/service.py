"""Staff service - Business logic for team members"""

import datetime as dt
import logging
from typing import Optional

from fastapi import HTTPException

from ...persistence.base import DocumentStore
from ..appointments.repository import AppointmentRepository
from ..clients.schemas import DeleteResponse
from .repository import StaffRepository
from .schemas import Staff, StaffCreate, StaffUpdate

logger = logging.getLogger(__name__)


class StaffService:
    def __init__(self, store: DocumentStore):
        self.repo = StaffRepository(store)
        self.appointments = AppointmentRepository(store)

    def get_staff(self, owner_id: str) -> list[Staff]:
        return self.repo.list(owner_id)

    def get_member(self, staff_id: str, owner_id: str) -> Staff:
        member = self.repo.get(staff_id, owner_id)
        if not member:
            raise HTTPException(status_code=404, detail="Staff member not found")
        return member

    def create_member(self, data: StaffCreate, owner_id: str) -> Staff:
        logger.info(f"📥 Creating staff member '{data.name}' for owner: {owner_id}")
        member = Staff(
            name=data.name,
            email=data.email,
            phone=data.phone,
            specialties=data.specialties,
            default_rate=data.defaultRate,
            rates=data.rates,
            created_at=dt.datetime.now(dt.timezone.utc),
        )
        if data.color:
            member.color = data.color
        return self.repo.save(member, owner_id)

    def update_member(self, staff_id: str, data: StaffUpdate, owner_id: str) -> Staff:
        member = self.get_member(staff_id, owner_id)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.email is not None:
            updates["email"] = data.email
        if data.phone is not None:
            updates["phone"] = data.phone
        if data.specialties is not None:
            updates["specialties"] = data.specialties
        if data.defaultRate is not None:
            updates["default_rate"] = data.defaultRate
        if data.rates is not None:
            updates["rates"] = data.rates
        if data.color is not None:
            updates["color"] = data.color

        return self.repo.save(member.model_copy(update=updates), owner_id)

    def delete_member(self, staff_id: str, owner_id: str, today: Optional[dt.date] = None) -> DeleteResponse:
        """Delete a team member; future appointments keep the dangling staff id"""
        member = self.get_member(staff_id, owner_id)
        future_count = self.appointments.count_future(
            owner_id, today or dt.date.today(), staff_id=member.id
        )
        if future_count:
            logger.warning(f"⚠️ Deleting staff member {member.id} with {future_count} future appointment(s)")

        self.repo.delete(member.id, owner_id)
        return DeleteResponse(message="Staff member deleted", futureAppointments=future_count)
