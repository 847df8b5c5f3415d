"""Appointment repository - Document store operations for appointments"""

import datetime as dt
from typing import Optional

from ...persistence.base import APPOINTMENTS
from ...persistence.repository import DocumentRepository
from .schemas import Appointment


class AppointmentRepository(DocumentRepository[Appointment]):
    """Repository for appointment documents"""

    collection = APPOINTMENTS
    model = Appointment

    def list_filtered(
        self,
        owner_id: str,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
        staff_id: Optional[str] = None,
        service_type_id: Optional[str] = None,
        status_id: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> list[Appointment]:
        """Appointments matching every given filter, ordered by date and start time"""
        appointments = [
            apt
            for apt in self.list(owner_id)
            if (start is None or apt.date >= start)
            and (end is None or apt.date <= end)
            and (staff_id is None or apt.staff_id == staff_id)
            and (service_type_id is None or apt.service_type_id == service_type_id)
            and (status_id is None or apt.status_id == status_id)
            and (client_id is None or apt.client_id == client_id)
        ]
        return sorted(appointments, key=lambda apt: (apt.date, apt.start_minutes))

    def count_future(self, owner_id: str, today: dt.date, **filters) -> int:
        """Appointments dated after today that match `filters`"""
        return sum(1 for apt in self.list_filtered(owner_id, **filters) if apt.date > today)
