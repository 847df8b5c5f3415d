"""Appointment service - Booking, editing and calendar workflows"""

import datetime as dt
import logging
from typing import Optional

from fastapi import HTTPException

from ...config import REJECT_DOUBLE_BOOKING
from ...persistence.base import DocumentStore
from ..clients.repository import ClientRepository
from ..staff.repository import StaffRepository
from ..statuses import rules
from ..statuses.service import StatusService
from ..treatments.repository import TreatmentRepository
from .calendar import CalendarGrid, ResizeEdge, resize_from_bottom, resize_from_top
from .pricing import final_price
from .repository import AppointmentRepository
from .schemas import Appointment, AppointmentCreate, AppointmentUpdate, DropRequest, ResizeRequest

logger = logging.getLogger(__name__)


class AppointmentService:
    """
    Service layer for appointments.

    Every write goes through `_save`, which recomputes the final price from
    the stored base price and discount and runs the double-booking check.
    """

    def __init__(self, store: DocumentStore, reject_double_booking: bool = REJECT_DOUBLE_BOOKING):
        self.repo = AppointmentRepository(store)
        self.clients = ClientRepository(store)
        self.treatments = TreatmentRepository(store)
        self.staff = StaffRepository(store)
        self.statuses = StatusService(store)
        self.reject_double_booking = reject_double_booking

    # ========================================================================
    # READS
    # ========================================================================

    def get_appointments(
        self,
        owner_id: str,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
        staff_id: Optional[str] = None,
        service_type_id: Optional[str] = None,
        status_id: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> list[Appointment]:
        if start and end and start > end:
            raise HTTPException(status_code=400, detail="start must not be after end")
        return self.repo.list_filtered(
            owner_id,
            start=start,
            end=end,
            staff_id=staff_id,
            service_type_id=service_type_id,
            status_id=status_id,
            client_id=client_id,
        )

    def get_appointment(self, appointment_id: str, owner_id: str) -> Appointment:
        appointment = self.repo.get(appointment_id, owner_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def find_overlaps(self, appointment: Appointment, owner_id: str) -> list[Appointment]:
        """
        Appointments of the same staff member on the same day whose time ranges
        intersect `appointment`. Cancelled appointments and unassigned ones
        never conflict.
        """
        if not appointment.staff_id:
            return []

        statuses = self.statuses.get_statuses(owner_id)
        status_by_id = {status.id: status for status in statuses}
        if rules.is_cancelled(status_by_id.get(appointment.status_id)):
            return []

        conflicts = []
        for other in self.repo.list_filtered(owner_id, start=appointment.date, end=appointment.date):
            if other.id == appointment.id or other.staff_id != appointment.staff_id:
                continue
            if rules.is_cancelled(status_by_id.get(other.status_id)):
                continue
            if other.start_minutes < appointment.end_minutes and appointment.start_minutes < other.end_minutes:
                conflicts.append(other)
        return conflicts

    # ========================================================================
    # WRITES
    # ========================================================================

    def create_appointment(self, data: AppointmentCreate, owner_id: str) -> Appointment:
        """
        Book an appointment.

        Client, treatment, staff and status references are checked before
        anything is written. Missing values are filled from the initial
        status, the treatment defaults and the client's current discount.
        """
        logger.info(f"📥 Booking appointment for client {data.clientId} on {data.date}")

        client = self.clients.get(data.clientId, owner_id)
        if not client:
            raise HTTPException(status_code=400, detail="Client not found")

        treatment = self.treatments.get(data.serviceTypeId, owner_id)
        if not treatment:
            raise HTTPException(status_code=400, detail="Treatment not found")

        if data.staffId:
            self._require_staff(data.staffId, owner_id)

        if data.statusId:
            status_id = self._require_status(data.statusId, owner_id)
        else:
            status = rules.initial_status(self.statuses.get_statuses(owner_id))
            if status is None:
                raise HTTPException(status_code=400, detail="No status available for new appointments")
            status_id = status.id

        appointment = Appointment(
            client_id=client.id,
            service_type_id=treatment.id,
            staff_id=data.staffId or None,
            status_id=status_id,
            date=data.date,
            start_time=data.startTime,
            duration_minutes=data.durationMinutes or treatment.default_duration,
            base_price=data.basePrice if data.basePrice is not None else treatment.default_price,
            discount_percentage=(
                data.discountPercentage if data.discountPercentage is not None else client.discount_percentage
            ),
            booking_fee_paid=data.bookingFeePaid,
            booking_fee_amount=data.bookingFeeAmount,
            notes=data.notes or "",
        )
        return self._save(appointment, owner_id)

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate, owner_id: str) -> Appointment:
        appointment = self.get_appointment(appointment_id, owner_id)

        updates = {}
        if data.clientId is not None:
            if not self.clients.get(data.clientId, owner_id):
                raise HTTPException(status_code=400, detail="Client not found")
            updates["client_id"] = data.clientId
        if data.serviceTypeId is not None:
            if not self.treatments.get(data.serviceTypeId, owner_id):
                raise HTTPException(status_code=400, detail="Treatment not found")
            updates["service_type_id"] = data.serviceTypeId
        if data.staffId is not None:
            # An empty string unassigns the staff member
            if data.staffId:
                self._require_staff(data.staffId, owner_id)
            updates["staff_id"] = data.staffId or None
        if data.statusId is not None:
            updates["status_id"] = self._require_status(data.statusId, owner_id)
        if data.date is not None:
            updates["date"] = data.date
        if data.startTime is not None:
            updates["start_time"] = data.startTime
        if data.durationMinutes is not None:
            updates["duration_minutes"] = data.durationMinutes
        if data.basePrice is not None:
            updates["base_price"] = data.basePrice
        if data.discountPercentage is not None:
            updates["discount_percentage"] = data.discountPercentage
        if data.bookingFeePaid is not None:
            updates["booking_fee_paid"] = data.bookingFeePaid
        if data.bookingFeeAmount is not None:
            updates["booking_fee_amount"] = data.bookingFeeAmount
        if data.notes is not None:
            updates["notes"] = data.notes

        return self._save(appointment.model_copy(update=updates), owner_id)

    def delete_appointment(self, appointment_id: str, owner_id: str) -> None:
        appointment = self.get_appointment(appointment_id, owner_id)
        self.repo.delete(appointment.id, owner_id)
        logger.info(f"🗑️ Appointment {appointment.id} deleted")

    def quick_complete(self, appointment_id: str, owner_id: str) -> Appointment:
        """Switch an appointment to the default billable status"""
        appointment = self.get_appointment(appointment_id, owner_id)
        status = rules.quick_complete_status(self.statuses.get_statuses(owner_id))
        if status is None:
            raise HTTPException(status_code=400, detail="No billable status configured")

        logger.info(f"✅ Appointment {appointment.id} completed with status {status.name}")
        return self._save(appointment.model_copy(update={"status_id": status.id}), owner_id)

    def move(self, appointment_id: str, day: dt.date, start_time: str, owner_id: str) -> Appointment:
        """Keep the appointment id, change its date and start time"""
        appointment = self.get_appointment(appointment_id, owner_id)
        logger.info(f"➡️ Moving appointment {appointment.id} to {day} {start_time}")
        return self._save(appointment.model_copy(update={"date": day, "start_time": start_time}), owner_id)

    def copy(self, appointment_id: str, day: dt.date, start_time: str, owner_id: str) -> Appointment:
        """Book a new appointment with the same attributes at another slot"""
        appointment = self.get_appointment(appointment_id, owner_id)
        logger.info(f"📋 Copying appointment {appointment.id} to {day} {start_time}")
        return self._save(
            appointment.model_copy(update={"id": "", "date": day, "start_time": start_time}), owner_id
        )

    def drop(self, appointment_id: str, request: DropRequest, owner_id: str) -> Appointment:
        """Resolve a calendar drop as the move or copy the caller chose"""
        resolve = self.copy if request.mode == "copy" else self.move
        return resolve(appointment_id, request.date, request.start_time, owner_id)

    def resize(self, appointment_id: str, request: ResizeRequest, owner_id: str) -> Appointment:
        """Apply a finished resize gesture, snapping the pointer delta to the grid"""
        appointment = self.get_appointment(appointment_id, owner_id)
        grid = CalendarGrid(slot_height=request.slotHeight) if request.slotHeight else CalendarGrid()

        if ResizeEdge(request.edge) == ResizeEdge.BOTTOM:
            updates = {
                "duration_minutes": resize_from_bottom(appointment.duration_minutes, request.deltaPixels, grid)
            }
        else:
            start_time, duration = resize_from_top(
                appointment.start_time, appointment.duration_minutes, request.deltaPixels, grid
            )
            updates = {"start_time": start_time, "duration_minutes": duration}

        return self._save(appointment.model_copy(update=updates), owner_id)

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _require_staff(self, staff_id: str, owner_id: str) -> str:
        if not self.staff.get(staff_id, owner_id):
            raise HTTPException(status_code=400, detail="Staff member not found")
        return staff_id

    def _require_status(self, status_id: str, owner_id: str) -> str:
        if not any(status.id == status_id for status in self.statuses.get_statuses(owner_id)):
            raise HTTPException(status_code=400, detail="Status not found")
        return status_id

    def _save(self, appointment: Appointment, owner_id: str) -> Appointment:
        appointment = appointment.model_copy(
            update={"price": final_price(appointment.base_price, appointment.discount_percentage)}
        )

        conflicts = self.find_overlaps(appointment, owner_id)
        if conflicts:
            ids = ", ".join(conflict.id for conflict in conflicts)
            logger.warning(f"⚠️ Appointment overlaps with {ids} for staff {appointment.staff_id}")
            if self.reject_double_booking:
                raise HTTPException(status_code=409, detail=f"Staff member is already booked ({ids})")

        return self.repo.save(appointment, owner_id)
