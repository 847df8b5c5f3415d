"""Client service - Business logic for client operations"""

import datetime as dt
import logging
from typing import Optional

from fastapi import HTTPException

from ...persistence.base import DocumentStore
from ..appointments.repository import AppointmentRepository
from .repository import ClientRepository
from .schemas import Client, ClientCreate, ClientUpdate, DeleteResponse

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, store: DocumentStore):
        self.repo = ClientRepository(store)
        self.appointments = AppointmentRepository(store)

    def get_clients(self, owner_id: str) -> list[Client]:
        """Get all clients for an owner"""
        return self.repo.list(owner_id)

    def get_client(self, client_id: str, owner_id: str) -> Client:
        """Get a specific client"""
        client = self.repo.get(client_id, owner_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def create_client(self, data: ClientCreate, owner_id: str) -> Client:
        """Create a new client"""
        logger.info(f"📥 Creating client for owner: {owner_id}")
        client = Client(
            name=data.name,
            email=data.email,
            phone=data.phone,
            notes=data.notes,
            created_at=dt.datetime.now(dt.timezone.utc),
            discount_percentage=data.discountPercentage or 0.0,
            finished_treatments=data.finishedTreatments or [],
        )
        return self.repo.save(client, owner_id)

    def update_client(self, client_id: str, data: ClientUpdate, owner_id: str) -> Client:
        """
        Update a client.

        A discount change applies to appointments booked from now on; existing
        appointments keep the discount they were saved with.
        """
        client = self.get_client(client_id, owner_id)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.email is not None:
            updates["email"] = data.email
        if data.phone is not None:
            updates["phone"] = data.phone
        if data.notes is not None:
            updates["notes"] = data.notes
        if data.discountPercentage is not None:
            updates["discount_percentage"] = data.discountPercentage
        if data.finishedTreatments is not None:
            updates["finished_treatments"] = data.finishedTreatments

        return self.repo.save(client.model_copy(update=updates), owner_id)

    def delete_client(self, client_id: str, owner_id: str, today: Optional[dt.date] = None) -> DeleteResponse:
        """
        Delete a client.

        Appointments are left untouched and keep referencing the deleted id;
        the response reports how many of them are still in the future.
        """
        client = self.get_client(client_id, owner_id)
        future_count = self.appointments.count_future(
            owner_id, today or dt.date.today(), client_id=client.id
        )
        if future_count:
            logger.warning(f"⚠️ Deleting client {client.id} with {future_count} future appointment(s)")

        self.repo.delete(client.id, owner_id)
        return DeleteResponse(message="Client deleted", futureAppointments=future_count)

    def toggle_finished_treatment(self, client_id: str, service_type_id: str, owner_id: str) -> Client:
        """Mark a treatment finished for the client, or reactivate its follow-up"""
        client = self.get_client(client_id, owner_id)

        if client.has_finished(service_type_id):
            finished = [sid for sid in client.finished_treatments if sid != service_type_id]
            logger.info(f"🔄 Follow-up reactivated for client {client.id}, treatment {service_type_id}")
        else:
            finished = [*client.finished_treatments, service_type_id]
            logger.info(f"✅ Treatment {service_type_id} finished for client {client.id}")

        return self.repo.save(client.model_copy(update={"finished_treatments": finished}), owner_id)
