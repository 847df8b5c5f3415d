"""Status service - Business logic for appointment statuses"""

import logging

from fastapi import HTTPException

from ...persistence.base import DocumentStore
from ...persistence.fixtures import DEFAULT_STATUSES
from .repository import StatusRepository
from .schemas import AppStatus, StatusCreate, StatusUpdate

logger = logging.getLogger(__name__)


class StatusService:
    """Service layer for status business logic"""

    def __init__(self, store: DocumentStore):
        self.repo = StatusRepository(store)

    def get_statuses(self, owner_id: str) -> list[AppStatus]:
        """
        Get all statuses for an owner.

        An owner without any status gets the default set so the appointment
        book is usable from the first visit.
        """
        statuses = self.repo.list(owner_id)
        if statuses:
            return statuses

        logger.info(f"🌱 Seeding default statuses for owner: {owner_id}")
        return [
            self.repo.save(AppStatus.model_validate({**status, "id": ""}), owner_id)
            for status in DEFAULT_STATUSES
        ]

    def get_status(self, status_id: str, owner_id: str) -> AppStatus:
        status = self.repo.get(status_id, owner_id)
        if not status:
            raise HTTPException(status_code=404, detail="Status not found")
        return status

    def create_status(self, data: StatusCreate, owner_id: str) -> AppStatus:
        status = AppStatus(
            name=data.name,
            is_billable=data.isBillable,
            is_default=data.isDefault,
            is_initial=data.isInitial,
        )
        if data.color:
            status.color = data.color

        saved = self.repo.save(status, owner_id)
        self._release_exclusive_flags(saved, owner_id)
        return saved

    def update_status(self, status_id: str, data: StatusUpdate, owner_id: str) -> AppStatus:
        status = self.get_status(status_id, owner_id)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.color is not None:
            updates["color"] = data.color
        if data.isBillable is not None:
            updates["is_billable"] = data.isBillable
        if data.isDefault is not None:
            updates["is_default"] = data.isDefault
        if data.isInitial is not None:
            updates["is_initial"] = data.isInitial

        saved = self.repo.save(status.model_copy(update=updates), owner_id)
        self._release_exclusive_flags(saved, owner_id)
        return saved

    def delete_status(self, status_id: str, owner_id: str) -> None:
        """Delete a status; appointments still carrying it resolve to no status"""
        status = self.get_status(status_id, owner_id)
        self.repo.delete(status.id, owner_id)
        logger.info(f"🗑️ Status {status.id} deleted for owner: {owner_id}")

    def _release_exclusive_flags(self, saved: AppStatus, owner_id: str) -> None:
        """Only one status may be the default and only one the initial status"""
        if not (saved.is_default or saved.is_initial):
            return

        for other in self.repo.list(owner_id):
            if other.id == saved.id:
                continue
            updates = {}
            if saved.is_default and other.is_default:
                updates["is_default"] = False
            if saved.is_initial and other.is_initial:
                updates["is_initial"] = False
            if updates:
                self.repo.save(other.model_copy(update=updates), owner_id)
                logger.info(f"🔄 Cleared {', '.join(updates)} on status {other.id}")
