"""Loading every collection of an owner at once"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from ...persistence.base import APPOINTMENTS, CLIENTS, STAFF, STATUSES, TREATMENTS, DocumentStore
from ..appointments.repository import AppointmentRepository
from ..appointments.schemas import Appointment
from ..clients.repository import ClientRepository
from ..clients.schemas import Client
from ..staff.repository import StaffRepository
from ..staff.schemas import Staff
from ..statuses.schemas import AppStatus
from ..statuses.service import StatusService
from ..treatments.repository import TreatmentRepository
from ..treatments.schemas import ServiceType

logger = logging.getLogger(__name__)


@dataclass
class ClinicSnapshot:
    clients: list[Client] = field(default_factory=list)
    treatments: list[ServiceType] = field(default_factory=list)
    appointments: list[Appointment] = field(default_factory=list)
    statuses: list[AppStatus] = field(default_factory=list)
    staff: list[Staff] = field(default_factory=list)
    # Collections that failed on the last load and still hold older data
    failed: list[str] = field(default_factory=list)


def load_snapshot(
    store: DocumentStore, owner_id: str, previous: Optional[ClinicSnapshot] = None
) -> ClinicSnapshot:
    """
    Fetch clients, treatments, appointments, statuses and staff.

    A collection that fails to load is logged and keeps the data it had in
    `previous` (empty on a first load); the others are still refreshed.
    """
    snapshot = replace(previous, failed=[]) if previous else ClinicSnapshot()
    loaders = {
        CLIENTS: ("clients", ClientRepository(store).list),
        TREATMENTS: ("treatments", TreatmentRepository(store).list),
        APPOINTMENTS: ("appointments", AppointmentRepository(store).list),
        STATUSES: ("statuses", StatusService(store).get_statuses),
        STAFF: ("staff", StaffRepository(store).list),
    }

    for collection, (attribute, load) in loaders.items():
        try:
            setattr(snapshot, attribute, load(owner_id))
        except Exception as e:
            logger.error(f"❌ Failed to load {collection} for owner {owner_id}: {e}")
            snapshot.failed.append(collection)

    if not snapshot.failed:
        logger.info(f"✅ Snapshot loaded for owner {owner_id}")
    return snapshot


class SnapshotCache:
    """
    Last snapshot per owner.

    Each load starts from the owner's previous snapshot, so a collection that
    fails keeps the data from the last successful load instead of going empty.
    """

    def __init__(self):
        self._snapshots: dict[str, ClinicSnapshot] = {}

    def load(self, store: DocumentStore, owner_id: str) -> ClinicSnapshot:
        snapshot = load_snapshot(store, owner_id, previous=self._snapshots.get(owner_id))
        self._snapshots[owner_id] = snapshot
        return snapshot
