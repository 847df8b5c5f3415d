import datetime as dt
from typing import Optional

import pytest

from clinicdesk.domain.analytics.service import AnalyticsService
from clinicdesk.domain.analytics.snapshot import ClinicSnapshot, SnapshotCache, load_snapshot
from clinicdesk.domain.staff.schemas import Staff
from clinicdesk.persistence import MemoryDocumentStore
from clinicdesk.persistence.base import STAFF


class FlakyStore(MemoryDocumentStore):
    """Memory store whose listing of one collection fails"""

    def __init__(self, failing: Optional[str] = None):
        super().__init__()
        self.failing = failing

    def list(self, collection, owner_id):
        if collection == self.failing:
            raise ConnectionError(f"{collection} unavailable")
        return super().list(collection, owner_id)


@pytest.fixture
def guest_store():
    return MemoryDocumentStore.seeded("guest")


def test_loads_every_collection(guest_store):
    snapshot = load_snapshot(guest_store, "guest")

    assert len(snapshot.clients) == 6
    assert len(snapshot.treatments) == 5
    assert len(snapshot.staff) == 2
    assert len(snapshot.statuses) == 5
    assert len(snapshot.appointments) == 11
    assert snapshot.failed == []


def test_failed_collection_keeps_previous_data():
    store = FlakyStore(failing=STAFF)
    store.save("clients", {"name": "Ana"}, "owner-1")
    previous = ClinicSnapshot(staff=[Staff(id="old", name="Old member")])

    snapshot = load_snapshot(store, "owner-1", previous=previous)

    assert snapshot.failed == [STAFF]
    assert [member.id for member in snapshot.staff] == ["old"]
    assert [client.name for client in snapshot.clients] == ["Ana"]


def test_first_load_failure_leaves_collection_empty():
    snapshot = load_snapshot(FlakyStore(failing=STAFF), "owner-1")

    assert snapshot.staff == []
    assert snapshot.failed == [STAFF]


def test_owner_without_statuses_gets_default_set():
    store = MemoryDocumentStore()

    snapshot = load_snapshot(store, "new-owner")

    assert [status.name for status in snapshot.statuses] == [
        "Scheduled",
        "Confirmed",
        "Completed",
        "Cancelled",
        "No-show",
    ]
    assert len(store.list("statuses", "new-owner")) == 5


def test_cache_falls_back_to_last_good_load():
    store = FlakyStore()
    store.save(STAFF, {"name": "Fran"}, "owner-1")
    cache = SnapshotCache()
    cache.load(store, "owner-1")

    store.failing = STAFF
    store.save(STAFF, {"name": "Laura"}, "owner-1")
    snapshot = cache.load(store, "owner-1")

    assert snapshot.failed == [STAFF]
    assert [member.name for member in snapshot.staff] == ["Fran"]


def test_cache_keeps_owners_apart():
    store = FlakyStore()
    store.save(STAFF, {"name": "Fran"}, "owner-1")
    cache = SnapshotCache()
    cache.load(store, "owner-1")

    store.failing = STAFF
    snapshot = cache.load(store, "owner-2")

    assert snapshot.staff == []


def test_reports_are_built_from_partial_data():
    store = FlakyStore.seeded("guest")
    store.failing = STAFF
    service = AnalyticsService(store)

    report = service.retention_report("guest", dt.date.today())
    financial = service.financial_report("guest", "all", dt.date.today())

    assert report.failed == [STAFF]
    assert report.counts.overdue == 1
    assert report.counts.ontime == 3
    assert financial.failed == [STAFF]
    # Without staff there is no cost, revenue still comes through
    assert financial.summary.cost == 0.0
    assert financial.summary.revenue > 0
    assert financial.staff == []
