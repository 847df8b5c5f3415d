import datetime as dt

import pytest
from fastapi import HTTPException

from clinicdesk.domain.appointments.schemas import AppointmentCreate
from clinicdesk.domain.appointments.service import AppointmentService
from clinicdesk.persistence import MemoryDocumentStore

TODAY = dt.date.today()


def iso(days: int = 0) -> str:
    return (TODAY + dt.timedelta(days=days)).isoformat()


def test_requests_without_token_or_guest_header_are_rejected(guest_client):
    response = guest_client.get("/appointments", headers={"X-Guest-Session": "false"})

    assert response.status_code == 401


def test_list_is_ordered_by_date_and_time(guest_client):
    response = guest_client.get("/appointments")

    assert response.status_code == 200
    appointments = response.json()
    assert len(appointments) == 11
    keys = [(apt["date"], apt["start_time"]) for apt in appointments]
    assert keys == sorted(keys)


def test_list_filters(guest_client):
    response = guest_client.get("/appointments", params={"start": iso(0), "end": iso(1), "staffId": "staff1"})

    assert sorted(apt["id"] for apt in response.json()) == ["a1", "a4"]


def test_create_fills_defaults_from_status_treatment_and_client(guest_client):
    response = guest_client.post(
        "/appointments",
        json={"clientId": "c5", "serviceTypeId": "s1", "date": iso(3), "startTime": "9:15"},
    )

    assert response.status_code == 201
    created = response.json()
    assert created["id"].startswith("guest-a")
    assert created["status_id"] == "st1"
    assert created["start_time"] == "09:15"
    assert created["duration_minutes"] == 60
    assert created["base_price"] == 50.0
    assert created["discount_percentage"] == 10.0
    assert created["price"] == 45.0


def test_create_requires_client_treatment_and_date(guest_client):
    response = guest_client.post("/appointments", json={"serviceTypeId": "s1", "date": iso(3)})

    assert response.status_code == 422


def test_create_with_unknown_reference_writes_nothing(guest_client):
    response = guest_client.post("/appointments", json={"clientId": "nobody", "serviceTypeId": "s1", "date": iso(3)})

    assert response.status_code == 400
    assert len(guest_client.get("/appointments").json()) == 11


def test_invalid_fields_are_422_with_readable_errors(guest_client):
    bad_time = guest_client.post(
        "/appointments",
        json={"clientId": "c5", "serviceTypeId": "s1", "date": iso(3), "startTime": "25:00"},
    )
    bad_discount = guest_client.put("/appointments/a1", json={"discountPercentage": 150})

    assert bad_time.status_code == 422
    assert bad_time.json()["detail"][0]["loc"][-1] == "startTime"
    assert bad_discount.status_code == 422
    assert len(guest_client.get("/appointments").json()) == 11


def test_update_recomputes_price(guest_client):
    response = guest_client.put("/appointments/a2", json={"basePrice": 300})

    assert response.status_code == 200
    assert response.json()["price"] == 270.0


def test_client_discount_change_does_not_touch_existing_appointments(guest_client):
    guest_client.put("/clients/c5", json={"discountPercentage": 50})

    assert guest_client.get("/appointments/a2").json()["price"] == 180.0


def test_move_keeps_id(guest_client):
    response = guest_client.post("/appointments/a3/drop", json={"date": iso(4), "hour": 11, "mode": "move"})

    assert response.status_code == 200
    moved = response.json()
    assert moved["id"] == "a3"
    assert (moved["date"], moved["start_time"]) == (iso(4), "11:00")
    assert len(guest_client.get("/appointments").json()) == 11


def test_copy_creates_new_appointment(guest_client):
    response = guest_client.post("/appointments/a3/drop", json={"date": iso(4), "hour": 11, "mode": "copy"})

    copied = response.json()
    original = guest_client.get("/appointments/a3").json()
    assert copied["id"] != "a3"
    assert copied["client_id"] == original["client_id"]
    assert copied["service_type_id"] == original["service_type_id"]
    assert original["date"] == iso(1)
    assert len(guest_client.get("/appointments").json()) == 12


def test_drop_needs_a_slot(guest_client):
    response = guest_client.post("/appointments/a3/drop", json={"date": iso(4), "mode": "move"})

    assert response.status_code == 422


def test_resize_bottom_and_top(guest_client):
    bottom = guest_client.post("/appointments/a1/resize", json={"edge": "bottom", "deltaPixels": 64})
    top = guest_client.post("/appointments/a3/resize", json={"edge": "top", "deltaPixels": -32, "slotHeight": 64})

    assert bottom.json()["duration_minutes"] == 120
    assert (top.json()["start_time"], top.json()["duration_minutes"]) == ("14:30", 75)


def test_resize_rejects_infinite_delta(guest_client):
    # 1e400 is valid JSON but overflows to infinity
    response = guest_client.post(
        "/appointments/a1/resize",
        content='{"edge": "bottom", "deltaPixels": 1e400}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert guest_client.get("/appointments/a1").json()["duration_minutes"] == 60


def test_quick_complete_uses_default_billable_status(guest_client):
    response = guest_client.post("/appointments/a5/complete")

    assert response.status_code == 200
    assert response.json()["status_id"] == "st3"


def test_quick_complete_without_billable_status(guest_client):
    guest_client.put("/statuses/st3", json={"isBillable": False})

    response = guest_client.post("/appointments/a5/complete")

    assert response.status_code == 400


def test_overlaps_for_same_staff_member(guest_client):
    created = guest_client.post(
        "/appointments",
        json={"clientId": "c1", "serviceTypeId": "s4", "staffId": "staff1", "date": iso(0), "startTime": "10:00"},
    ).json()

    response = guest_client.get(f"/appointments/{created['id']}/overlaps")

    assert [apt["id"] for apt in response.json()["conflicts"]] == ["a1"]


def test_delete_appointment(guest_client):
    assert guest_client.delete("/appointments/a6").status_code == 200
    assert guest_client.get("/appointments/a6").status_code == 404


def test_double_booking_rejected_when_enabled():
    store = MemoryDocumentStore.seeded("guest", today=TODAY)
    service = AppointmentService(store, reject_double_booking=True)
    data = AppointmentCreate(clientId="c1", serviceTypeId="s4", staffId="staff1", date=TODAY, startTime="10:00")

    with pytest.raises(HTTPException) as exc:
        service.create_appointment(data, "guest")

    assert exc.value.status_code == 409


def test_cancelled_appointments_never_conflict():
    store = MemoryDocumentStore.seeded("guest", today=TODAY)
    service = AppointmentService(store, reject_double_booking=True)
    # a6 is cancelled and sits at 09:00 in two days
    data = AppointmentCreate(
        clientId="c1", serviceTypeId="s4", staffId="staff1", date=TODAY + dt.timedelta(days=2), startTime="09:00"
    )

    assert service.create_appointment(data, "guest").staff_id == "staff1"
