import datetime as dt

TOMORROW = (dt.date.today() + dt.timedelta(days=1)).isoformat()
YESTERDAY = (dt.date.today() - dt.timedelta(days=1)).isoformat()


def create_client(client, **overrides):
    payload = {"name": "Ana García", "email": "Ana@Example.com", "discountPercentage": 10}
    payload.update(overrides)
    response = client.post("/clients", json=payload)
    assert response.status_code == 201
    return response.json()


def create_treatment(client, **overrides):
    payload = {"name": "Botox", "defaultPrice": 50, "defaultDuration": 30, "recurrenceDays": 60}
    payload.update(overrides)
    response = client.post("/treatments", json=payload)
    assert response.status_code == 201
    return response.json()


def test_client_crud(owner_client):
    created = create_client(owner_client)

    assert created["email"] == "ana@example.com"
    assert created["discount_percentage"] == 10.0
    assert owner_client.get(f"/clients/{created['id']}").json()["name"] == "Ana García"

    updated = owner_client.put(f"/clients/{created['id']}", json={"phone": "600 111 222"}).json()
    assert updated["phone"] == "600 111 222"
    assert updated["name"] == "Ana García"

    assert [c["id"] for c in owner_client.get("/clients").json()] == [created["id"]]


def test_client_validation(owner_client):
    assert owner_client.post("/clients", json={"name": "Ana", "email": "not-an-email"}).status_code == 422
    assert owner_client.post("/clients", json={"name": "Ana", "discountPercentage": 120}).status_code == 422
    assert owner_client.post("/clients", json={"name": ""}).status_code == 422


def test_unknown_client_is_404(owner_client):
    assert owner_client.get("/clients/missing").status_code == 404
    assert owner_client.put("/clients/missing", json={"name": "X"}).status_code == 404


def test_toggle_finished_treatment(owner_client):
    client = create_client(owner_client)

    finished = owner_client.post(f"/clients/{client['id']}/finished-treatments/s1").json()
    reactivated = owner_client.post(f"/clients/{client['id']}/finished-treatments/s1").json()

    assert finished["finished_treatments"] == ["s1"]
    assert reactivated["finished_treatments"] == []


def test_deleting_client_reports_future_appointments(owner_client):
    client = create_client(owner_client)
    treatment = create_treatment(owner_client)
    for day in (TOMORROW, TOMORROW, YESTERDAY):
        response = owner_client.post(
            "/appointments", json={"clientId": client["id"], "serviceTypeId": treatment["id"], "date": day}
        )
        assert response.status_code == 201

    response = owner_client.delete(f"/clients/{client['id']}")

    assert response.status_code == 200
    assert response.json()["futureAppointments"] == 2
    assert owner_client.get(f"/clients/{client['id']}").status_code == 404
    # Appointments keep the dangling reference
    assert len(owner_client.get("/appointments").json()) == 3


def test_new_appointment_snapshots_prices(owner_client):
    client = create_client(owner_client)
    treatment = create_treatment(owner_client)

    appointment = owner_client.post(
        "/appointments", json={"clientId": client["id"], "serviceTypeId": treatment["id"], "date": TOMORROW}
    ).json()
    owner_client.put(f"/treatments/{treatment['id']}", json={"defaultPrice": 500})

    stored = owner_client.get(f"/appointments/{appointment['id']}").json()
    assert stored["duration_minutes"] == 30
    assert stored["price"] == 45.0


def test_treatment_crud_and_delete_warning(owner_client):
    treatment = create_treatment(owner_client, upcomingThresholdDays=14)
    assert treatment["upcoming_threshold_days"] == 14
    assert treatment["recurrence_days"] == 60

    updated = owner_client.put(f"/treatments/{treatment['id']}", json={"recurrenceDays": 0}).json()
    assert updated["recurrence_days"] == 0

    response = owner_client.delete(f"/treatments/{treatment['id']}")
    assert response.json()["futureAppointments"] == 0
    assert owner_client.get("/treatments").json() == []


def test_staff_crud(owner_client):
    created = owner_client.post("/staff", json={"name": "Fran", "defaultRate": 30, "rates": {"s1": 60}})
    assert created.status_code == 201
    member = created.json()

    updated = owner_client.put(f"/staff/{member['id']}", json={"defaultRate": 35}).json()
    assert updated["default_rate"] == 35.0
    assert updated["rates"] == {"s1": 60.0}

    assert owner_client.delete(f"/staff/{member['id']}").json()["futureAppointments"] == 0
    assert owner_client.get(f"/staff/{member['id']}").status_code == 404


def test_statuses_are_seeded_once_for_new_owner(owner_client):
    first = owner_client.get("/statuses").json()
    second = owner_client.get("/statuses").json()

    assert [s["name"] for s in first] == ["Scheduled", "Confirmed", "Completed", "Cancelled", "No-show"]
    assert [s["id"] for s in second] == [s["id"] for s in first]


def test_default_and_initial_flags_are_exclusive(owner_client):
    seeded = {s["name"]: s for s in owner_client.get("/statuses").json()}

    created = owner_client.post("/statuses", json={"name": "Paid", "isBillable": True, "isDefault": True}).json()
    owner_client.put(f"/statuses/{seeded['Confirmed']['id']}", json={"isInitial": True})

    statuses = {s["name"]: s for s in owner_client.get("/statuses").json()}
    assert [name for name, s in statuses.items() if s["is_default"]] == ["Paid"]
    assert [name for name, s in statuses.items() if s["is_initial"]] == ["Confirmed"]
    assert created["is_default"] is True


def test_delete_status(owner_client):
    seeded = owner_client.get("/statuses").json()

    assert owner_client.delete(f"/statuses/{seeded[-1]['id']}").status_code == 200
    assert len(owner_client.get("/statuses").json()) == 4
