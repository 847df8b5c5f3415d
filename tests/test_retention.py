import datetime as dt

import pytest

from clinicdesk.domain.analytics.retention import (
    classify_clients,
    count_by_status,
    requiring_attention,
    search_metrics,
    sort_metrics,
)
from clinicdesk.domain.analytics.schemas import RetentionStatus
from clinicdesk.domain.analytics.sorting import SortConfig
from clinicdesk.domain.clients.schemas import Client


@pytest.mark.parametrize(
    "today, status, days_overdue",
    [
        (dt.date(2024, 3, 5), RetentionStatus.OVERDUE, 4),
        (dt.date(2024, 2, 28), RetentionStatus.UPCOMING, 0),
        (dt.date(2024, 3, 1), RetentionStatus.UPCOMING, 0),
        (dt.date(2024, 2, 24), RetentionStatus.UPCOMING, 0),
        (dt.date(2024, 2, 23), RetentionStatus.ONTIME, 0),
        (dt.date(2024, 1, 15), RetentionStatus.ONTIME, 0),
    ],
)
def test_classification_around_recommended_date(ana, botox, statuses, make_appointment, today, status, days_overdue):
    [metric] = classify_clients([ana], [make_appointment()], [botox], statuses, today)

    assert metric.recommended_return_date == dt.date(2024, 3, 1)
    assert metric.status == status
    assert metric.days_overdue == days_overdue
    assert metric.last_service_name == "Botox"


def test_treatment_threshold_overrides_window(ana, botox, statuses, make_appointment):
    wide = botox.model_copy(update={"upcoming_threshold_days": 30})

    [metric] = classify_clients([ana], [make_appointment()], [wide], statuses, dt.date(2024, 2, 15))

    assert metric.status == RetentionStatus.UPCOMING


def test_most_recent_billable_visit_across_treatments(ana, botox, cleaning, statuses, make_appointment):
    appointments = [
        make_appointment(service_type_id="s1", date=dt.date(2024, 1, 1)),
        make_appointment(service_type_id="s2", date=dt.date(2024, 2, 1)),
        make_appointment(service_type_id="s1", date=dt.date(2024, 3, 1), status_id="scheduled"),
    ]

    [metric] = classify_clients([ana], appointments, [botox, cleaning], statuses, dt.date(2024, 2, 2))

    assert metric.last_service_name == "Dental Cleaning"
    assert metric.last_appointment_date == dt.date(2024, 2, 1)


def test_clients_without_a_trackable_last_visit_are_excluded(botox, consultation, statuses, make_appointment):
    clients = [
        Client(id="finished", name="Finished", finished_treatments=["s1"]),
        Client(id="oneoff", name="One-off"),
        Client(id="orphan", name="Orphan"),
        Client(id="never", name="Never billed"),
    ]
    appointments = [
        make_appointment(client_id="finished"),
        make_appointment(client_id="oneoff", service_type_id="s9"),
        make_appointment(client_id="orphan", service_type_id="deleted"),
        make_appointment(client_id="never", status_id="scheduled"),
    ]

    assert classify_clients(clients, appointments, [botox, consultation], statuses, dt.date(2024, 2, 1)) == []


@pytest.fixture
def portfolio(botox, statuses, make_appointment):
    clients = [
        Client(id="a", name="Álvaro", email="alvaro@example.com"),
        Client(id="b", name="beatriz", phone="611 000 000"),
        Client(id="c", name="Carmen"),
        Client(id="d", name="David"),
        Client(id="e", name="Elena"),
    ]
    # Botox every 60 days; today 2024-03-10
    appointments = [
        make_appointment(client_id="a", date=dt.date(2024, 1, 5)),  # due 03-05, 5 days overdue
        make_appointment(client_id="b", date=dt.date(2023, 12, 20)),  # due 02-18, 21 days overdue
        make_appointment(client_id="c", date=dt.date(2024, 1, 14)),  # due 03-14, upcoming
        make_appointment(client_id="d", date=dt.date(2024, 1, 12)),  # due 03-12, upcoming
        make_appointment(client_id="e", date=dt.date(2024, 3, 1)),  # due 04-30, ontime
    ]
    metrics = classify_clients(clients, appointments, [botox], statuses, dt.date(2024, 3, 10))
    return clients, metrics


def test_default_order(portfolio):
    _, metrics = portfolio

    assert [m.client_id for m in metrics] == ["b", "a", "d", "c", "e"]
    assert [m.days_overdue for m in metrics[:2]] == [21, 5]


def test_counts_and_attention_filter(portfolio):
    _, metrics = portfolio

    counts = count_by_status(metrics)

    assert (counts.overdue, counts.upcoming, counts.ontime) == (2, 2, 1)
    assert [m.client_id for m in requiring_attention(metrics)] == ["b", "a", "d", "c"]


def test_search_matches_name_email_and_phone(portfolio):
    clients, metrics = portfolio

    assert [m.client_id for m in search_metrics(metrics, clients, "CARMEN")] == ["c"]
    assert [m.client_id for m in search_metrics(metrics, clients, "alvaro@")] == ["a"]
    assert [m.client_id for m in search_metrics(metrics, clients, "611")] == ["b"]
    assert len(search_metrics(metrics, clients, "  ")) == 5


def test_sort_by_client_name_ignores_accents_and_case(portfolio):
    _, metrics = portfolio
    config = SortConfig().request("client_name")

    ascending = sort_metrics(metrics, config)
    descending = sort_metrics(metrics, config.request("client_name"))

    assert [m.client_name for m in ascending] == ["Álvaro", "beatriz", "Carmen", "David", "Elena"]
    assert [m.client_name for m in descending] == ["Elena", "David", "Carmen", "beatriz", "Álvaro"]


def test_sort_by_status_keeps_order_within_status(portfolio):
    _, metrics = portfolio

    by_status = sort_metrics(metrics, SortConfig("status", "desc"))

    assert [m.client_id for m in by_status] == ["e", "d", "c", "b", "a"]


def test_unknown_sort_key_is_rejected(portfolio):
    _, metrics = portfolio

    with pytest.raises(ValueError):
        sort_metrics(metrics, SortConfig("days_overdue"))


def test_finishing_a_treatment_toggles_the_client_row(ana, botox, statuses, make_appointment):
    appointments = [make_appointment()]
    today = dt.date(2024, 3, 5)

    def rows(client):
        return classify_clients([client], appointments, [botox], statuses, today)

    active = rows(ana)
    finished = ana.model_copy(update={"finished_treatments": ["s1"]})
    reactivated = finished.model_copy(update={"finished_treatments": []})

    assert [metric.client_id for metric in active] == ["c1"]
    assert rows(finished) == []
    assert rows(reactivated) == active
    assert rows(reactivated.model_copy(update={"finished_treatments": ["s1"]})) == []
