"""
Retention classification

Each client is classified from their most recent billable appointment across
all treatments:

    days_past_due = today - (last visit + treatment recurrence)

    days_past_due > 0               overdue
    -window < days_past_due <= 0    upcoming
    otherwise                       ontime
"""

import datetime as dt
from typing import Iterable, Optional

from ...config import UPCOMING_WINDOW_DAYS
from ..appointments.schemas import Appointment
from ..clients.schemas import Client
from ..statuses import rules
from ..statuses.schemas import AppStatus
from ..treatments.schemas import ServiceType
from ...shared.lookups import index_by_id
from .recurrence import recommended_date_for
from .schemas import RetentionCounts, RetentionMetric, RetentionStatus
from .sorting import SortConfig, sort_rows

STATUS_PRIORITY = {
    RetentionStatus.OVERDUE: 0,
    RetentionStatus.UPCOMING: 1,
    RetentionStatus.ONTIME: 2,
}

SORT_KEYS = {
    "client_name": lambda m: m.client_name,
    "last_service_name": lambda m: m.last_service_name,
    "recommended_return_date": lambda m: m.recommended_return_date,
    "status": lambda m: STATUS_PRIORITY[m.status],
}


def classify(days_past_due: int, window: int) -> RetentionStatus:
    if days_past_due > 0:
        return RetentionStatus.OVERDUE
    if days_past_due > -window:
        return RetentionStatus.UPCOMING
    return RetentionStatus.ONTIME


def _default_order(metric: RetentionMetric):
    if metric.status == RetentionStatus.OVERDUE:
        return (STATUS_PRIORITY[metric.status], -metric.days_overdue, metric.recommended_return_date)
    return (STATUS_PRIORITY[metric.status], 0, metric.recommended_return_date)


def classify_clients(
    clients: Iterable[Client],
    appointments: Iterable[Appointment],
    treatments: Iterable[ServiceType],
    statuses: Iterable[AppStatus],
    today: dt.date,
    upcoming_window_days: int = UPCOMING_WINDOW_DAYS,
) -> list[RetentionMetric]:
    """
    Retention rows ordered overdue (most days first), upcoming, then ontime.

    Clients produce no row when they have no billable appointment, or when
    their most recent treatment is unknown, non-recurring, or finished for
    them. A treatment's `upcoming_threshold_days` replaces the default window.
    """
    status_by_id = index_by_id(statuses)
    treatment_by_id = index_by_id(treatments)

    latest_by_client: dict[str, Appointment] = {}
    for apt in appointments:
        if not rules.is_billable(status_by_id.get(apt.status_id)):
            continue
        current = latest_by_client.get(apt.client_id)
        if current is None or apt.date > current.date:
            latest_by_client[apt.client_id] = apt

    metrics = []
    for client in clients:
        last = latest_by_client.get(client.id)
        if last is None:
            continue
        treatment = treatment_by_id.get(last.service_type_id)
        if treatment is None or not treatment.is_recurring or client.has_finished(treatment.id):
            continue

        recommended = recommended_date_for(last.date, treatment.recurrence_days)
        days_past_due = (today - recommended).days
        window = (
            treatment.upcoming_threshold_days
            if treatment.upcoming_threshold_days is not None
            else upcoming_window_days
        )
        metrics.append(
            RetentionMetric(
                client_id=client.id,
                client_name=client.name,
                last_appointment_date=last.date,
                last_service_name=treatment.name,
                recommended_return_date=recommended,
                days_overdue=max(days_past_due, 0),
                status=classify(days_past_due, window),
            )
        )

    return sorted(metrics, key=_default_order)


def search_metrics(metrics: list[RetentionMetric], clients: Iterable[Client], term: str) -> list[RetentionMetric]:
    """Case-insensitive match on the client's name, email or phone"""
    term = term.strip().lower()
    if not term:
        return metrics
    client_by_id = index_by_id(clients)

    def matches(metric: RetentionMetric) -> bool:
        client = client_by_id.get(metric.client_id)
        fields = [metric.client_name]
        if client is not None:
            fields += [client.email or "", client.phone or ""]
        return any(term in field.lower() for field in fields)

    return [metric for metric in metrics if matches(metric)]


def requiring_attention(metrics: list[RetentionMetric]) -> list[RetentionMetric]:
    return [metric for metric in metrics if metric.status != RetentionStatus.ONTIME]


def count_by_status(metrics: Iterable[RetentionMetric]) -> RetentionCounts:
    counts = RetentionCounts()
    for metric in metrics:
        setattr(counts, metric.status.value, getattr(counts, metric.status.value) + 1)
    return counts


def sort_metrics(metrics: list[RetentionMetric], config: Optional[SortConfig]) -> list[RetentionMetric]:
    if config is None or config.key is None:
        return metrics
    if config.key not in SORT_KEYS:
        raise ValueError(f"Cannot sort retention rows by '{config.key}'")
    return sort_rows(metrics, config, SORT_KEYS)
