"""Per-client, per-staff and per-treatment statistics for the detail pages"""

import datetime as dt
from typing import Iterable, Literal, Optional

from ..appointments.schemas import Appointment
from ..clients.schemas import Client
from ..staff.schemas import Staff
from ..statuses import rules
from ..statuses.schemas import AppStatus
from ..treatments.schemas import ServiceType
from ...shared.lookups import index_by_id, name_or_placeholder
from .financials import effective_hourly_rate
from .recurrence import project_recommendations, recommended_date_for
from .schemas import (
    ClientStats,
    StaffPerformanceRow,
    StaffStats,
    StaffTreatmentRow,
    TreatmentBreakdownRow,
    TreatmentClientRow,
    TreatmentStats,
)


def client_stats(
    client: Client,
    appointments: Iterable[Appointment],
    treatments: Iterable[ServiceType],
    statuses: Iterable[AppStatus],
    today: dt.date,
) -> ClientStats:
    """
    Totals over the client's past appointments (before today) plus a
    per-treatment breakdown over all of their billable appointments.
    """
    treatments = list(treatments)
    statuses = list(statuses)
    status_by_id = index_by_id(statuses)
    treatment_by_id = index_by_id(treatments)
    own = sorted(
        (apt for apt in appointments if apt.client_id == client.id),
        key=lambda apt: apt.date,
        reverse=True,
    )

    total_spent = 0.0
    completed = cancelled = 0
    last_visit: Optional[dt.date] = None
    for apt in own:
        if apt.date >= today:
            continue
        status = status_by_id.get(apt.status_id)
        if rules.is_billable(status):
            total_spent += apt.price
            completed += 1
            if last_visit is None:
                last_visit = apt.date
        elif rules.is_cancelled(status):
            cancelled += 1

    breakdown: dict[str, TreatmentBreakdownRow] = {}
    for apt in own:
        if not rules.is_billable(status_by_id.get(apt.status_id)):
            continue
        row = breakdown.get(apt.service_type_id)
        if row is None:
            treatment = treatment_by_id.get(apt.service_type_id)
            row = breakdown[apt.service_type_id] = TreatmentBreakdownRow(
                service_type_id=apt.service_type_id,
                service_name=name_or_placeholder(treatment),
            )
        row.count += 1
        row.revenue += apt.price

    return ClientStats(
        client_id=client.id,
        total_spent=total_spent,
        completed_count=completed,
        cancelled_count=cancelled,
        last_visit=last_visit,
        average_ticket=total_spent / completed if completed else 0.0,
        treatments=sorted(breakdown.values(), key=lambda row: row.revenue, reverse=True),
        recommendations=project_recommendations(client, own, treatments, statuses, today),
    )


def staff_stats(
    member: Staff,
    appointments: Iterable[Appointment],
    treatments: Iterable[ServiceType],
    statuses: Iterable[AppStatus],
    today: dt.date,
) -> StaffStats:
    """
    Realized figures come from billable appointments, scheduled figures from
    non-billable ones dated today or later. Cancelled appointments and ones
    with an unknown status count for neither.
    """
    status_by_id = index_by_id(statuses)
    treatment_by_id = index_by_id(treatments)
    stats = StaffStats(staff_id=member.id, treatments=[])
    breakdown: dict[str, StaffTreatmentRow] = {}

    for apt in appointments:
        if apt.staff_id != member.id:
            continue
        status = status_by_id.get(apt.status_id)
        if status is None or rules.is_cancelled(status):
            continue

        cost = apt.hours * effective_hourly_rate(member, apt.service_type_id)
        if rules.is_billable(status):
            stats.realized_revenue += apt.price
            stats.realized_cost += cost
            stats.realized_hours += apt.hours
            stats.realized_count += 1

            row = breakdown.get(apt.service_type_id)
            if row is None:
                treatment = treatment_by_id.get(apt.service_type_id)
                row = breakdown[apt.service_type_id] = StaffTreatmentRow(
                    service_type_id=apt.service_type_id,
                    service_name=name_or_placeholder(treatment),
                )
            row.revenue += apt.price
            row.cost += cost
            row.profit += apt.price - cost
            row.hours += apt.hours
            row.count += 1
        elif apt.date >= today:
            stats.scheduled_revenue += apt.price
            stats.scheduled_cost += cost
            stats.scheduled_hours += apt.hours
            stats.scheduled_count += 1

    stats.realized_profit = stats.realized_revenue - stats.realized_cost
    stats.scheduled_profit = stats.scheduled_revenue - stats.scheduled_cost
    if stats.realized_count:
        stats.avg_profit_per_session = stats.realized_profit / stats.realized_count
        stats.avg_minutes_per_session = stats.realized_hours * 60 / stats.realized_count
    stats.treatments = sorted(breakdown.values(), key=lambda row: row.profit, reverse=True)
    return stats


def treatment_stats(
    treatment: ServiceType,
    appointments: Iterable[Appointment],
    clients: Iterable[Client],
    staff: Iterable[Staff],
    statuses: Iterable[AppStatus],
    today: dt.date,
    client_filter: Literal["active", "finished"] = "active",
) -> TreatmentStats:
    """
    Revenue and client follow-up for one treatment.

    A client's recommended visit is shown only when they have a past billable
    visit and no booking from today on other than cancelled ones.
    """
    status_by_id = index_by_id(statuses)
    staff_by_id = index_by_id(staff)
    client_by_id = index_by_id(clients)
    own = [apt for apt in appointments if apt.service_type_id == treatment.id]
    billable = [apt for apt in own if rules.is_billable(status_by_id.get(apt.status_id))]

    performance: dict[str, StaffPerformanceRow] = {}
    for apt in billable:
        member = staff_by_id.get(apt.staff_id) if apt.staff_id else None
        if member is None:
            continue
        row = performance.setdefault(member.id, StaffPerformanceRow(staff_id=member.id, staff_name=member.name))
        row.revenue += apt.price

    rows: dict[str, TreatmentClientRow] = {}
    for apt in own:
        client = client_by_id.get(apt.client_id)
        if client is None:
            continue
        row = rows.setdefault(
            client.id,
            TreatmentClientRow(client_id=client.id, client_name=client.name, finished=client.has_finished(treatment.id)),
        )
        status = status_by_id.get(apt.status_id)
        if rules.is_billable(status) and (row.last_visit is None or apt.date > row.last_visit):
            row.last_visit = apt.date
        if (
            apt.date >= today
            and not rules.is_cancelled(status)
            and (row.next_visit is None or apt.date < row.next_visit)
        ):
            row.next_visit = apt.date

    for row in rows.values():
        if row.last_visit and not row.next_visit and treatment.is_recurring:
            row.recommended_visit = recommended_date_for(row.last_visit, treatment.recurrence_days)

    wanted_finished = client_filter == "finished"
    client_rows = sorted(
        (row for row in rows.values() if row.finished == wanted_finished),
        key=lambda row: row.last_visit or dt.date.min,
        reverse=True,
    )

    return TreatmentStats(
        service_type_id=treatment.id,
        revenue=sum(apt.price for apt in billable),
        appointment_count=len(billable),
        unique_clients=len({apt.client_id for apt in billable}),
        staff_performance=sorted(
            (row for row in performance.values() if row.revenue > 0), key=lambda row: row.revenue, reverse=True
        ),
        clients=client_rows,
    )
