"""
Financial aggregation

Appointments with a cancelled status are ignored. Billable appointments are
realized revenue, carry staff cost, and count toward hours and attended
clients. Non-billable appointments are pending revenue, except that a paid
booking fee is already realized.
"""

from typing import Iterable, Optional

from ..appointments.schemas import Appointment
from ..clients.schemas import Client
from ..staff.schemas import Staff
from ..statuses import rules
from ..statuses.schemas import AppStatus
from ..treatments.schemas import ServiceType
from ...shared.lookups import index_by_id, name_or_placeholder
from .schemas import ClientFinancialRow, FinancialSummary, ServiceEfficiencyRow, StaffFinancialRow


def effective_hourly_rate(staff: Staff, service_type_id: str) -> float:
    return staff.hourly_rate_for(service_type_id)


def summarize(
    appointments: Iterable[Appointment],
    statuses: Iterable[AppStatus],
    staff: Iterable[Staff],
) -> FinancialSummary:
    status_by_id = index_by_id(statuses)
    staff_by_id = index_by_id(staff)

    revenue = pending = cost = hours = 0.0
    attended: set[str] = set()

    for apt in appointments:
        status = status_by_id.get(apt.status_id)
        if rules.is_cancelled(status):
            continue

        if rules.is_billable(status):
            revenue += apt.price
            hours += apt.hours
            attended.add(apt.client_id)
            member = staff_by_id.get(apt.staff_id) if apt.staff_id else None
            if member is not None:
                cost += apt.hours * effective_hourly_rate(member, apt.service_type_id)
        elif apt.booking_fee_paid:
            revenue += apt.booking_fee_amount
            pending += apt.price - apt.booking_fee_amount
        else:
            pending += apt.price

    profit = revenue - cost
    return FinancialSummary(
        revenue=revenue,
        pending=pending,
        cost=cost,
        profit=profit,
        attended_clients=len(attended),
        total_hours=hours,
        profit_per_client=profit / len(attended) if attended else 0.0,
        profit_per_hour=profit / hours if hours > 0 else 0.0,
    )


def staff_breakdown(
    appointments: Iterable[Appointment],
    statuses: Iterable[AppStatus],
    staff: Iterable[Staff],
    service_type_id: Optional[str] = None,
) -> list[StaffFinancialRow]:
    """One row per staff member, optionally restricted to a single treatment"""
    appointments = list(appointments)
    statuses = list(statuses)
    if service_type_id:
        appointments = [apt for apt in appointments if apt.service_type_id == service_type_id]

    rows = []
    for member in staff:
        own = [apt for apt in appointments if apt.staff_id == member.id]
        summary = summarize(own, statuses, [member])
        rows.append(StaffFinancialRow(staff_id=member.id, staff_name=member.name, **summary.model_dump()))
    return rows


def client_breakdown(
    appointments: Iterable[Appointment],
    statuses: Iterable[AppStatus],
    staff: Iterable[Staff],
    clients: Iterable[Client],
) -> list[ClientFinancialRow]:
    """One row per client with at least one appointment in the given set"""
    appointments = list(appointments)
    statuses = list(statuses)
    staff = list(staff)
    client_by_id = index_by_id(clients)

    by_client: dict[str, list[Appointment]] = {}
    for apt in appointments:
        by_client.setdefault(apt.client_id, []).append(apt)

    rows = []
    for client_id, own in by_client.items():
        client = client_by_id.get(client_id)
        summary = summarize(own, statuses, staff)
        rows.append(
            ClientFinancialRow(
                client_id=client_id,
                client_name=name_or_placeholder(client),
                **summary.model_dump(),
            )
        )
    return rows


def service_efficiency(
    appointments: Iterable[Appointment],
    statuses: Iterable[AppStatus],
    treatments: Iterable[ServiceType],
) -> list[ServiceEfficiencyRow]:
    """Billable revenue and hours per treatment, highest revenue first"""
    status_by_id = index_by_id(statuses)
    treatment_by_id = index_by_id(treatments)

    rows: dict[str, ServiceEfficiencyRow] = {}
    for apt in appointments:
        if not rules.is_billable(status_by_id.get(apt.status_id)):
            continue
        row = rows.get(apt.service_type_id)
        if row is None:
            treatment = treatment_by_id.get(apt.service_type_id)
            row = rows[apt.service_type_id] = ServiceEfficiencyRow(
                service_type_id=apt.service_type_id,
                service_name=name_or_placeholder(treatment),
            )
        row.revenue += apt.price
        row.hours += apt.hours

    for row in rows.values():
        row.revenue_per_hour = row.revenue / row.hours if row.hours > 0 else 0.0
    return sorted(rows.values(), key=lambda row: row.revenue, reverse=True)
