"""
Recurrence projection

A billable appointment for a recurring treatment implies the next visit is due
`recurrence_days` calendar days later. Only the most recent billable
appointment per treatment counts.
"""

import datetime as dt
from typing import Iterable

from ..appointments.pricing import final_price
from ..appointments.schemas import Appointment
from ..clients.schemas import Client
from ..statuses import rules
from ..statuses.schemas import AppStatus
from ..treatments.schemas import ServiceType
from ...shared.lookups import index_by_id
from .schemas import RecommendedVisit


def recommended_date_for(last_date: dt.date, recurrence_days: int) -> dt.date:
    return last_date + dt.timedelta(days=recurrence_days)


def latest_billable_by_treatment(
    appointments: Iterable[Appointment], statuses: Iterable[AppStatus]
) -> dict[str, Appointment]:
    """Most recent billable appointment per treatment id"""
    status_by_id = index_by_id(statuses)
    latest: dict[str, Appointment] = {}
    for apt in appointments:
        if not rules.is_billable(status_by_id.get(apt.status_id)):
            continue
        current = latest.get(apt.service_type_id)
        if current is None or apt.date > current.date:
            latest[apt.service_type_id] = apt
    return latest


def project_recommendations(
    client: Client,
    appointments: Iterable[Appointment],
    treatments: Iterable[ServiceType],
    statuses: Iterable[AppStatus],
    today: dt.date,
) -> list[RecommendedVisit]:
    """
    Suggested next visits for one client, earliest first.

    Nothing is suggested for a treatment that is non-recurring, unknown,
    finished for this client, or already booked for today or later. Past due
    suggestions are kept and flagged `overdue`. The price is the treatment's
    current default with the client's current discount.
    """
    statuses = list(statuses)
    status_by_id = index_by_id(statuses)
    treatment_by_id = index_by_id(treatments)
    client_apts = [apt for apt in appointments if apt.client_id == client.id]

    booked = {
        apt.service_type_id
        for apt in client_apts
        if apt.date >= today and not rules.is_cancelled(status_by_id.get(apt.status_id))
    }

    recommendations = []
    for service_type_id, last in latest_billable_by_treatment(client_apts, statuses).items():
        treatment = treatment_by_id.get(service_type_id)
        if treatment is None or not treatment.is_recurring:
            continue
        if client.has_finished(service_type_id) or service_type_id in booked:
            continue

        recommended = recommended_date_for(last.date, treatment.recurrence_days)
        recommendations.append(
            RecommendedVisit(
                service_type_id=service_type_id,
                service_name=treatment.name,
                last_appointment_date=last.date,
                recommended_date=recommended,
                price=final_price(treatment.default_price, client.discount_percentage),
                overdue=recommended < today,
            )
        )

    return sorted(recommendations, key=lambda visit: visit.recommended_date)
