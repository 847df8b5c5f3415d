"""
Guest fixture data

Dates are generated relative to `today` so the retention and financial views
always have something to show: one overdue client, one upcoming, three on time,
one client whose last treatment is finished, and a handful of appointments
around today.
"""

from datetime import date, datetime, timedelta

from ..domain.appointments.pricing import final_price
from .base import APPOINTMENTS, CLIENTS, STAFF, STATUSES, TREATMENTS

DEFAULT_STATUSES = [
    {"id": "st1", "name": "Scheduled", "color": "bg-gray-100 text-gray-800", "is_billable": False, "is_default": False, "is_initial": True},
    {"id": "st2", "name": "Confirmed", "color": "bg-blue-100 text-blue-800", "is_billable": False, "is_default": False, "is_initial": False},
    {"id": "st3", "name": "Completed", "color": "bg-green-100 text-green-800", "is_billable": True, "is_default": True, "is_initial": False},
    {"id": "st4", "name": "Cancelled", "color": "bg-red-100 text-red-800", "is_billable": False, "is_default": False, "is_initial": False},
    {"id": "st5", "name": "No-show", "color": "bg-orange-100 text-orange-800", "is_billable": False, "is_default": False, "is_initial": False},
]

TREATMENT_FIXTURES = [
    {"id": "s1", "name": "Botox", "default_price": 50.0, "recurrence_days": 60, "default_duration": 60, "color": "bg-blue-100 text-blue-800"},
    {"id": "s2", "name": "Dental Cleaning", "default_price": 80.0, "recurrence_days": 180, "default_duration": 45, "color": "bg-teal-100 text-teal-800"},
    {"id": "s3", "name": "Whitening", "default_price": 200.0, "recurrence_days": 365, "default_duration": 90, "color": "bg-purple-100 text-purple-800"},
    {"id": "s4", "name": "Orthodontic Check", "default_price": 60.0, "recurrence_days": 30, "default_duration": 20, "color": "bg-indigo-100 text-indigo-800"},
    {"id": "s5", "name": "Implant", "default_price": 800.0, "recurrence_days": 30, "default_duration": 120, "color": "bg-orange-100 text-orange-800"},
]

STAFF_FIXTURES = [
    {
        "id": "staff1",
        "name": "Fran",
        "specialties": ["s1", "s3", "s4", "s5"],
        "default_rate": 30.0,
        "rates": {"s1": 60.0},
        "color": "bg-indigo-100 text-indigo-800",
    },
    {
        "id": "staff2",
        "name": "Laura",
        "specialties": ["s2", "s3"],
        "default_rate": 25.0,
        "rates": {},
        "color": "bg-rose-100 text-rose-800",
    },
]

CLIENT_FIXTURES = [
    {"id": "c1", "name": "Ana Garcia", "email": "ana@example.com", "phone": "600 111 222", "notes": "Prefers afternoons.", "discount_percentage": 0.0, "finished_treatments": []},
    {"id": "c2", "name": "Carlos Ruiz", "email": "carlos@example.com", "phone": "600 333 444", "discount_percentage": 0.0, "finished_treatments": []},
    {"id": "c3", "name": "Elena Torres", "email": "elena@example.com", "phone": "600 555 666", "notes": "Tooth sensitivity.", "discount_percentage": 0.0, "finished_treatments": []},
    {"id": "c4", "name": "Miguel Angel", "email": "miguel@example.com", "phone": "600 777 888", "discount_percentage": 0.0, "finished_treatments": []},
    {"id": "c5", "name": "Lucia Mendez", "email": "lucia@example.com", "phone": "600 999 000", "discount_percentage": 10.0, "finished_treatments": []},
    {"id": "c6", "name": "Sofia Valer", "email": "sofia@example.com", "phone": "600 888 111", "discount_percentage": 0.0, "finished_treatments": ["s3"]},
]

# (id, client, treatment, staff, status, day offset, start, duration, fee paid, fee amount, notes)
APPOINTMENT_ROWS = [
    ("h1", "c1", "s4", "staff1", "st3", -45, "10:00", 30, False, 0.0, "Orthodontic follow-up, good progress."),
    ("h2", "c2", "s2", "staff2", "st3", -175, "11:00", 45, False, 0.0, "Deep cleaning."),
    ("h3", "c3", "s1", "staff1", "st3", -10, "09:00", 30, False, 0.0, "Check results next month."),
    ("h4", "c4", "s4", "staff1", "st3", -28, "16:00", 20, False, 0.0, "Small adjustment."),
    ("h5", "c6", "s3", "staff2", "st3", -400, "12:00", 90, False, 0.0, "Old whitening, treatment finished."),
    ("a1", "c4", "s1", "staff1", "st3", 0, "09:30", 60, False, 0.0, "Full face botox."),
    ("a2", "c5", "s3", "staff2", "st3", 0, "12:00", 90, True, 20.0, "First whitening session."),
    ("a3", "c1", "s2", "staff2", "st2", 1, "15:00", 45, False, 0.0, "Yearly cleaning."),
    ("a4", "c2", "s5", "staff1", "st2", 1, "10:00", 120, True, 50.0, "Implant consultation."),
    ("a5", "c3", "s4", "staff1", "st1", 2, "16:30", 20, False, 0.0, "Reschedule by phone if needed."),
    ("a6", "c4", "s1", "staff1", "st4", 2, "09:00", 30, False, 0.0, "Cancelled, travelling."),
]


def _appointments(today: date) -> list[dict]:
    prices = {treatment["id"]: treatment["default_price"] for treatment in TREATMENT_FIXTURES}
    discounts = {client["id"]: client["discount_percentage"] for client in CLIENT_FIXTURES}

    appointments = []
    for (apt_id, client_id, treatment_id, staff_id, status_id, offset, start, duration, fee_paid, fee, notes) in APPOINTMENT_ROWS:
        base_price = prices[treatment_id]
        discount = discounts[client_id]
        appointments.append(
            {
                "id": apt_id,
                "client_id": client_id,
                "service_type_id": treatment_id,
                "staff_id": staff_id,
                "status_id": status_id,
                "date": (today + timedelta(days=offset)).isoformat(),
                "start_time": start,
                "duration_minutes": duration,
                "base_price": base_price,
                "discount_percentage": discount,
                "price": final_price(base_price, discount),
                "booking_fee_paid": fee_paid,
                "booking_fee_amount": fee,
                "notes": notes,
            }
        )
    return appointments


def guest_fixtures(today: date) -> dict[str, list[dict]]:
    """Return fixture documents keyed by collection"""
    created_at = datetime.combine(today, datetime.min.time()).isoformat()
    return {
        CLIENTS: [{**client, "created_at": created_at} for client in CLIENT_FIXTURES],
        TREATMENTS: [dict(treatment) for treatment in TREATMENT_FIXTURES],
        STAFF: [{**member, "created_at": created_at} for member in STAFF_FIXTURES],
        STATUSES: [dict(status) for status in DEFAULT_STATUSES],
        APPOINTMENTS: _appointments(today),
    }
