"""Analytics schemas - derived views, never persisted"""

import datetime as dt
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel

Period = Literal["week", "month", "year", "all"]


class RetentionStatus(str, Enum):
    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    ONTIME = "ontime"


class RecommendedVisit(BaseModel):
    """Next visit suggested for one client and treatment"""

    service_type_id: str
    service_name: str
    last_appointment_date: dt.date
    recommended_date: dt.date
    price: float
    overdue: bool = False


class RetentionMetric(BaseModel):
    client_id: str
    client_name: str
    last_appointment_date: dt.date
    last_service_name: str
    recommended_return_date: dt.date
    days_overdue: int = 0
    status: RetentionStatus


class RetentionCounts(BaseModel):
    overdue: int = 0
    upcoming: int = 0
    ontime: int = 0


class RetentionReport(BaseModel):
    metrics: list[RetentionMetric]
    counts: RetentionCounts
    # Collections that could not be refreshed; figures use their last loaded data
    failed: list[str] = []


class FinancialSummary(BaseModel):
    revenue: float = 0.0
    pending: float = 0.0
    cost: float = 0.0
    profit: float = 0.0
    attended_clients: int = 0
    total_hours: float = 0.0
    profit_per_client: float = 0.0
    profit_per_hour: float = 0.0


class StaffFinancialRow(FinancialSummary):
    staff_id: str
    staff_name: str


class ClientFinancialRow(FinancialSummary):
    client_id: str
    client_name: str


class ServiceEfficiencyRow(BaseModel):
    service_type_id: str
    service_name: str
    revenue: float = 0.0
    hours: float = 0.0
    revenue_per_hour: float = 0.0


class FinancialReport(BaseModel):
    period: Period
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None
    label: str
    summary: FinancialSummary
    staff: list[StaffFinancialRow]
    clients: list[ClientFinancialRow]
    services: list[ServiceEfficiencyRow]
    failed: list[str] = []


# ============================================================================
# DETAIL PAGES
# ============================================================================


class TreatmentBreakdownRow(BaseModel):
    service_type_id: str
    service_name: str
    count: int = 0
    revenue: float = 0.0


class ClientStats(BaseModel):
    client_id: str
    total_spent: float = 0.0
    completed_count: int = 0
    cancelled_count: int = 0
    last_visit: Optional[dt.date] = None
    average_ticket: float = 0.0
    treatments: list[TreatmentBreakdownRow]
    recommendations: list[RecommendedVisit]
    failed: list[str] = []


class StaffTreatmentRow(BaseModel):
    service_type_id: str
    service_name: str
    revenue: float = 0.0
    cost: float = 0.0
    profit: float = 0.0
    hours: float = 0.0
    count: int = 0


class StaffStats(BaseModel):
    staff_id: str
    realized_revenue: float = 0.0
    scheduled_revenue: float = 0.0
    realized_cost: float = 0.0
    scheduled_cost: float = 0.0
    realized_profit: float = 0.0
    scheduled_profit: float = 0.0
    realized_hours: float = 0.0
    scheduled_hours: float = 0.0
    realized_count: int = 0
    scheduled_count: int = 0
    avg_profit_per_session: float = 0.0
    avg_minutes_per_session: float = 0.0
    treatments: list[StaffTreatmentRow]
    failed: list[str] = []


class StaffPerformanceRow(BaseModel):
    staff_id: str
    staff_name: str
    revenue: float = 0.0


class TreatmentClientRow(BaseModel):
    client_id: str
    client_name: str
    last_visit: Optional[dt.date] = None
    next_visit: Optional[dt.date] = None
    recommended_visit: Optional[dt.date] = None
    finished: bool = False


class TreatmentStats(BaseModel):
    service_type_id: str
    revenue: float = 0.0
    appointment_count: int = 0
    unique_clients: int = 0
    staff_performance: list[StaffPerformanceRow]
    clients: list[TreatmentClientRow]
    failed: list[str] = []
