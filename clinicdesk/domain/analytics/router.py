"""Analytics router - Retention, financial and detail report endpoints"""

import datetime as dt
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request

from ...auth import get_current_owner
from ...persistence import DocumentStore, get_document_store
from . import periods
from .schemas import (
    ClientStats,
    FinancialReport,
    Period,
    RecommendedVisit,
    RetentionReport,
    StaffStats,
    TreatmentStats,
)
from .service import AnalyticsService
from .sorting import Direction, SortConfig

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def get_analytics_service(
    request: Request, store: DocumentStore = Depends(get_document_store)
) -> AnalyticsService:
    return AnalyticsService(store, snapshots=request.app.state.snapshots)


def _sort(key: Optional[str], direction: Direction) -> Optional[SortConfig]:
    return SortConfig(key, direction) if key else None


@router.get("/retention", response_model=RetentionReport)
async def get_retention(
    today: Optional[dt.date] = Query(None),
    search: Optional[str] = Query(None),
    attention_only: bool = Query(False, alias="attentionOnly"),
    sort_key: Optional[str] = Query(None, alias="sortKey"),
    sort_direction: Direction = Query("asc", alias="sortDirection"),
    owner_id: str = Depends(get_current_owner),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Clients due back for a recurring treatment, with counts per status"""
    return service.retention_report(
        owner_id,
        today or dt.date.today(),
        search=search,
        attention_only=attention_only,
        sort=_sort(sort_key, sort_direction),
    )


@router.get("/financials", response_model=FinancialReport)
async def get_financials(
    period: Period = Query("month"),
    anchor: Optional[dt.date] = Query(None),
    offset: int = Query(0, description="Periods to move from the anchor, negative goes back"),
    service_type_id: Optional[str] = Query(None, alias="serviceTypeId"),
    staff_sort_key: Optional[str] = Query(None, alias="staffSortKey"),
    staff_sort_direction: Direction = Query("asc", alias="staffSortDirection"),
    client_sort_key: Optional[str] = Query(None, alias="clientSortKey"),
    client_sort_direction: Direction = Query("asc", alias="clientSortDirection"),
    owner_id: str = Depends(get_current_owner),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Revenue, cost and profit for a week, month, year or all time"""
    anchor = periods.shift_anchor(period, anchor or dt.date.today(), offset)
    return service.financial_report(
        owner_id,
        period,
        anchor,
        staff_service_type_id=service_type_id,
        staff_sort=_sort(staff_sort_key, staff_sort_direction),
        client_sort=_sort(client_sort_key, client_sort_direction),
    )


@router.get("/clients/{client_id}/recommendations", response_model=list[RecommendedVisit])
async def get_recommendations(
    client_id: str,
    today: Optional[dt.date] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.recommendations(client_id, owner_id, today or dt.date.today())


@router.get("/clients/{client_id}", response_model=ClientStats)
async def get_client_stats(
    client_id: str,
    today: Optional[dt.date] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.client_stats(client_id, owner_id, today or dt.date.today())


@router.get("/staff/{staff_id}", response_model=StaffStats)
async def get_staff_stats(
    staff_id: str,
    today: Optional[dt.date] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.staff_stats(staff_id, owner_id, today or dt.date.today())


@router.get("/treatments/{treatment_id}", response_model=TreatmentStats)
async def get_treatment_stats(
    treatment_id: str,
    today: Optional[dt.date] = Query(None),
    client_filter: Literal["active", "finished"] = Query("active", alias="clientFilter"),
    owner_id: str = Depends(get_current_owner),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.treatment_stats(treatment_id, owner_id, today or dt.date.today(), client_filter=client_filter)
