"""Analytics service - Retention, financial and detail reports"""

import datetime as dt
import logging
from typing import Literal, Optional

from fastapi import HTTPException

from ...persistence.base import DocumentStore
from ...shared.lookups import find_by_id
from . import detail, financials, periods, retention
from .recurrence import project_recommendations
from .schemas import (
    ClientStats,
    FinancialReport,
    Period,
    RecommendedVisit,
    RetentionReport,
    StaffStats,
    TreatmentStats,
)
from .snapshot import ClinicSnapshot, SnapshotCache
from .sorting import SortConfig, sort_rows

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Builds reports from a snapshot of the owner's collections.

    All figures are derived on request; nothing here is persisted. When a
    collection fails to load, reports are built from what did load (and the
    data kept from the previous load) and list the failed collections.
    """

    def __init__(self, store: DocumentStore, snapshots: Optional[SnapshotCache] = None):
        self.store = store
        self.snapshots = snapshots if snapshots is not None else SnapshotCache()

    def _snapshot(self, owner_id: str) -> ClinicSnapshot:
        snapshot = self.snapshots.load(self.store, owner_id)
        if snapshot.failed:
            logger.warning(f"⚠️ Reporting for owner {owner_id} without fresh {', '.join(snapshot.failed)}")
        return snapshot

    def retention_report(
        self,
        owner_id: str,
        today: dt.date,
        search: Optional[str] = None,
        attention_only: bool = False,
        sort: Optional[SortConfig] = None,
    ) -> RetentionReport:
        snapshot = self._snapshot(owner_id)
        metrics = retention.classify_clients(
            snapshot.clients, snapshot.appointments, snapshot.treatments, snapshot.statuses, today
        )
        # Counts feed the portfolio chart and ignore the table filters
        counts = retention.count_by_status(metrics)

        if search:
            metrics = retention.search_metrics(metrics, snapshot.clients, search)
        if attention_only:
            metrics = retention.requiring_attention(metrics)
        metrics = retention.sort_metrics(metrics, sort)

        return RetentionReport(metrics=metrics, counts=counts, failed=snapshot.failed)

    def financial_report(
        self,
        owner_id: str,
        period: Period,
        anchor: dt.date,
        staff_service_type_id: Optional[str] = None,
        staff_sort: Optional[SortConfig] = None,
        client_sort: Optional[SortConfig] = None,
    ) -> FinancialReport:
        snapshot = self._snapshot(owner_id)
        span = periods.date_range(period, anchor)
        in_range = periods.filter_by_range(snapshot.appointments, span)
        logger.info(f"📊 Financial report {period} {span.start}..{span.end}: {len(in_range)} appointment(s)")

        staff_rows = financials.staff_breakdown(
            in_range, snapshot.statuses, snapshot.staff, service_type_id=staff_service_type_id
        )
        client_rows = financials.client_breakdown(in_range, snapshot.statuses, snapshot.staff, snapshot.clients)

        return FinancialReport(
            period=period,
            start=span.start,
            end=span.end,
            label=periods.period_label(period, anchor),
            summary=financials.summarize(in_range, snapshot.statuses, snapshot.staff),
            staff=sort_rows(staff_rows, staff_sort) if staff_sort else staff_rows,
            clients=sort_rows(client_rows, client_sort) if client_sort else client_rows,
            services=financials.service_efficiency(in_range, snapshot.statuses, snapshot.treatments),
            failed=snapshot.failed,
        )

    def recommendations(self, client_id: str, owner_id: str, today: dt.date) -> list[RecommendedVisit]:
        snapshot = self._snapshot(owner_id)
        client = find_by_id(snapshot.clients, client_id)
        if client is None:
            raise HTTPException(status_code=404, detail="Client not found")
        return project_recommendations(client, snapshot.appointments, snapshot.treatments, snapshot.statuses, today)

    def client_stats(self, client_id: str, owner_id: str, today: dt.date) -> ClientStats:
        snapshot = self._snapshot(owner_id)
        client = find_by_id(snapshot.clients, client_id)
        if client is None:
            raise HTTPException(status_code=404, detail="Client not found")
        stats = detail.client_stats(client, snapshot.appointments, snapshot.treatments, snapshot.statuses, today)
        stats.failed = snapshot.failed
        return stats

    def staff_stats(self, staff_id: str, owner_id: str, today: dt.date) -> StaffStats:
        snapshot = self._snapshot(owner_id)
        member = find_by_id(snapshot.staff, staff_id)
        if member is None:
            raise HTTPException(status_code=404, detail="Staff member not found")
        stats = detail.staff_stats(member, snapshot.appointments, snapshot.treatments, snapshot.statuses, today)
        stats.failed = snapshot.failed
        return stats

    def treatment_stats(
        self,
        treatment_id: str,
        owner_id: str,
        today: dt.date,
        client_filter: Literal["active", "finished"] = "active",
    ) -> TreatmentStats:
        snapshot = self._snapshot(owner_id)
        treatment = find_by_id(snapshot.treatments, treatment_id)
        if treatment is None:
            raise HTTPException(status_code=404, detail="Treatment not found")
        stats = detail.treatment_stats(
            treatment,
            snapshot.appointments,
            snapshot.clients,
            snapshot.staff,
            snapshot.statuses,
            today,
            client_filter=client_filter,
        )
        stats.failed = snapshot.failed
        return stats
