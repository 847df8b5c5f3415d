"""Status classification rules shared by analytics and appointment workflows"""

from typing import Iterable, Optional

from ...config import CANCELLED_STATUS_KEYWORDS
from .schemas import AppStatus


def is_billable(status: Optional[AppStatus]) -> bool:
    return bool(status and status.is_billable)


def is_cancelled(status: Optional[AppStatus], keywords: Iterable[str] = CANCELLED_STATUS_KEYWORDS) -> bool:
    """
    Cancellation is inferred from the status name.

    Statuses carry no cancellation flag, so any name containing one of the
    configured keywords ("cancel", "anul" by default) counts. Renaming or
    translating a status silently changes the result.
    """
    if status is None:
        return False
    name = status.name.lower()
    return any(keyword in name for keyword in keywords)


def quick_complete_status(statuses: list[AppStatus]) -> Optional[AppStatus]:
    """Default billable status, falling back to the first billable one"""
    for status in statuses:
        if status.is_default and status.is_billable:
            return status
    for status in statuses:
        if status.is_billable:
            return status
    return None


def initial_status(statuses: list[AppStatus]) -> Optional[AppStatus]:
    """Status for new appointments: initial flag, then default flag, then the first status"""
    for status in statuses:
        if status.is_initial:
            return status
    for status in statuses:
        if status.is_default:
            return status
    return statuses[0] if statuses else None
