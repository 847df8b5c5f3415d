"""Status repository - Document store operations for appointment statuses"""

from ...persistence.base import STATUSES
from ...persistence.repository import DocumentRepository
from .schemas import AppStatus


class StatusRepository(DocumentRepository[AppStatus]):
    """Repository for status documents"""

    collection = STATUSES
    model = AppStatus
