"""Staff repository - Document store operations for team members"""

from ...persistence.base import STAFF
from ...persistence.repository import DocumentRepository
from .schemas import Staff


class StaffRepository(DocumentRepository[Staff]):
    """Repository for staff documents"""

    collection = STAFF
    model = Staff
