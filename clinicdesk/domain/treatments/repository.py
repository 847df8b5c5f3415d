"""Treatment repository - Document store operations for treatments"""

from ...persistence.base import TREATMENTS
from ...persistence.repository import DocumentRepository
from .schemas import ServiceType


class TreatmentRepository(DocumentRepository[ServiceType]):
    """Repository for treatment documents"""

    collection = TREATMENTS
    model = ServiceType
