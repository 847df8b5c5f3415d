"""Client repository - Document store operations for clients"""

from ...persistence.base import CLIENTS
from ...persistence.repository import DocumentRepository
from .schemas import Client


class ClientRepository(DocumentRepository[Client]):
    """Repository for client documents"""

    collection = CLIENTS
    model = Client
