"""Document store capability shared by the database-backed and in-memory stores"""

from abc import ABC, abstractmethod
from typing import Optional

CLIENTS = "clients"
TREATMENTS = "treatments"
STAFF = "staff"
STATUSES = "statuses"
APPOINTMENTS = "appointments"


class DocumentNotFoundError(LookupError):
    """Raised when updating a document that does not exist for the owner"""

    def __init__(self, collection: str, document_id: str):
        super().__init__(f"{collection}/{document_id} not found")
        self.collection = collection
        self.document_id = document_id


class DocumentStore(ABC):
    """
    CRUD over owner-partitioned collections of JSON documents.

    Documents are plain dicts carrying their identifier under "id". `save`
    creates the document when "id" is empty and updates it otherwise; the
    returned dict always carries the identifier assigned by the store.
    """

    @abstractmethod
    def list(self, collection: str, owner_id: str) -> list[dict]:
        """Return every document of a collection for the owner"""

    @abstractmethod
    def get(self, collection: str, document_id: str, owner_id: str) -> Optional[dict]:
        """Return one document, or None when it does not exist"""

    @abstractmethod
    def save(self, collection: str, document: dict, owner_id: str) -> dict:
        """Create or update a document"""

    @abstractmethod
    def delete(self, collection: str, document_id: str, owner_id: str) -> None:
        """Delete a document; deleting a missing document is a no-op"""
