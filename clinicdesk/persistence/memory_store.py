"""In-memory document store used for guest sessions"""

import copy
import logging
import uuid
from datetime import date
from typing import Optional

from .base import APPOINTMENTS, CLIENTS, STAFF, STATUSES, TREATMENTS, DocumentNotFoundError, DocumentStore
from .fixtures import guest_fixtures

logger = logging.getLogger(__name__)

ID_PREFIXES = {
    CLIENTS: "guest-c",
    TREATMENTS: "guest-s",
    APPOINTMENTS: "guest-a",
    STATUSES: "status-",
    STAFF: "staff-",
}


class MemoryDocumentStore(DocumentStore):
    """
    Keeps documents in process memory, partitioned by owner and collection.

    Documents are copied on the way in and on the way out so callers can never
    mutate stored state without going through `save`.
    """

    def __init__(self):
        self._owners: dict[str, dict[str, list[dict]]] = {}

    @classmethod
    def seeded(cls, owner_id: str, today: Optional[date] = None) -> "MemoryDocumentStore":
        """Create a store holding the guest fixture data for `owner_id`"""
        store = cls()
        for collection, documents in guest_fixtures(today or date.today()).items():
            store._collection(collection, owner_id).extend(copy.deepcopy(documents))
        logger.info(f"✅ Guest store seeded for owner {owner_id}")
        return store

    def _collection(self, collection: str, owner_id: str) -> list[dict]:
        return self._owners.setdefault(owner_id, {}).setdefault(collection, [])

    def list(self, collection: str, owner_id: str) -> list[dict]:
        return copy.deepcopy(self._collection(collection, owner_id))

    def get(self, collection: str, document_id: str, owner_id: str) -> Optional[dict]:
        for document in self._collection(collection, owner_id):
            if document["id"] == document_id:
                return copy.deepcopy(document)
        return None

    def save(self, collection: str, document: dict, owner_id: str) -> dict:
        documents = self._collection(collection, owner_id)
        stored = copy.deepcopy(document)

        if not stored.get("id"):
            stored["id"] = f"{ID_PREFIXES.get(collection, 'guest-')}{uuid.uuid4().hex[:12]}"
            documents.append(stored)
            return copy.deepcopy(stored)

        for index, existing in enumerate(documents):
            if existing["id"] == stored["id"]:
                documents[index] = stored
                return copy.deepcopy(stored)

        raise DocumentNotFoundError(collection, stored["id"])

    def delete(self, collection: str, document_id: str, owner_id: str) -> None:
        documents = self._collection(collection, owner_id)
        documents[:] = [document for document in documents if document["id"] != document_id]
