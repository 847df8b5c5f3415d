"""FastAPI dependency selecting the document store for the current owner"""

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..auth import get_current_owner
from ..config import GUEST_OWNER_ID
from ..database import get_db
from .base import DocumentStore
from .memory_store import MemoryDocumentStore
from .sql_store import SqlDocumentStore

logger = logging.getLogger(__name__)


def get_document_store(
    request: Request,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
) -> DocumentStore:
    """Guest sessions use the in-memory store held on app.state, everyone else the database"""
    if owner_id == GUEST_OWNER_ID:
        store = getattr(request.app.state, "guest_store", None)
        if store is None:
            logger.warning("⚠️ Guest store missing from app state, seeding a new one")
            store = MemoryDocumentStore.seeded(GUEST_OWNER_ID)
            request.app.state.guest_store = store
        return store
    return SqlDocumentStore(db)
