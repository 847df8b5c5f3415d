"""Database-backed document store"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models import Document, generate_document_id
from .base import DocumentNotFoundError, DocumentStore

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """Stores documents as JSON rows in the documents table"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, collection: str, owner_id: str):
        return self.db.query(Document).filter(
            Document.owner_id == owner_id, Document.collection == collection
        )

    @staticmethod
    def _to_dict(row: Document) -> dict:
        return {**(row.data or {}), "id": row.id}

    def list(self, collection: str, owner_id: str) -> list[dict]:
        rows = self._query(collection, owner_id).order_by(Document.created_at, Document.id).all()
        return [self._to_dict(row) for row in rows]

    def get(self, collection: str, document_id: str, owner_id: str) -> Optional[dict]:
        row = self._query(collection, owner_id).filter(Document.id == document_id).first()
        return self._to_dict(row) if row else None

    def save(self, collection: str, document: dict, owner_id: str) -> dict:
        data = {key: value for key, value in document.items() if key != "id"}
        document_id = document.get("id")

        try:
            if not document_id:
                row = Document(
                    id=generate_document_id(),
                    owner_id=owner_id,
                    collection=collection,
                    data=data,
                )
                self.db.add(row)
                logger.info(f"📥 Creating {collection} document for owner {owner_id}")
            else:
                row = self._query(collection, owner_id).filter(Document.id == document_id).first()
                if not row:
                    raise DocumentNotFoundError(collection, document_id)
                # Assign a new dict so the JSON column is flagged as modified
                row.data = data

            self.db.commit()
            self.db.refresh(row)
        except DocumentNotFoundError:
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save {collection} document: {e}")
            raise

        return self._to_dict(row)

    def delete(self, collection: str, document_id: str, owner_id: str) -> None:
        row = self._query(collection, owner_id).filter(Document.id == document_id).first()
        if not row:
            return
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete {collection}/{document_id}: {e}")
            raise
