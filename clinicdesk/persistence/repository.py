"""Typed repositories over a DocumentStore"""

from typing import ClassVar, Generic, Optional, TypeVar

from pydantic import BaseModel

from .base import DocumentStore

EntityT = TypeVar("EntityT", bound=BaseModel)


class DocumentRepository(Generic[EntityT]):
    """
    Converts between stored documents and pydantic entities for one collection.

    Subclasses set `collection` and `model`. Entities are serialized with
    `model_dump(mode="json")` so dates are stored as ISO strings in both store
    implementations.
    """

    collection: ClassVar[str]
    model: ClassVar[type[BaseModel]]

    def __init__(self, store: DocumentStore):
        self.store = store

    def _load(self, document: dict) -> EntityT:
        return self.model.model_validate(document)

    def list(self, owner_id: str) -> list[EntityT]:
        return [self._load(document) for document in self.store.list(self.collection, owner_id)]

    def get(self, entity_id: str, owner_id: str) -> Optional[EntityT]:
        document = self.store.get(self.collection, entity_id, owner_id)
        return self._load(document) if document else None

    def save(self, entity: EntityT, owner_id: str) -> EntityT:
        saved = self.store.save(self.collection, entity.model_dump(mode="json"), owner_id)
        return self._load(saved)

    def delete(self, entity_id: str, owner_id: str) -> None:
        self.store.delete(self.collection, entity_id, owner_id)
