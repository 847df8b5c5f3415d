"""
Persistence layer

Every CRUD call is scoped to an owner id. The guest owner id is served by an
in-memory store seeded with fixture data; every other owner goes to the
database-backed document store.
"""

from .base import DocumentNotFoundError, DocumentStore
from .dependencies import get_document_store
from .memory_store import MemoryDocumentStore
from .sql_store import SqlDocumentStore

__all__ = [
    "DocumentNotFoundError",
    "DocumentStore",
    "MemoryDocumentStore",
    "SqlDocumentStore",
    "get_document_store",
]
