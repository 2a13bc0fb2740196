"""Persistence layer for the durable document store.

The document store is an external collaborator; this package defines the
async contract the core relies on plus an in-process implementation used
in development and tests.
"""

from infrastructure.persistence.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    SortSpec,
    UpdateResult,
)

__all__ = ["DocumentStore", "InMemoryDocumentStore", "SortSpec", "UpdateResult"]
