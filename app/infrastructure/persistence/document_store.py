"""Async document store contract and in-memory implementation.

Filters are dictionaries of field equality tests. A ``$or`` key holds a
list of sub-filters of which at least one must match. Sorts are sequences
of ``(field, direction)`` pairs with direction ``1`` (ascending) or ``-1``.
Documents that compare equal keep insertion order.
"""

import asyncio
import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

Document = Dict[str, Any]
Filter = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int


class DocumentStore(Protocol):
    async def find_one(self, collection: str, query: Filter) -> Optional[Document]:
        ...

    async def find_many(
        self,
        collection: str,
        query: Filter,
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        ...

    async def insert_one(self, collection: str, document: Document) -> None:
        ...

    async def update_one(
        self,
        collection: str,
        query: Filter,
        values: Dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        ...

    async def update_many(
        self, collection: str, query: Filter, values: Dict[str, Any]
    ) -> UpdateResult:
        ...


def matches(document: Document, query: Filter) -> bool:
    """Return True if ``document`` satisfies ``query``."""
    for field, expected in query.items():
        if field == "$or":
            if not any(matches(document, sub) for sub in expected):
                return False
        elif document.get(field) != expected:
            return False
    return True


class InMemoryDocumentStore:
    """Dictionary-backed document store.

    Each collection is a list kept in insertion order. Every method runs
    under an asyncio lock so that ``update_many`` applies as one step.
    Returned documents are copies.
    """

    def __init__(self):
        self._collections: Dict[str, List[Document]] = {}
        self._lock = asyncio.Lock()

    def _collection(self, name: str) -> List[Document]:
        return self._collections.setdefault(name, [])

    async def find_one(self, collection: str, query: Filter) -> Optional[Document]:
        async with self._lock:
            for document in self._collection(collection):
                if matches(document, query):
                    return copy.deepcopy(document)
        return None

    async def find_many(
        self,
        collection: str,
        query: Filter,
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        async with self._lock:
            found = [
                copy.deepcopy(document)
                for document in self._collection(collection)
                if matches(document, query)
            ]
        # Successive stable sorts from the least significant key
        for field, direction in reversed(list(sort or ())):
            found.sort(key=lambda document: document.get(field), reverse=direction < 0)
        return found

    async def insert_one(self, collection: str, document: Document) -> None:
        async with self._lock:
            self._collection(collection).append(copy.deepcopy(document))

    async def update_one(
        self,
        collection: str,
        query: Filter,
        values: Dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        async with self._lock:
            for document in self._collection(collection):
                if matches(document, query):
                    return UpdateResult(1, int(_apply(document, values)))
            if upsert:
                created = {k: v for k, v in query.items() if k != "$or"}
                created.update(copy.deepcopy(values))
                self._collection(collection).append(created)
                return UpdateResult(0, 1)
        return UpdateResult(0, 0)

    async def update_many(
        self, collection: str, query: Filter, values: Dict[str, Any]
    ) -> UpdateResult:
        async with self._lock:
            matched = modified = 0
            for document in self._collection(collection):
                if matches(document, query):
                    matched += 1
                    modified += int(_apply(document, values))
        return UpdateResult(matched, modified)

    async def count(self, collection: str, query: Optional[Filter] = None) -> int:
        async with self._lock:
            return sum(
                1 for document in self._collection(collection) if matches(document, query or {})
            )


def _apply(document: Document, values: Dict[str, Any]) -> bool:
    changed = any(document.get(k) != v for k, v in values.items())
    document.update(copy.deepcopy(values))
    return changed
