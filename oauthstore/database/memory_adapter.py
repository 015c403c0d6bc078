"""
In-memory adapter implementation for DocumentStore protocol.

Keeps every collection as a list of dictionaries. Used by tests and local
runs; it gives the same per-record atomicity guarantees as a real store.
"""

import asyncio
import copy
import logging
import uuid
from typing import Any

from oauthstore.core.constants import ID_NAME
from oauthstore.core.exceptions import (
    ConsistencyError,
    DuplicateKeyError,
    StorageConnectionError,
)

logger = logging.getLogger(__name__)


def _matches(record: dict[str, Any], filter: dict[str, Any] | None) -> bool:
    if not filter:
        return True
    return all(key in record and record[key] == value for key, value in filter.items())


class InMemoryDocumentStore:
    """
    In-memory implementation of the DocumentStore protocol.

    Records are deep-copied on the way in and out, so callers never share
    state with the store. A single asyncio.Lock serializes writes.
    """

    def __init__(self) -> None:
        """Initialize an empty, unopened store"""
        self._collections: dict[str, list[dict[str, Any]]] = {}
        self._lock = asyncio.Lock()
        self._initialized = False

    async def initialize(self) -> None:
        """Mark the store as open"""
        self._initialized = True
        logger.debug("In-memory document store initialized")

    async def close(self) -> None:
        """Mark the store as closed; data is kept for reopening"""
        self._initialized = False
        logger.debug("In-memory document store closed")

    def _collection(self, name: str) -> list[dict[str, Any]]:
        if not self._initialized:
            msg = "Document store not initialized. Call initialize() first."
            raise StorageConnectionError(msg)
        return self._collections.setdefault(name, [])

    async def insert(self, collection: str, record: dict[str, Any]) -> None:
        """Insert a record, assigning an _id when absent"""
        async with self._lock:
            records = self._collection(collection)
            stored = copy.deepcopy(record)
            if stored.get(ID_NAME) is None:
                stored[ID_NAME] = uuid.uuid4().hex
            elif any(existing[ID_NAME] == stored[ID_NAME] for existing in records):
                msg = f"Duplicate {ID_NAME} '{stored[ID_NAME]}' in '{collection}'"
                raise DuplicateKeyError(msg)
            records.append(stored)

    async def find_one(
        self,
        collection: str,
        filter: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Return a copy of the first matching record"""
        for record in self._collection(collection):
            if _matches(record, filter):
                return copy.deepcopy(record)
        return None

    async def find_many(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return copies of all matching records"""
        return [
            copy.deepcopy(record)
            for record in self._collection(collection)
            if _matches(record, filter)
        ]

    async def update_one(
        self,
        collection: str,
        filter: dict[str, Any],
        record: dict[str, Any],
        upsert: bool = False,
    ) -> bool:
        """Replace the first matching record, or insert it when upsert is set"""
        async with self._lock:
            records = self._collection(collection)
            replacement = copy.deepcopy(record)
            for index, existing in enumerate(records):
                if _matches(existing, filter):
                    replacement.setdefault(ID_NAME, existing[ID_NAME])
                    records[index] = replacement
                    return True

            if not upsert:
                return False

            if replacement.get(ID_NAME) is None:
                replacement[ID_NAME] = filter.get(ID_NAME) or uuid.uuid4().hex
            records.append(replacement)
            return True

    async def find_one_and_update(
        self,
        collection: str,
        filter: dict[str, Any],
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Apply changes to the only matching record under the write lock"""
        async with self._lock:
            matched = [
                record for record in self._collection(collection) if _matches(record, filter)
            ]
            if len(matched) > 1:
                raise ConsistencyError(collection, len(matched))
            if not matched:
                return None
            matched[0].update(copy.deepcopy(changes))
            return copy.deepcopy(matched[0])

    async def update_many(
        self,
        collection: str,
        filter: dict[str, Any],
        changes: dict[str, Any],
    ) -> int:
        """Apply changes to every matching record under the write lock"""
        updated = 0
        async with self._lock:
            for record in self._collection(collection):
                if _matches(record, filter):
                    record.update(copy.deepcopy(changes))
                    updated += 1
        return updated

    def count(self, collection: str) -> int:
        """Number of records in a collection"""
        return len(self._collections.get(collection, []))
