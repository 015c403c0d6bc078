"""
Supabase adapter implementation for DocumentStore protocol.

Each collection is a PostgreSQL table exposed through PostgREST. Column names
match the stored field names (``_id``, ``clientId``, ``redirectUri`` ...).
"""

import logging
import os
from collections.abc import Callable
from typing import Any, TypeVar, cast

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client
from supabase.client import ClientOptions

from oauthstore.core.constants import ID_NAME, STORAGE_TIMEOUT_DEFAULT
from oauthstore.core.exceptions import (
    ConfigurationError,
    ConsistencyError,
    DuplicateKeyError,
    StorageConnectionError,
    StorageError,
    StorageTimeoutError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseDocumentStore:
    """
    Supabase implementation of the DocumentStore protocol.

    find_one_and_update selects the candidates, refuses a multi-match, then
    runs one conditional UPDATE ... RETURNING keyed on the candidate's _id
    and the original filter. PostgreSQL executes that update atomically, so
    of several concurrent callers only one sees the row returned.
    """

    def __init__(
        self,
        url: str | None = None,
        key: str | None = None,
        timeout: float = STORAGE_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize Supabase adapter with connection parameters"""
        self.url = url or os.getenv("SUPABASE_URL")
        self.key = key or os.getenv("SUPABASE_SERVICE_KEY")
        self.timeout = timeout
        self.client: Client | None = None

    async def initialize(self) -> None:
        """Initialize Supabase client connection"""
        if self.client is None:
            if not self.url or not self.key:
                msg = (
                    "SUPABASE_URL and SUPABASE_SERVICE_KEY must be set in "
                    "environment variables"
                )
                raise ConfigurationError(msg)

            self.client = create_client(
                self.url,
                self.key,
                options=ClientOptions(postgrest_client_timeout=self.timeout),
            )
            logger.info("Supabase document store initialized for %s", self.url)

    async def close(self) -> None:
        """Drop the client; PostgREST calls are stateless HTTP requests"""
        self.client = None
        logger.info("Supabase document store closed")

    def _require_client(self) -> Client:
        if not self.client:
            msg = "Document store not initialized. Call initialize() first."
            raise StorageConnectionError(msg)
        return self.client

    def _execute(self, action: str, collection: str, call: Callable[[], T]) -> T:
        """Run one PostgREST request, translating its failures to StorageError"""
        try:
            return call()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                msg = f"Duplicate key on {action} in '{collection}': {e.message}"
                raise DuplicateKeyError(msg) from e
            msg = f"Supabase {action} on '{collection}' failed: {e.message}"
            raise StorageError(msg) from e
        except httpx.TimeoutException as e:
            msg = f"Supabase {action} on '{collection}' timed out after {self.timeout}s"
            raise StorageTimeoutError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Supabase {action} on '{collection}' failed: {e}"
            raise StorageError(msg) from e

    async def insert(self, collection: str, record: dict[str, Any]) -> None:
        """Insert a record; PostgreSQL assigns _id when it is absent"""
        client = self._require_client()
        self._execute(
            "insert",
            collection,
            lambda: client.table(collection).insert(record).execute(),
        )

    async def find_one(
        self,
        collection: str,
        filter: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Select the first matching row"""
        client = self._require_client()
        result = self._execute(
            "select",
            collection,
            lambda: client.table(collection).select("*").match(filter).limit(1).execute(),
        )
        rows = cast(list[dict[str, Any]], result.data) if result.data else []
        return rows[0] if rows else None

    async def find_many(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Select every matching row"""
        client = self._require_client()

        def run() -> Any:
            query = client.table(collection).select("*")
            if filter:
                query = query.match(filter)
            return query.execute()

        result = self._execute("select", collection, run)
        return cast(list[dict[str, Any]], result.data) if result.data else []

    async def update_one(
        self,
        collection: str,
        filter: dict[str, Any],
        record: dict[str, Any],
        upsert: bool = False,
    ) -> bool:
        """Replace the matching row, or upsert it on _id"""
        client = self._require_client()

        if upsert:
            row = dict(record)
            if ID_NAME not in row and ID_NAME in filter:
                row[ID_NAME] = filter[ID_NAME]
            result = self._execute(
                "upsert",
                collection,
                lambda: client.table(collection).upsert(row, on_conflict=ID_NAME).execute(),
            )
        else:
            result = self._execute(
                "update",
                collection,
                lambda: client.table(collection).update(record).match(filter).execute(),
            )
        return bool(result.data)

    async def find_one_and_update(
        self,
        collection: str,
        filter: dict[str, Any],
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Conditional update of the only matching row, returning it"""
        client = self._require_client()
        found = self._execute(
            "select",
            collection,
            lambda: client.table(collection).select("*").match(filter).execute(),
        )
        candidates = cast(list[dict[str, Any]], found.data) if found.data else []
        if len(candidates) > 1:
            raise ConsistencyError(collection, len(candidates))
        if not candidates:
            return None

        # The filter is repeated so a row changed since the select is skipped
        condition = {**filter, ID_NAME: candidates[0][ID_NAME]}
        result = self._execute(
            "update",
            collection,
            lambda: client.table(collection).update(changes).match(condition).execute(),
        )
        rows = cast(list[dict[str, Any]], result.data) if result.data else []
        return rows[0] if rows else None

    async def update_many(
        self,
        collection: str,
        filter: dict[str, Any],
        changes: dict[str, Any],
    ) -> int:
        """Update every matching row"""
        client = self._require_client()
        result = self._execute(
            "update",
            collection,
            lambda: client.table(collection).update(changes).match(filter).execute(),
        )
        return len(result.data) if result.data else 0
