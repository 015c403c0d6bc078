"""Scope definition store."""

import logging

from oauthstore.core.constants import ID_NAME, SCOPES_COLLECTION
from oauthstore.core.decorators import track_operation
from oauthstore.database.base import DocumentStore

from .codec import decode, encode
from .models import Scope, split_scope

logger = logging.getLogger(__name__)


class ScopeStore:
    """Persists Scope definitions in the ``scopes`` collection, keyed by name."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    @track_operation("store_scope")
    async def upsert(self, scope: Scope) -> bool:
        """
        Store a scope, replacing any existing scope with the same name.

        Raises:
            StorageError: The write failed
        """
        await self.store.update_one(
            SCOPES_COLLECTION,
            {ID_NAME: scope.name},
            encode(scope),
            upsert=True,
        )
        logger.debug("Stored scope %s", scope.name)
        return True

    @track_operation("find_scope")
    async def find(self, name: str) -> Scope | None:
        """Load a scope by name."""
        record = await self.store.find_one(SCOPES_COLLECTION, {ID_NAME: name})
        if record is None:
            return None
        return decode(Scope, record)

    @track_operation("list_scopes")
    async def list_all(self) -> list[Scope]:
        """Load every stored scope (snapshot, store-defined order)."""
        records = await self.store.find_many(SCOPES_COLLECTION)
        return [decode(Scope, record) for record in records]

    @track_operation("check_scopes")
    async def undefined_scopes(self, requested: str) -> list[str]:
        """
        Names in a space-delimited scope string that have no stored Scope.

        Returns:
            Unknown names in request order (empty when all are defined)
        """
        names = split_scope(requested)
        if not names:
            return []
        records = await self.store.find_many(SCOPES_COLLECTION)
        known = {decode(Scope, record).name for record in records}
        return [name for name in names if name not in known]
