"""Client credential store.

Registration, lookup and secret validation for OAuth client applications.
"""

import logging
from typing import Any

from oauthstore.core.constants import (
    CLIENTS_COLLECTION,
    DESCRIPTION_NAME,
    ID_NAME,
    SCOPE_NAME,
    STATUS_NAME,
)
from oauthstore.core.decorators import track_operation
from oauthstore.database.base import DocumentStore

from .codec import decode, encode
from .hashing import hash_secret, verify_secret
from .models import ClientCredentials

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists ClientCredentials in the ``clients`` collection."""

    def __init__(self, store: DocumentStore, hash_secrets: bool = False) -> None:
        self.store = store
        self.hash_secrets = hash_secrets

    @track_operation("create_client")
    async def create(self, creds: ClientCredentials) -> None:
        """
        Store new client credentials.

        The caller generates a collision-free client_id; no existence check
        is made here.

        Raises:
            StorageError: The insert failed
        """
        record = encode(creds)
        if self.hash_secrets:
            record["secret"] = hash_secret(creds.secret)

        await self.store.insert(CLIENTS_COLLECTION, record)
        logger.info("Registered client: %s", creds.client_id)

    @track_operation("find_client")
    async def find(self, client_id: str) -> ClientCredentials | None:
        """Load client credentials by client id."""
        record = await self.store.find_one(CLIENTS_COLLECTION, {ID_NAME: client_id})
        if record is None:
            return None
        creds = decode(ClientCredentials, record)
        logger.debug("Loaded client %s (%s)", creds.client_id, creds.name)
        return creds

    @track_operation("validate_client")
    async def validate(self, client_id: str, secret: str) -> bool:
        """
        Validate a client id and secret pair.

        Returns:
            True when the client exists and the secret matches, otherwise False
        """
        record = await self.store.find_one(CLIENTS_COLLECTION, {ID_NAME: client_id})
        if record is None:
            logger.debug("Client %s not found", client_id)
            return False
        return verify_secret(secret, record.get("secret"), hashed=self.hash_secrets)

    @track_operation("update_client_scope")
    async def update_scope(
        self,
        client_id: str,
        scope: str | None = None,
        description: str | None = None,
        status: int | None = None,
    ) -> bool:
        """
        Update scope, description and status of a client application.

        Only non-empty values are written. The write touches just those
        fields, so concurrent updates of different fields do not overwrite
        each other.

        Returns:
            True if the client exists, False otherwise
        """
        changes: dict[str, Any] = {}
        if scope:
            changes[SCOPE_NAME] = scope
        if description:
            changes[DESCRIPTION_NAME] = description
        if status is not None:
            changes[STATUS_NAME] = status

        query = {ID_NAME: client_id}
        if not changes:
            return await self.store.find_one(CLIENTS_COLLECTION, query) is not None

        updated = await self.store.find_one_and_update(CLIENTS_COLLECTION, query, changes)
        if updated is None:
            logger.info("Cannot update client %s: not found", client_id)
            return False
        logger.info("Updated client %s: %s", client_id, ", ".join(sorted(changes)))
        return True
