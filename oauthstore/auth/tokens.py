"""Access and refresh token store.

A token pair is one record: the access token under ``token`` and its refresh
token under ``refreshToken``, sharing a single ``valid`` flag. Revoking the
record therefore hides it from lookups by either token.
"""

import logging
from typing import Any

from oauthstore.core.constants import (
    ACCESS_TOKEN_ID_NAME,
    ACCESS_TOKENS_COLLECTION,
    CLIENT_ID_NAME,
    REFRESH_TOKEN_ID_NAME,
    VALID_NAME,
)
from oauthstore.core.decorators import track_operation
from oauthstore.core.exceptions import ConsistencyError
from oauthstore.core.logging import mask_value
from oauthstore.database.base import DocumentStore

from .codec import decode, encode
from .models import AccessToken

logger = logging.getLogger(__name__)


class TokenStore:
    """Persists AccessToken records in the ``accessTokens`` collection."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def _find_unique(self, filter: dict[str, Any]) -> AccessToken | None:
        records = await self.store.find_many(ACCESS_TOKENS_COLLECTION, filter)
        if len(records) > 1:
            raise ConsistencyError(ACCESS_TOKENS_COLLECTION, len(records))
        if not records:
            return None
        return decode(AccessToken, records[0])

    @track_operation("issue_access_token")
    async def issue(self, access_token: AccessToken) -> None:
        """
        Store a new access token (and its refresh token) with valid=True.

        Raises:
            StorageError: The insert failed
        """
        record = encode(access_token.model_copy(update={"valid": True}))
        await self.store.insert(ACCESS_TOKENS_COLLECTION, record)
        logger.debug("Issued access token for client %s", access_token.client_id)

    @track_operation("find_access_token")
    async def find_by_access_token(self, token: str) -> AccessToken | None:
        """
        Load a valid access token.

        Raises:
            ConsistencyError: More than one valid record has this token
        """
        try:
            found = await self._find_unique(
                {ACCESS_TOKEN_ID_NAME: token, VALID_NAME: True},
            )
        except ConsistencyError:
            logger.warning("Several access tokens found for %s", mask_value(token))
            raise
        if found is None:
            logger.debug("No access token found")
        return found

    @track_operation("find_refresh_token")
    async def find_by_refresh_token(
        self,
        refresh_token: str,
        client_id: str,
    ) -> AccessToken | None:
        """
        Load a valid token pair by refresh token, for the client it was issued to.

        A refresh token presented by any other client is not found.

        Raises:
            ConsistencyError: More than one valid record has this refresh token
        """
        try:
            found = await self._find_unique(
                {
                    REFRESH_TOKEN_ID_NAME: refresh_token,
                    CLIENT_ID_NAME: client_id,
                    VALID_NAME: True,
                },
            )
        except ConsistencyError:
            logger.warning(
                "Several refresh tokens found for %s (client %s)",
                mask_value(refresh_token),
                client_id,
            )
            raise
        if found is not None:
            logger.debug("Loaded token pair for %s", mask_value(found.token))
        return found

    @track_operation("revoke_access_token")
    async def revoke(self, token: str, valid: bool = False) -> bool:
        """
        Set the valid flag of every record holding this access token.

        Returns:
            True if a record with this token exists
        """
        updated = await self.store.update_many(
            ACCESS_TOKENS_COLLECTION,
            {ACCESS_TOKEN_ID_NAME: token},
            {VALID_NAME: valid},
        )
        if not updated:
            logger.debug("Cannot set valid=%s: no access token %s", valid, mask_value(token))
            return False
        logger.info("Access token %s valid=%s", mask_value(token), valid)
        return True

    @track_operation("revoke_refresh_token")
    async def revoke_by_refresh_token(
        self,
        refresh_token: str,
        client_id: str | None = None,
    ) -> bool:
        """
        Revoke every token pair holding this refresh token.

        Args:
            refresh_token: Refresh token to revoke
            client_id: When given, only the issuing client's records match

        Returns:
            True if a matching record exists
        """
        query: dict[str, Any] = {REFRESH_TOKEN_ID_NAME: refresh_token}
        if client_id is not None:
            query[CLIENT_ID_NAME] = client_id

        updated = await self.store.update_many(
            ACCESS_TOKENS_COLLECTION,
            query,
            {VALID_NAME: False},
        )
        if not updated:
            return False
        logger.info("Revoked token pair by refresh token %s", mask_value(refresh_token))
        return True
