"""Authorization code store.

Issues codes, looks them up for redemption and enforces single use.
"""

import logging

from oauthstore.core.constants import (
    AUTH_CODE_ID_NAME,
    AUTH_CODES_COLLECTION,
    REDIRECT_URI_NAME,
    VALID_NAME,
)
from oauthstore.core.decorators import track_operation
from oauthstore.core.exceptions import ConsistencyError
from oauthstore.core.logging import mask_value
from oauthstore.database.base import DocumentStore

from .codec import decode, encode
from .models import AuthCode

logger = logging.getLogger(__name__)


class AuthCodeStore:
    """Persists AuthCode records in the ``authCodes`` collection."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    @track_operation("issue_auth_code")
    async def issue(self, auth_code: AuthCode) -> None:
        """
        Store a new authorization code with valid=True.

        Raises:
            StorageError: The insert failed
        """
        record = encode(auth_code.model_copy(update={"valid": True}))
        await self.store.insert(AUTH_CODES_COLLECTION, record)
        logger.debug("Issued auth code for client %s", auth_code.client_id)

    @track_operation("find_auth_code")
    async def redeem_lookup(self, code: str, redirect_uri: str) -> AuthCode | None:
        """
        Load a valid authorization code issued for the given redirect URI.

        Used codes and codes issued for another redirect URI are never
        returned. Callers that exchange the code must invalidate it right
        after; redeem() does both in one step.

        Raises:
            ConsistencyError: More than one record has this code
        """
        records = await self.store.find_many(
            AUTH_CODES_COLLECTION,
            {
                AUTH_CODE_ID_NAME: code,
                REDIRECT_URI_NAME: redirect_uri,
                VALID_NAME: True,
            },
        )
        if len(records) > 1:
            logger.warning("Several auth codes found for %s", mask_value(code))
            raise ConsistencyError(AUTH_CODES_COLLECTION, len(records))
        if not records:
            return None
        return decode(AuthCode, records[0])

    @track_operation("redeem_auth_code")
    async def redeem(self, code: str, redirect_uri: str) -> AuthCode | None:
        """
        Find a valid code for the redirect URI and invalidate it atomically.

        Of any number of concurrent calls for the same code, exactly one gets
        the code back; the others get None.

        Returns:
            The redeemed code as now stored (valid=False), or None

        Raises:
            ConsistencyError: More than one valid record has this code; none
                of them is invalidated
        """
        try:
            record = await self.store.find_one_and_update(
                AUTH_CODES_COLLECTION,
                {
                    AUTH_CODE_ID_NAME: code,
                    REDIRECT_URI_NAME: redirect_uri,
                    VALID_NAME: True,
                },
                {VALID_NAME: False},
            )
        except ConsistencyError:
            logger.warning("Several auth codes found for %s", mask_value(code))
            raise
        if record is None:
            logger.debug("No redeemable auth code for %s", mask_value(code))
            return None
        auth_code = decode(AuthCode, record)
        logger.info("Redeemed auth code for client %s", auth_code.client_id)
        return auth_code

    @track_operation("invalidate_auth_code")
    async def invalidate(self, code: str) -> bool:
        """
        Mark every record with this authorization code as used.

        Invalidating an unknown or already used code is a no-op.

        Returns:
            True if a record with this code exists
        """
        updated = await self.store.update_many(
            AUTH_CODES_COLLECTION,
            {AUTH_CODE_ID_NAME: code},
            {VALID_NAME: False},
        )
        return updated > 0
