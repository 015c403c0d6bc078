"""OAuth persistence facade.

Bundles the four stores over one injected document store and owns its
lifecycle.
"""

import logging

from oauthstore.config import Settings, get_settings
from oauthstore.database.base import DocumentStore

from .auth_codes import AuthCodeStore
from .credentials import CredentialStore
from .scopes import ScopeStore
from .tokens import TokenStore

logger = logging.getLogger(__name__)


class OAuthPersistence:
    """
    Entry point used by the token endpoint layer.

    Example:
        async with OAuthPersistence(InMemoryDocumentStore()) as persistence:
            await persistence.clients.create(creds)
            ok = await persistence.clients.validate(creds.client_id, creds.secret)
    """

    def __init__(self, store: DocumentStore, settings: Settings | None = None) -> None:
        """
        Args:
            store: Document store adapter shared by every store
            settings: Settings to use (defaults to the cached settings)
        """
        settings = settings or get_settings()
        self.store = store
        self.clients = CredentialStore(store, hash_secrets=settings.hash_client_secrets)
        self.auth_codes = AuthCodeStore(store)
        self.tokens = TokenStore(store)
        self.scopes = ScopeStore(store)

    async def initialize(self) -> None:
        """Open the underlying document store."""
        await self.store.initialize()
        logger.info("OAuth persistence ready (%s)", type(self.store).__name__)

    async def close(self) -> None:
        """Close the underlying document store."""
        await self.store.close()
        logger.info("OAuth persistence closed")

    async def __aenter__(self) -> "OAuthPersistence":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
