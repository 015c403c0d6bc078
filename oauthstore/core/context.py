"""Application lifecycle management for the OAuth persistence core."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from oauthstore.auth.manager import OAuthPersistence
from oauthstore.config import Settings, get_settings
from oauthstore.database.factory import create_document_store

from .logging import logger


@asynccontextmanager
async def persistence_lifespan(
    settings: Settings | None = None,
) -> AsyncIterator[OAuthPersistence]:
    """
    Create the document store once at startup and close it at shutdown.

    The yielded OAuthPersistence is meant to be passed to the token endpoint
    layer; there is no module-level connection.

    Args:
        settings: Settings to use (defaults to the cached settings)

    Yields:
        An initialized OAuthPersistence
    """
    settings = settings or get_settings()
    logger.info("Initializing OAuth persistence (%s backend)...", settings.storage_backend)

    persistence = OAuthPersistence(create_document_store(settings), settings)
    await persistence.initialize()
    try:
        yield persistence
    finally:
        logger.info("Shutting down OAuth persistence...")
        await persistence.close()
