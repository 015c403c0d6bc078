"""
Factory for creating document store adapters.

Selects the backend from settings.
"""

import logging

from oauthstore.config import Settings, get_settings
from oauthstore.core.exceptions import ConfigurationError

from .base import DocumentStore
from .memory_adapter import InMemoryDocumentStore

logger = logging.getLogger(__name__)


def create_document_store(settings: Settings | None = None) -> DocumentStore:
    """
    Create a document store adapter based on settings.

    Args:
        settings: Settings to use (defaults to the cached settings)

    Returns:
        An uninitialized document store adapter
    """
    settings = settings or get_settings()
    backend = settings.storage_backend

    if backend == "memory":
        return InMemoryDocumentStore()

    if backend == "supabase":
        from .supabase_adapter import SupabaseDocumentStore

        return SupabaseDocumentStore(
            url=settings.supabase_url,
            key=settings.supabase_service_key,
            timeout=settings.storage_timeout,
        )

    msg = f"Unknown storage backend: {backend}"
    raise ConfigurationError(msg)


async def create_and_initialize_document_store(
    settings: Settings | None = None,
) -> DocumentStore:
    """
    Create and initialize a document store adapter.

    Args:
        settings: Settings to use (defaults to the cached settings)

    Returns:
        An initialized document store adapter
    """
    store = create_document_store(settings)
    await store.initialize()
    logger.info("Initialized %s document store", type(store).__name__)
    return store
