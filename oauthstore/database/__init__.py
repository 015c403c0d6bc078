"""Document store adapter package.

Supports multiple backends: in-memory and Supabase.
"""

from .base import DocumentStore
from .factory import create_and_initialize_document_store, create_document_store
from .memory_adapter import InMemoryDocumentStore

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "create_and_initialize_document_store",
    "create_document_store",
]
