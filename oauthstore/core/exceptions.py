"""Custom exceptions for the OAuth persistence core."""


# ========================================
# Base Exceptions
# ========================================


class OAuthStoreError(Exception):
    """Base exception for all OAuth persistence errors."""


# ========================================
# Storage Exceptions
# ========================================


class StorageError(OAuthStoreError):
    """The storage adapter failed (I/O, timeout, serialization)."""


class StorageConnectionError(StorageError):
    """Storage connection could not be established or is not initialized."""


class StorageTimeoutError(StorageError):
    """Storage round trip exceeded its timeout."""


class DuplicateKeyError(StorageError):
    """A record with the same primary key already exists."""


# ========================================
# Consistency Exceptions
# ========================================


class ConsistencyError(OAuthStoreError):
    """More records matched a unique-key filter than expected."""

    def __init__(self, collection: str, match_count: int):
        self.collection = collection
        self.match_count = match_count
        super().__init__(
            f"{match_count} records in '{collection}' matched a unique-key filter",
        )


# ========================================
# Validation Exceptions
# ========================================


class ValidationError(OAuthStoreError):
    """Base exception for validation errors."""


class ConfigurationError(ValidationError):
    """Configuration validation failed."""
