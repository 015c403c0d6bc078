"""Core functionality for the OAuth persistence core."""

from .decorators import track_operation
from .exceptions import (
    ConfigurationError,
    ConsistencyError,
    DuplicateKeyError,
    OAuthStoreError,
    StorageConnectionError,
    StorageError,
    StorageTimeoutError,
)
from .logging import configure_logging, logger

__all__ = [
    "ConfigurationError",
    "ConsistencyError",
    "DuplicateKeyError",
    "OAuthStoreError",
    "StorageConnectionError",
    "StorageError",
    "StorageTimeoutError",
    "configure_logging",
    "logger",
    "track_operation",
]
